# src/code_critic/review/parser.py
import json
import logging
import math
import re
from typing import Any
from pydantic import ValidationError
from code_critic.errors import MalformedModelOutput
from code_critic.models.review import Issue, IssueType, Severity, WidgetType


logger = logging.getLogger(__name__)

TEXT_FIELDS = ("title", "roast", "explanation", "problematic_code", "suggested_fix")


def fallback_issue() -> Issue:
    """Issue reported in place of a response that is not a JSON array."""
    return Issue(
        issue_type=IssueType.LOGIC,
        severity=Severity.LOW,
        title="AI Brain Freeze",
        roast="I tried to roast you, but I roasted my own JSON parser instead.",
        explanation="The AI returned invalid JSON. It happens to the best of us.",
        widget_type=WidgetType.GENERIC_ROAST,
        widget_config={"emoji": "🤖", "color": "gray"},
        impact_score=5,
    )


def strip_code_fences(text: str) -> str:
    text = re.sub(r"```json\n?", "", text)
    text = re.sub(r"```\n?", "", text)
    return text.strip()


def _decode(raw_text: str) -> list[Any]:
    text = strip_code_fences(raw_text or "")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedModelOutput(f"invalid JSON: {e}") from e
    except RecursionError as e:
        raise MalformedModelOutput("JSON nested too deeply") from e
    if not isinstance(data, list):
        raise MalformedModelOutput(f"expected a JSON array, got {type(data).__name__}")
    return data


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, (int, float)) and math.isfinite(value):
        return value
    return None


def _repair(entry: dict[str, Any]) -> tuple[dict[str, Any], list[str]]:
    """Coerce one decoded entry onto the Issue schema, listing what changed."""
    data = dict(entry)
    repairs = []

    for name in ("issue_type", "severity"):
        if isinstance(data.get(name), str):
            data[name] = data[name].strip().lower()

    if data.get("issue_type") not in {t.value for t in IssueType}:
        repairs.append(f"issue_type={data.get('issue_type')!r}")
        data["issue_type"] = IssueType.LOGIC.value
    if data.get("severity") not in {s.value for s in Severity}:
        repairs.append(f"severity={data.get('severity')!r}")
        data["severity"] = Severity.LOW.value
    if data.get("widget_type") not in {w.value for w in WidgetType}:
        repairs.append(f"widget_type={data.get('widget_type')!r}")
        data["widget_type"] = WidgetType.GENERIC_ROAST.value
    if not isinstance(data.get("widget_config"), dict):
        data["widget_config"] = {}

    for name in TEXT_FIELDS:
        value = data.get(name)
        if value is None:
            data[name] = ""
        elif not isinstance(value, str):
            data[name] = str(value)

    line_number = _as_number(data.get("line_number"))
    data["line_number"] = int(line_number) if line_number is not None else None

    impact = _as_number(data.get("impact_score"))
    if impact is None:
        if data.get("impact_score") is not None:
            repairs.append(f"impact_score={data.get('impact_score')!r}")
        data["impact_score"] = None
    else:
        clamped = min(100, max(0, round(impact)))
        if clamped != impact:
            repairs.append(f"impact_score={impact!r}")
        data["impact_score"] = clamped

    return data, repairs


def parse_issues(raw_text: str) -> list[Issue]:
    """Parse the model's raw response into issues.

    Never raises: a response that is not a JSON array yields a single
    fallback issue, and individual entries are repaired onto the schema.
    """
    try:
        entries = _decode(raw_text)
    except MalformedModelOutput as e:
        logger.error(f"JSON parse error ({e}): {raw_text!r}")
        return [fallback_issue()]

    issues = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            logger.warning(f"Dropping issue #{index}: not an object")
            continue

        data, repairs = _repair(entry)
        if repairs:
            logger.warning(f"Repaired issue #{index}: {', '.join(repairs)}")

        try:
            issues.append(Issue.model_validate(data))
        except ValidationError as e:
            logger.warning(f"Dropping issue #{index}: {e}")

    return issues
