from dataclasses import dataclass
from code_critic.models.code import CodeUnit


MAX_CODE_CHARS = 15000

ROAST_STYLES = {
    "gentle": "Be constructive and encouraging with light humor.",
    "medium": "Be witty and sarcastic but helpful. Use clever analogies.",
    "savage": "Full Gordon Ramsay mode. Be brutally honest but educational.",
}

DEFAULT_ROAST_LEVEL = "medium"


SYSTEM_PROMPT = """You are Code Critic, a developer reviewing code with personality.

ROAST STYLE: {roast_style}

Analyze the provided code for security, performance, complexity, logic, and style issues.

For EACH issue, you must decide which UI widget to render:
- SecurityBomb: Critical security vulnerabilities (SQL injection, XSS, secrets)
- SpaghettiMeter: Complex, unreadable code (high cyclomatic complexity)
- PerformanceTurtle: Performance issues (O(n²) loops, memory leaks)
- GenericRoast: Everything else

Return a JSON array with this EXACT structure:
[
  {{
    "issue_type": "security|performance|complexity|logic|style",
    "severity": "critical|high|medium|low",
    "title": "Short punchy title (max 6 words)",
    "roast": "Your {roast_level} roast (1-2 sentences)",
    "explanation": "Technical explanation (2-3 sentences)",
    "line_number": number or null,
    "problematic_code": "The specific bad code snippet (if applicable)",
    "suggested_fix": "How to fix it",
    "widget_type": "SecurityBomb|SpaghettiMeter|PerformanceTurtle|GenericRoast",
    "widget_config": {{
      // For SecurityBomb: {{"severity_level": 1-10, "pulse_speed": "slow|medium|fast", "color": "#hex"}}
      // For SpaghettiMeter: {{"complexity": 0-100, "emoji": "🍝"}}
      // For PerformanceTurtle: {{"slowness_factor": 0-100, "animation_speed": "crawl|walk|run"}}
      // For GenericRoast: {{"emoji": "😱|🤦|💀", "color": "red|yellow|orange"}}
    }},
    "impact_score": 0-100
  }}
]

Find 3-7 issues. Return ONLY the JSON array, no markdown formatting."""


USER_PROMPT = """CODE TO REVIEW ({language}):
Context/File: {filename}

```{language}
{code}
```"""


@dataclass(frozen=True)
class Prompts:
    system: str
    user: str


def build_prompts(unit: CodeUnit, roast_level: str) -> Prompts:
    """Build the system and user prompts for one review.

    Unknown roast levels are treated as "medium". Code longer than
    MAX_CODE_CHARS is cut off without a marker.
    """
    if roast_level not in ROAST_STYLES:
        roast_level = DEFAULT_ROAST_LEVEL

    system = SYSTEM_PROMPT.format(
        roast_style=ROAST_STYLES[roast_level],
        roast_level=roast_level,
    )
    user = USER_PROMPT.format(
        language=unit.language,
        filename=unit.filename,
        code=unit.code[:MAX_CODE_CHARS],
    )
    return Prompts(system=system, user=user)
