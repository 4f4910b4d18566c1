"""SQLiteStore: local file-based review store.

Used for development and self-hosted setups without Supabase. Mirrors the
code_reviews / code_issues tables; widget_config is stored as JSON text.
"""

import json
import logging
import sqlite3
from datetime import datetime, timezone
from .base import ReviewStore, issue_row
from code_critic.errors import StoreError
from code_critic.models.review import (
    Issue,
    IssueRecord,
    ReviewRecord,
    ReviewStatus,
    ScoreResult,
)


logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS code_reviews (
    id                     INTEGER PRIMARY KEY AUTOINCREMENT,
    session_id             TEXT NOT NULL,
    code_snippet           TEXT NOT NULL,
    repo_url               TEXT DEFAULT '',
    github_url             TEXT,
    language               TEXT,
    roast_level            TEXT,
    status                 TEXT NOT NULL,
    overall_score          INTEGER,
    security_score         INTEGER,
    performance_score      INTEGER,
    maintainability_score  INTEGER,
    badge                  TEXT,
    created_at             TEXT,
    updated_at             TEXT
);
CREATE INDEX IF NOT EXISTS idx_reviews_session ON code_reviews (session_id);

CREATE TABLE IF NOT EXISTS code_issues (
    id                INTEGER PRIMARY KEY AUTOINCREMENT,
    review_id         INTEGER NOT NULL REFERENCES code_reviews (id) ON DELETE CASCADE,
    issue_type        TEXT,
    severity          TEXT,
    title             TEXT,
    roast             TEXT,
    explanation       TEXT,
    line_number       INTEGER,
    problematic_code  TEXT,
    suggested_fix     TEXT,
    widget_type       TEXT,
    widget_config     TEXT DEFAULT '{}',
    impact_score      INTEGER DEFAULT 0
);
CREATE INDEX IF NOT EXISTS idx_issues_review ON code_issues (review_id);
"""

_ISSUE_COLUMNS = (
    "review_id",
    "issue_type",
    "severity",
    "title",
    "roast",
    "explanation",
    "line_number",
    "problematic_code",
    "suggested_fix",
    "widget_type",
    "widget_config",
    "impact_score",
)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SQLiteStore(ReviewStore):
    """Stores reviews in a local SQLite database file.

    Defaults to `.code-critic.db` in the working directory; configure with
    SQLITE_PATH.
    """

    def __init__(self, db_path: str = ".code-critic.db"):
        self._conn = sqlite3.connect(db_path)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA foreign_keys = ON")
        self._conn.executescript(_SCHEMA)
        self._conn.commit()

    def _execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        try:
            cursor = self._conn.execute(sql, params)
            self._conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"SQLite error: {e}") from e
        return cursor

    async def create_review(
        self,
        *,
        session_id: str,
        code_snippet: str,
        repo_url: str,
        github_url: str | None,
        language: str,
        roast_level: str,
    ) -> ReviewRecord:
        now = _now()
        cursor = self._execute(
            """
            INSERT INTO code_reviews
              (session_id, code_snippet, repo_url, github_url, language,
               roast_level, status, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                session_id,
                code_snippet,
                repo_url,
                github_url,
                language,
                roast_level,
                ReviewStatus.ANALYZING.value,
                now,
                now,
            ),
        )
        return await self.get_review(cursor.lastrowid)

    async def add_issues(self, review_id: int | str, issues: list[Issue]) -> None:
        rows = []
        for issue in issues:
            row = issue_row(review_id, issue)
            row["widget_config"] = json.dumps(row["widget_config"])
            rows.append(tuple(row[column] for column in _ISSUE_COLUMNS))

        placeholders = ", ".join("?" for _ in _ISSUE_COLUMNS)
        try:
            with self._conn:
                self._conn.executemany(
                    f"INSERT INTO code_issues ({', '.join(_ISSUE_COLUMNS)}) VALUES ({placeholders})",
                    rows,
                )
        except sqlite3.Error as e:
            raise StoreError(f"SQLite error: {e}") from e

    async def complete_review(self, review_id: int | str, scores: ScoreResult) -> None:
        self._execute(
            """
            UPDATE code_reviews
               SET status=?, overall_score=?, security_score=?, performance_score=?,
                   maintainability_score=?, badge=?, updated_at=?
             WHERE id=?
            """,
            (
                ReviewStatus.COMPLETE.value,
                scores.overall_score,
                scores.security_score,
                scores.performance_score,
                scores.maintainability_score,
                scores.badge,
                _now(),
                review_id,
            ),
        )

    async def get_review(self, review_id: int | str) -> ReviewRecord | None:
        row = self._execute("SELECT * FROM code_reviews WHERE id=?", (review_id,)).fetchone()
        return ReviewRecord.model_validate(dict(row)) if row else None

    async def get_review_by_session(self, session_id: str) -> ReviewRecord | None:
        row = self._execute(
            "SELECT * FROM code_reviews WHERE session_id=? ORDER BY id DESC",
            (session_id,),
        ).fetchone()
        return ReviewRecord.model_validate(dict(row)) if row else None

    async def list_issues(self, review_id: int | str) -> list[IssueRecord]:
        rows = self._execute(
            "SELECT * FROM code_issues WHERE review_id=? ORDER BY id",
            (review_id,),
        ).fetchall()
        return [self._row_to_issue(r) for r in rows]

    async def close(self) -> None:
        self._conn.close()

    @staticmethod
    def _row_to_issue(row: sqlite3.Row) -> IssueRecord:
        data = dict(row)
        data["widget_config"] = json.loads(data["widget_config"] or "{}")
        return IssueRecord.model_validate(data)
