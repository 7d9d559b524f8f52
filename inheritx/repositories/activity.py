"""Storage of user activities."""

from __future__ import annotations

import sqlite3

from inheritx.db import NotFoundError
from inheritx.models import CreateUserActivityRequest, UserActivity, from_json

_COLUMNS = "id, user_id, date, activity_type, details, action_type, action_link, created_at"


def _activity(row: sqlite3.Row) -> UserActivity:
    return from_json(UserActivity, dict(row))


def create_activity(conn: sqlite3.Connection, request: CreateUserActivityRequest) -> UserActivity:
    """Store a new activity and return it as saved."""
    with conn:
        cursor = conn.execute(
            "INSERT INTO user_activities (user_id, activity_type, details, action_type, action_link) "
            "VALUES (?, ?, ?, ?, ?)",
            (
                request.user_id,
                request.activity_type,
                request.details,
                request.action_type,
                request.action_link,
            ),
        )
    row = conn.execute(
        f"SELECT {_COLUMNS} FROM user_activities WHERE id = ?", (cursor.lastrowid,)
    ).fetchone()
    if row is None:
        raise NotFoundError(f"activity {cursor.lastrowid} not found")
    return _activity(row)


def get_user_activities(
    conn: sqlite3.Connection, user_id: str, page: int, page_size: int
) -> tuple[list[UserActivity], int]:
    """Return one page of a user's activities, newest first, and the user's total."""
    total = conn.execute(
        "SELECT COUNT(*) FROM user_activities WHERE user_id = ?", (user_id,)
    ).fetchone()[0]
    offset = (page - 1) * page_size
    rows = conn.execute(
        f"SELECT {_COLUMNS} FROM user_activities WHERE user_id = ? "
        "ORDER BY date DESC LIMIT ? OFFSET ?",
        (user_id, page_size, offset),
    )
    return [_activity(row) for row in rows], total