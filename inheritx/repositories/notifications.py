"""Storage of notifications."""

from __future__ import annotations

import sqlite3
from collections.abc import Sequence

from inheritx.db import CURRENT_TIMESTAMP_SQL, NotFoundError
from inheritx.models import CreateNotification, Notification, UpdateNotification, from_json

_SELECT = "SELECT id, title, body, is_read, created_at, updated_at FROM notifications"


def _missing(notification_id: int) -> NotFoundError:
    return NotFoundError(f"notification {notification_id} not found")


def _notification(row: sqlite3.Row) -> Notification:
    data = dict(row)
    data["is_read"] = bool(data["is_read"])
    return from_json(Notification, data)


def _change(
    conn: sqlite3.Connection, notification_id: int, assignments: str, params: Sequence[object]
) -> Notification:
    with conn:
        cursor = conn.execute(
            f"UPDATE notifications SET {assignments} WHERE id = ?",
            (*params, notification_id),
        )
    if cursor.rowcount == 0:
        raise _missing(notification_id)
    return get_by_id(conn, notification_id)


def get_all(conn: sqlite3.Connection) -> list[Notification]:
    """Return every notification."""
    return [_notification(row) for row in conn.execute(_SELECT)]


def get_by_id(conn: sqlite3.Connection, notification_id: int) -> Notification:
    """Return one notification; raise NotFoundError if it does not exist."""
    row = conn.execute(f"{_SELECT} WHERE id = ?", (notification_id,)).fetchone()
    if row is None:
        raise _missing(notification_id)
    return _notification(row)


def create(conn: sqlite3.Connection, notification: CreateNotification) -> Notification:
    """Store a new, unread notification and return it."""
    with conn:
        cursor = conn.execute(
            "INSERT INTO notifications (title, body) VALUES (?, ?)",
            (notification.title, notification.body),
        )
    return get_by_id(conn, cursor.lastrowid)


def update(
    conn: sqlite3.Connection, notification_id: int, notification: UpdateNotification
) -> Notification:
    """Change the given fields of a notification; raise NotFoundError if it does not exist."""
    is_read = None if notification.is_read is None else int(notification.is_read)
    return _change(
        conn,
        notification_id,
        "title = COALESCE(?, title), body = COALESCE(?, body), "
        f"is_read = COALESCE(?, is_read), updated_at = {CURRENT_TIMESTAMP_SQL}",
        (notification.title, notification.body, is_read),
    )


def delete(conn: sqlite3.Connection, notification_id: int) -> None:
    """Remove a notification; removing one that does not exist is not an error."""
    with conn:
        conn.execute("DELETE FROM notifications WHERE id = ?", (notification_id,))


def mark_as_read(conn: sqlite3.Connection, notification_id: int) -> Notification:
    """Flag a notification as read; raise NotFoundError if it does not exist."""
    return _change(conn, notification_id, "is_read = 1", ())