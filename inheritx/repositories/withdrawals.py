"""Storage of withdrawal history."""

from __future__ import annotations

import sqlite3

from inheritx.db import CURRENT_TIMESTAMP_SQL, NotFoundError
from inheritx.models import CreateWithdrawalRecordRequest, WithdrawalRecord, from_json

_TABLE = f"""
CREATE TABLE IF NOT EXISTS withdrawal_history (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER,
    plan_id TEXT NOT NULL,
    wallet_id TEXT NOT NULL,
    amount INTEGER NOT NULL,
    payer_name TEXT NOT NULL,
    created_at TEXT NOT NULL DEFAULT ({CURRENT_TIMESTAMP_SQL})
)
"""

_SELECT = "SELECT id, plan_id, wallet_id, amount, payer_name, created_at FROM withdrawal_history"


def _ensure_table(conn: sqlite3.Connection) -> None:
    conn.execute(_TABLE)


def _record(row: sqlite3.Row) -> WithdrawalRecord:
    return from_json(WithdrawalRecord, dict(row))


def _user_number(user_id: str) -> int:
    try:
        return int(user_id)
    except ValueError:
        return 0


def _amount(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise ValueError(f"invalid withdrawal amount: {text!r}") from None


def record_withdrawal(
    conn: sqlite3.Connection, request: CreateWithdrawalRecordRequest
) -> WithdrawalRecord:
    """Store a withdrawal described by the request and return it.

    The request's fields fill plan, wallet, amount and payer in that order;
    the amount must be an integer.
    """
    _ensure_table(conn)
    amount = _amount(request.details)
    with conn:
        cursor = conn.execute(
            "INSERT INTO withdrawal_history (user_id, plan_id, wallet_id, amount, payer_name) "
            "VALUES (?, ?, ?, ?, ?)",
            (
                _user_number(request.user_id),
                request.user_id,
                request.activity_type,
                amount,
                request.action_type,
            ),
        )
    return get_withdrawal_by_id(conn, cursor.lastrowid)


def get_withdrawal_history(
    conn: sqlite3.Connection, page: int, page_size: int
) -> tuple[list[WithdrawalRecord], int]:
    """Return one page of withdrawals, newest first, and the total count."""
    _ensure_table(conn)
    total = conn.execute("SELECT COUNT(*) FROM withdrawal_history").fetchone()[0]
    offset = (page - 1) * page_size
    rows = conn.execute(
        f"{_SELECT} ORDER BY created_at DESC, id DESC LIMIT ? OFFSET ?", (page_size, offset)
    )
    return [_record(row) for row in rows], total


def delete_withdrawal(conn: sqlite3.Connection, withdrawal_id: int) -> None:
    """Remove a withdrawal; removing one that does not exist is not an error."""
    _ensure_table(conn)
    with conn:
        conn.execute("DELETE FROM withdrawal_history WHERE id = ?", (withdrawal_id,))


def get_withdrawal_by_id(conn: sqlite3.Connection, withdrawal_id: int) -> WithdrawalRecord:
    """Return one withdrawal; raise NotFoundError if it does not exist."""
    _ensure_table(conn)
    row = conn.execute(f"{_SELECT} WHERE id = ?", (withdrawal_id,)).fetchone()
    if row is None:
        raise NotFoundError(f"withdrawal {withdrawal_id} not found")
    return _record(row)


def update_withdrawal(conn: sqlite3.Connection, record: WithdrawalRecord) -> WithdrawalRecord:
    """Overwrite plan, wallet, amount and payer of a stored withdrawal."""
    _ensure_table(conn)
    with conn:
        cursor = conn.execute(
            "UPDATE withdrawal_history SET plan_id = ?, wallet_id = ?, amount = ?, payer_name = ? "
            "WHERE id = ?",
            (record.plan_id, record.wallet_id, record.amount, record.payer_name, record.id),
        )
    if cursor.rowcount == 0:
        raise NotFoundError(f"withdrawal {record.id} not found")
    return get_withdrawal_by_id(conn, record.id)


def get_withdrawal_history_by_user_id(
    conn: sqlite3.Connection, user_id: int
) -> list[WithdrawalRecord]:
    """Return every withdrawal made by one user."""
    _ensure_table(conn)
    rows = conn.execute(f"{_SELECT} WHERE user_id = ?", (user_id,))
    return [_record(row) for row in rows]