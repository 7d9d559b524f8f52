"""Storage of KYC (identity verification) records."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone

from inheritx.db import NotFoundError
from inheritx.models import CreateKycRequest, KycRecord, from_json

_COLUMNS = (
    "id, user_id, full_name, date_of_birth, id_type, id_number, address, "
    "verification_status, created_at, updated_at"
)

DEFAULT_STATUS = "pending"
VERIFIED_STATUS = "verified"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _single(cursor: sqlite3.Cursor, what: str) -> sqlite3.Row:
    rows = cursor.fetchmany(2)
    if not rows:
        raise NotFoundError(f"{what} not found")
    if len(rows) > 1:
        raise LookupError(f"more than one {what} found")
    return rows[0]


def _record(row: sqlite3.Row) -> KycRecord:
    return from_json(KycRecord, dict(row))


def create_kyc(conn: sqlite3.Connection, request: CreateKycRequest) -> KycRecord:
    """Store a new KYC record in the pending state and return it."""
    with conn:
        cursor = conn.execute(
            "INSERT INTO kyc_records (user_id, full_name, date_of_birth, id_type, id_number, "
            "address, verification_status, created_at) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (
                request.user_id,
                request.full_name,
                request.date_of_birth,
                request.id_type,
                request.id_number,
                request.address,
                DEFAULT_STATUS,
                _now(),
            ),
        )
    return get_kyc_by_id(conn, cursor.lastrowid)


def update_kyc_verification_status(
    conn: sqlite3.Connection, kyc_id: int, verification_status: str
) -> KycRecord:
    """Set the verification status of a record; raise NotFoundError if it does not exist."""
    with conn:
        cursor = conn.execute(
            "UPDATE kyc_records SET verification_status = ?, updated_at = ? WHERE id = ?",
            (verification_status, _now(), kyc_id),
        )
    if cursor.rowcount == 0:
        raise NotFoundError(f"KYC record {kyc_id} not found")
    return get_kyc_by_id(conn, kyc_id)


def get_kyc_by_id(conn: sqlite3.Connection, kyc_id: int) -> KycRecord:
    """Return the record with the given id; raise NotFoundError if there is none."""
    cursor = conn.execute(f"SELECT {_COLUMNS} FROM kyc_records WHERE id = ?", (kyc_id,))
    return _record(_single(cursor, f"KYC record {kyc_id}"))


def get_kyc_by_user_id(conn: sqlite3.Connection, user_id: int) -> KycRecord:
    """Return the one record of a user; raise NotFoundError if none, LookupError if several."""
    cursor = conn.execute(f"SELECT {_COLUMNS} FROM kyc_records WHERE user_id = ?", (user_id,))
    return _record(_single(cursor, f"KYC record for user {user_id}"))


def is_kyc_verified(conn: sqlite3.Connection, user_id: int) -> bool:
    """Tell whether the user's record is verified; a user without one is not."""
    cursor = conn.execute(
        "SELECT verification_status FROM kyc_records WHERE user_id = ?", (user_id,)
    )
    try:
        row = _single(cursor, f"KYC record for user {user_id}")
    except NotFoundError:
        return False
    return row["verification_status"] == VERIFIED_STATUS