"""Storage of claims."""

from __future__ import annotations

import sqlite3

from inheritx.db import CURRENT_TIMESTAMP_SQL, NotFoundError
from inheritx.models import Claim, ClaimStatus, CreateClaim, UpdateClaim, from_json

_SELECT = "SELECT id, user_id, amount, status, description, created_at, updated_at FROM claims"


def _claims(rows) -> list[Claim]:
    return [from_json(Claim, dict(row)) for row in rows]


def _fetch(conn: sqlite3.Connection, claim_id: int) -> Claim:
    row = conn.execute(f"{_SELECT} WHERE id = ?", (claim_id,)).fetchone()
    if row is None:
        raise NotFoundError(f"claim {claim_id} not found")
    return from_json(Claim, dict(row))


def get_all(conn: sqlite3.Connection) -> list[Claim]:
    """Return every claim."""
    return _claims(conn.execute(_SELECT))


def get_by_user_id(conn: sqlite3.Connection, user_id: int) -> list[Claim]:
    """Return the claims of one user."""
    return _claims(conn.execute(f"{_SELECT} WHERE user_id = ?", (user_id,)))


def get_by_status(conn: sqlite3.Connection, status: ClaimStatus) -> list[Claim]:
    """Return the claims in one status."""
    return _claims(conn.execute(f"{_SELECT} WHERE status = ?", (ClaimStatus(status).value,)))


def get_by_user_and_status(
    conn: sqlite3.Connection, user_id: int, status: ClaimStatus
) -> list[Claim]:
    """Return one user's claims in one status."""
    return _claims(
        conn.execute(
            f"{_SELECT} WHERE user_id = ? AND status = ?", (user_id, ClaimStatus(status).value)
        )
    )


def create(conn: sqlite3.Connection, claim: CreateClaim) -> Claim:
    """Store a new claim as pending and return it."""
    with conn:
        cursor = conn.execute(
            "INSERT INTO claims (user_id, amount, status, description) VALUES (?, ?, ?, ?)",
            (claim.user_id, claim.amount, ClaimStatus.PENDING.value, claim.description),
        )
    return _fetch(conn, cursor.lastrowid)


def update(conn: sqlite3.Connection, claim_id: int, claim: UpdateClaim) -> Claim:
    """Change the given fields of a claim; raise NotFoundError if it does not exist."""
    status = None if claim.status is None else ClaimStatus(claim.status).value
    with conn:
        cursor = conn.execute(
            "UPDATE claims SET status = COALESCE(?, status), "
            "description = COALESCE(?, description), "
            f"updated_at = {CURRENT_TIMESTAMP_SQL} WHERE id = ?",
            (status, claim.description, claim_id),
        )
    if cursor.rowcount == 0:
        raise NotFoundError(f"claim {claim_id} not found")
    return _fetch(conn, claim_id)