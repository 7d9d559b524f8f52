"""HTTP routes for withdrawal history, gated by KYC verification."""

from __future__ import annotations

import logging
import re
import sqlite3
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager
from typing import Any, Optional

from flask import Blueprint, current_app, jsonify, request

from inheritx.models import (
    CreateWithdrawalRecordRequest,
    SingleWithdrawalRecordRequest,
    WithdrawalRecord,
    WithdrawalRecordsResponse,
    from_json,
    to_json,
)
from inheritx.repositories import kyc as kyc_repository
from inheritx.repositories import withdrawals as withdrawal_repository
from inheritx.web.activity_controller import POOL_KEY

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

_log = logging.getLogger(__name__)
_FAILURES = (sqlite3.Error, LookupError, ValueError)
_INTEGER = re.compile(r"[+-]?[0-9]+")
_I32 = range(-(2**31), 2**31)


class _DatabaseUnavailable(RuntimeError):
    pass


class _BadRequest(Exception):
    pass


@contextmanager
def _database() -> Iterator[sqlite3.Connection]:
    pool = current_app.extensions.get(POOL_KEY)
    if pool is None:
        raise _DatabaseUnavailable("no database pool configured")
    with ExitStack() as stack:
        try:
            conn = stack.enter_context(pool.get())
        except sqlite3.Error as err:
            raise _DatabaseUnavailable(str(err)) from err
        yield conn


def _read_body(cls: type) -> Any:
    data = request.get_json(silent=True)
    if data is None:
        raise _BadRequest("expected a JSON body")
    try:
        return from_json(cls, data)
    except ValueError as err:
        raise _BadRequest(str(err)) from None


def _query_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = request.args.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise _BadRequest(f"invalid query parameter `{name}`") from None


def _user_number(text: str) -> int:
    """Read a user id as a 32-bit integer, or 0 when it is not one."""
    if _INTEGER.fullmatch(text):
        value = int(text)
        if value in _I32:
            return value
    return 0


def _error(status: int, message: str):
    return jsonify({"error": message}), status


def _bad_request(error: _BadRequest):
    return _error(400, str(error))


def _database_error(error: _DatabaseUnavailable):
    _log.error("Failed to get DB client: %s", error)
    return _error(500, "Database error")


def _positive_id() -> Optional[int]:
    value = _query_int("id", 0)
    return value if value >= 1 else None


def record_withdrawal():
    """POST /api/withdrawals/record: store a withdrawal for a KYC-verified user."""
    withdrawal_request = _read_body(CreateWithdrawalRecordRequest)
    with _database() as conn:
        user_id = _user_number(withdrawal_request.user_id)
        try:
            verified = kyc_repository.is_kyc_verified(conn, user_id)
        except _FAILURES as err:
            _log.error("Failed to check KYC verification status: %r", err)
            return _error(500, "Failed to verify KYC status")
        if not verified:
            return jsonify(
                {
                    "error": "KYC verification required",
                    "message": "You must complete KYC verification before making withdrawals.",
                }
            ), 403
        try:
            record = withdrawal_repository.record_withdrawal(conn, withdrawal_request)
        except _FAILURES as err:
            _log.error("Failed to create activity: %r", err)
            return _error(500, "Failed to create activity")
    return jsonify(to_json(record)), 201


def get_withdrawal_history():
    """GET /api/withdrawals/history: one page of withdrawals."""
    page = _query_int("page", DEFAULT_PAGE)
    page_size = _query_int("page_size", DEFAULT_PAGE_SIZE)
    if page < 1 or page_size < 1:
        return _error(400, "Page and page_size must be positive integers")
    with _database() as conn:
        try:
            records, total = withdrawal_repository.get_withdrawal_history(conn, page, page_size)
        except _FAILURES as err:
            _log.error("Failed to get user activities: %r", err)
            return _error(500, "Failed to get user activities")
    response = WithdrawalRecordsResponse(
        records=[record.to_response() for record in records],
        total=total,
        page=page,
        page_size=page_size,
    )
    return jsonify(to_json(response)), 200


def delete_withdrawal():
    """POST /api/withdrawals/delete: remove a withdrawal by id."""
    target = _read_body(SingleWithdrawalRecordRequest)
    with _database() as conn:
        try:
            withdrawal_repository.delete_withdrawal(conn, target.id)
        except _FAILURES as err:
            _log.error("Failed to create activity: %r", err)
            return _error(500, "Failed to create activity")
    return jsonify(None), 200


def get_single_withdrawal():
    """GET /api/withdrawals/single?id=<id>: one withdrawal."""
    withdrawal_id = _positive_id()
    if withdrawal_id is None:
        return _error(400, "ID must be a positive integer")
    with _database() as conn:
        try:
            record = withdrawal_repository.get_withdrawal_by_id(conn, withdrawal_id)
        except _FAILURES as err:
            _log.error("Failed to create activity: %r", err)
            return _error(500, "Failed to create activity")
    return jsonify(to_json(record)), 200


def update_withdrawal():
    """POST /api/withdrawals/update: overwrite a stored withdrawal."""
    record = _read_body(WithdrawalRecord)
    with _database() as conn:
        try:
            updated = withdrawal_repository.update_withdrawal(conn, record)
        except _FAILURES as err:
            _log.error("Failed to create activity: %r", err)
            return _error(500, "Failed to create activity")
    return jsonify(to_json(updated)), 200


def get_withdrawal_history_by_user():
    """GET /api/withdrawals/user?id=<user id>: every withdrawal of one user."""
    user_id = _positive_id()
    if user_id is None:
        return _error(400, "ID must be a positive integer")
    with _database() as conn:
        try:
            records = withdrawal_repository.get_withdrawal_history_by_user_id(conn, user_id)
        except _FAILURES as err:
            _log.error("Failed to create activity: %r", err)
            return _error(500, "Failed to create activity")
    return jsonify(to_json(records)), 200


def create_blueprint() -> Blueprint:
    """Build the /api/withdrawals routes."""
    blueprint = Blueprint("withdrawals", __name__, url_prefix="/api/withdrawals")
    blueprint.register_error_handler(_BadRequest, _bad_request)
    blueprint.register_error_handler(_DatabaseUnavailable, _database_error)
    blueprint.add_url_rule("/record", view_func=record_withdrawal, methods=["POST"])
    blueprint.add_url_rule("/history", view_func=get_withdrawal_history, methods=["GET"])
    blueprint.add_url_rule("/delete", view_func=delete_withdrawal, methods=["POST"])
    blueprint.add_url_rule("/single", view_func=get_single_withdrawal, methods=["GET"])
    blueprint.add_url_rule("/update", view_func=update_withdrawal, methods=["POST"])
    blueprint.add_url_rule("/user", view_func=get_withdrawal_history_by_user, methods=["GET"])
    return blueprint