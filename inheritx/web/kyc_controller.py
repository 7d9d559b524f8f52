"""HTTP routes for KYC (identity verification) records."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager
from typing import Any

from flask import Blueprint, current_app, jsonify, request

from inheritx.models import CreateKycRequest, KycRecord, KycVerificationRequest, from_json, to_json
from inheritx.repositories import kyc as kyc_repository
from inheritx.web.activity_controller import POOL_KEY

_log = logging.getLogger(__name__)
_FAILURES = (sqlite3.Error, LookupError, ValueError)


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


def _required_query_int(name: str) -> int:
    raw = request.args.get(name)
    if raw is None:
        raise _BadRequest(f"missing query parameter `{name}`")
    try:
        return int(raw)
    except ValueError:
        raise _BadRequest(f"invalid query parameter `{name}`") from None


def _error(status: int, message: str):
    return jsonify({"error": message}), status


def _bad_request(error: _BadRequest):
    return _error(400, str(error))


def _database_error(error: _DatabaseUnavailable):
    _log.error("Failed to get DB client: %s", error)
    return _error(500, "Database error")


def _record_response(record: KycRecord, status: int):
    return jsonify(to_json(record.to_response())), status


def create_kyc():
    """POST /api/kyc/create: store a new pending KYC record."""
    kyc_request = _read_body(CreateKycRequest)
    with _database() as conn:
        try:
            record = kyc_repository.create_kyc(conn, kyc_request)
        except _FAILURES as err:
            _log.error("Failed to create KYC record: %r", err)
            return _error(500, "Failed to create KYC record")
    return _record_response(record, 201)


def verify_kyc():
    """POST /api/kyc/verify: set the verification status of a record."""
    verification = _read_body(KycVerificationRequest)
    with _database() as conn:
        try:
            record = kyc_repository.update_kyc_verification_status(
                conn, verification.id, verification.verification_status
            )
        except _FAILURES as err:
            _log.error("Failed to update KYC verification status: %r", err)
            return _error(500, "Failed to update KYC verification status")
    return _record_response(record, 200)


def get_kyc_status():
    """GET /api/kyc/status?id=<id>: one record by its id."""
    kyc_id = _required_query_int("id")
    with _database() as conn:
        try:
            record = kyc_repository.get_kyc_by_id(conn, kyc_id)
        except _FAILURES as err:
            _log.error("Failed to get KYC record: %r", err)
            return _error(404, "KYC record not found")
    return _record_response(record, 200)


def get_kyc_by_user():
    """GET /api/kyc/user?user_id=<id>: the record of one user."""
    user_id = _required_query_int("user_id")
    with _database() as conn:
        try:
            record = kyc_repository.get_kyc_by_user_id(conn, user_id)
        except _FAILURES as err:
            _log.error("Failed to get KYC record: %r", err)
            return _error(404, "KYC record not found for this user")
    return _record_response(record, 200)


def create_blueprint() -> Blueprint:
    """Build the /api/kyc routes."""
    blueprint = Blueprint("kyc", __name__, url_prefix="/api/kyc")
    blueprint.register_error_handler(_BadRequest, _bad_request)
    blueprint.register_error_handler(_DatabaseUnavailable, _database_error)
    blueprint.add_url_rule("/create", view_func=create_kyc, methods=["POST"])
    blueprint.add_url_rule("/verify", view_func=verify_kyc, methods=["POST"])
    blueprint.add_url_rule("/status", view_func=get_kyc_status, methods=["GET"])
    blueprint.add_url_rule("/user", view_func=get_kyc_by_user, methods=["GET"])
    return blueprint