"""HTTP routes for recording and listing user activities."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Callable, Iterator
from contextlib import ExitStack, contextmanager
from typing import Any

from flask import Blueprint, current_app, jsonify, request

from inheritx.models import CreateUserActivityRequest, UserActivitiesResponse, from_json, to_json
from inheritx.repositories import activity as activity_repository

POOL_KEY = "inheritx.pool"
"""Key under ``app.extensions`` that holds the database pool."""

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

_log = logging.getLogger(__name__)
_FAILURES = (sqlite3.Error, LookupError, ValueError)


class _DatabaseUnavailable(RuntimeError):
    pass


class _BadRequest(Exception):
    pass


class _OperationFailed(RuntimeError):
    """A repository call failed; the message is what the client is told."""

    def __init__(self, message: str, status: int = 500) -> None:
        super().__init__(message)
        self.status = status


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


def _perform(failure: str, operation: Callable[..., Any], *args: Any, status: int = 500) -> Any:
    """Run a repository call on a pooled connection; failures become ``failure``."""
    with _database() as conn:
        try:
            return operation(conn, *args)
        except _FAILURES as err:
            cause = err
    _log.error("%s: %r", failure, cause)
    raise _OperationFailed(failure, status) from cause


def _read_body(cls: type) -> Any:
    data = request.get_json(silent=True)
    if data is None:
        raise _BadRequest("expected a JSON body")
    try:
        return from_json(cls, data)
    except ValueError as err:
        raise _BadRequest(str(err)) from None


def _query_int(name: str, default: int) -> int:
    raw = request.args.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise _BadRequest(f"invalid query parameter `{name}`") from None


def _error(status: int, message: str):
    return jsonify({"error": message}), status


def _json(value: Any, status: int = 200):
    return jsonify(to_json(value)), status


def _database_error(error: _DatabaseUnavailable):
    _log.error("Failed to get DB client: %s", error)
    return _error(500, "Database error")


def _install_error_handlers(blueprint: Blueprint) -> None:
    blueprint.register_error_handler(_BadRequest, lambda error: _error(400, str(error)))
    blueprint.register_error_handler(_DatabaseUnavailable, _database_error)
    blueprint.register_error_handler(
        _OperationFailed, lambda error: _error(error.status, str(error))
    )


def create_user_activity():
    """POST /activities: store an activity and return it."""
    activity_request = _read_body(CreateUserActivityRequest)
    activity = _perform(
        "Failed to create activity", activity_repository.create_activity, activity_request
    )
    return _json(activity, 201)


def get_user_activities_endpoint(user_id: str):
    """GET /activities/<user_id>: one page of a user's activities."""
    page = _query_int("page", DEFAULT_PAGE)
    page_size = _query_int("page_size", DEFAULT_PAGE_SIZE)
    if page < 1 or page_size < 1:
        return _error(400, "Page and page_size must be positive integers")
    activities, total = _perform(
        "Failed to get user activities",
        activity_repository.get_user_activities,
        user_id,
        page,
        page_size,
    )
    response = UserActivitiesResponse(
        activities=[activity.to_response() for activity in activities],
        total=total,
        page=page,
        page_size=page_size,
    )
    return _json(response)


def create_blueprint() -> Blueprint:
    """Build the /activities routes."""
    blueprint = Blueprint("activities", __name__, url_prefix="/activities")
    _install_error_handlers(blueprint)
    blueprint.add_url_rule("", view_func=create_user_activity, methods=["POST"])
    blueprint.add_url_rule(
        "/<user_id>", view_func=get_user_activities_endpoint, methods=["GET"]
    )
    return blueprint