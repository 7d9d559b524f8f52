"""In-memory activity log kept by the web process, with its HTTP routes."""

from __future__ import annotations

import threading
from collections.abc import Iterable
from typing import Optional

from flask import Blueprint, jsonify, request

from inheritx.models import ActivityLog, from_json, to_json

_MAX_ID = 0xFFFFFFFF


class ActivityLogStore:
    """A thread-safe list of activity logs."""

    def __init__(self, logs: Optional[Iterable[ActivityLog]] = None) -> None:
        self._logs: list[ActivityLog] = list(logs or [])
        self._lock = threading.Lock()

    def create(self, log: ActivityLog) -> None:
        """Append a log."""
        with self._lock:
            self._logs.append(log)

    def get_all(self) -> list[ActivityLog]:
        """Return a copy of every log, in insertion order."""
        with self._lock:
            return list(self._logs)

    def update(self, log_id: int, log: ActivityLog) -> bool:
        """Replace the first log with the given id; tell whether one was found."""
        with self._lock:
            for index, existing in enumerate(self._logs):
                if existing.id == log_id:
                    self._logs[index] = log
                    return True
            return False

    def delete(self, log_id: int) -> bool:
        """Remove every log with the given id; tell whether any was removed."""
        with self._lock:
            kept = [log for log in self._logs if log.id != log_id]
            removed = len(kept) < len(self._logs)
            self._logs = kept
            return removed


class _BadRequest(ValueError):
    pass


def _read_log() -> ActivityLog:
    data = request.get_json(silent=True)
    if data is None:
        raise _BadRequest("expected a JSON body")
    log = from_json(ActivityLog, data)
    if not 0 <= log.id <= _MAX_ID:
        raise _BadRequest("field `id`: out of range")
    return log


def create_blueprint(store: Optional[ActivityLogStore] = None) -> Blueprint:
    """Build the /activity-log routes over the given store."""
    store = store if store is not None else ActivityLogStore()
    blueprint = Blueprint("activity_log", __name__, url_prefix="/activity-log")

    @blueprint.errorhandler(ValueError)
    def bad_request(error: ValueError):
        return jsonify({"error": str(error)}), 400

    @blueprint.post("")
    def create():
        store.create(_read_log())
        return jsonify("Activity log created"), 201

    @blueprint.get("")
    def get_all():
        return jsonify(to_json(store.get_all())), 200

    @blueprint.put("/<int:log_id>")
    def update(log_id: int):
        if store.update(log_id, _read_log()):
            return jsonify("Updated"), 200
        return jsonify("Not found"), 404

    @blueprint.delete("/<int:log_id>")
    def delete(log_id: int):
        if store.delete(log_id):
            return jsonify("Deleted"), 200
        return jsonify("Not found"), 404

    return blueprint