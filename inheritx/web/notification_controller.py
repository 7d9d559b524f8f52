"""HTTP routes for notifications."""

from __future__ import annotations

from flask import Blueprint

from inheritx.models import CreateNotification, UpdateNotification
from inheritx.repositories import notifications as notification_repository
from inheritx.web.activity_controller import (
    _install_error_handlers,
    _json,
    _perform,
    _read_body,
)


def get_notifications():
    """GET /notifications: every notification."""
    return _json(_perform("Failed to fetch notifications", notification_repository.get_all))


def get_notification(notification_id: int):
    """GET /notifications/<id>: one notification."""
    notification = _perform(
        "Notification not found",
        notification_repository.get_by_id,
        notification_id,
        status=404,
    )
    return _json(notification)


def create_notification():
    """POST /notifications: store a new unread notification."""
    notification = _read_body(CreateNotification)
    created = _perform(
        "Failed to create notification", notification_repository.create, notification
    )
    return _json(created, 201)


def update_notification(notification_id: int):
    """PUT /notifications/<id>: change the given fields of a notification."""
    notification = _read_body(UpdateNotification)
    updated = _perform(
        "Failed to update notification",
        notification_repository.update,
        notification_id,
        notification,
    )
    return _json(updated)


def delete_notification(notification_id: int):
    """DELETE /notifications/<id>: remove a notification."""
    _perform("Failed to delete notification", notification_repository.delete, notification_id)
    return "", 204


def mark_notification_as_read(notification_id: int):
    """POST /notifications/<id>/read: flag a notification as read."""
    updated = _perform(
        "Failed to mark notification as read",
        notification_repository.mark_as_read,
        notification_id,
    )
    return _json(updated)


def create_blueprint() -> Blueprint:
    """Build the /notifications routes."""
    blueprint = Blueprint("notifications", __name__, url_prefix="/notifications")
    _install_error_handlers(blueprint)
    item = "/<int(signed=True):notification_id>"
    routes = (
        ("", get_notifications, "GET"),
        ("", create_notification, "POST"),
        (item, get_notification, "GET"),
        (item, update_notification, "PUT"),
        (item, delete_notification, "DELETE"),
        (f"{item}/read", mark_notification_as_read, "POST"),
    )
    for rule, view, method in routes:
        blueprint.add_url_rule(rule, view_func=view, methods=[method])
    return blueprint