"""HTTP routes for claims."""

from __future__ import annotations

from flask import Blueprint

from inheritx.models import ClaimStatus, CreateClaim, UpdateClaim
from inheritx.repositories import claims as claim_repository
from inheritx.web.activity_controller import (
    _BadRequest,
    _install_error_handlers,
    _json,
    _perform,
    _read_body,
)


def _parse_status(value: str) -> ClaimStatus:
    try:
        return ClaimStatus.parse(value)
    except ValueError:
        raise _BadRequest("Invalid status") from None


def get_claims():
    """GET /claims: every claim."""
    return _json(_perform("Failed to fetch claims", claim_repository.get_all))


def get_user_claims(user_id: int):
    """GET /claims/user/<user_id>: the claims of one user."""
    return _json(
        _perform("Failed to fetch user claims", claim_repository.get_by_user_id, user_id)
    )


def get_claims_by_status(status: str):
    """GET /claims/status/<status>: claims in one status, named case-insensitively."""
    claim_status = _parse_status(status)
    return _json(
        _perform(
            "Failed to fetch claims by status", claim_repository.get_by_status, claim_status
        )
    )


def get_user_claims_by_status(user_id: int, status: str):
    """GET /claims/user/<user_id>/status/<status>: one user's claims in one status."""
    claim_status = _parse_status(status)
    return _json(
        _perform(
            "Failed to fetch user claims by status",
            claim_repository.get_by_user_and_status,
            user_id,
            claim_status,
        )
    )


def create_claim():
    """POST /claims: store a new pending claim."""
    claim = _read_body(CreateClaim)
    return _json(_perform("Failed to create claim", claim_repository.create, claim), 201)


def update_claim(claim_id: int):
    """PUT /claims/<id>: change the status and/or description of a claim."""
    claim = _read_body(UpdateClaim)
    return _json(_perform("Failed to update claim", claim_repository.update, claim_id, claim))


def create_blueprint() -> Blueprint:
    """Build the /claims routes."""
    blueprint = Blueprint("claims", __name__, url_prefix="/claims")
    _install_error_handlers(blueprint)
    routes = [
        ("", get_claims, "GET"),
        ("", create_claim, "POST"),
        ("/user/<int(signed=True):user_id>", get_user_claims, "GET"),
        ("/status/<status>", get_claims_by_status, "GET"),
        ("/user/<int(signed=True):user_id>/status/<status>", get_user_claims_by_status, "GET"),
        ("/<int(signed=True):claim_id>", update_claim, "PUT"),
    ]
    for rule, view, method in routes:
        blueprint.add_url_rule(rule, view_func=view, methods=[method])
    return blueprint