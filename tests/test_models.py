from datetime import datetime, timedelta, timezone

import pytest

from inheritx.models import (
    Claim,
    ClaimStatus,
    CreateClaim,
    CreateUserActivityRequest,
    ActivityLog,
    KycRecord,
    UpdateClaim,
    UserActivitiesResponse,
    UserActivity,
    UserActivityResponse,
    WithdrawalRecord,
    format_date,
    from_json,
    to_json,
)

UTC = timezone.utc


@pytest.fixture
def claim():
    return Claim(
        id=7,
        user_id=3,
        amount=12.5,
        status=ClaimStatus.APPROVED,
        description="roof",
        created_at=datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC),
        updated_at=datetime(2024, 1, 3, 3, 4, 5, tzinfo=UTC),
    )


def test_parse_is_case_insensitive():
    assert ClaimStatus.parse("APPROVED") is ClaimStatus.APPROVED
    assert ClaimStatus.parse("Rejected") is ClaimStatus.REJECTED


def test_parse_rejects_unknown():
    with pytest.raises(ValueError, match="invalid claim status"):
        ClaimStatus.parse("closed")


def test_status_str_is_lowercase_name():
    assert str(ClaimStatus.parse("PENDING")) == "pending"


def test_format_date():
    assert format_date(datetime(2024, 3, 5, 10, 0, tzinfo=UTC)) == "05-03-2024"


def test_format_date_uses_utc():
    value = datetime(2024, 3, 5, 23, 30, tzinfo=timezone(timedelta(hours=-2)))
    assert format_date(value) == "06-03-2024"


def test_claim_round_trip(claim):
    assert from_json(Claim, to_json(claim)) == claim


def test_to_json_values(claim):
    data = to_json(claim)
    assert data["status"] == "approved"
    assert data["created_at"] == "2024-01-02T03:04:05Z"


def test_missing_optional_field_is_none():
    request = from_json(
        CreateUserActivityRequest,
        {"user_id": "u1", "activity_type": "login", "details": "d", "action_type": "view"},
    )
    assert request.action_link is None
    assert request.user_id == "u1"


def test_missing_required_field():
    with pytest.raises(ValueError, match="description"):
        from_json(CreateClaim, {"user_id": 1, "amount": 2.0})


@pytest.mark.parametrize(
    "data",
    [
        {"user_id": "1", "amount": 2.0, "description": "x"},
        {"user_id": True, "amount": 2.0, "description": "x"},
        {"user_id": 1.0, "amount": 2.0, "description": "x"},
        {"user_id": 1, "amount": "2", "description": "x"},
        {"user_id": 1, "amount": 2.0, "description": None},
    ],
)
def test_wrong_types_rejected(data):
    with pytest.raises(ValueError):
        from_json(CreateClaim, data)


def test_float_field_accepts_integer():
    created = from_json(CreateClaim, {"user_id": 1, "amount": 100, "description": "x"})
    assert created.amount == 100.0
    assert isinstance(created.amount, float)


def test_enum_is_case_sensitive_in_json():
    with pytest.raises(ValueError):
        from_json(UpdateClaim, {"status": "Approved"})
    assert from_json(UpdateClaim, {"status": "rejected"}).status is ClaimStatus.REJECTED


def test_extra_fields_ignored():
    update = from_json(UpdateClaim, {"description": "new", "other": 1})
    assert update == UpdateClaim(status=None, description="new")


def test_non_mapping_rejected():
    with pytest.raises(ValueError):
        from_json(UpdateClaim, ["status"])


def test_timestamp_with_z_suffix():
    log = from_json(
        ActivityLog,
        {"id": 1, "user_id": "u", "action": "a", "timestamp": "2024-01-02T03:04:05Z", "details": "d"},
    )
    assert log.timestamp == datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)


def test_invalid_timestamp_rejected():
    with pytest.raises(ValueError):
        from_json(
            ActivityLog,
            {"id": 1, "user_id": "u", "action": "a", "timestamp": "yesterday", "details": "d"},
        )


def test_nested_round_trip():
    response = UserActivitiesResponse(
        activities=[UserActivityResponse(1, "u", "01-01-2024", "t", "d", "a", None)],
        total=1,
        page=1,
        page_size=10,
    )
    assert from_json(UserActivitiesResponse, to_json(response)) == response


def test_user_activity_to_response():
    when = datetime(2024, 6, 1, 12, tzinfo=UTC)
    activity = UserActivity(4, "u9", when, "deposit", "details", "open", "/x", when)
    response = activity.to_response()
    assert response.date == format_date(when)
    assert (response.id, response.user_id, response.action_link) == (4, "u9", "/x")


def test_kyc_to_response_without_update():
    when = datetime(2024, 6, 1, tzinfo=UTC)
    record = KycRecord(1, 2, "Test User", "01-01-1990", "passport", "AB123456", "addr", "pending", when, None)
    response = record.to_response()
    assert response.updated_at is None
    assert response.created_at == format_date(when)
    assert response.verification_status == "pending"


def test_kyc_to_response_with_update():
    created = datetime(2024, 6, 1, tzinfo=UTC)
    updated = datetime(2024, 7, 2, tzinfo=UTC)
    record = KycRecord(1, 2, "Test User", "01-01-1990", "passport", "AB123456", "addr", "verified", created, updated)
    assert record.to_response().updated_at == format_date(updated)


def test_withdrawal_to_response():
    when = datetime(2024, 2, 2, tzinfo=UTC)
    record = WithdrawalRecord(5, "plan", "wallet", 100, "payer", when)
    response = record.to_response()
    assert response.created_at == format_date(when)
    assert (response.id, response.amount, response.payer_name) == (5, 100, "payer")