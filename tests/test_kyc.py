import pytest

from inheritx.db import NotFoundError, connect, run_migrations
from inheritx.models import CreateKycRequest
from inheritx.repositories import kyc


@pytest.fixture
def conn():
    connection = connect(":memory:")
    run_migrations(connection)
    yield connection
    connection.close()


def _request(user_id=1):
    return CreateKycRequest(
        user_id=user_id,
        full_name="Test User",
        date_of_birth="01-01-1990",
        id_type="passport",
        id_number="AB123456",
        address="123 Test St, Test City",
    )


def test_create_kyc_is_pending(conn):
    record = kyc.create_kyc(conn, _request())
    assert record.verification_status == "pending"
    assert record.user_id == 1
    assert record.full_name == "Test User"
    assert record.id_number == "AB123456"
    assert record.updated_at is None
    assert record.created_at.tzinfo is not None


def test_update_verification_status(conn):
    created = kyc.create_kyc(conn, _request())
    updated = kyc.update_kyc_verification_status(conn, created.id, "verified")
    assert updated.id == created.id
    assert updated.verification_status == "verified"
    assert updated.updated_at is not None
    assert kyc.get_kyc_by_id(conn, created.id) == updated


def test_update_missing_record_raises(conn):
    with pytest.raises(NotFoundError):
        kyc.update_kyc_verification_status(conn, 99, "verified")


def test_get_by_id_missing_raises(conn):
    with pytest.raises(NotFoundError):
        kyc.get_kyc_by_id(conn, 1)


def test_get_by_user_id_round_trip(conn):
    created = kyc.create_kyc(conn, _request(user_id=7))
    assert kyc.get_kyc_by_user_id(conn, 7) == created
    with pytest.raises(NotFoundError):
        kyc.get_kyc_by_user_id(conn, 8)


def test_get_by_user_id_with_two_records_raises(conn):
    kyc.create_kyc(conn, _request())
    kyc.create_kyc(conn, _request())
    with pytest.raises(LookupError):
        kyc.get_kyc_by_user_id(conn, 1)


def test_is_kyc_verified(conn):
    assert kyc.is_kyc_verified(conn, 1) is False
    created = kyc.create_kyc(conn, _request())
    assert kyc.is_kyc_verified(conn, 1) is False
    kyc.update_kyc_verification_status(conn, created.id, "verified")
    assert kyc.is_kyc_verified(conn, 1) is True
    kyc.update_kyc_verification_status(conn, created.id, "rejected")
    assert kyc.is_kyc_verified(conn, 1) is False