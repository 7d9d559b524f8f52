import sqlite3
from datetime import datetime, timedelta

import pytest

from inheritx.db import Pool, connect, run_migrations

TABLES = {"notifications", "user_activities", "claims", "kyc_records"}


def _tables(conn):
    return {row["name"] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}


@pytest.fixture
def conn():
    connection = connect(":memory:")
    run_migrations(connection)
    yield connection
    connection.close()


def test_migrations_create_tables(conn):
    assert TABLES <= _tables(conn)


def test_migrations_are_idempotent(conn):
    before = _tables(conn)
    run_migrations(conn)
    assert _tables(conn) == before


def test_claim_status_is_constrained(conn):
    with pytest.raises(sqlite3.IntegrityError):
        conn.execute(
            "INSERT INTO claims (user_id, amount, status, description) VALUES (1, 1.0, 'bogus', 'x')"
        )


def test_notification_defaults(conn):
    conn.execute("INSERT INTO notifications (title, body) VALUES ('t', 'b')")
    row = conn.execute("SELECT is_read, created_at FROM notifications").fetchone()
    assert row["is_read"] == 0
    assert datetime.fromisoformat(row["created_at"]).utcoffset() == timedelta(0)


def test_kyc_defaults(conn):
    conn.execute(
        "INSERT INTO kyc_records (user_id, full_name, date_of_birth, id_type, id_number, address) "
        "VALUES (1, 'Test User', '01-01-1990', 'passport', 'AB123456', 'addr')"
    )
    row = conn.execute("SELECT verification_status, updated_at FROM kyc_records").fetchone()
    assert row["verification_status"] == "pending"
    assert row["updated_at"] is None


def test_memory_pool_shares_one_database():
    pool = Pool(":memory:")
    with pool.get() as first:
        run_migrations(first)
        first.execute("INSERT INTO notifications (title, body) VALUES ('t', 'b')")
        first.commit()
    with pool.get() as second:
        assert second.execute("SELECT COUNT(*) FROM notifications").fetchone()[0] == 1


def test_file_pool_persists(tmp_path):
    pool = Pool(str(tmp_path / "data.sqlite3"))
    with pool.get() as first:
        run_migrations(first)
        first.execute("INSERT INTO notifications (title, body) VALUES ('t', 'b')")
        first.commit()
    with pool.get() as second:
        row = second.execute("SELECT title FROM notifications").fetchone()
        assert row["title"] == "t"