import pytest

from inheritx.db import connect, run_migrations
from inheritx.models import CreateUserActivityRequest
from inheritx.repositories.activity import create_activity, get_user_activities


@pytest.fixture
def conn():
    connection = connect(":memory:")
    run_migrations(connection)
    yield connection
    connection.close()


def _request(user_id="u1", link=None):
    return CreateUserActivityRequest(
        user_id=user_id, activity_type="deposit", details="details", action_type="view", action_link=link
    )


def test_create_activity_returns_saved_row(conn):
    activity = create_activity(conn, _request(link="/plans/1"))
    assert activity.id >= 1
    assert (activity.user_id, activity.activity_type, activity.action_link) == ("u1", "deposit", "/plans/1")
    assert activity.date.tzinfo is not None
    assert activity.created_at.tzinfo is not None


def test_create_activity_without_link(conn):
    assert create_activity(conn, _request()).action_link is None


def test_pagination(conn):
    own = {create_activity(conn, _request()).id for _ in range(3)}
    create_activity(conn, _request(user_id="u2"))
    first, total = get_user_activities(conn, "u1", 1, 2)
    second, total_again = get_user_activities(conn, "u1", 2, 2)
    assert total == total_again == len(own)
    assert len(first) == 2
    assert len(second) == 1
    assert {a.id for a in first + second} == own


def test_unknown_user_has_nothing(conn):
    create_activity(conn, _request())
    assert get_user_activities(conn, "nobody", 1, 10) == ([], 0)


def test_newest_first(conn):
    for day in ("2024-01-01", "2024-03-01", "2024-02-01"):
        conn.execute(
            "INSERT INTO user_activities (user_id, date, activity_type, details, action_type) "
            "VALUES ('u1', ?, 't', 'd', 'a')",
            (day + "T00:00:00+00:00",),
        )
    activities, _ = get_user_activities(conn, "u1", 1, 10)
    dates = [a.date for a in activities]
    assert dates == sorted(dates, reverse=True)