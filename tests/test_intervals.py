"""Tests for recording and listing session intervals."""

from datetime import datetime, timedelta, timezone

import pytest

from focus_timer_api.app.core.exceptions import (
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    parse_input,
)
from focus_timer_api.app.schemas.interval import IntervalCreate, IntervalType
from focus_timer_api.app.schemas.session import SessionStart
from focus_timer_api.app.services.interval_service import IntervalService
from focus_timer_api.app.services.session_service import SessionService

from helpers import count_rows, run


@pytest.fixture
def session(alice):
    return run(SessionService.start_session(alice, SessionStart(planned_focus_minutes=25)))


def add(identity, session_id, **fields):
    return run(IntervalService.add_interval(identity, session_id, IntervalCreate(**fields)))


class TestAddInterval:

    def test_defaults(self, alice, session):
        before = datetime.now(timezone.utc)
        interval = add(alice, session.id)
        assert interval.session_id == session.id
        assert interval.type == IntervalType.FOCUS
        assert interval.duration_seconds == 0
        assert interval.completed is False
        assert interval.ended_at is None
        assert interval.started_at >= before

    def test_explicit_fields(self, alice, session):
        started = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
        interval = add(
            alice,
            session.id,
            type="long_break",
            started_at=started,
            ended_at=started + timedelta(minutes=15),
            duration_seconds=900,
            completed=True,
        )
        assert interval.type == IntervalType.LONG_BREAK
        assert interval.started_at == started
        assert interval.ended_at == started + timedelta(minutes=15)
        assert interval.duration_seconds == 900
        assert interval.completed is True

    def test_naive_times_are_utc(self, alice, session):
        interval = add(alice, session.id, started_at=datetime(2026, 3, 1, 9, 0))
        assert interval.started_at == datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)

    def test_foreign_session_not_found_and_nothing_inserted(self, alice, bob, session):
        with pytest.raises(NotFoundError):
            add(bob, session.id, type="break", duration_seconds=300)
        assert count_rows("focus_intervals") == 0
        assert run(IntervalService.list_intervals(alice, session.id)) == []

    def test_missing_session_not_found(self, alice):
        with pytest.raises(NotFoundError):
            add(alice, 12345)

    def test_unauthenticated(self, session):
        with pytest.raises(UnauthorizedError):
            run(IntervalService.add_interval(None, session.id, IntervalCreate()))
        assert count_rows("focus_intervals") == 0


class TestListIntervals:

    def test_lists_in_start_order(self, alice, session):
        base = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
        add(alice, session.id, type="break", started_at=base + timedelta(minutes=25))
        add(alice, session.id, type="focus", started_at=base)
        add(alice, session.id, type="focus", started_at=base + timedelta(minutes=30))

        intervals = run(IntervalService.list_intervals(alice, session.id))
        assert [i.type for i in intervals] == [IntervalType.FOCUS, IntervalType.BREAK, IntervalType.FOCUS]
        assert [i.started_at for i in intervals] == sorted(i.started_at for i in intervals)

    def test_only_this_sessions_intervals(self, alice, session):
        other = run(SessionService.start_session(alice, SessionStart()))
        add(alice, session.id)
        add(alice, other.id)
        intervals = run(IntervalService.list_intervals(alice, session.id))
        assert len(intervals) == 1
        assert intervals[0].session_id == session.id

    def test_foreign_session_not_found(self, alice, bob, session):
        add(alice, session.id)
        with pytest.raises(NotFoundError):
            run(IntervalService.list_intervals(bob, session.id))

    def test_unauthenticated(self, session):
        with pytest.raises(UnauthorizedError):
            run(IntervalService.list_intervals(None, session.id))


class TestIntervalValidation:

    @pytest.mark.parametrize("payload", [
        {"type": "nap"},
        {"type": None},
        {"durationSeconds": -1},
        {"durationSeconds": 2**63},
        {"completed": "sometimes"},
        {"startedAt": "not a date"},
    ])
    def test_invalid(self, payload):
        with pytest.raises(ValidationError):
            parse_input(IntervalCreate, payload)
