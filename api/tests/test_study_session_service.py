"""
Tests for study session tracking and analytics.
"""
from datetime import datetime, timedelta

import pytest

from studydeck.core.exceptions import InvalidInputError, NotFoundError
from studydeck.models.enums import AnalyticsPeriod, SessionType
from studydeck.services import study_session_service
from studydeck.services.study_session_service import period_start, subtract_months


OWNER_ID = 1
OTHER_USER_ID = 2
NOW = datetime(2024, 8, 31, 18, 0)


def completed_session(session, subject, start, minutes, focus_score=None, user_id=OWNER_ID):
    study_session = study_session_service.start_session(session, user_id, subject, now=start)
    return study_session_service.end_session(
        session, study_session.id, user_id,
        focus_score=focus_score,
        now=start + timedelta(minutes=minutes)
    )


class TestStartSession:
    def test_defaults(self, session):
        study_session = study_session_service.start_session(
            session, OWNER_ID, " Chemistry ", goals=["acids", "acids"], now=NOW
        )

        assert study_session.id is not None
        assert study_session.subject == "Chemistry"
        assert study_session.session_type == SessionType.POMODORO
        assert study_session.start_time == NOW
        assert study_session.completed is False
        assert study_session.duration == 0
        assert study_session.goals == ["acids"]

    def test_requires_subject(self, session):
        with pytest.raises(InvalidInputError):
            study_session_service.start_session(session, OWNER_ID, "  ")

    def test_rejects_unknown_session_type(self, session):
        with pytest.raises(InvalidInputError):
            study_session_service.start_session(session, OWNER_ID, "Math", session_type="nap")


class TestEndSession:
    def test_records_duration_in_minutes(self, session):
        study_session = study_session_service.start_session(session, OWNER_ID, "Math", now=NOW)

        ended = study_session_service.end_session(
            session, study_session.id, OWNER_ID,
            focus_score=80, pomodoro_cycles=1,
            now=NOW + timedelta(minutes=25, seconds=10)
        )

        assert ended.completed is True
        assert ended.duration == 25
        assert ended.end_time == NOW + timedelta(minutes=25, seconds=10)
        assert ended.focus_score == 80
        assert ended.pomodoro_cycles == 1

    def test_half_minute_rounds_up(self, session):
        study_session = study_session_service.start_session(session, OWNER_ID, "Math", now=NOW)

        ended = study_session_service.end_session(
            session, study_session.id, OWNER_ID, now=NOW + timedelta(minutes=2, seconds=30)
        )

        assert ended.duration == 3

    def test_session_of_another_user_is_not_found(self, session):
        study_session = study_session_service.start_session(session, OWNER_ID, "Math", now=NOW)

        with pytest.raises(NotFoundError):
            study_session_service.end_session(session, study_session.id, OTHER_USER_ID, now=NOW)

    def test_rejects_focus_score_out_of_range(self, session):
        study_session = study_session_service.start_session(session, OWNER_ID, "Math", now=NOW)

        with pytest.raises(InvalidInputError):
            study_session_service.end_session(session, study_session.id, OWNER_ID, focus_score=101)


class TestUpdateSession:
    def test_updates_known_fields_only(self, session):
        study_session = study_session_service.start_session(session, OWNER_ID, "Math", now=NOW)

        updated = study_session_service.update_session(session, study_session.id, OWNER_ID, {
            "topic": "Integrals",
            "session_type": "deep_work",
            "user_id": OTHER_USER_ID,
            "completed": True,
        })

        assert updated.topic == "Integrals"
        assert updated.session_type == SessionType.DEEP_WORK
        assert updated.user_id == OWNER_ID
        assert updated.completed is False

    def test_rejects_focus_score_out_of_range(self, session):
        study_session = study_session_service.start_session(session, OWNER_ID, "Math", now=NOW)

        with pytest.raises(InvalidInputError):
            study_session_service.update_session(session, study_session.id, OWNER_ID, {"focus_score": 150})

    @pytest.mark.parametrize("field_name", ["pomodoro_cycles", "notes_created"])
    def test_rejects_null_counters(self, session, field_name):
        study_session = study_session_service.start_session(session, OWNER_ID, "Math", now=NOW)

        with pytest.raises(InvalidInputError):
            study_session_service.update_session(
                session, study_session.id, OWNER_ID, {"topic": "Limits", field_name: None}
            )

        session.expire_all()
        stored = study_session_service.list_sessions(session, OWNER_ID)[0]
        assert stored.topic is None
        assert getattr(stored, field_name) == 0

    def test_session_of_another_user_is_not_found(self, session):
        study_session = study_session_service.start_session(session, OWNER_ID, "Math", now=NOW)

        with pytest.raises(NotFoundError):
            study_session_service.update_session(session, study_session.id, OTHER_USER_ID, {"topic": "x"})


class TestListSessions:
    def test_most_recent_first_with_limit(self, session):
        for offset in range(3):
            study_session_service.start_session(session, OWNER_ID, f"S{offset}", now=NOW + timedelta(hours=offset))
        study_session_service.start_session(session, OTHER_USER_ID, "Other", now=NOW)

        sessions = study_session_service.list_sessions(session, OWNER_ID, limit=2)

        assert [s.subject for s in sessions] == ["S2", "S1"]

    def test_rejects_non_positive_limit(self, session):
        with pytest.raises(InvalidInputError):
            study_session_service.list_sessions(session, OWNER_ID, limit=0)


class TestAnalytics:
    def test_sums_completed_sessions_in_period(self, session):
        completed_session(session, "Math", NOW - timedelta(days=1), 30, focus_score=80)
        completed_session(session, "Math", NOW - timedelta(days=2), 20, focus_score=65)
        completed_session(session, "Physics", NOW - timedelta(days=3), 45)
        # Outside the 7 day window
        completed_session(session, "Physics", NOW - timedelta(days=10), 60, focus_score=90)
        # Not completed
        study_session_service.start_session(session, OWNER_ID, "Math", now=NOW - timedelta(hours=1))
        # Another user
        completed_session(session, "Math", NOW - timedelta(days=1), 30, user_id=OTHER_USER_ID)

        analytics = study_session_service.get_analytics(session, OWNER_ID, period="daily", now=NOW)

        assert analytics == {
            "period": "daily",
            "total_study_time": 95,
            "total_sessions": 3,
            "average_focus_score": 48,  # (80 + 65 + 0) / 3
            "subject_distribution": {"Math": 50, "Physics": 45},
        }

    def test_average_focus_score_rounds_half_up(self, session):
        completed_session(session, "Math", NOW - timedelta(days=1), 30, focus_score=72)
        completed_session(session, "Math", NOW - timedelta(days=2), 30, focus_score=73)

        analytics = study_session_service.get_analytics(session, OWNER_ID, period="daily", now=NOW)

        assert analytics["average_focus_score"] == 73

    def test_weekly_period_covers_thirty_days(self, session):
        completed_session(session, "Math", NOW - timedelta(days=10), 60, focus_score=90)
        completed_session(session, "Math", NOW - timedelta(days=40), 60, focus_score=90)

        analytics = study_session_service.get_analytics(session, OWNER_ID, now=NOW)

        assert analytics["period"] == "weekly"
        assert analytics["total_sessions"] == 1
        assert analytics["average_focus_score"] == 90

    def test_empty_period(self, session):
        analytics = study_session_service.get_analytics(session, OWNER_ID, period="monthly", now=NOW)

        assert analytics["total_sessions"] == 0
        assert analytics["total_study_time"] == 0
        assert analytics["average_focus_score"] == 0
        assert analytics["subject_distribution"] == {}

    def test_unknown_period(self, session):
        with pytest.raises(InvalidInputError):
            study_session_service.get_analytics(session, OWNER_ID, period="yearly")


class TestPeriods:
    def test_subtract_months_clamps_day(self):
        assert subtract_months(datetime(2024, 8, 31, 12, 0), 6) == datetime(2024, 2, 29, 12, 0)

    def test_subtract_months_crosses_year(self):
        assert subtract_months(datetime(2024, 3, 15), 6) == datetime(2023, 9, 15)

    def test_period_starts(self):
        assert period_start(AnalyticsPeriod.DAILY, NOW) == NOW - timedelta(days=7)
        assert period_start(AnalyticsPeriod.WEEKLY, NOW) == NOW - timedelta(days=30)
        assert period_start(AnalyticsPeriod.MONTHLY, NOW) == datetime(2024, 2, 29, 18, 0)
