"""
Study session service for tracking timed study sessions.
"""
import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from studydeck.core.exceptions import InvalidInputError, NotFoundError, StoreError
from studydeck.models.enums import AnalyticsPeriod, SessionType
from studydeck.models.study_session import StudySession
from studydeck.services.srs_service import round_half_up
from studydeck.utils.text_utils import clean_text, normalize_tags

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('subject', 'topic', 'session_type', 'goals', 'pomodoro_cycles', 'focus_score', 'notes_created')
NON_NULLABLE_COUNTERS = ('pomodoro_cycles', 'notes_created')


def subtract_months(moment: datetime, months: int) -> datetime:
    """Move a datetime back by calendar months, clamping the day to the target month's length."""
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    # Last day of the target month
    next_month = datetime(year + (month // 12), month % 12 + 1, 1)
    last_day = (next_month - timedelta(days=1)).day
    return moment.replace(year=year, month=month, day=min(moment.day, last_day))


def period_start(period: AnalyticsPeriod, now: datetime) -> datetime:
    if period == AnalyticsPeriod.DAILY:
        return now - timedelta(days=7)
    if period == AnalyticsPeriod.WEEKLY:
        return now - timedelta(days=30)
    return subtract_months(now, 6)


def _commit(session: Session, study_session: StudySession, action: str) -> StudySession:
    session.add(study_session)
    try:
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Database error while trying to {action}: {str(e)}")
        raise StoreError(f"Failed to {action}") from e
    session.refresh(study_session)
    return study_session


def _validate_focus_score(focus_score: Optional[int]) -> None:
    if focus_score is not None and not 0 <= focus_score <= 100:
        raise InvalidInputError("Focus score must be between 0 and 100")


def _parse_session_type(value) -> SessionType:
    try:
        return SessionType(value)
    except ValueError:
        raise InvalidInputError(f"Unknown session type: {value}")


def _require_session(session: Session, session_id: int, user_id: int) -> StudySession:
    study_session = session.exec(
        select(StudySession).where(StudySession.id == session_id, StudySession.user_id == user_id)
    ).first()
    if study_session is None:
        raise NotFoundError("Session not found")
    return study_session


def start_session(
    session: Session,
    user_id: int,
    subject: str,
    topic: Optional[str] = None,
    session_type: SessionType = SessionType.POMODORO,
    goals: Optional[Sequence[str]] = None,
    now: Optional[datetime] = None
) -> StudySession:
    """
    Start a study session.

    Raises:
        InvalidInputError: If subject is missing or blank
    """
    clean_subject = clean_text(subject)
    if not clean_subject:
        raise InvalidInputError("Subject is required")

    study_session = StudySession(
        user_id=user_id,
        subject=clean_subject,
        topic=clean_text(topic),
        session_type=_parse_session_type(session_type).value,
        goals=normalize_tags(goals),
        start_time=now or datetime.utcnow()
    )
    study_session = _commit(session, study_session, "start study session")
    logger.info(f"Started study session {study_session.id} for user {user_id} ({clean_subject})")
    return study_session


def update_session(session: Session, session_id: int, user_id: int, updates: Dict[str, Any]) -> StudySession:
    """
    Update selected fields of a study session.

    Unknown fields are ignored.

    Raises:
        NotFoundError: If the session does not exist or is not owned by user_id
        InvalidInputError: If a field value is invalid
    """
    study_session = _require_session(session, session_id, user_id)

    # Validate everything before touching the record
    changes = {}
    for field_name, value in updates.items():
        if field_name not in UPDATABLE_FIELDS:
            continue
        if field_name == 'subject':
            value = clean_text(value)
            if not value:
                raise InvalidInputError("Subject cannot be empty")
        elif field_name == 'topic':
            value = clean_text(value)
        elif field_name == 'session_type':
            value = _parse_session_type(value).value
        elif field_name == 'goals':
            value = normalize_tags(value)
        elif field_name == 'focus_score':
            _validate_focus_score(value)
        elif field_name in NON_NULLABLE_COUNTERS:
            if value is None or value < 0:
                raise InvalidInputError(f"{field_name} must be a non-negative integer")
        changes[field_name] = value

    for field_name, value in changes.items():
        setattr(study_session, field_name, value)

    return _commit(session, study_session, "update study session")


def end_session(
    session: Session,
    session_id: int,
    user_id: int,
    focus_score: Optional[int] = None,
    notes_created: Optional[int] = None,
    pomodoro_cycles: Optional[int] = None,
    now: Optional[datetime] = None
) -> StudySession:
    """
    Complete a study session and record its duration in minutes.

    Raises:
        NotFoundError: If the session does not exist or is not owned by user_id
        InvalidInputError: If focus_score is outside 0-100
    """
    _validate_focus_score(focus_score)
    study_session = _require_session(session, session_id, user_id)

    end_time = now or datetime.utcnow()
    elapsed = (end_time - study_session.start_time).total_seconds()

    study_session.end_time = end_time
    study_session.duration = max(0, round_half_up(elapsed / 60))
    study_session.completed = True
    if focus_score is not None:
        study_session.focus_score = focus_score
    if notes_created is not None:
        study_session.notes_created = notes_created
    if pomodoro_cycles is not None:
        study_session.pomodoro_cycles = pomodoro_cycles

    study_session = _commit(session, study_session, "end study session")
    logger.info(f"Ended study session {session_id} for user {user_id} after {study_session.duration} minute(s)")
    return study_session


def list_sessions(session: Session, user_id: int, limit: int = 10) -> List[StudySession]:
    """List the user's most recent study sessions."""
    if limit < 1:
        raise InvalidInputError("Limit must be a positive integer")
    return list(session.exec(
        select(StudySession)
        .where(StudySession.user_id == user_id)
        .order_by(StudySession.start_time.desc())  # type: ignore
        .limit(limit)
    ).all())


def get_analytics(
    session: Session,
    user_id: int,
    period: str = AnalyticsPeriod.WEEKLY.value,
    now: Optional[datetime] = None
) -> Dict[str, Any]:
    """
    Summarize completed study sessions over a period.

    Args:
        session: Database session
        user_id: User whose sessions are summarized
        period: 'daily' (last 7 days), 'weekly' (last 30 days) or 'monthly' (last 6 months)
        now: Reference time (defaults to now, UTC)

    Returns:
        Dict with period, total_study_time (minutes), total_sessions,
        average_focus_score and subject_distribution (minutes per subject)

    Raises:
        InvalidInputError: If period is unknown
    """
    try:
        period_enum = AnalyticsPeriod(period)
    except ValueError:
        raise InvalidInputError(f"Unknown period: {period}")

    now = now or datetime.utcnow()
    start = period_start(period_enum, now)

    sessions = session.exec(
        select(StudySession).where(
            StudySession.user_id == user_id,
            StudySession.start_time >= start,
            StudySession.completed == True  # noqa: E712
        )
    ).all()

    total_study_time = sum(s.duration for s in sessions)
    total_sessions = len(sessions)
    average_focus_score = (
        sum(s.focus_score or 0 for s in sessions) / total_sessions if total_sessions else 0
    )

    subject_distribution: Dict[str, int] = {}
    for s in sessions:
        subject_distribution[s.subject] = subject_distribution.get(s.subject, 0) + s.duration

    return {
        'period': period_enum.value,
        'total_study_time': total_study_time,
        'total_sessions': total_sessions,
        'average_focus_score': round_half_up(average_focus_score),
        'subject_distribution': subject_distribution,
    }
