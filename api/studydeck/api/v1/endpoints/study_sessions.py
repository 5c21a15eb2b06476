"""
Study session endpoints.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from studydeck.core.database import get_session
from studydeck.models.enums import AnalyticsPeriod
from studydeck.schemas.study_session import (
    EndSessionRequest,
    SessionAnalyticsResponse,
    StartSessionRequest,
    StudySessionResponse,
    StudySessionsResponse,
    UpdateSessionRequest,
)
from studydeck.services import study_session_service

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=StudySessionResponse, status_code=status.HTTP_201_CREATED)
def start_session(
    request: StartSessionRequest,
    session: Session = Depends(get_session)
):
    """Start a study session."""
    study_session = study_session_service.start_session(
        session,
        user_id=request.user_id,
        subject=request.subject,
        topic=request.topic,
        session_type=request.session_type,
        goals=request.goals
    )
    return StudySessionResponse.model_validate(study_session)


@router.get("", response_model=StudySessionsResponse)
def get_sessions(
    user_id: int,
    limit: int = Query(10, ge=1, le=100),
    session: Session = Depends(get_session)
):
    """Get the user's most recent study sessions."""
    sessions = study_session_service.list_sessions(session, user_id, limit=limit)
    return StudySessionsResponse(
        sessions=[StudySessionResponse.model_validate(s) for s in sessions]
    )


@router.get("/analytics", response_model=SessionAnalyticsResponse)
def get_analytics(
    user_id: int,
    period: AnalyticsPeriod = AnalyticsPeriod.WEEKLY,
    session: Session = Depends(get_session)
):
    """Summarize completed study sessions: daily (7 days), weekly (30 days) or monthly (6 months)."""
    return SessionAnalyticsResponse(
        **study_session_service.get_analytics(session, user_id, period=period.value)
    )


@router.put("/{session_id}", response_model=StudySessionResponse)
def update_session(
    session_id: int,
    request: UpdateSessionRequest,
    session: Session = Depends(get_session)
):
    """Update a study session. Only fields present in the request are changed."""
    updates = request.model_dump(exclude_unset=True, exclude={"user_id"})
    study_session = study_session_service.update_session(session, session_id, request.user_id, updates)
    return StudySessionResponse.model_validate(study_session)


@router.post("/{session_id}/end", response_model=StudySessionResponse)
def end_session(
    session_id: int,
    request: EndSessionRequest,
    session: Session = Depends(get_session)
):
    """End a study session and record its duration."""
    study_session = study_session_service.end_session(
        session,
        session_id,
        request.user_id,
        focus_score=request.focus_score,
        notes_created=request.notes_created,
        pomodoro_cycles=request.pomodoro_cycles
    )
    return StudySessionResponse.model_validate(study_session)
