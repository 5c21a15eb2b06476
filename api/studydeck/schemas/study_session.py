"""
Study session schemas.
"""
from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from datetime import datetime
from studydeck.models.enums import SessionType


class StartSessionRequest(BaseModel):
    """Request schema for starting a study session."""
    user_id: int = Field(..., description="Owner user ID")
    subject: str = Field(..., description="Subject being studied")
    topic: Optional[str] = Field(None, description="Optional topic within the subject")
    session_type: SessionType = Field(SessionType.POMODORO, description="Kind of session")
    goals: List[str] = Field(default_factory=list, description="Goals for this session")


class UpdateSessionRequest(BaseModel):
    """Request schema for updating a study session. Only provided fields are changed."""
    user_id: int = Field(..., description="Owner user ID")
    subject: Optional[str] = None
    topic: Optional[str] = None
    session_type: Optional[SessionType] = None
    goals: Optional[List[str]] = None
    pomodoro_cycles: Optional[int] = Field(None, ge=0)
    focus_score: Optional[int] = None
    notes_created: Optional[int] = Field(None, ge=0)


class EndSessionRequest(BaseModel):
    """Request schema for ending a study session."""
    user_id: int = Field(..., description="Owner user ID")
    focus_score: Optional[int] = Field(None, description="Self-assessed focus, 0-100")
    notes_created: Optional[int] = Field(None, ge=0)
    pomodoro_cycles: Optional[int] = Field(None, ge=0)


class StudySessionResponse(BaseModel):
    """Study session response schema."""
    id: int
    user_id: int
    subject: str
    topic: Optional[str] = None
    session_type: SessionType
    start_time: datetime
    end_time: Optional[datetime] = None
    duration: int = 0
    pomodoro_cycles: int = 0
    focus_score: Optional[int] = None
    completed: bool = False
    goals: List[str] = []
    notes_created: int = 0

    class Config:
        from_attributes = True


class StudySessionsResponse(BaseModel):
    """Response schema for study session lists."""
    sessions: List[StudySessionResponse]


class SessionAnalyticsResponse(BaseModel):
    """Response schema for study session analytics."""
    period: str
    total_study_time: int = Field(..., description="Minutes studied in completed sessions")
    total_sessions: int
    average_focus_score: int
    subject_distribution: Dict[str, int] = Field(..., description="Minutes per subject")
