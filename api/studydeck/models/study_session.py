"""
StudySession model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional, List
from datetime import datetime
from sqlalchemy import Column, JSON, String as SAString
from studydeck.models.enums import SessionType


class StudySession(SQLModel, table=True):
    """StudySession table - tracks timed study sessions."""
    __tablename__ = "study_sessions"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True)
    subject: str
    topic: Optional[str] = None
    session_type: SessionType = Field(
        default=SessionType.POMODORO,
        sa_column=Column(SAString, nullable=False, default=SessionType.POMODORO.value)
    )
    start_time: datetime = Field(default_factory=datetime.utcnow)
    end_time: Optional[datetime] = None
    duration: int = Field(default=0)  # Minutes
    pomodoro_cycles: int = Field(default=0)
    focus_score: Optional[int] = None  # 0-100
    completed: bool = Field(default=False)
    goals: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))
    notes_created: int = Field(default=0)
