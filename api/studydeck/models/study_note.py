"""
StudyNote model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional, List, Dict
from datetime import datetime
from sqlalchemy import Column, JSON, Text, String as SAString


class StudyNote(SQLModel, table=True):
    """StudyNote table - a user's notes plus the latest AI analysis of them."""
    __tablename__ = "study_notes"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True)
    title: str
    content: str = Field(sa_column=Column(Text, nullable=False))
    subject: Optional[str] = Field(default=None, index=True)
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))
    # [{"type": "image" | "audio" | "link" | "file", "url": str, "name": str | None}]
    attachments: List[Dict[str, Optional[str]]] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False, default=list)
    )

    # Filled in by summarize
    summary: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    key_points: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))
    complexity: Optional[str] = Field(default=None, sa_column=Column(SAString, nullable=True))  # NoteComplexity value

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
