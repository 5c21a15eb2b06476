"""
Study note schemas.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from studydeck.models.enums import AttachmentType, NoteComplexity


class NoteAttachment(BaseModel):
    """A resource attached to a note."""
    type: AttachmentType
    url: str
    name: Optional[str] = None


class CreateNoteRequest(BaseModel):
    """Request schema for creating a note."""
    user_id: int = Field(..., description="Owner user ID")
    title: str = Field(..., description="Note title")
    content: str = Field(..., description="Note body")
    subject: Optional[str] = Field(None, description="Subject of the note")
    tags: List[str] = Field(default_factory=list, description="Free-text tags")
    attachments: List[NoteAttachment] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": 1,
                "title": "Photosynthesis",
                "content": "Light reactions happen in the thylakoid membrane...",
                "subject": "biology",
                "tags": ["plants"],
                "attachments": [{"type": "link", "url": "https://example.com/diagram", "name": "Diagram"}]
            }
        }


class UpdateNoteRequest(BaseModel):
    """Request schema for updating a note. Only provided fields are changed."""
    user_id: int = Field(..., description="Owner user ID")
    title: Optional[str] = None
    content: Optional[str] = None
    subject: Optional[str] = None
    tags: Optional[List[str]] = None
    attachments: Optional[List[NoteAttachment]] = None


class SummarizeNoteRequest(BaseModel):
    """Request schema for summarizing a note."""
    user_id: int = Field(..., description="Owner user ID")


class StudyNoteResponse(BaseModel):
    """Study note response schema."""
    id: int
    user_id: int
    title: str
    content: str
    subject: Optional[str] = None
    tags: List[str] = []
    attachments: List[NoteAttachment] = []
    summary: Optional[str] = None
    key_points: List[str] = []
    complexity: Optional[NoteComplexity] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class StudyNotesResponse(BaseModel):
    """Response schema for note lists."""
    notes: List[StudyNoteResponse]


class NoteSummaryResponse(BaseModel):
    """Response schema for a note summary."""
    message: str
    summary: str
    key_points: List[str]
    complexity: Optional[NoteComplexity] = None
    tags: List[str]
