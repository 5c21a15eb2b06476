"""
Study note endpoints.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import Optional

from studydeck.api.v1.dependencies import get_note_summarizer
from studydeck.core.database import get_session
from studydeck.schemas.study_note import (
    CreateNoteRequest,
    NoteSummaryResponse,
    StudyNoteResponse,
    StudyNotesResponse,
    SummarizeNoteRequest,
    UpdateNoteRequest,
)
from studydeck.services import study_note_service

router = APIRouter(prefix="/notes", tags=["notes"])


@router.post("", response_model=StudyNoteResponse, status_code=status.HTTP_201_CREATED)
def create_note(
    request: CreateNoteRequest,
    session: Session = Depends(get_session)
):
    """Create a study note."""
    note = study_note_service.create_note(
        session,
        user_id=request.user_id,
        title=request.title,
        content=request.content,
        subject=request.subject,
        tags=request.tags,
        attachments=[a.model_dump(mode="json") for a in request.attachments]
    )
    return StudyNoteResponse.model_validate(note)


@router.get("", response_model=StudyNotesResponse)
def get_notes(
    user_id: int,
    subject: Optional[str] = None,
    tag: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """Get the user's notes, most recently updated first."""
    notes = study_note_service.list_notes(session, user_id, subject=subject, tag=tag)
    return StudyNotesResponse(notes=[StudyNoteResponse.model_validate(note) for note in notes])


@router.get("/{note_id}", response_model=StudyNoteResponse)
def get_note(
    note_id: int,
    user_id: int,
    session: Session = Depends(get_session)
):
    """Get a note by ID."""
    return StudyNoteResponse.model_validate(study_note_service.get_note(session, note_id, user_id))


@router.put("/{note_id}", response_model=StudyNoteResponse)
def update_note(
    note_id: int,
    request: UpdateNoteRequest,
    session: Session = Depends(get_session)
):
    """Update a note. Only fields present in the request are changed."""
    updates = request.model_dump(mode="json", exclude_unset=True, exclude={"user_id"})
    note = study_note_service.update_note(session, note_id, request.user_id, updates)
    return StudyNoteResponse.model_validate(note)


@router.delete("/{note_id}", status_code=status.HTTP_200_OK)
def delete_note(
    note_id: int,
    user_id: int,
    session: Session = Depends(get_session)
):
    """Delete a note."""
    study_note_service.delete_note(session, note_id, user_id)
    return {"message": "Note deleted successfully"}


@router.post("/{note_id}/summarize", response_model=NoteSummaryResponse)
def summarize_note(
    note_id: int,
    request: SummarizeNoteRequest,
    session: Session = Depends(get_session),
    summarizer=Depends(get_note_summarizer)
):
    """Summarize a note with the LLM and store the summary, key points and complexity on it."""
    note = study_note_service.summarize_note(session, summarizer, note_id, request.user_id)
    return NoteSummaryResponse(
        message="Note summarized successfully",
        summary=note.summary,
        key_points=note.key_points,
        complexity=note.complexity,
        tags=note.tags
    )
