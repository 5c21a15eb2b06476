"""
Study note service: owner-scoped note CRUD and AI summaries.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from studydeck.core.exceptions import InvalidInputError, NotFoundError, StoreError
from studydeck.models.enums import AttachmentType
from studydeck.models.study_note import StudyNote
from studydeck.utils.text_utils import clean_text, normalize_tags

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('title', 'content', 'subject', 'tags', 'attachments')


def _commit(session: Session, note: StudyNote, action: str) -> StudyNote:
    session.add(note)
    try:
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Database error while trying to {action}: {str(e)}")
        raise StoreError(f"Failed to {action}") from e
    session.refresh(note)
    return note


def normalize_attachments(attachments: Optional[Sequence[Dict[str, Any]]]) -> List[Dict[str, Optional[str]]]:
    """
    Validate attachments into plain dicts with type, url and name.

    Raises:
        InvalidInputError: If an attachment has an unknown type or no url
    """
    normalized = []
    for attachment in attachments or []:
        if not isinstance(attachment, dict):
            raise InvalidInputError("Attachments must be objects")
        try:
            attachment_type = AttachmentType(attachment.get('type'))
        except ValueError:
            raise InvalidInputError(f"Unknown attachment type: {attachment.get('type')}")
        url = attachment.get('url')
        url = clean_text(url) if isinstance(url, str) else None
        if not url:
            raise InvalidInputError("Attachment url is required")
        name = attachment.get('name')
        normalized.append({
            'type': attachment_type.value,
            'url': url,
            'name': clean_text(name) if isinstance(name, str) else None,
        })
    return normalized


def _required_text(value: Optional[str], field_name: str) -> str:
    cleaned = clean_text(value) if isinstance(value, str) else None
    if not cleaned:
        raise InvalidInputError(f"Note {field_name} is required")
    return cleaned


def create_note(
    session: Session,
    user_id: int,
    title: str,
    content: str,
    subject: Optional[str] = None,
    tags: Optional[Sequence[str]] = None,
    attachments: Optional[Sequence[Dict[str, Any]]] = None,
    now: Optional[datetime] = None
) -> StudyNote:
    """
    Create a study note.

    Raises:
        InvalidInputError: If title or content is blank, or an attachment is invalid
    """
    now = now or datetime.utcnow()
    note = StudyNote(
        user_id=user_id,
        title=_required_text(title, 'title'),
        content=_required_text(content, 'content'),
        subject=clean_text(subject),
        tags=normalize_tags(tags),
        attachments=normalize_attachments(attachments),
        created_at=now,
        updated_at=now
    )
    note = _commit(session, note, "create note")
    logger.info(f"Created note {note.id} for user {user_id}")
    return note


def get_note(session: Session, note_id: int, user_id: int) -> StudyNote:
    """
    Raises:
        NotFoundError: If the note does not exist or is not owned by user_id
    """
    note = session.exec(
        select(StudyNote).where(StudyNote.id == note_id, StudyNote.user_id == user_id)
    ).first()
    if note is None:
        raise NotFoundError("Note not found")
    return note


def list_notes(
    session: Session,
    user_id: int,
    subject: Optional[str] = None,
    tag: Optional[str] = None
) -> List[StudyNote]:
    """List the user's notes, most recently updated first, optionally filtered by subject and tag."""
    query = select(StudyNote).where(StudyNote.user_id == user_id)
    if subject:
        query = query.where(StudyNote.subject == subject)
    query = query.order_by(StudyNote.updated_at.desc(), StudyNote.id.desc())  # type: ignore

    notes = list(session.exec(query).all())
    if tag:
        # Tags are a JSON list; matched here so the filter works on every backend
        notes = [note for note in notes if tag in (note.tags or [])]
    return notes


def update_note(
    session: Session,
    note_id: int,
    user_id: int,
    updates: Dict[str, Any],
    now: Optional[datetime] = None
) -> StudyNote:
    """
    Update selected fields of a note. Unknown fields are ignored.

    Raises:
        NotFoundError: If the note does not exist or is not owned by user_id
        InvalidInputError: If a field value is invalid
    """
    note = get_note(session, note_id, user_id)

    changes = {}
    for field_name, value in updates.items():
        if field_name not in UPDATABLE_FIELDS:
            continue
        if field_name in ('title', 'content'):
            value = _required_text(value, field_name)
        elif field_name == 'subject':
            value = clean_text(value)
        elif field_name == 'tags':
            value = normalize_tags(value)
        elif field_name == 'attachments':
            value = normalize_attachments(value)
        changes[field_name] = value

    for field_name, value in changes.items():
        setattr(note, field_name, value)
    note.updated_at = now or datetime.utcnow()

    return _commit(session, note, "update note")


def delete_note(session: Session, note_id: int, user_id: int) -> None:
    """
    Raises:
        NotFoundError: If the note does not exist or is not owned by user_id
    """
    note = get_note(session, note_id, user_id)
    session.delete(note)
    try:
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Database error while trying to delete note {note_id}: {str(e)}")
        raise StoreError("Failed to delete note") from e
    logger.info(f"Deleted note {note_id} of user {user_id}")


def summarize_note(
    session: Session,
    summarizer,
    note_id: int,
    user_id: int,
    now: Optional[datetime] = None
) -> StudyNote:
    """
    Analyze a note with the summarizer and store the result on it.

    The summary, key points and complexity are replaced. Suggested tags are
    appended to the note's tags when not already present.

    Args:
        session: Database session
        summarizer: Collaborator exposing summarize_text(text) -> NoteSummary
        note_id: Note to summarize
        user_id: Owner of the note
        now: Update time (defaults to now, UTC)

    Raises:
        NotFoundError: If the note does not exist or is not owned by user_id
        InvalidInputError: If the note has no content
        GenerationError: If the summarizer fails (the note is left unchanged)
    """
    note = get_note(session, note_id, user_id)
    if not clean_text(note.content):
        raise InvalidInputError("Note has no content to summarize")

    result = summarizer.summarize_text(note.content)

    note.summary = result.summary
    note.key_points = list(result.key_points)
    note.complexity = result.complexity.value if result.complexity else None
    note.tags = normalize_tags(list(note.tags or []) + list(result.tags))
    note.updated_at = now or datetime.utcnow()

    note = _commit(session, note, "save note summary")
    logger.info(f"Summarized note {note_id} for user {user_id}")
    return note
