"""
Text utility functions.
"""
from typing import Iterable, List, Optional


def clean_text(text: Optional[str]) -> Optional[str]:
    """
    Strip surrounding whitespace, turning blank strings into None.

    Args:
        text: The text to clean

    Returns:
        Stripped text, or None if nothing is left
    """
    if text is None:
        return None
    stripped = text.strip()
    return stripped or None


def normalize_tags(tags: Optional[Iterable[str]]) -> List[str]:
    """
    Normalize free-text tags: strip whitespace, drop blanks and duplicates.
    First-seen order is preserved.

    Args:
        tags: Raw tags (may be None)

    Returns:
        List of unique, non-empty tags
    """
    if not tags:
        return []

    seen = set()
    normalized = []
    for tag in tags:
        if not isinstance(tag, str):
            continue
        tag = tag.strip()
        if tag and tag not in seen:
            seen.add(tag)
            normalized.append(tag)
    return normalized
