"""
SRS (Spaced Repetition System) service implementing a variant of SM-2.

The scheduler is a pure function of a card's current interval/ease factor and
the recall quality of a review. It performs no I/O; applying its result to a
stored card is the job of the review service.
"""
import math
from datetime import datetime, timedelta
from typing import NamedTuple, Optional

from studydeck.core.exceptions import InvalidInputError


MIN_QUALITY = 0
MAX_QUALITY = 5
PASSING_QUALITY = 3  # quality >= 3 counts as a successful recall

DEFAULT_INTERVAL = 1  # days
FIRST_SUCCESS_INTERVAL = 6  # days, used when the previous interval was 1
DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3


class ScheduleState(NamedTuple):
    """Scheduling state produced by the scheduler."""
    interval: int
    ease_factor: float


def is_valid_quality(quality) -> bool:
    """Return True if quality is an integer in [0, 5]. Booleans are rejected."""
    if isinstance(quality, bool) or not isinstance(quality, int):
        return False
    return MIN_QUALITY <= quality <= MAX_QUALITY


def validate_quality(quality) -> int:
    """
    Validate a recall quality score.

    Raises:
        InvalidInputError: If quality is not an integer between 0 and 5
    """
    if not is_valid_quality(quality):
        raise InvalidInputError(
            f"Quality must be an integer between {MIN_QUALITY} and {MAX_QUALITY}, got {quality!r}"
        )
    return quality


def is_successful_recall(quality: int) -> bool:
    return quality >= PASSING_QUALITY


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties away from zero."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def compute_next_state(quality: int, previous_interval: int, previous_ease_factor: float) -> ScheduleState:
    """
    Compute the next scheduling state after a review.

    Failed recalls (quality < 3) reset the interval to 1 day and leave the ease
    factor untouched. Successful recalls adjust the ease factor with the SM-2
    formula (clamped at 1.3), jump from a 1-day interval straight to 6 days and
    otherwise multiply the previous interval by the new ease factor.

    Args:
        quality: Recall quality (0-5)
        previous_interval: Current interval in days (>= 1)
        previous_ease_factor: Current ease factor (>= 1.3)

    Returns:
        ScheduleState with the new interval and ease factor

    Raises:
        InvalidInputError: If quality is outside [0, 5]
    """
    validate_quality(quality)

    if not is_successful_recall(quality):
        return ScheduleState(interval=DEFAULT_INTERVAL, ease_factor=previous_ease_factor)

    miss = MAX_QUALITY - quality
    new_ease = previous_ease_factor + (0.1 - miss * (0.08 + miss * 0.02))
    ease_factor = max(MIN_EASE_FACTOR, new_ease)

    if previous_interval == 1:
        interval = FIRST_SUCCESS_INTERVAL
    else:
        interval = round_half_up(previous_interval * ease_factor)

    return ScheduleState(interval=max(DEFAULT_INTERVAL, interval), ease_factor=ease_factor)


def calculate_next_review(interval_days: int, base_time: Optional[datetime] = None) -> datetime:
    """
    Calculate the next review time from an interval in days.

    Args:
        interval_days: Interval in days
        base_time: Base time to calculate from (defaults to now, UTC)

    Returns:
        Datetime for next review
    """
    if base_time is None:
        base_time = datetime.utcnow()

    # Timestamps are UTC, so adding whole days lands on the same wall-clock time
    return base_time + timedelta(days=interval_days)
