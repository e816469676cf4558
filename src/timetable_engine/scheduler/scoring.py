"""Coverage score for generated timetables."""

import math

from ..models import StudentBatch, Subject
from .constants import MAX_SCORE
from .models import TimetableEntry
from .utils import get_total_required


def calculate_score(
    entries: list[TimetableEntry],
    subjects: list[Subject],
    batches: list[StudentBatch],
) -> int:
    """Compute the coverage score of a schedule.

    The required count is the number of subject obligations summed over
    batches (mandatory subjects, or every subject when a batch has none).
    The score is the placed entry count as a rounded percentage of that,
    capped at 100. Soft constraints and preferences play no part.

    Args:
        entries: Placed entries
        subjects: Subject catalog
        batches: Batches that were scheduled

    Returns:
        Integer score in 0..100, 0 when nothing is required
    """
    total_required = get_total_required(batches, subjects)
    if total_required == 0:
        return 0
    # Half-up rounding
    score = math.floor(100 * len(entries) / total_required + 0.5)
    return min(score, MAX_SCORE)
