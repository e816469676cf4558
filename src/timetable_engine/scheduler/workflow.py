"""Review workflow for generated timetables."""

from dataclasses import replace

from ..exceptions import InvalidTransitionError
from .models import GeneratedTimetable, TimetableStatus

ALLOWED_TRANSITIONS: dict[TimetableStatus, set[TimetableStatus]] = {
    TimetableStatus.DRAFT: {TimetableStatus.UNDER_REVIEW, TimetableStatus.APPROVED},
    TimetableStatus.UNDER_REVIEW: {TimetableStatus.APPROVED, TimetableStatus.DRAFT},
    TimetableStatus.APPROVED: {TimetableStatus.PUBLISHED},
    TimetableStatus.PUBLISHED: set(),
}


def can_transition(current: TimetableStatus, target: TimetableStatus) -> bool:
    """Check if the workflow allows moving from current to target."""
    return target in ALLOWED_TRANSITIONS[current]


def transition(
    timetable: GeneratedTimetable, target: TimetableStatus | str
) -> GeneratedTimetable:
    """Move a timetable to a new review status.

    Args:
        timetable: Timetable to update (left unchanged)
        target: Requested status

    Returns:
        Copy of the timetable with the new status

    Raises:
        InvalidTransitionError: If the workflow does not allow the move
    """
    target = TimetableStatus(target)
    if not can_transition(timetable.status, target):
        raise InvalidTransitionError(timetable.status.value, target.value)
    return replace(timetable, status=target)


def submit_for_review(timetable: GeneratedTimetable) -> GeneratedTimetable:
    return transition(timetable, TimetableStatus.UNDER_REVIEW)


def approve(timetable: GeneratedTimetable) -> GeneratedTimetable:
    return transition(timetable, TimetableStatus.APPROVED)


def publish(timetable: GeneratedTimetable) -> GeneratedTimetable:
    return transition(timetable, TimetableStatus.PUBLISHED)
