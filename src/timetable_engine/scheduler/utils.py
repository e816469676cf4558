"""Utility functions for timetable generation."""

from collections import Counter
from dataclasses import replace

from ..models import Faculty, Room, StudentBatch, Subject
from .models import GeneratedTimetable, ScheduleStatistics, TimetableEntry


def normalize_sessions_per_week(subjects: list[Subject]) -> list[Subject]:
    """Return copies of the subjects with sessions per week set to credits.

    Credits drive the weekly session count; any configured value is
    overridden. The input subjects are left untouched.

    Args:
        subjects: Subjects from the catalog

    Returns:
        New Subject objects in the same order
    """
    return [replace(s, sessions_per_week=s.credits) for s in subjects]


def get_batch_subject_ids(batch: StudentBatch, subjects: list[Subject]) -> list[str]:
    """Get the subject ids a batch must be taught.

    Falls back to every subject when the batch has no mandatory subjects.
    """
    if batch.mandatory_subjects:
        return list(batch.mandatory_subjects)
    return [s.id for s in subjects]


def get_total_required(batches: list[StudentBatch], subjects: list[Subject]) -> int:
    """Count subject obligations over all batches."""
    return sum(len(get_batch_subject_ids(batch, subjects)) for batch in batches)


def get_eligible_faculty(subject_id: str, faculty: list[Faculty]) -> list[Faculty]:
    """Get faculty who list the subject as teachable, in catalog order."""
    return [f for f in faculty if f.can_teach(subject_id)]


def get_suitable_rooms(batch: StudentBatch, rooms: list[Room]) -> list[Room]:
    """Get rooms large enough for the batch, in catalog order.

    Room type and equipment are not considered.
    """
    return [r for r in rooms if r.capacity >= batch.size]


def make_entry_id(sequence: int, batch_id: str, subject_id: str) -> str:
    """Build the id of the entry placed as number `sequence` (1-based)."""
    return f"entry-{sequence}-{batch_id}-{subject_id}"


def build_grid(entries: list[TimetableEntry]) -> dict[tuple[str, int], TimetableEntry]:
    """Key entries by (day, period).

    Intended for the entries of one batch, faculty member or room. When
    several entries share a cell the last one wins.
    """
    return {entry.time_slot.key: entry for entry in entries}


def filter_entries(
    entries: list[TimetableEntry],
    batch_id: str | None = None,
    faculty_id: str | None = None,
    room_id: str | None = None,
) -> list[TimetableEntry]:
    """Filter entries by batch, faculty and/or room id."""
    result = entries
    if batch_id is not None:
        result = [e for e in result if e.batch.id == batch_id]
    if faculty_id is not None:
        result = [e for e in result if e.faculty.id == faculty_id]
    if room_id is not None:
        result = [e for e in result if e.room.id == room_id]
    return list(result)


def compute_statistics(timetable: GeneratedTimetable) -> ScheduleStatistics:
    """Compute distribution statistics for a generated timetable."""
    entries = timetable.entries
    return ScheduleStatistics(
        total_entries=len(entries),
        total_conflicts=len(timetable.conflicts),
        total_unscheduled=len(timetable.unscheduled),
        by_day=dict(Counter(e.time_slot.day for e in entries)),
        by_batch=dict(Counter(e.batch.name for e in entries)),
        by_faculty=dict(Counter(e.faculty.name for e in entries)),
        by_room=dict(Counter(e.room.name for e in entries)),
        conflicts_by_type=dict(Counter(c.type.value for c in timetable.conflicts)),
    )
