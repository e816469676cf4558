"""Test fixtures for timetable engine tests."""

import json

import pytest

from timetable_engine.models import (
    Catalog,
    Faculty,
    Institution,
    PeriodTiming,
    Room,
    StudentBatch,
    Subject,
    TimeSlot,
)
from timetable_engine.scheduler.models import (
    Conflict,
    ConflictType,
    GeneratedTimetable,
    TimetableEntry,
    UnscheduledReason,
    UnscheduledSession,
)

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]

TIMINGS = [
    ("09:00", "10:00"),
    ("10:00", "11:00"),
    ("11:15", "12:15"),
    ("12:15", "13:15"),
    ("14:00", "15:00"),
    ("15:00", "16:00"),
]


@pytest.fixture
def institution():
    """Five working days with six periods each."""
    return Institution(
        id="inst1",
        name="Test Institute",
        working_days=list(WEEKDAYS),
        periods_per_day=len(TIMINGS),
        period_timings=[
            PeriodTiming(period=i, start_time=start, end_time=end)
            for i, (start, end) in enumerate(TIMINGS, start=1)
        ],
    )


@pytest.fixture
def make_institution():
    """Factory for institutions with the given days and period count."""

    def _make(days, periods):
        return Institution(
            id="inst-small",
            name="Small Institute",
            working_days=list(days),
            periods_per_day=periods,
            period_timings=[
                PeriodTiming(period=i, start_time=f"{8 + i:02d}:00", end_time=f"{9 + i:02d}:00")
                for i in range(1, periods + 1)
            ],
        )

    return _make


@pytest.fixture
def cs101():
    return Subject(id="CS101", code="CS101", name="Programming", credits=3)


@pytest.fixture
def faculty_f1():
    return Faculty(id="F1", name="Dr. Smith", eligible_subjects=["CS101"])


@pytest.fixture
def room_r1():
    return Room(id="R1", name="Room 101", capacity=60)


@pytest.fixture
def batch_b1():
    return StudentBatch(
        id="B1", name="CSE-A", department="CSE", size=10, mandatory_subjects=["CS101"]
    )


@pytest.fixture
def single_subject_catalog(cs101, faculty_f1, room_r1, batch_b1):
    """One batch owing one 3-credit subject, one faculty member, one room."""
    return Catalog(
        subjects=[cs101],
        faculty=[faculty_f1],
        rooms=[room_r1],
        batches=[batch_b1],
    )


@pytest.fixture
def sample_entry(cs101, faculty_f1, room_r1, batch_b1):
    return TimetableEntry(
        id="entry-1-B1-CS101",
        subject=cs101,
        faculty=faculty_f1,
        room=room_r1,
        batch=batch_b1,
        time_slot=TimeSlot(day="Monday", period=1, start_time="09:00", end_time="10:00"),
    )


@pytest.fixture
def sample_timetable(sample_entry):
    """A timetable with one entry, one conflict and one unscheduled session."""
    return GeneratedTimetable(
        id="timetable-abc",
        name="Generated Timetable 2024-01-15",
        entries=[sample_entry],
        conflicts=[
            Conflict(
                id="no-room-clash-1234abcd",
                type=ConflictType.ROOM_CLASH,
                description="Room Room 101 is already occupied by Programming",
                affected_entries=["entry-2-B2-CS101", sample_entry.id],
                suggestions=["Assign different room", "Change time slot"],
            )
        ],
        score=50,
        generated_at="2024-01-15T10:00:00",
        unscheduled=[
            UnscheduledSession(
                batch_id="B2",
                subject_id="CS101",
                session=1,
                reason=UnscheduledReason.NO_FEASIBLE_SLOT,
                details="Every slot/faculty/room combination conflicts for Programming",
            )
        ],
    )


@pytest.fixture
def catalog_data():
    """Raw JSON documents of a small catalog."""
    return {
        "institution.json": {
            "id": "inst1",
            "name": "Test Institute",
            "workingDays": ["Monday", "Tuesday"],
            "periodTimings": [
                {"period": 1, "startTime": "09:00", "endTime": "10:00"},
                {"period": 2, "startTime": "10:00", "endTime": "11:00"},
            ],
        },
        "subjects.json": [
            {"id": "CS101", "code": "CS101", "name": "Programming", "type": "Theory", "credits": 2},
            {"id": "MA101", "code": "MA101", "name": "Calculus", "type": "Theory", "credits": 1},
        ],
        "faculty.json": [
            {"id": "F1", "name": "Dr. Smith", "eligibleSubjects": ["CS101"]},
            {"id": "F2", "name": "Dr. Jones", "eligibleSubjects": ["MA101"]},
        ],
        "rooms.json": [
            {"id": "R1", "name": "Room 101", "type": "Classroom", "capacity": 60},
        ],
        "batches.json": [
            {
                "id": "B1",
                "name": "CSE-A",
                "department": "CSE",
                "year": 1,
                "section": "A",
                "size": 40,
                "mandatorySubjects": ["CS101", "MA101"],
            },
            {
                "id": "B2",
                "name": "CSE-B",
                "department": "CSE",
                "year": 1,
                "section": "B",
                "size": 35,
                "mandatorySubjects": ["MA101"],
            },
        ],
    }


@pytest.fixture
def write_catalog(tmp_path):
    """Factory writing JSON documents into a fresh data directory."""

    def _write(documents, directory="data"):
        data_dir = tmp_path / directory
        data_dir.mkdir(parents=True, exist_ok=True)
        for filename, content in documents.items():
            path = data_dir / filename
            if isinstance(content, str):
                path.write_text(content, encoding="utf-8")
            else:
                path.write_text(json.dumps(content), encoding="utf-8")
        return data_dir

    return _write


@pytest.fixture
def catalog_dir(write_catalog, catalog_data):
    return write_catalog(catalog_data)
