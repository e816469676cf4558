"""Tests for GreedyScheduler and create_scheduler."""

import logging
from itertools import combinations

import pytest

from timetable_engine.models import Catalog, Faculty, Room, StudentBatch, Subject
from timetable_engine.scheduler.algorithm import (
    GreedyScheduler,
    SchedulerBase,
    create_scheduler,
)
from timetable_engine.scheduler.conflicts import default_hard_constraints
from timetable_engine.scheduler.constants import ROOM_CAPACITY
from timetable_engine.scheduler.models import (
    ConflictType,
    OptimizationSettings,
    PriorityWeights,
    SoftConstraint,
    TimetableStatus,
    UnscheduledReason,
)


def entry_keys(timetable):
    """Comparable summary of the placed entries."""
    return [
        (e.id, e.time_slot.key, e.faculty.id, e.room.id, e.batch.id, e.subject.id)
        for e in timetable.entries
    ]


@pytest.fixture
def shared_faculty_catalog():
    """Two batches owing the same 1-credit subject from its only faculty member."""
    return Catalog(
        subjects=[Subject(id="CS101", code="CS101", name="Programming", credits=1)],
        faculty=[Faculty(id="F1", name="Dr. Smith", eligible_subjects=["CS101"])],
        rooms=[Room(id="R1", name="Room 101", capacity=60)],
        batches=[
            StudentBatch(id="B1", name="CSE-A", size=10, mandatory_subjects=["CS101"]),
            StudentBatch(id="B2", name="CSE-B", size=10, mandatory_subjects=["CS101"]),
        ],
    )


@pytest.fixture
def department_catalog():
    """Three batches, four subjects, three faculty and three rooms."""
    subjects = [
        Subject(id="CS101", code="CS101", name="Programming", credits=3),
        Subject(id="MA101", code="MA101", name="Calculus", credits=4),
        Subject(id="PH101", code="PH101", name="Physics", credits=3),
        Subject(id="EN101", code="EN101", name="English", credits=2),
    ]
    faculty = [
        Faculty(id="F1", name="Dr. Smith", eligible_subjects=["CS101", "PH101"]),
        Faculty(id="F2", name="Dr. Jones", eligible_subjects=["MA101"]),
        Faculty(id="F3", name="Dr. Brown", eligible_subjects=["EN101", "MA101"]),
    ]
    rooms = [
        Room(id="R1", name="Room 101", capacity=40),
        Room(id="R2", name="Room 102", capacity=60),
        Room(id="R3", name="Seminar Hall", capacity=120),
    ]
    batches = [
        StudentBatch(
            id="B1", name="CSE-A", size=45, mandatory_subjects=["CS101", "MA101", "EN101"]
        ),
        StudentBatch(
            id="B2", name="CSE-B", size=35, mandatory_subjects=["CS101", "PH101", "MA101"]
        ),
        StudentBatch(id="B3", name="ECE-A", size=100, mandatory_subjects=[]),
    ]
    return Catalog(subjects=subjects, faculty=faculty, rooms=rooms, batches=batches)


class TestSingleSubject:
    """One batch, one 3-credit subject, one faculty member, one room."""

    def test_places_one_entry_per_credit(self, institution, single_subject_catalog):
        timetable = GreedyScheduler(institution, single_subject_catalog).generate()

        assert timetable.total_entries == 3
        assert all(e.subject.id == "CS101" for e in timetable.entries)
        assert timetable.unscheduled == []

    def test_takes_earliest_slots(self, institution, single_subject_catalog):
        timetable = GreedyScheduler(institution, single_subject_catalog).generate()

        assert [e.time_slot.key for e in timetable.entries] == [
            ("Monday", 1),
            ("Monday", 2),
            ("Monday", 3),
        ]

    def test_score_is_capped_at_100(self, institution, single_subject_catalog):
        timetable = GreedyScheduler(institution, single_subject_catalog).generate()
        assert timetable.score == 100

    def test_accepted_entries_do_not_clash(self, institution, single_subject_catalog):
        timetable = GreedyScheduler(institution, single_subject_catalog).generate()
        keys = [e.time_slot.key for e in timetable.entries]
        assert len(set(keys)) == len(keys)

    def test_rejected_candidates_are_recorded(self, institution, single_subject_catalog):
        timetable = GreedyScheduler(institution, single_subject_catalog).generate()

        # Session 2 is rejected once at Monday 1, session 3 at Monday 1 and 2,
        # each time by the faculty, room and batch rules.
        assert len(timetable.conflicts) == 9
        assert {c.type for c in timetable.conflicts} == {
            ConflictType.FACULTY_CLASH,
            ConflictType.ROOM_CLASH,
            ConflictType.BATCH_CLASH,
        }

    def test_entry_ids(self, institution, single_subject_catalog):
        timetable = GreedyScheduler(institution, single_subject_catalog).generate()
        assert [e.id for e in timetable.entries] == [
            "entry-1-B1-CS101",
            "entry-2-B1-CS101",
            "entry-3-B1-CS101",
        ]

    def test_timetable_metadata(self, institution, single_subject_catalog):
        timetable = GreedyScheduler(institution, single_subject_catalog).generate()

        assert timetable.id.startswith("timetable-")
        assert timetable.name.startswith("Generated Timetable ")
        assert timetable.status == TimetableStatus.DRAFT
        assert timetable.generated_at

    def test_custom_name(self, institution, single_subject_catalog):
        timetable = GreedyScheduler(institution, single_subject_catalog).generate(
            name="Semester 1"
        )
        assert timetable.name == "Semester 1"


class TestRoomCapacity:
    """Batches larger than every room."""

    @pytest.fixture
    def oversized_catalog(self):
        return Catalog(
            subjects=[Subject(id="CS101", code="CS101", name="Programming", credits=3)],
            faculty=[Faculty(id="F1", name="Dr. Smith", eligible_subjects=["CS101"])],
            rooms=[Room(id="R1", name="Room 101", capacity=30)],
            batches=[
                StudentBatch(id="B1", name="CSE-A", size=50, mandatory_subjects=["CS101"])
            ],
        )

    def test_no_entries_placed(self, institution, oversized_catalog):
        timetable = GreedyScheduler(institution, oversized_catalog).generate()
        assert timetable.entries == []
        assert timetable.score == 0

    def test_capacity_conflicts_reported(self, institution, oversized_catalog):
        timetable = GreedyScheduler(institution, oversized_catalog).generate()

        assert timetable.conflicts
        assert all(
            c.type == ConflictType.CONSTRAINT_VIOLATION for c in timetable.conflicts
        )
        assert timetable.conflicts[0].description == (
            "Room capacity (30) insufficient for batch size (50)"
        )
        # 3 sessions x 30 slots x 1 faculty x 1 room
        assert len(timetable.conflicts) == 90

    def test_sessions_listed_as_unscheduled(self, institution, oversized_catalog):
        timetable = GreedyScheduler(institution, oversized_catalog).generate()

        assert [u.session for u in timetable.unscheduled] == [1, 2, 3]
        assert all(
            u.reason == UnscheduledReason.NO_SUITABLE_ROOM for u in timetable.unscheduled
        )

    def test_undersized_rooms_skipped_when_one_fits(self, institution):
        catalog = Catalog(
            subjects=[Subject(id="CS101", code="CS101", name="Programming", credits=1)],
            faculty=[Faculty(id="F1", name="Dr. Smith", eligible_subjects=["CS101"])],
            rooms=[
                Room(id="R0", name="Closet", capacity=5),
                Room(id="R1", name="Room 101", capacity=60),
            ],
            batches=[
                StudentBatch(id="B1", name="CSE-A", size=10, mandatory_subjects=["CS101"])
            ],
        )
        timetable = GreedyScheduler(institution, catalog).generate()

        assert [e.room.id for e in timetable.entries] == ["R1"]
        assert timetable.conflicts == []

    def test_disabled_capacity_rule_admits_small_room(
        self, institution, oversized_catalog
    ):
        definitions = default_hard_constraints()
        for definition in definitions:
            if definition.id == ROOM_CAPACITY:
                definition.enabled = False

        timetable = GreedyScheduler(
            institution, oversized_catalog, hard_constraints=definitions
        ).generate()

        assert timetable.total_entries == 3
        assert all(e.room.id == "R1" for e in timetable.entries)


class TestSharedFaculty:
    """Two batches competing for the same faculty member."""

    def test_second_batch_loses_single_slot(self, make_institution, shared_faculty_catalog):
        institution = make_institution(["Monday"], 1)
        timetable = GreedyScheduler(institution, shared_faculty_catalog).generate()

        assert [e.batch.id for e in timetable.entries] == ["B1"]
        assert timetable.score == 50
        assert [c.type for c in timetable.conflicts] == [
            ConflictType.FACULTY_CLASH,
            ConflictType.ROOM_CLASH,
        ]

    def test_second_batch_unscheduled(self, make_institution, shared_faculty_catalog):
        institution = make_institution(["Monday"], 1)
        timetable = GreedyScheduler(institution, shared_faculty_catalog).generate()

        assert len(timetable.unscheduled) == 1
        unscheduled = timetable.unscheduled[0]
        assert unscheduled.batch_id == "B2"
        assert unscheduled.subject_id == "CS101"
        assert unscheduled.session == 1
        assert unscheduled.reason == UnscheduledReason.NO_FEASIBLE_SLOT

    def test_second_slot_serves_both(self, make_institution, shared_faculty_catalog):
        institution = make_institution(["Monday"], 2)
        timetable = GreedyScheduler(institution, shared_faculty_catalog).generate()

        assert [(e.batch.id, e.time_slot.key) for e in timetable.entries] == [
            ("B1", ("Monday", 1)),
            ("B2", ("Monday", 2)),
        ]
        assert timetable.score == 100

    def test_logs_unplaced_session(self, make_institution, shared_faculty_catalog, caplog):
        institution = make_institution(["Monday"], 1)
        with caplog.at_level(logging.WARNING):
            GreedyScheduler(institution, shared_faculty_catalog).generate()

        assert "Could not schedule session 1 for subject Programming in batch CSE-B" in (
            caplog.text
        )


class TestScheduleInvariants:
    """Properties every generated schedule must have."""

    @pytest.fixture
    def timetable(self, institution, department_catalog):
        return GreedyScheduler(institution, department_catalog).generate()

    @pytest.mark.parametrize("attribute", ["faculty", "room", "batch"])
    def test_no_double_booking(self, timetable, attribute):
        for a, b in combinations(timetable.entries, 2):
            if getattr(a, attribute).id == getattr(b, attribute).id:
                assert a.time_slot.key != b.time_slot.key

    def test_rooms_fit_batches(self, timetable):
        for entry in timetable.entries:
            assert entry.room.capacity >= entry.batch.size

    def test_faculty_eligible(self, timetable):
        for entry in timetable.entries:
            assert entry.faculty.can_teach(entry.subject.id)

    def test_slots_come_from_grid(self, timetable):
        for entry in timetable.entries:
            assert entry.time_slot.day in {
                "Monday",
                "Tuesday",
                "Wednesday",
                "Thursday",
                "Friday",
            }
            assert 1 <= entry.time_slot.period <= 6

    def test_entry_ids_unique(self, timetable):
        ids = [e.id for e in timetable.entries]
        assert len(set(ids)) == len(ids)

    def test_score_in_range(self, timetable):
        assert 0 <= timetable.score <= 100

    def test_batch_without_mandatory_owes_all_subjects(self, timetable):
        subjects = {e.subject.id for e in timetable.entries if e.batch.id == "B3"}
        assert subjects == {"CS101", "MA101", "PH101", "EN101"}

    def test_batches_in_catalog_order(self, timetable):
        batch_order = []
        for entry in timetable.entries:
            if entry.batch.id not in batch_order:
                batch_order.append(entry.batch.id)
        assert batch_order == ["B1", "B2", "B3"]

    def test_entries_carry_credit_session_count(self, timetable):
        for entry in timetable.entries:
            assert entry.subject.sessions_per_week == entry.subject.credits


class TestDeterminism:
    """Repeated runs over the same input."""

    def test_same_entries_every_run(self, institution, department_catalog):
        scheduler = GreedyScheduler(institution, department_catalog)
        first = scheduler.generate()
        second = scheduler.generate()

        assert entry_keys(first) == entry_keys(second)
        assert first.score == second.score
        assert len(first.conflicts) == len(second.conflicts)

    def test_settings_do_not_change_result(self, institution, department_catalog):
        scheduler = GreedyScheduler(institution, department_catalog)
        settings = OptimizationSettings(
            max_iterations=1,
            time_limit=0,
            priority_weights=PriorityWeights(faculty_load=1.0, constraints=0.0),
        )

        assert entry_keys(scheduler.generate(settings)) == entry_keys(scheduler.generate())

    def test_soft_constraints_do_not_change_result(self, institution, department_catalog):
        default = GreedyScheduler(institution, department_catalog).generate()
        custom = GreedyScheduler(
            institution,
            department_catalog,
            soft_constraints=[SoftConstraint(id="minimize-gaps", name="Gaps", weight=10)],
        ).generate()

        assert entry_keys(custom) == entry_keys(default)

    def test_catalog_subjects_not_modified(self, institution):
        subject = Subject(
            id="CS101", code="CS101", name="Programming", credits=2, sessions_per_week=5
        )
        catalog = Catalog(
            subjects=[subject],
            faculty=[Faculty(id="F1", name="Dr. Smith", eligible_subjects=["CS101"])],
            rooms=[Room(id="R1", name="Room 101", capacity=60)],
            batches=[
                StudentBatch(id="B1", name="CSE-A", size=10, mandatory_subjects=["CS101"])
            ],
        )
        timetable = GreedyScheduler(institution, catalog).generate()

        assert timetable.total_entries == 2
        assert subject.sessions_per_week == 5
        assert catalog.subjects[0] is subject


class TestUnschedulable:
    """Sessions the engine cannot place."""

    def test_missing_subject(self, institution):
        catalog = Catalog(
            batches=[
                StudentBatch(id="B1", name="CSE-A", size=10, mandatory_subjects=["XX999"])
            ]
        )
        timetable = GreedyScheduler(institution, catalog).generate()

        assert timetable.entries == []
        assert timetable.conflicts == []
        assert timetable.score == 0
        assert len(timetable.unscheduled) == 1
        assert timetable.unscheduled[0].reason == UnscheduledReason.SUBJECT_NOT_FOUND
        assert timetable.unscheduled[0].session is None

    def test_missing_subject_does_not_stop_others(self, institution, single_subject_catalog):
        single_subject_catalog.batches[0].mandatory_subjects = ["XX999", "CS101"]
        timetable = GreedyScheduler(institution, single_subject_catalog).generate()

        assert timetable.total_entries == 3
        # 3 entries against 2 obligations
        assert timetable.score == 100

    def test_no_eligible_faculty(self, institution, single_subject_catalog):
        single_subject_catalog.faculty = [
            Faculty(id="F9", name="Dr. Other", eligible_subjects=["MA101"])
        ]
        timetable = GreedyScheduler(institution, single_subject_catalog).generate()

        assert timetable.entries == []
        assert timetable.conflicts == []
        assert [u.reason for u in timetable.unscheduled] == [
            UnscheduledReason.NO_ELIGIBLE_FACULTY
        ] * 3

    def test_no_time_slots(self, make_institution, single_subject_catalog):
        institution = make_institution([], 6)
        timetable = GreedyScheduler(institution, single_subject_catalog).generate()

        assert timetable.entries == []
        assert timetable.score == 0
        assert all(
            u.reason == UnscheduledReason.NO_TIME_SLOTS for u in timetable.unscheduled
        )

    def test_zero_credit_subject_needs_no_sessions(self, institution):
        catalog = Catalog(
            subjects=[Subject(id="SP100", code="SP100", name="Sports", credits=0)],
            faculty=[Faculty(id="F1", name="Coach", eligible_subjects=["SP100"])],
            rooms=[Room(id="R1", name="Ground", capacity=200)],
            batches=[
                StudentBatch(id="B1", name="CSE-A", size=10, mandatory_subjects=["SP100"])
            ],
        )
        timetable = GreedyScheduler(institution, catalog).generate()

        assert timetable.entries == []
        assert timetable.unscheduled == []
        assert timetable.score == 0

    def test_empty_catalog(self, institution):
        timetable = GreedyScheduler(institution, Catalog()).generate()
        assert timetable.entries == []
        assert timetable.score == 0

    def test_partial_coverage_score(self, institution):
        subjects = [
            Subject(id=f"S{i}", code=f"S{i}", name=f"Subject {i}", credits=1)
            for i in range(3)
        ]
        catalog = Catalog(
            subjects=subjects,
            faculty=[Faculty(id="F1", name="Dr. Smith", eligible_subjects=["S0", "S1"])],
            rooms=[Room(id="R1", name="Room 101", capacity=60)],
            batches=[StudentBatch(id="B1", name="CSE-A", size=10)],
        )
        timetable = GreedyScheduler(institution, catalog).generate()

        assert timetable.total_entries == 2
        assert timetable.score == 67


class TestSchedulerConstraints:
    """Constraint definitions held by a scheduler."""

    def test_get_constraints_defaults(self, institution, single_subject_catalog):
        scheduler = GreedyScheduler(institution, single_subject_catalog)
        constraints = scheduler.get_constraints()

        assert len(constraints["hard"]) == 5
        assert len(constraints["soft"]) == 4

    def test_update_constraints(self, institution, single_subject_catalog):
        scheduler = GreedyScheduler(institution, single_subject_catalog)
        hard = default_hard_constraints()[:2]
        soft = [SoftConstraint(id="minimize-gaps", name="Gaps", weight=3)]

        scheduler.update_constraints(hard, soft)

        assert scheduler.get_constraints() == {"hard": hard, "soft": soft}

    def test_invalid_soft_weight_rejected(self, institution, single_subject_catalog):
        with pytest.raises(ValueError):
            GreedyScheduler(
                institution,
                single_subject_catalog,
                soft_constraints=[SoftConstraint(id="x", name="X", weight=42)],
            )


class TestCreateScheduler:
    """Tests for create_scheduler."""

    def test_greedy(self, institution, single_subject_catalog):
        scheduler = create_scheduler(institution, single_subject_catalog)
        assert isinstance(scheduler, GreedyScheduler)
        assert isinstance(scheduler, SchedulerBase)

    def test_unknown_strategy(self, institution, single_subject_catalog):
        with pytest.raises(ValueError, match="Unsupported strategy: annealing"):
            create_scheduler(institution, single_subject_catalog, strategy="annealing")

    def test_passes_constraints(self, institution, single_subject_catalog):
        hard = default_hard_constraints()
        scheduler = create_scheduler(
            institution, single_subject_catalog, hard_constraints=hard
        )
        assert scheduler.checker.hard_constraints is hard
