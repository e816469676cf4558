"""Greedy first-fit timetable generation."""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from uuid import uuid4

from ..models import Catalog, Faculty, Institution, Room, StudentBatch, Subject, TimeSlot
from .conflicts import ConflictChecker
from .constraints import SoftConstraints
from .models import (
    Conflict,
    GeneratedTimetable,
    HardConstraint,
    OptimizationSettings,
    SoftConstraint,
    TimetableEntry,
    TimetableStatus,
    UnscheduledReason,
    UnscheduledSession,
)
from .scoring import calculate_score
from .timegrid import generate_time_slots
from .utils import (
    get_batch_subject_ids,
    get_eligible_faculty,
    get_suitable_rooms,
    make_entry_id,
    normalize_sessions_per_week,
)

logger = logging.getLogger(__name__)


class SchedulerBase(ABC):
    """Common interface of timetable generators.

    Callers depend on this interface only, so a searching solver can
    replace the greedy one.
    """

    def __init__(
        self,
        institution: Institution,
        catalog: Catalog,
        hard_constraints: list[HardConstraint] | None = None,
        soft_constraints: list[SoftConstraint] | None = None,
    ) -> None:
        """
        Initialize the scheduler.

        Args:
            institution: Institution calendar configuration.
            catalog: Subjects, faculty, rooms and batches to schedule.
            hard_constraints: Hard constraint definitions (defaults if None).
            soft_constraints: Soft constraint definitions (defaults if None).
        """
        self.institution = institution
        self.catalog = catalog
        self.checker = ConflictChecker(hard_constraints)
        self.soft_constraints = SoftConstraints(soft_constraints)

    @abstractmethod
    def generate(
        self, settings: OptimizationSettings | None = None
    ) -> GeneratedTimetable:
        """Generate a timetable for every batch in the catalog."""
        pass

    def get_constraints(self) -> dict[str, list]:
        """Get the hard and soft constraint definitions in use."""
        return {
            "hard": self.checker.hard_constraints,
            "soft": self.soft_constraints.constraints,
        }

    def update_constraints(
        self, hard: list[HardConstraint], soft: list[SoftConstraint]
    ) -> None:
        """Replace the constraint definitions for later runs."""
        self.checker = ConflictChecker(hard)
        self.soft_constraints = SoftConstraints(soft)


class GreedyScheduler(SchedulerBase):
    """Deterministic first-fit scheduler without backtracking.

    Algorithm:
    1. Sessions per week of every subject are set to its credits
       (on copies; the catalog is not modified)
    2. Batches are taken in catalog order; each owes its mandatory
       subjects, or every subject when it declares none
    3. Eligible faculty teach the subject; suitable rooms fit the batch
       (all rooms are tried when none fits, so capacity conflicts are kept)
    4. Each session takes the first (slot, faculty, room) combination,
       slots outermost and rooms innermost, with no hard-rule conflicts.
       Conflicts of rejected combinations are kept in the result
    5. A session with no feasible combination is left out; it lowers the
       score and is listed in `unscheduled`, not among the conflicts

    Optimization settings and soft constraints are not consulted.
    """

    def generate(
        self, settings: OptimizationSettings | None = None, name: str | None = None
    ) -> GeneratedTimetable:
        """Generate a timetable.

        Args:
            settings: Optimization settings (accepted but not consulted)
            name: Display name; defaults to "Generated Timetable <date>"

        Returns:
            GeneratedTimetable in Draft status
        """
        settings = settings or OptimizationSettings()
        self._log_inert_configuration(settings)

        time_slots = generate_time_slots(self.institution)
        subjects = normalize_sessions_per_week(self.catalog.subjects)
        subjects_by_id = {s.id: s for s in subjects}

        logger.info(
            f"Scheduling {len(self.catalog.batches)} batches over "
            f"{len(time_slots)} time slots"
        )
        if not time_slots:
            logger.warning("Institution calendar yields no time slots")

        entries: list[TimetableEntry] = []
        conflicts: list[Conflict] = []
        unscheduled: list[UnscheduledSession] = []

        for batch in self.catalog.batches:
            for subject_id in get_batch_subject_ids(batch, subjects):
                subject = subjects_by_id.get(subject_id)
                if subject is None:
                    logger.warning(
                        f"Subject with ID {subject_id} not found for batch {batch.name}"
                    )
                    unscheduled.append(
                        UnscheduledSession(
                            batch_id=batch.id,
                            subject_id=subject_id,
                            session=None,
                            reason=UnscheduledReason.SUBJECT_NOT_FOUND,
                            details=f"Subject {subject_id} is not in the catalog",
                        )
                    )
                    continue

                self._schedule_subject(
                    batch, subject, time_slots, entries, conflicts, unscheduled
                )

        score = calculate_score(entries, subjects, self.catalog.batches)
        logger.info(
            f"Placed {len(entries)} entries, {len(unscheduled)} unscheduled, "
            f"{len(conflicts)} conflicts observed, score {score}"
        )

        now = datetime.now()
        return GeneratedTimetable(
            id=f"timetable-{uuid4().hex[:12]}",
            name=name or f"Generated Timetable {now.strftime('%Y-%m-%d')}",
            entries=entries,
            conflicts=conflicts,
            score=score,
            generated_at=now.isoformat(),
            status=TimetableStatus.DRAFT,
            unscheduled=unscheduled,
        )

    def _schedule_subject(
        self,
        batch: StudentBatch,
        subject: Subject,
        time_slots: list[TimeSlot],
        entries: list[TimetableEntry],
        conflicts: list[Conflict],
        unscheduled: list[UnscheduledSession],
    ) -> None:
        """Place every required session of one subject for one batch."""
        eligible_faculty = get_eligible_faculty(subject.id, self.catalog.faculty)
        if not eligible_faculty:
            logger.warning(
                f"No eligible faculty for subject {subject.name} in batch {batch.name}"
            )

        suitable_rooms = get_suitable_rooms(batch, self.catalog.rooms)
        if not suitable_rooms:
            logger.warning(
                f"No suitable rooms (by capacity) for subject {subject.name} "
                f"in batch {batch.name}"
            )

        # With no room large enough every room is tried, and the capacity
        # rule rejects (and reports) each one.
        candidate_rooms = suitable_rooms or self.catalog.rooms

        for session in range(subject.sessions_per_week):
            entry = self._place_session(
                batch,
                subject,
                time_slots,
                eligible_faculty,
                candidate_rooms,
                entries,
                conflicts,
            )
            if entry is not None:
                entries.append(entry)
                continue

            logger.warning(
                f"Could not schedule session {session + 1} for subject "
                f"{subject.name} in batch {batch.name}"
            )
            reason, details = self._diagnose(
                time_slots, eligible_faculty, suitable_rooms, subject, batch
            )
            unscheduled.append(
                UnscheduledSession(
                    batch_id=batch.id,
                    subject_id=subject.id,
                    session=session + 1,
                    reason=reason,
                    details=details,
                )
            )

    def _place_session(
        self,
        batch: StudentBatch,
        subject: Subject,
        time_slots: list[TimeSlot],
        eligible_faculty: list[Faculty],
        rooms: list[Room],
        entries: list[TimetableEntry],
        conflicts: list[Conflict],
    ) -> TimetableEntry | None:
        """Find the first conflict-free combination for one session.

        Conflicts of rejected candidates are appended to `conflicts`.

        Returns:
            The accepted entry, or None if no combination is feasible
        """
        entry_id = make_entry_id(len(entries) + 1, batch.id, subject.id)
        for time_slot in time_slots:
            for faculty in eligible_faculty:
                for room in rooms:
                    candidate = TimetableEntry(
                        id=entry_id,
                        subject=subject,
                        faculty=faculty,
                        room=room,
                        batch=batch,
                        time_slot=time_slot,
                    )
                    candidate_conflicts = self.checker.check(candidate, entries)
                    if not candidate_conflicts:
                        return candidate
                    conflicts.extend(candidate_conflicts)
        return None

    @staticmethod
    def _diagnose(
        time_slots: list[TimeSlot],
        eligible_faculty: list[Faculty],
        suitable_rooms: list[Room],
        subject: Subject,
        batch: StudentBatch,
    ) -> tuple[UnscheduledReason, str]:
        """Explain why a session found no combination."""
        if not time_slots:
            return (UnscheduledReason.NO_TIME_SLOTS, "Institution calendar has no time slots")
        if not eligible_faculty:
            return (
                UnscheduledReason.NO_ELIGIBLE_FACULTY,
                f"No faculty is eligible to teach {subject.name}",
            )
        if not suitable_rooms:
            return (
                UnscheduledReason.NO_SUITABLE_ROOM,
                f"No room holds batch {batch.name} ({batch.size} students)",
            )
        return (
            UnscheduledReason.NO_FEASIBLE_SLOT,
            f"Every slot/faculty/room combination conflicts for {subject.name}",
        )

    def _log_inert_configuration(self, settings: OptimizationSettings) -> None:
        logger.debug(
            f"Greedy scheduler ignores settings: max_iterations={settings.max_iterations}, "
            f"time_limit={settings.time_limit}s, "
            f"priority_weights={settings.priority_weights.to_dict()}"
        )
        weights = self.soft_constraints.get_weights()
        if weights:
            logger.debug(f"Greedy scheduler ignores soft constraints: {weights}")


SCHEDULERS: dict[str, type[SchedulerBase]] = {
    "greedy": GreedyScheduler,
}


def create_scheduler(
    institution: Institution,
    catalog: Catalog,
    strategy: str = "greedy",
    hard_constraints: list[HardConstraint] | None = None,
    soft_constraints: list[SoftConstraint] | None = None,
) -> SchedulerBase:
    """Create a scheduler for the given strategy.

    Args:
        institution: Institution calendar configuration
        catalog: Catalog to schedule
        strategy: Scheduler name ('greedy')
        hard_constraints: Hard constraint definitions (defaults if None)
        soft_constraints: Soft constraint definitions (defaults if None)

    Returns:
        Scheduler instance

    Raises:
        ValueError: If the strategy is not supported
    """
    if strategy not in SCHEDULERS:
        raise ValueError(
            f"Unsupported strategy: {strategy}. Supported: {', '.join(SCHEDULERS.keys())}"
        )
    return SCHEDULERS[strategy](
        institution, catalog, hard_constraints, soft_constraints
    )
