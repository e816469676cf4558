"""Data models for the timetable scheduling engine."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from ..models import Faculty, Room, StudentBatch, Subject, TimeSlot
from .constants import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_PRIORITY_WEIGHTS,
    DEFAULT_TIME_LIMIT,
)


class ConflictType(str, Enum):
    """Kind of hard-rule violation."""

    FACULTY_CLASH = "Faculty Clash"
    ROOM_CLASH = "Room Clash"
    BATCH_CLASH = "Batch Clash"
    CONSTRAINT_VIOLATION = "Constraint Violation"


class Severity(str, Enum):
    """Severity of a conflict."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class TimetableStatus(str, Enum):
    """Review workflow status of a generated timetable."""

    DRAFT = "Draft"
    UNDER_REVIEW = "Under Review"
    APPROVED = "Approved"
    PUBLISHED = "Published"


class UnscheduledReason(str, Enum):
    """Reasons why a session could not be placed."""

    SUBJECT_NOT_FOUND = "subject_not_found"
    NO_ELIGIBLE_FACULTY = "no_eligible_faculty"
    NO_SUITABLE_ROOM = "no_suitable_room"
    NO_TIME_SLOTS = "no_time_slots"
    NO_FEASIBLE_SLOT = "no_feasible_slot"


@dataclass(frozen=True)
class TimetableEntry:
    """One placed session."""

    id: str
    subject: Subject
    faculty: Faculty
    room: Room
    batch: StudentBatch
    time_slot: TimeSlot

    def occupies(self, day: str, period: int) -> bool:
        """Check if the entry sits in the given (day, period) cell."""
        return self.time_slot.day == day and self.time_slot.period == period

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimetableEntry":
        return cls(
            id=data["id"],
            subject=Subject.from_dict(data["subject"]),
            faculty=Faculty.from_dict(data["faculty"]),
            room=Room.from_dict(data["room"]),
            batch=StudentBatch.from_dict(data["batch"]),
            time_slot=TimeSlot.from_dict(data["timeSlot"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "subject": self.subject.to_dict(),
            "faculty": self.faculty.to_dict(),
            "room": self.room.to_dict(),
            "batch": self.batch.to_dict(),
            "timeSlot": self.time_slot.to_dict(),
        }


@dataclass(frozen=True)
class Conflict:
    """A detected hard-rule violation."""

    id: str
    type: ConflictType
    description: str
    severity: Severity = Severity.HIGH
    affected_entries: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Conflict":
        return cls(
            id=data["id"],
            type=ConflictType(data["type"]),
            description=data.get("description", ""),
            severity=Severity(data.get("severity", Severity.HIGH.value)),
            affected_entries=list(data.get("affectedEntries", [])),
            suggestions=list(data.get("suggestions", [])),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "description": self.description,
            "severity": self.severity.value,
            "affectedEntries": self.affected_entries,
            "suggestions": self.suggestions,
        }


@dataclass
class UnscheduledSession:
    """A required session the engine could not place.

    `session` is the 1-based session number, or None when no session of the
    subject could be attempted at all (e.g. the subject is missing).
    """

    batch_id: str
    subject_id: str
    session: int | None
    reason: UnscheduledReason
    details: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UnscheduledSession":
        return cls(
            batch_id=data["batchId"],
            subject_id=data["subjectId"],
            session=data.get("session"),
            reason=UnscheduledReason(data["reason"]),
            details=data.get("details", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "batchId": self.batch_id,
            "subjectId": self.subject_id,
            "session": self.session,
            "reason": self.reason.value,
            "details": self.details,
        }


@dataclass
class PriorityWeights:
    """Relative importance of optimization goals."""

    faculty_load: float = DEFAULT_PRIORITY_WEIGHTS["facultyLoad"]
    room_utilization: float = DEFAULT_PRIORITY_WEIGHTS["roomUtilization"]
    student_schedule: float = DEFAULT_PRIORITY_WEIGHTS["studentSchedule"]
    constraints: float = DEFAULT_PRIORITY_WEIGHTS["constraints"]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PriorityWeights":
        return cls(
            faculty_load=float(data.get("facultyLoad", DEFAULT_PRIORITY_WEIGHTS["facultyLoad"])),
            room_utilization=float(
                data.get("roomUtilization", DEFAULT_PRIORITY_WEIGHTS["roomUtilization"])
            ),
            student_schedule=float(
                data.get("studentSchedule", DEFAULT_PRIORITY_WEIGHTS["studentSchedule"])
            ),
            constraints=float(data.get("constraints", DEFAULT_PRIORITY_WEIGHTS["constraints"])),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "facultyLoad": self.faculty_load,
            "roomUtilization": self.room_utilization,
            "studentSchedule": self.student_schedule,
            "constraints": self.constraints,
        }


@dataclass
class OptimizationSettings:
    """Settings for a generation run.

    The greedy scheduler accepts these but does not consult them; they are
    kept for solvers that search.
    """

    max_iterations: int = DEFAULT_MAX_ITERATIONS
    time_limit: int = DEFAULT_TIME_LIMIT
    priority_weights: PriorityWeights = field(default_factory=PriorityWeights)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OptimizationSettings":
        return cls(
            max_iterations=int(data.get("maxIterations", DEFAULT_MAX_ITERATIONS)),
            time_limit=int(data.get("timeLimit", DEFAULT_TIME_LIMIT)),
            priority_weights=PriorityWeights.from_dict(data.get("priorityWeights", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "maxIterations": self.max_iterations,
            "timeLimit": self.time_limit,
            "priorityWeights": self.priority_weights.to_dict(),
        }


@dataclass
class HardConstraint:
    """Definition of a hard rule as shown in the constraint manager."""

    id: str
    name: str
    description: str = ""
    enabled: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HardConstraint":
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            description=data.get("description", ""),
            enabled=bool(data.get("enabled", True)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "enabled": self.enabled,
        }


@dataclass
class SoftConstraint:
    """A weighted scheduling preference."""

    id: str
    name: str
    description: str = ""
    weight: int = 5
    enabled: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SoftConstraint":
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            description=data.get("description", ""),
            weight=int(data.get("weight", 5)),
            enabled=bool(data.get("enabled", True)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "weight": self.weight,
            "enabled": self.enabled,
        }


@dataclass
class ScheduleStatistics:
    """Statistics about a generated timetable."""

    total_entries: int = 0
    total_conflicts: int = 0
    total_unscheduled: int = 0
    by_day: dict[str, int] = field(default_factory=dict)
    by_batch: dict[str, int] = field(default_factory=dict)
    by_faculty: dict[str, int] = field(default_factory=dict)
    by_room: dict[str, int] = field(default_factory=dict)
    conflicts_by_type: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total_entries": self.total_entries,
            "total_conflicts": self.total_conflicts,
            "total_unscheduled": self.total_unscheduled,
            "by_day": self.by_day,
            "by_batch": self.by_batch,
            "by_faculty": self.by_faculty,
            "by_room": self.by_room,
            "conflicts_by_type": self.conflicts_by_type,
        }


@dataclass
class GeneratedTimetable:
    """Result of one scheduling run."""

    id: str
    name: str
    entries: list[TimetableEntry] = field(default_factory=list)
    conflicts: list[Conflict] = field(default_factory=list)
    score: int = 0
    generated_at: str = field(default_factory=lambda: datetime.now().isoformat())
    status: TimetableStatus = TimetableStatus.DRAFT
    unscheduled: list[UnscheduledSession] = field(default_factory=list)

    @property
    def total_entries(self) -> int:
        """Total number of placed sessions."""
        return len(self.entries)

    @property
    def total_unscheduled(self) -> int:
        """Total number of sessions left unplaced."""
        return len(self.unscheduled)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GeneratedTimetable":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            entries=[TimetableEntry.from_dict(e) for e in data.get("entries", [])],
            conflicts=[Conflict.from_dict(c) for c in data.get("conflicts", [])],
            score=int(data.get("score", 0)),
            generated_at=data.get("generatedAt", ""),
            status=TimetableStatus(data.get("status", TimetableStatus.DRAFT.value)),
            unscheduled=[
                UnscheduledSession.from_dict(u) for u in data.get("unscheduled", [])
            ],
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "entries": [e.to_dict() for e in self.entries],
            "conflicts": [c.to_dict() for c in self.conflicts],
            "score": self.score,
            "generatedAt": self.generated_at,
            "status": self.status.value,
            "unscheduled": [u.to_dict() for u in self.unscheduled],
        }
