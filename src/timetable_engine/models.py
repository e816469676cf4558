"""Data models for institution configuration and catalog entities.

The catalog (subjects, faculty, rooms, batches) and the institution
configuration are owned by the data-management side of the application.
The scheduling engine only reads them.

Dictionaries use the camelCase keys of the stored JSON documents.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SubjectType(str, Enum):
    """Kind of teaching a subject requires."""

    THEORY = "Theory"
    LAB = "Lab"
    TUTORIAL = "Tutorial"
    SEMINAR = "Seminar"


class RoomType(str, Enum):
    """Kind of physical room."""

    CLASSROOM = "Classroom"
    LAB = "Lab"
    SEMINAR_HALL = "Seminar Hall"
    AUDITORIUM = "Auditorium"


@dataclass(frozen=True)
class TimeSlot:
    """One (day, period) cell of the weekly grid."""

    day: str
    period: int
    start_time: str = ""
    end_time: str = ""

    @property
    def key(self) -> tuple[str, int]:
        """Identity of the slot."""
        return (self.day, self.period)

    @property
    def time_range(self) -> str:
        """Time range string (e.g., '09:00-10:00')."""
        if self.start_time and self.end_time:
            return f"{self.start_time}-{self.end_time}"
        return ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimeSlot":
        return cls(
            day=data["day"],
            period=int(data["period"]),
            start_time=data.get("startTime", ""),
            end_time=data.get("endTime", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.day,
            "period": self.period,
            "startTime": self.start_time,
            "endTime": self.end_time,
        }


@dataclass
class PeriodTiming:
    """Start and end time of a numbered teaching period."""

    period: int
    start_time: str
    end_time: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PeriodTiming":
        return cls(
            period=int(data["period"]),
            start_time=data["startTime"],
            end_time=data["endTime"],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "period": self.period,
            "startTime": self.start_time,
            "endTime": self.end_time,
        }


@dataclass
class Break:
    """A named break in the teaching day."""

    name: str
    start_time: str
    end_time: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Break":
        return cls(
            name=data.get("name", ""),
            start_time=data["startTime"],
            end_time=data["endTime"],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "startTime": self.start_time,
            "endTime": self.end_time,
        }


@dataclass
class Institution:
    """Institution calendar configuration.

    Breaks, semester dates and holidays are stored for the data-management
    side; the scheduling engine only uses working days and period timings.
    """

    id: str
    name: str
    working_days: list[str] = field(default_factory=list)
    periods_per_day: int = 0
    period_timings: list[PeriodTiming] = field(default_factory=list)
    breaks: list[Break] = field(default_factory=list)
    semester_start: str = ""
    semester_end: str = ""
    holidays: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Institution":
        timings = [PeriodTiming.from_dict(t) for t in data.get("periodTimings", [])]
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            working_days=list(data.get("workingDays", [])),
            periods_per_day=data.get("periodsPerDay", len(timings)),
            period_timings=timings,
            breaks=[Break.from_dict(b) for b in data.get("breaks", [])],
            semester_start=data.get("semesterStart", ""),
            semester_end=data.get("semesterEnd", ""),
            holidays=list(data.get("holidays", [])),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "workingDays": self.working_days,
            "periodsPerDay": self.periods_per_day,
            "periodTimings": [t.to_dict() for t in self.period_timings],
            "breaks": [b.to_dict() for b in self.breaks],
            "semesterStart": self.semester_start,
            "semesterEnd": self.semester_end,
            "holidays": self.holidays,
        }


@dataclass
class Subject:
    """An academic course unit."""

    id: str
    code: str
    name: str
    type: SubjectType = SubjectType.THEORY
    credits: int = 0
    weekly_hours: int = 0
    sessions_per_week: int = 0
    session_duration: int = 60  # minutes
    preferred_time_slots: list[str] = field(default_factory=list)
    continuous_hours: int = 1
    equipment_required: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Subject":
        return cls(
            id=data["id"],
            code=data.get("code", data["id"]),
            name=data.get("name", data.get("code", data["id"])),
            type=SubjectType(data.get("type", SubjectType.THEORY.value)),
            credits=int(data.get("credits", 0)),
            weekly_hours=int(data.get("weeklyHours", 0)),
            sessions_per_week=int(data.get("sessionsPerWeek", 0)),
            session_duration=int(data.get("sessionDuration", 60)),
            preferred_time_slots=list(data.get("preferredTimeSlots", [])),
            continuous_hours=int(data.get("continuousHours", 1)),
            equipment_required=list(data.get("equipmentRequired", [])),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "code": self.code,
            "name": self.name,
            "type": self.type.value,
            "credits": self.credits,
            "weeklyHours": self.weekly_hours,
            "sessionsPerWeek": self.sessions_per_week,
            "sessionDuration": self.session_duration,
            "preferredTimeSlots": self.preferred_time_slots,
            "continuousHours": self.continuous_hours,
            "equipmentRequired": self.equipment_required,
        }


@dataclass
class FacultyPreferences:
    """Scheduling preferences of a faculty member."""

    preferred_days: list[str] = field(default_factory=list)
    preferred_time_slots: list[str] = field(default_factory=list)
    no_back_to_back: bool = False
    max_daily_hours: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FacultyPreferences":
        return cls(
            preferred_days=list(data.get("preferredDays", [])),
            preferred_time_slots=list(data.get("preferredTimeSlots", [])),
            no_back_to_back=bool(data.get("noBackToBack", False)),
            max_daily_hours=int(data.get("maxDailyHours", 0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "preferredDays": self.preferred_days,
            "preferredTimeSlots": self.preferred_time_slots,
            "noBackToBack": self.no_back_to_back,
            "maxDailyHours": self.max_daily_hours,
        }


@dataclass
class Faculty:
    """A faculty member and the subjects they may teach."""

    id: str
    name: str
    eligible_subjects: list[str] = field(default_factory=list)
    max_weekly_load: int = 0
    availability: list[TimeSlot] = field(default_factory=list)
    unavailable_slots: list[TimeSlot] = field(default_factory=list)
    preferences: FacultyPreferences = field(default_factory=FacultyPreferences)
    leave_frequency: float = 0.0
    preferred_rooms: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Faculty":
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            eligible_subjects=list(data.get("eligibleSubjects", [])),
            max_weekly_load=int(data.get("maxWeeklyLoad", 0)),
            availability=[TimeSlot.from_dict(s) for s in data.get("availability", [])],
            unavailable_slots=[
                TimeSlot.from_dict(s) for s in data.get("unavailableSlots", [])
            ],
            preferences=FacultyPreferences.from_dict(data.get("preferences", {})),
            leave_frequency=float(data.get("leaveFrequency", 0.0)),
            preferred_rooms=list(data.get("preferredRooms") or []),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "eligibleSubjects": self.eligible_subjects,
            "maxWeeklyLoad": self.max_weekly_load,
            "availability": [s.to_dict() for s in self.availability],
            "unavailableSlots": [s.to_dict() for s in self.unavailable_slots],
            "preferences": self.preferences.to_dict(),
            "leaveFrequency": self.leave_frequency,
            "preferredRooms": self.preferred_rooms,
        }

    def can_teach(self, subject_id: str) -> bool:
        """Check if the subject is in the eligible-subject list."""
        return subject_id in self.eligible_subjects


@dataclass
class Room:
    """A physical room."""

    id: str
    name: str
    type: RoomType = RoomType.CLASSROOM
    capacity: int = 0
    equipment: list[str] = field(default_factory=list)
    availability: list[TimeSlot] = field(default_factory=list)
    location: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Room":
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            type=RoomType(data.get("type", RoomType.CLASSROOM.value)),
            capacity=int(data.get("capacity", 0)),
            equipment=list(data.get("equipment", [])),
            availability=[TimeSlot.from_dict(s) for s in data.get("availability", [])],
            location=data.get("location", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "capacity": self.capacity,
            "equipment": self.equipment,
            "availability": [s.to_dict() for s in self.availability],
            "location": self.location,
        }


@dataclass
class ElectiveGroup:
    """A set of elective subjects a batch chooses from."""

    id: str
    name: str
    subjects: list[str] = field(default_factory=list)
    max_selections: int = 1

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ElectiveGroup":
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            subjects=list(data.get("subjects", [])),
            max_selections=int(data.get("maxSelections", 1)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "subjects": self.subjects,
            "maxSelections": self.max_selections,
        }


@dataclass
class StudentBatch:
    """A cohort of students scheduled together."""

    id: str
    name: str
    department: str = ""
    year: int = 1
    section: str = ""
    size: int = 0
    mandatory_subjects: list[str] = field(default_factory=list)
    assigned_room_id: str | None = None
    elective_groups: list[ElectiveGroup] = field(default_factory=list)
    max_daily_classes: int = 0
    special_requirements: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StudentBatch":
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            department=data.get("department", ""),
            year=int(data.get("year", 1)),
            section=data.get("section", ""),
            size=int(data.get("size", 0)),
            mandatory_subjects=list(data.get("mandatorySubjects") or []),
            assigned_room_id=data.get("assignedRoomId"),
            elective_groups=[
                ElectiveGroup.from_dict(g) for g in data.get("electiveGroups", [])
            ],
            max_daily_classes=int(data.get("maxDailyClasses", 0)),
            special_requirements=list(data.get("specialRequirements", [])),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "department": self.department,
            "year": self.year,
            "section": self.section,
            "size": self.size,
            "mandatorySubjects": self.mandatory_subjects,
            "assignedRoomId": self.assigned_room_id,
            "electiveGroups": [g.to_dict() for g in self.elective_groups],
            "maxDailyClasses": self.max_daily_classes,
            "specialRequirements": self.special_requirements,
        }


@dataclass
class Catalog:
    """Subjects, faculty, rooms and batches handed to one scheduling run."""

    subjects: list[Subject] = field(default_factory=list)
    faculty: list[Faculty] = field(default_factory=list)
    rooms: list[Room] = field(default_factory=list)
    batches: list[StudentBatch] = field(default_factory=list)

    def get_subject(self, subject_id: str) -> Subject | None:
        """Get a subject by id."""
        for subject in self.subjects:
            if subject.id == subject_id:
                return subject
        return None

    def get_batch(self, batch_id: str) -> StudentBatch | None:
        """Get a batch by id."""
        for batch in self.batches:
            if batch.id == batch_id:
                return batch
        return None
