"""Timetable Engine - class timetable generation for academic institutions.

This package assigns class sessions (subject x student batch) to faculty,
rooms and weekly time slots, reports hard-rule conflicts and scores the
result by coverage.

Example usage:
    from timetable_engine import CatalogLoader, create_scheduler

    loader = CatalogLoader("data")
    scheduler = create_scheduler(loader.institution, loader.catalog)
    timetable = scheduler.generate(loader.settings)

    print(f"Score: {timetable.score}%")
    for entry in timetable.entries:
        print(f"{entry.time_slot.day} P{entry.time_slot.period} | {entry.subject.code}")

    # Export to JSON
    from timetable_engine.exporters import JSONExporter
    exporter = JSONExporter()
    exporter.export(timetable, "timetable.json")
"""

from .catalog import CatalogLoader
from .exceptions import (
    BatchNotFoundError,
    CatalogNotFoundError,
    InvalidDataError,
    InvalidTransitionError,
    TimetableError,
)
from .exporters import CSVExporter, ExcelExporter, JSONExporter, get_exporter
from .models import (
    Catalog,
    Faculty,
    Institution,
    PeriodTiming,
    Room,
    RoomType,
    StudentBatch,
    Subject,
    SubjectType,
    TimeSlot,
)
from .scheduler import (
    ConflictChecker,
    GeneratedTimetable,
    GreedyScheduler,
    OptimizationSettings,
    calculate_score,
    create_scheduler,
    generate_time_slots,
)

__version__ = "0.1.0"

__all__ = [
    # Loading
    "CatalogLoader",
    # Engine
    "GreedyScheduler",
    "create_scheduler",
    "ConflictChecker",
    "generate_time_slots",
    "calculate_score",
    # Models
    "Catalog",
    "Faculty",
    "GeneratedTimetable",
    "Institution",
    "OptimizationSettings",
    "PeriodTiming",
    "Room",
    "RoomType",
    "StudentBatch",
    "Subject",
    "SubjectType",
    "TimeSlot",
    # Exporters
    "JSONExporter",
    "CSVExporter",
    "ExcelExporter",
    "get_exporter",
    # Exceptions
    "TimetableError",
    "CatalogNotFoundError",
    "InvalidDataError",
    "BatchNotFoundError",
    "InvalidTransitionError",
]
