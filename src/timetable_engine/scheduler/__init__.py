"""Timetable scheduling engine.

This package assigns class sessions (subject x batch) to
(faculty, room, time slot) triples. A greedy first-fit scheduler places
each session in the first combination that passes the hard constraints,
and the result is scored by coverage.

Main classes:
- GreedyScheduler: First-fit scheduler without backtracking
- ConflictChecker: Hard-rule violation detection
- GeneratedTimetable: Result of a scheduling run

Usage:
    from timetable_engine.scheduler import create_scheduler

    scheduler = create_scheduler(institution, catalog)
    timetable = scheduler.generate()
"""

from .algorithm import GreedyScheduler, SchedulerBase, create_scheduler
from .conflicts import ConflictChecker, default_hard_constraints
from .constants import (
    DEFAULT_HARD_CONSTRAINTS,
    DEFAULT_PERIOD_TIMINGS,
    DEFAULT_SOFT_CONSTRAINTS,
    DEFAULT_WORKING_DAYS,
)
from .excel_generator import TimetableExcelGenerator, generate_timetable_excel
from .models import (
    Conflict,
    ConflictType,
    GeneratedTimetable,
    HardConstraint,
    OptimizationSettings,
    PriorityWeights,
    ScheduleStatistics,
    Severity,
    SoftConstraint,
    TimetableEntry,
    TimetableStatus,
    UnscheduledReason,
    UnscheduledSession,
)
from .scoring import calculate_score
from .timegrid import default_institution, generate_time_slots
from .utils import (
    build_grid,
    compute_statistics,
    filter_entries,
    normalize_sessions_per_week,
)
from .workflow import approve, publish, submit_for_review, transition

__all__ = [
    # Schedulers
    "SchedulerBase",
    "GreedyScheduler",
    "create_scheduler",
    # Constraint checking
    "ConflictChecker",
    "default_hard_constraints",
    # Time grid
    "generate_time_slots",
    "default_institution",
    # Scoring
    "calculate_score",
    # Models
    "Conflict",
    "ConflictType",
    "GeneratedTimetable",
    "HardConstraint",
    "OptimizationSettings",
    "PriorityWeights",
    "ScheduleStatistics",
    "Severity",
    "SoftConstraint",
    "TimetableEntry",
    "TimetableStatus",
    "UnscheduledReason",
    "UnscheduledSession",
    # Constants
    "DEFAULT_HARD_CONSTRAINTS",
    "DEFAULT_PERIOD_TIMINGS",
    "DEFAULT_SOFT_CONSTRAINTS",
    "DEFAULT_WORKING_DAYS",
    # Utilities
    "build_grid",
    "compute_statistics",
    "filter_entries",
    "normalize_sessions_per_week",
    # Workflow
    "transition",
    "submit_for_review",
    "approve",
    "publish",
    # Excel
    "TimetableExcelGenerator",
    "generate_timetable_excel",
]
