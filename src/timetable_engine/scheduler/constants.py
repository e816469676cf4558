"""Constants for timetable generation."""

# Default weekly calendar used when no institution configuration is given
DEFAULT_WORKING_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]

DEFAULT_PERIOD_TIMINGS = [
    {"period": 1, "startTime": "09:00", "endTime": "10:00"},
    {"period": 2, "startTime": "10:00", "endTime": "11:00"},
    {"period": 3, "startTime": "11:15", "endTime": "12:15"},
    {"period": 4, "startTime": "12:15", "endTime": "13:15"},
    {"period": 5, "startTime": "14:00", "endTime": "15:00"},
    {"period": 6, "startTime": "15:00", "endTime": "16:00"},
]

DEFAULT_BREAKS = [
    {"name": "Tea Break", "startTime": "11:00", "endTime": "11:15"},
    {"name": "Lunch Break", "startTime": "13:15", "endTime": "14:00"},
]

# Hard constraint ids
FACULTY_CLASH = "no-faculty-clash"
ROOM_CLASH = "no-room-clash"
BATCH_CLASH = "no-batch-clash"
ROOM_CAPACITY = "room-capacity"
FACULTY_AVAILABILITY = "faculty-availability"

# faculty-availability is defined for the constraint manager but has no
# checking rule yet
DEFAULT_HARD_CONSTRAINTS = [
    {
        "id": FACULTY_CLASH,
        "name": "No Faculty Double Booking",
        "description": "Faculty cannot be assigned to multiple classes at the same time",
        "enabled": True,
    },
    {
        "id": ROOM_CLASH,
        "name": "No Room Double Booking",
        "description": "Room cannot be assigned to multiple classes at the same time",
        "enabled": True,
    },
    {
        "id": BATCH_CLASH,
        "name": "No Batch Double Booking",
        "description": "Student batch cannot have multiple classes at the same time",
        "enabled": True,
    },
    {
        "id": ROOM_CAPACITY,
        "name": "Room Capacity Check",
        "description": "Room capacity must be sufficient for batch size",
        "enabled": True,
    },
    {
        "id": FACULTY_AVAILABILITY,
        "name": "Faculty Availability",
        "description": "Faculty must be available during assigned slots",
        "enabled": True,
    },
]

# Soft constraints (weight 1-10); not consulted by placement or scoring
DEFAULT_SOFT_CONSTRAINTS = [
    {
        "id": "even-distribution",
        "name": "Even Distribution",
        "description": "Classes should be evenly distributed across the week",
        "weight": 8,
        "enabled": True,
    },
    {
        "id": "minimize-gaps",
        "name": "Minimize Gaps",
        "description": "Minimize idle time for faculty and students",
        "weight": 7,
        "enabled": True,
    },
    {
        "id": "lab-morning-preference",
        "name": "Lab Morning Preference",
        "description": "Schedule labs and practicals in morning slots",
        "weight": 6,
        "enabled": True,
    },
    {
        "id": "faculty-load-balance",
        "name": "Faculty Load Balance",
        "description": "Balance teaching loads fairly across faculty",
        "weight": 7,
        "enabled": True,
    },
]

MIN_SOFT_WEIGHT = 1
MAX_SOFT_WEIGHT = 10

# Optimization settings defaults
DEFAULT_MAX_ITERATIONS = 1000
DEFAULT_TIME_LIMIT = 30  # seconds
DEFAULT_PRIORITY_WEIGHTS = {
    "facultyLoad": 0.3,
    "roomUtilization": 0.2,
    "studentSchedule": 0.3,
    "constraints": 0.2,
}

MAX_SCORE = 100
