"""Weekly time grid generation."""

from ..models import Break, Institution, PeriodTiming, TimeSlot
from .constants import DEFAULT_BREAKS, DEFAULT_PERIOD_TIMINGS, DEFAULT_WORKING_DAYS


def generate_time_slots(institution: Institution) -> list[TimeSlot]:
    """Expand the institution calendar into schedulable time slots.

    Slots are ordered by day (configured order), then by period number.
    Empty working days or timings give an empty grid.

    Args:
        institution: Institution configuration

    Returns:
        List of TimeSlot objects
    """
    timings = sorted(institution.period_timings, key=lambda t: t.period)
    return [
        TimeSlot(
            day=day,
            period=timing.period,
            start_time=timing.start_time,
            end_time=timing.end_time,
        )
        for day in institution.working_days
        for timing in timings
    ]


def default_institution() -> Institution:
    """Institution with the default Monday-Friday, six-period calendar."""
    timings = [PeriodTiming.from_dict(t) for t in DEFAULT_PERIOD_TIMINGS]
    return Institution(
        id="default",
        name="Default Institution",
        working_days=list(DEFAULT_WORKING_DAYS),
        periods_per_day=len(timings),
        period_timings=timings,
        breaks=[Break.from_dict(b) for b in DEFAULT_BREAKS],
    )
