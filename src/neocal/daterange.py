"""
Relative date range calculation
"""
import enum
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta

import dateutil.tz
from dateutil.relativedelta import SU, relativedelta

START_OF_DAY = 'T00:00:00.000Z'
END_OF_DAY = 'T23:59:59.000Z'


class RangeKind(enum.Enum):
    TODAY = 'today'
    TOMORROW = 'tomorrow'
    CURRENT_WEEK = 'week'
    WEEKS_AHEAD = 'weeks'


@dataclass(frozen=True)
class RangeRequest:
    """A range relative to the current day, resolved at fetch time."""
    kind: RangeKind
    weeks: int = 0


@dataclass(frozen=True)
class DateRange:
    """Inclusive absolute bounds sent to the provider as timeMin/timeMax."""
    start: str
    end: str


def select_range(
    weeks: int | None = None,
    week: bool = False,
    today: bool = False,
    tomorrow: bool = False,
) -> RangeRequest | None:
    """Pick the range requested by the command-line flags.

    Flags are evaluated in the order weeks, week, today, tomorrow and the
    last one that is set wins. Earlier selections are overwritten, not
    rejected.

    Args:
        weeks: Number of ISO weeks ahead of the current one, or None
        week: Whether the current ISO week was requested
        today: Whether today was requested
        tomorrow: Whether tomorrow was requested

    Returns:
        The selected RangeRequest, or None if no range flag was given
    """
    candidates = [
        (weeks is not None, lambda: RangeRequest(RangeKind.WEEKS_AHEAD, weeks or 0)),
        (week, lambda: RangeRequest(RangeKind.CURRENT_WEEK)),
        (today, lambda: RangeRequest(RangeKind.TODAY)),
        (tomorrow, lambda: RangeRequest(RangeKind.TOMORROW)),
    ]

    selected: RangeRequest | None = None
    for is_set, build in candidates:
        if not is_set:
            continue
        request = build()
        if selected is not None:
            logging.warning(f"Range '{request.kind.value}' overrides '{selected.kind.value}'")
        selected = request
    return selected


def _day_bounds(first: date, last: date) -> DateRange:
    return DateRange(
        start=first.isoformat() + START_OF_DAY,
        end=last.isoformat() + END_OF_DAY,
    )


def iso_week_monday(day: date) -> date:
    """Return the Monday of the ISO-8601 week containing ``day``.

    Near new year this may fall in the previous calendar year.
    """
    iso_year, iso_week, _ = day.isocalendar()
    return date.fromisocalendar(iso_year, iso_week, 1)


def compute_range(request: RangeRequest, now: datetime | None = None) -> DateRange:
    """Convert a relative range request into absolute day boundaries.

    The boundaries use the local calendar date of ``now`` but carry a UTC
    ``Z`` label, e.g. ``2024-01-01T00:00:00.000Z``.

    Args:
        request: Relative range to resolve
        now: Reference time (default: current local time)

    Returns:
        DateRange with inclusive start and end strings

    Raises:
        ValueError: If a negative week count is requested
    """
    now = now or datetime.now(dateutil.tz.tzlocal())
    local_day = now.date()

    if request.kind is RangeKind.TODAY:
        return _day_bounds(local_day, local_day)

    if request.kind is RangeKind.TOMORROW:
        tomorrow = local_day + timedelta(days=1)
        return _day_bounds(tomorrow, tomorrow)

    monday = iso_week_monday(local_day)

    if request.kind is RangeKind.CURRENT_WEEK:
        weeks = 0
    else:
        weeks = request.weeks
        if weeks < 0:
            raise ValueError(f"Week count cannot be negative: {weeks}")

    sunday = monday + relativedelta(weeks=weeks, weekday=SU)
    return _day_bounds(monday, sunday)
