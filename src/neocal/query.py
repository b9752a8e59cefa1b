"""
Effective query resolution

Merges command-line flags with configuration defaults into the single
query used for one invocation.
"""
import enum
from dataclasses import dataclass
from typing import Iterable

from neocal.config import NEOCAL_SECTION, Config, ConfigError
from neocal.daterange import RangeRequest, select_range


class ViewMode(enum.Enum):
    AGENDA = 'agenda'
    CALENDAR = 'calendar'


class QueryError(Exception):
    """Raised when flags and configuration cannot form a valid query."""


class UnknownViewModeError(QueryError):
    def __init__(self, mode: str):
        super().__init__(f"Unrecognized view type: {mode}")
        self.mode = mode


@dataclass(frozen=True)
class EffectiveQuery:
    calendar_name: str
    endpoint: str
    timezone: str = ''
    search_term: str = ''
    date_range: RangeRequest | None = None
    view_mode: ViewMode = ViewMode.AGENDA


def first_set(candidates: Iterable[str | None]) -> str | None:
    """Return the first candidate that is neither None nor blank."""
    for candidate in candidates:
        if candidate is not None and candidate.strip():
            return candidate
    return None


def parse_view_mode(mode: str) -> ViewMode:
    try:
        return ViewMode(mode.strip().lower())
    except ValueError:
        raise UnknownViewModeError(mode) from None


def resolve_query(
    config: Config,
    calendar: str | None = None,
    search: str | None = None,
    timezone: str | None = None,
    weeks: int | None = None,
    week: bool = False,
    today: bool = False,
    tomorrow: bool = False,
    view: str | None = None,
    mode: str | None = None,
) -> EffectiveQuery:
    """Build the effective query from flags and loaded configuration.

    Args:
        config: Loaded configuration (section -> key -> value)
        calendar: ``--for`` flag value
        search: ``--search`` flag value
        timezone: ``--timezone`` flag value
        weeks, week, today, tomorrow: date range flags
        view: Name of the subcommand that was invoked, if any
        mode: ``--mode`` flag value

    Returns:
        Fully resolved EffectiveQuery

    Raises:
        ConfigError: If no calendar is selected or it has no endpoint
        UnknownViewModeError: If the requested view mode is not known
    """
    settings = config.get(NEOCAL_SECTION, {})

    calendar_name = first_set([calendar, settings.get('default')])
    if calendar_name is None:
        raise ConfigError(f"No calendar given and no 'default' set in the [{NEOCAL_SECTION}] section")

    calendar_settings = config.get(calendar_name)
    endpoint = first_set([(calendar_settings or {}).get('endpoint')])
    if calendar_settings is None or endpoint is None:
        raise ConfigError(f"Calendar '{calendar_name}' not found or has no endpoint")

    timezone = first_set([
        timezone,
        calendar_settings.get('timezone'),
        settings.get('timezone'),
    ])

    view_name = first_set([view, mode, settings.get('mode')])
    view_mode = parse_view_mode(view_name) if view_name is not None else ViewMode.AGENDA

    return EffectiveQuery(
        calendar_name=calendar_name,
        endpoint=endpoint.strip(),
        timezone=timezone or '',
        search_term=search or '',
        date_range=select_range(weeks=weeks, week=week, today=today, tomorrow=tomorrow),
        view_mode=view_mode,
    )
