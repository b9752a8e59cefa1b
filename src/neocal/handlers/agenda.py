"""
Agenda view handler
"""
import logging
import os
import sys
import textwrap

from dateutil.parser import isoparse

from neocal.models import Event

ALL_DAY = 'All Day'
NO_EVENTS = 'No events found.'

# Columns reserved for the date and time columns plus borders
RESERVED_COLUMNS = 60
FALLBACK_WIDTH = 80
MIN_TITLE_WIDTH = 20

Row = tuple[str, str, str]
SEPARATOR: Row = ('', '', '')


def format_time_span(event: Event) -> str:
    """Return ``HH:MM - HH:MM`` for timed events, ``All Day`` otherwise.

    Times are shown in the offset encoded in the timestamps themselves.
    """
    if event.is_all_day:
        return ALL_DAY
    start = isoparse(event.start_date_time)
    end = isoparse(event.end_date_time)
    return f"{start:%H:%M} - {end:%H:%M}"


def format_title(event: Event) -> str:
    if event.call:
        return f"{event.summary}\n{event.call}"
    return event.summary


def build_rows(events: list[Event]) -> list[Row]:
    """Lay out events as table rows grouped by start date.

    A blank separator row opens every run of events sharing a start date
    and the date is printed only on the first event of the run. Events are
    kept in the order given, so a date that reappears later starts a new
    group.

    Args:
        events: Events in display order

    Returns:
        Rows of (date marker, time span, title)
    """
    rows: list[Row] = []
    last_date: str | None = None

    for event in events:
        if event.start_date != last_date:
            rows.append(SEPARATOR)
            marker = event.start_date
            last_date = event.start_date
        else:
            marker = ''
        rows.append((marker, format_time_span(event), format_title(event)))

    return rows


def title_width(columns: int | None) -> int:
    """Width available to the title column for a terminal of ``columns``.

    Args:
        columns: Terminal width, or None if it could not be determined

    Returns:
        Maximum title column width
    """
    if columns is None:
        return FALLBACK_WIDTH
    return max(columns - RESERVED_COLUMNS, MIN_TITLE_WIDTH)


def terminal_columns() -> int | None:
    try:
        return os.get_terminal_size(sys.stdout.fileno()).columns
    except (OSError, ValueError):
        return None


def _cell_lines(text: str, width: int) -> list[str]:
    lines: list[str] = []
    for paragraph in text.split('\n'):
        lines.extend(textwrap.wrap(paragraph, width) or [''])
    return lines


def render_table(rows: list[Row], max_title_width: int) -> str:
    """Render rows as a box-drawn table.

    Args:
        rows: Table rows as produced by build_rows
        max_title_width: Upper bound for the title column

    Returns:
        The table as a single string without trailing newline
    """
    date_width = max((len(row[0]) for row in rows), default=0)
    time_width = max((len(row[1]) for row in rows), default=0)
    longest_title = max(
        (len(line) for row in rows for line in row[2].split('\n')),
        default=0,
    )
    widths = [
        max(width, 1)
        for width in (date_width, time_width, min(longest_title, max_title_width))
    ]

    def border(left: str, middle: str, right: str) -> str:
        return left + middle.join('─' * (width + 2) for width in widths) + right

    lines = [border('┌', '┬', '┐')]
    for row in rows:
        cells = [_cell_lines(cell, width) for cell, width in zip(row, widths)]
        height = max(len(cell) for cell in cells)
        for i in range(height):
            parts = [
                f" {(cell[i] if i < len(cell) else ''):<{width}} "
                for cell, width in zip(cells, widths)
            ]
            lines.append('│' + '│'.join(parts) + '│')
    lines.append(border('└', '┴', '┘'))

    return '\n'.join(lines)


class Handler:
    """Agenda view: events grouped by day in a table"""

    def __init__(self, columns: int | None = None):
        """
        Initialize agenda handler

        Args:
            columns: Terminal width; detected from stdout when omitted
        """
        self.columns = columns if columns is not None else terminal_columns()

    def __call__(self, events: list[Event]) -> None:
        if not events:
            print(NO_EVENTS, flush=True)
            return

        width = title_width(self.columns)
        logging.debug(f"Rendering {len(events)} events with title width {width}")
        print(render_table(build_rows(events), width), flush=True)
