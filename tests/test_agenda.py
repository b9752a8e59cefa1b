"""Tests for the agenda view."""
import pytest

from neocal.handlers import agenda
from neocal.handlers.agenda import (
    ALL_DAY,
    SEPARATOR,
    Handler,
    build_rows,
    format_time_span,
    render_table,
    title_width,
)
from neocal.models import Event


def make_event(summary, start_date, start='', end='', call=''):
    return Event(
        summary=summary,
        start_date=start_date,
        end_date=start_date,
        start_date_time=start,
        end_date_time=end,
        call=call,
    )


def test_date_marker_printed_once_per_day():
    events = [
        make_event('A', '2024-01-01'),
        make_event('B', '2024-01-01'),
        make_event('C', '2024-01-02'),
    ]

    rows = build_rows(events)

    assert rows.count(SEPARATOR) == 2
    assert rows == [
        SEPARATOR,
        ('2024-01-01', ALL_DAY, 'A'),
        ('', ALL_DAY, 'B'),
        SEPARATOR,
        ('2024-01-02', ALL_DAY, 'C'),
    ]


def test_out_of_order_dates_start_new_groups():
    events = [
        make_event('A', '2024-01-01'),
        make_event('B', '2024-01-02'),
        make_event('C', '2024-01-01'),
    ]

    markers = [row[0] for row in build_rows(events) if row != SEPARATOR]

    assert markers == ['2024-01-01', '2024-01-02', '2024-01-01']


def test_all_day_span():
    assert format_time_span(make_event('Holiday', '2024-01-01')) == 'All Day'


def test_time_span_keeps_encoded_offset():
    event = make_event(
        'Standup', '2024-01-01',
        start='2024-01-01T09:00:00+01:00',
        end='2024-01-01T09:15:00+01:00',
    )

    assert format_time_span(event) == '09:00 - 09:15'


def test_time_span_with_utc_designator():
    event = make_event('Late', '2024-01-01', start='2024-01-01T22:30:00Z', end='2024-01-01T23:45:00.000Z')

    assert format_time_span(event) == '22:30 - 23:45'


def test_call_link_goes_on_second_line():
    event = make_event('Sync', '2024-01-01', call='https://meet.example.com/x')

    assert build_rows([event])[1][2] == 'Sync\nhttps://meet.example.com/x'


@pytest.mark.parametrize('columns, expected', [
    (None, 80),
    (140, 80),
    (100, 40),
    (70, 20),
])
def test_title_width(columns, expected):
    assert title_width(columns) == expected


def test_render_table_wraps_long_titles():
    rows = [SEPARATOR, ('2024-01-01', ALL_DAY, 'word ' * 10)]

    table = render_table(rows, 20)

    lines = table.split('\n')
    assert lines[0].startswith('┌') and lines[-1].startswith('└')
    assert len({len(line) for line in lines}) == 1
    assert all(len(line) == len(lines[0]) for line in lines)
    assert sum('word' in line for line in lines) > 1


def test_render_table_multiline_cells():
    rows = [('2024-01-01', ALL_DAY, 'Sync\nhttps://meet.example.com/x')]

    lines = render_table(rows, 80).split('\n')

    assert '2024-01-01' in lines[1] and 'Sync' in lines[1]
    assert 'https://meet.example.com/x' in lines[2]
    assert '2024-01-01' not in lines[2]


def test_handler_prints_notice_for_empty_list(capsys):
    Handler(columns=120)([])

    out = capsys.readouterr().out
    assert out == 'No events found.\n'
    assert '┌' not in out


def test_handler_prints_table(capsys):
    Handler(columns=120)([make_event('A', '2024-01-01')])

    out = capsys.readouterr().out
    assert out.count('2024-01-01') == 1
    assert 'All Day' in out


def test_handler_falls_back_without_terminal(monkeypatch):
    monkeypatch.setattr(agenda, 'terminal_columns', lambda: None)

    assert Handler().columns is None


def test_empty_summary_renders(capsys):
    Handler(columns=120)([make_event('', '2024-01-01')])

    lines = capsys.readouterr().out.splitlines()
    assert '2024-01-01' in lines[2]
    assert len({len(line) for line in lines}) == 1


def test_render_table_with_empty_columns():
    table = render_table([SEPARATOR, ('', '', '')], 80)

    assert table.split('\n')[0] == '┌───┬───┬───┐'
