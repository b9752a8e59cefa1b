"""
Pytest configuration and shared fixtures.
"""
from datetime import datetime
from unittest.mock import MagicMock

import pytest
from dateutil.tz import tzutc

from neocal.config import CONFIG_PATH_ENV


CONFIG_TEXT = """\
[neocal]
default = work
mode = agenda
timezone = UTC

[work]
endpoint = https://calendar.example.com/work?key=abc%20def
timezone = Europe/Madrid

[home]
endpoint = https://calendar.example.com/home
"""


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Write a config file and point NEOCAL_CONFIG_PATH at it."""
    path = tmp_path / 'config.ini'
    path.write_text(CONFIG_TEXT, encoding='utf-8')
    monkeypatch.setenv(CONFIG_PATH_ENV, str(path))
    return path


@pytest.fixture
def config():
    return {
        'neocal': {'default': 'work', 'mode': 'agenda', 'timezone': 'UTC'},
        'work': {'endpoint': 'https://calendar.example.com/work', 'timezone': 'Europe/Madrid'},
        'home': {'endpoint': 'https://calendar.example.com/home'},
    }


@pytest.fixture
def sample_event():
    """Sample timed event payload."""
    return {
        'summary': 'Standup',
        'description': 'Daily sync',
        'start_date': '2024-01-01',
        'end_date': '2024-01-01',
        'start_date_time': '2024-01-01T09:00:00+01:00',
        'end_date_time': '2024-01-01T09:15:00+01:00',
        'call': 'https://meet.example.com/abc',
    }


@pytest.fixture
def all_day_event():
    return {
        'summary': 'Holiday',
        'description': '',
        'start_date': '2024-01-02',
        'end_date': '2024-01-02',
        'start_date_time': '',
        'end_date_time': '',
        'call': '',
    }


@pytest.fixture
def fixed_now():
    # Wednesday of ISO week 2024-W01
    return datetime(2024, 1, 3, 15, 30, tzinfo=tzutc())


def build_session(status_code=200, payload=None, json_error=None):
    """Build a requests.Session mock returning a single canned response."""
    session = MagicMock()
    response = session.get.return_value
    response.status_code = status_code
    response.url = 'https://calendar.example.com/work'
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload if payload is not None else []
    return session


@pytest.fixture
def make_session():
    return build_session
