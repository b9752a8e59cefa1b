"""
Event fetcher

Performs the single GET request against a calendar endpoint and turns the
response into a list of events.
"""
import logging
from datetime import datetime

import requests
from pydantic import ValidationError

from neocal.daterange import DateRange, compute_range
from neocal.models import Event, EventList
from neocal.query import EffectiveQuery

HEADERS = {
    'Accept': 'application/json',
    'Content-Type': 'application/json',
}


class FetchError(Exception):
    """Base class for failures talking to the calendar provider."""


class CalendarNotFoundError(FetchError):
    def __init__(self, url: str):
        super().__init__("Looks like the Calendar URL does not exist.")
        self.url = url


class CalendarNotPublicError(FetchError):
    def __init__(self, url: str):
        super().__init__("Looks like the Calendar URL is not public.")
        self.url = url


class UnexpectedResponseError(FetchError):
    def __init__(self, status_code: int):
        super().__init__(f"Uh oh! Something unexpected happened (HTTP {status_code}).")
        self.status_code = status_code


class SchemaMismatchError(FetchError):
    def __init__(self, detail: str):
        super().__init__(f"The response didn't match the shape we expected. {detail}")
        self.detail = detail


class TransportError(FetchError):
    pass


def build_params(query: EffectiveQuery, date_range: DateRange | None = None) -> dict[str, str]:
    """Assemble the ordered query parameters for the request.

    Args:
        query: Resolved query
        date_range: Absolute bounds for timeMin/timeMax, if any

    Returns:
        Parameter mapping in the order q, timeZone, timeMin, timeMax
    """
    params: dict[str, str] = {}
    if query.search_term:
        params['q'] = query.search_term
    if query.timezone:
        params['timeZone'] = query.timezone
    if date_range is not None:
        params['timeMin'] = date_range.start
        params['timeMax'] = date_range.end
    return params


def parse_events(response: requests.Response) -> list[Event]:
    try:
        payload = response.json()
    except ValueError as e:
        raise SchemaMismatchError(f"Body is not valid JSON: {e}") from e

    try:
        return EventList.validate_python(payload)
    except ValidationError as e:
        raise SchemaMismatchError(str(e)) from e


def fetch_events(
    query: EffectiveQuery,
    session: requests.Session | None = None,
    now: datetime | None = None,
) -> list[Event]:
    """Fetch the events for a resolved query.

    Args:
        query: Resolved query carrying endpoint and parameters
        session: HTTP session to use (default: a new requests.Session)
        now: Reference time for relative date ranges

    Returns:
        Events in the order sent by the provider

    Raises:
        FetchError: On non-200 responses, transport failures or a body
            that is not a list of events
    """
    date_range = compute_range(query.date_range, now) if query.date_range else None
    params = build_params(query, date_range)

    if date_range is not None:
        logging.info(f"Time Range: {date_range.start} to {date_range.end}")

    session = session or requests.Session()
    try:
        response = session.get(query.endpoint, params=params, headers=HEADERS)
    except requests.RequestException as e:
        raise TransportError(f"Could not reach calendar '{query.calendar_name}': {e}") from e

    logging.debug(f"GET {response.url} -> HTTP {response.status_code}")

    if response.status_code == requests.codes.ok:
        events = parse_events(response)
        logging.info(f"Received {len(events)} events from '{query.calendar_name}'")
        return events
    if response.status_code == requests.codes.not_found:
        raise CalendarNotFoundError(query.endpoint)
    if response.status_code == requests.codes.unauthorized:
        raise CalendarNotPublicError(query.endpoint)
    raise UnexpectedResponseError(response.status_code)
