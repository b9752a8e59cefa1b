"""
Event records returned by the calendar provider
"""
from dateutil.parser import isoparse
from pydantic import BaseModel, ConfigDict, TypeAdapter, field_validator, model_validator


class Event(BaseModel):
    """A single calendar event as sent by the provider."""

    model_config = ConfigDict(frozen=True)

    summary: str
    description: str = ''
    start_date: str
    end_date: str
    start_date_time: str = ''
    end_date_time: str = ''
    call: str = ''

    @field_validator('start_date_time', 'end_date_time')
    @classmethod
    def validate_timestamp(cls, value: str) -> str:
        if not value:
            return value
        try:
            isoparse(value)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Invalid RFC-3339 timestamp: {value}") from e
        return value

    @model_validator(mode='after')
    def validate_time_pair(self):
        """Start and end times are either both set or both empty (all-day)."""
        if bool(self.start_date_time) != bool(self.end_date_time):
            raise ValueError("start_date_time and end_date_time must both be set or both be empty")
        return self

    @property
    def is_all_day(self) -> bool:
        return not self.start_date_time and not self.end_date_time


EventList = TypeAdapter(list[Event])
