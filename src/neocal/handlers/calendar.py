"""
Calendar grid view handler
"""
from neocal.models import Event

NOT_IMPLEMENTED = "Calendar view is not implemented yet."


class Handler:
    """Placeholder for the month grid view"""

    def __call__(self, events: list[Event]) -> None:
        print(NOT_IMPLEMENTED, flush=True)
