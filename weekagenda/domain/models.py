"""
Domain models for appointments and the records handed to a rendering surface.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

import pendulum
from pendulum import DateTime

REPAIR_DURATION_HOURS = 2


def hours_since_midnight(value: DateTime) -> float:
    """
    Convert the time of day of a datetime into decimal hours.

    Example: 9:30 -> 9.5
    """
    return (value - value.start_of("day")).total_seconds() / 3600


@dataclass
class Appointment:
    """
    A single appointment normalized into day-relative decimal hours.

    Construction never raises: if either instant is not a datetime the
    appointment is flagged invalid and no derived field is computed.
    An end before the start is repaired to start + 2 hours.
    """
    start: Any
    end: Any
    title: Any = ""

    is_valid: bool = field(init=False, default=False)
    reference_day: DateTime | None = field(init=False, default=None)
    start_offset_hours: float | None = field(init=False, default=None)
    end_offset_hours: float | None = field(init=False, default=None)
    duration_hours: float | None = field(init=False, default=None)

    # Assigned by DayBucket.group()
    slot_index: int | None = field(init=False, default=None)
    slot_count: int | None = field(init=False, default=None)
    group_index: int | None = field(init=False, default=None)

    def __post_init__(self):
        if not isinstance(self.title, str):
            self.title = ""

        if not isinstance(self.start, datetime) or not isinstance(self.end, datetime):
            self.start = self.start if isinstance(self.start, datetime) else None
            self.end = self.end if isinstance(self.end, datetime) else None
            return

        self.is_valid = True
        self.start = pendulum.instance(self.start)
        self.end = pendulum.instance(self.end)
        self.reference_day = self.start.start_of("day")

        if self.end < self.start:
            self.end = self.start.add(hours=REPAIR_DURATION_HOURS)

        self.start_offset_hours = hours_since_midnight(self.start)
        self.end_offset_hours = hours_since_midnight(self.end)
        self.duration_hours = (self.end - self.start).total_seconds() / 3600

    @property
    def is_grouped(self) -> bool:
        return self.slot_count is not None

    def formatted_start_time(self) -> str:
        """Return the start time as zero-padded 24h ``HH:mm``."""
        if not self.is_valid:
            return ""
        return self.start.format("HH:mm")

    def __str__(self) -> str:
        if not self.is_valid:
            return f"<invalid appointment {self.title!r}>"
        return f"{self.start.format('DD.MM.YYYY HH:mm')} - {self.end.format('HH:mm')} {self.title}"


class SkipReason(str, Enum):
    """Why a raw agenda record did not make it into the week."""
    INVALID_APPOINTMENT = "invalid_appointment"
    OUT_OF_WINDOW = "out_of_window"


@dataclass(frozen=True)
class SkippedRecord:
    """A raw record absorbed while filling the week."""
    index: int
    reason: SkipReason
    record: Any


@dataclass(frozen=True)
class AppointmentView:
    """
    Plain layout record for one appointment, free of any rendering object.
    """
    day_index: int
    position: int
    title: str
    formatted_start_time: str
    top: float
    height: float
    width_percent: float
    left_percent: float
    slot_index: int
    slot_count: int

    @property
    def label(self) -> str:
        return f"{self.formatted_start_time} - {self.title}"
