"""
Week orchestration: builds the 7-day window, files raw agenda records into
their day and drives grouping and layout.

The rendering surface is injected through a small protocol so the same
orchestration can feed a terminal table, an HTML writer or a test stub.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, List, Protocol, Sequence

import pendulum
from pendulum import DateTime

from ..domain.day_bucket import DayBucket
from ..domain.exceptions import InvalidParameters
from ..domain.layout import project_layout
from ..domain.models import Appointment, AppointmentView, SkippedRecord, SkipReason

logger = logging.getLogger(__name__)

DAYS_IN_WEEK = 7
DEFAULT_HEADER_FORMAT = "ddd MMM DD YYYY"


class RenderSurfaceProtocol(Protocol):
    """Protocol describing the rendering collaborator fed by the agenda."""

    def build(self, target: str, headers: List[str]) -> None:
        """Create the empty week structure for the given day headers."""

    def add_appointment(self, view: AppointmentView) -> None:
        """Place one appointment in its day column."""


def validate_parameters(target: Any, start_date: Any, agenda: Any) -> List[str]:
    """
    Check the construction arguments of a WeekAgenda.

    Returns:
        List of problem descriptions, empty when everything is usable
    """
    problems: List[str] = []

    if not isinstance(target, str) or not target.strip():
        problems.append(f"target must be a non-empty string, got {target!r}")

    if not isinstance(start_date, date):
        problems.append(f"start_date must be a date, got {type(start_date).__name__}")

    if not isinstance(agenda, (list, tuple)):
        problems.append(f"agenda must be a list of records, got {type(agenda).__name__}")

    return problems


def to_midnight(value: date) -> DateTime:
    """Truncate a date or datetime to midnight of its calendar day."""
    if isinstance(value, datetime):
        return pendulum.instance(value).start_of("day")
    return pendulum.datetime(value.year, value.month, value.day)


class WeekAgenda:
    """
    A week of appointments laid out side by side.

    Args:
        target: Opaque handle passed through to the rendering surface
        start_date: First day of the week window
        agenda: Raw records shaped ``{start_date, end_date, title}``

    Raises:
        InvalidParameters: If any argument is unusable
    """

    def __init__(self, target: str, start_date: date, agenda: Sequence[Mapping[str, Any]]):
        problems = validate_parameters(target, start_date, agenda)
        if problems:
            raise InvalidParameters(problems)

        self.target = target
        self.start_day = to_midnight(start_date)
        self.days: List[DayBucket] = [
            DayBucket(self.start_day.add(days=i)) for i in range(DAYS_IN_WEEK)
        ]
        self._buckets = {bucket.key: bucket for bucket in self.days}
        self.skipped: List[SkippedRecord] = []

        self.fill_agenda(agenda)

    @property
    def end_day(self) -> DateTime:
        return self.days[-1].day

    def bucket_for(self, day: date) -> DayBucket | None:
        """Return the bucket of a calendar day, or None outside the window."""
        if isinstance(day, datetime):
            day = day.date()
        return self._buckets.get(day)

    def fill_agenda(self, agenda: Sequence[Mapping[str, Any]]) -> int:
        """
        Create appointments from raw records and file them into their day.

        Invalid records and records outside the week are skipped and
        remembered in ``skipped``; they never interrupt the batch.

        Returns:
            Number of appointments added
        """
        added = 0

        for index, record in enumerate(agenda):
            if isinstance(record, Mapping):
                appointment = Appointment(
                    record.get("start_date"),
                    record.get("end_date"),
                    record.get("title")
                )
            else:
                appointment = Appointment(None, None)

            if not appointment.is_valid:
                logger.warning("Skipping agenda record %d: invalid start or end date", index)
                self.skipped.append(SkippedRecord(index, SkipReason.INVALID_APPOINTMENT, record))
                continue

            bucket = self.bucket_for(appointment.reference_day)
            if bucket is None:
                logger.debug(
                    "Dropping agenda record %d (%s): outside %s - %s",
                    index,
                    appointment,
                    self.start_day.to_date_string(),
                    self.end_day.to_date_string()
                )
                self.skipped.append(SkippedRecord(index, SkipReason.OUT_OF_WINDOW, record))
                continue

            bucket.add(appointment)
            added += 1

        return added

    def day_headers(self, fmt: str = DEFAULT_HEADER_FORMAT, locale: str = "en") -> List[str]:
        """Return one header label per day, e.g. ``Mon Jan 01 2024``."""
        return [bucket.day.format(fmt, locale=locale) for bucket in self.days]

    def layout(self, row_height: float) -> List[AppointmentView]:
        """
        Group every day and project each appointment into a plain view.

        Args:
            row_height: Rendered height of one full day column

        Returns:
            Views ordered by day, then by start time
        """
        views: List[AppointmentView] = []

        for day_index, bucket in enumerate(self.days):
            bucket.group()

            for position, appointment in enumerate(bucket.appointments):
                slot = project_layout(
                    start_offset_hours=appointment.start_offset_hours,
                    duration_hours=appointment.duration_hours,
                    slot_index=appointment.slot_index,
                    slot_count=appointment.slot_count,
                    row_height=row_height
                )
                views.append(AppointmentView(
                    day_index=day_index,
                    position=position,
                    title=appointment.title,
                    formatted_start_time=appointment.formatted_start_time(),
                    top=slot.top,
                    height=slot.height,
                    width_percent=slot.width_percent,
                    left_percent=slot.left_percent,
                    slot_index=appointment.slot_index,
                    slot_count=appointment.slot_count
                ))

        return views

    def render(
        self,
        surface: RenderSurfaceProtocol,
        row_height: float,
        *,
        header_format: str = DEFAULT_HEADER_FORMAT,
        locale: str = "en"
    ) -> List[AppointmentView]:
        """Build the week on the surface and hand it every appointment view."""
        surface.build(self.target, self.day_headers(header_format, locale))

        views = self.layout(row_height)
        for view in views:
            surface.add_appointment(view)

        return views
