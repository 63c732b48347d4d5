"""
Domain layer - Pure business logic without external dependencies.
"""

from .day_bucket import DayBucket, OverlapGroup
from .layout import SlotLayout, project_layout
from .models import Appointment, AppointmentView, SkippedRecord, SkipReason

__all__ = [
    "Appointment",
    "AppointmentView",
    "DayBucket",
    "OverlapGroup",
    "SkippedRecord",
    "SkipReason",
    "SlotLayout",
    "project_layout",
]
