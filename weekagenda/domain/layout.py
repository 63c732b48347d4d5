"""
Position arithmetic for appointments inside a day column.

Vertical values are in the unit of ``row_height`` (the rendered height of a
full 24 hour day); horizontal values are percentages of the column width.
Every slot reserves a 2% gutter.
"""

from dataclasses import dataclass

HOURS_PER_DAY = 24
GUTTER_PERCENT = 2


@dataclass(frozen=True)
class SlotLayout:
    """Projected position of one appointment."""
    top: float
    height: float
    width_percent: float
    left_percent: float


def project_layout(
    start_offset_hours: float,
    duration_hours: float,
    slot_index: int,
    slot_count: int,
    row_height: float
) -> SlotLayout:
    """
    Project an appointment's time and slot into position fractions.

    Args:
        start_offset_hours: Decimal hours since midnight
        duration_hours: Length of the appointment in hours
        slot_index: 0-based lane within the overlap group
        slot_count: Number of lanes in the overlap group
        row_height: Height representing 24 hours

    Returns:
        SlotLayout with top/height in row_height units and width/left in percent

    Raises:
        ValueError: If the slot values are inconsistent
    """
    if slot_count < 1:
        raise ValueError(f"slot_count must be at least 1, got {slot_count}")
    if not 0 <= slot_index < slot_count:
        raise ValueError(f"slot_index {slot_index} outside [0, {slot_count})")

    width = (100 - slot_count * GUTTER_PERCENT) / slot_count
    left = width * slot_index + slot_index * GUTTER_PERCENT + 1

    return SlotLayout(
        top=start_offset_hours * row_height / HOURS_PER_DAY,
        height=duration_hours * row_height / HOURS_PER_DAY,
        width_percent=width,
        left_percent=left
    )
