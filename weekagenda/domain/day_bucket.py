"""
Per-day appointment collection and the overlap grouping algorithm.

This is pure domain logic: it only decides which appointments share a row of
the day column and in which lane each of them sits.
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Tuple

from pendulum import DateTime

from .models import Appointment


@dataclass(frozen=True)
class OverlapGroup:
    """
    A cluster of appointments judged to overlap in time.

    ``members`` holds indices into the owning bucket's sorted appointment
    list, in the order the appointments joined the group.
    """
    index: int
    min: float
    max: float
    members: Tuple[int, ...]

    @property
    def size(self) -> int:
        return len(self.members)


class DayBucket:
    """
    Appointments filed under one calendar day.

    Algorithm of ``group()``:
    1. Sort appointments by ascending start offset (stable)
    2. Place each appointment in the first group, in creation order, whose
       [min, max] range contains its start; extend that group's max
    3. Open a new group when no existing group contains the start
    4. Give every member its position in the group and the group size
    """

    def __init__(self, day: DateTime):
        self.day = day.start_of("day")
        self.appointments: List[Appointment] = []
        self.groups: Tuple[OverlapGroup, ...] = ()

    @property
    def key(self) -> date:
        return self.day.date()

    def __len__(self) -> int:
        return len(self.appointments)

    def add(self, appointment: Appointment) -> None:
        """
        Append an appointment to the bucket.

        Raises:
            ValueError: If the appointment is invalid or belongs to another day
        """
        if not appointment.is_valid:
            raise ValueError(f"Cannot file invalid appointment {appointment.title!r}")
        if appointment.reference_day.date() != self.key:
            raise ValueError(
                f"Appointment on {appointment.reference_day.to_date_string()} "
                f"does not belong to {self.day.to_date_string()}"
            )
        self.appointments.append(appointment)

    def sort(self) -> List[Appointment]:
        """Sort appointments by ascending start offset, keeping ties in order."""
        self.appointments.sort(key=lambda a: a.start_offset_hours)
        return self.appointments

    def group(self) -> Tuple[OverlapGroup, ...]:
        """
        Partition the day into overlap groups and assign slots.

        First fit by scan order, not an optimal interval coloring: a group's
        max may grow and pull in later appointments, and groups are never
        merged afterwards.

        Returns:
            Tuple of OverlapGroup in creation order
        """
        appointments = self.sort()

        bounds: List[List[float]] = []
        members: List[List[int]] = []

        for position, appointment in enumerate(appointments):
            start = appointment.start_offset_hours
            end = appointment.end_offset_hours

            for group_index, (group_min, group_max) in enumerate(bounds):
                if group_min <= start <= group_max:
                    members[group_index].append(position)
                    if end > group_max:
                        bounds[group_index][1] = end
                    break
            else:
                bounds.append([start, end])
                members.append([position])

        groups = tuple(
            OverlapGroup(index=i, min=b[0], max=b[1], members=tuple(m))
            for i, (b, m) in enumerate(zip(bounds, members))
        )

        for group in groups:
            for slot_index, position in enumerate(group.members):
                appointment = appointments[position]
                appointment.slot_index = slot_index
                appointment.slot_count = group.size
                appointment.group_index = group.index

        self.groups = groups
        return groups

    def group_of(self, appointment: Appointment) -> OverlapGroup | None:
        """Return the group an appointment was placed in, if grouped."""
        if appointment.group_index is None or appointment.group_index >= len(self.groups):
            return None
        return self.groups[appointment.group_index]
