"""
Terminal rendering surface built on rich.
"""

from typing import Dict, List

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..domain.models import AppointmentView


class ConsoleWeekRenderer:
    """
    Collects appointment views per day and prints them as a week table.

    Each cell lists the day's appointments in start order; appointments that
    share an overlap group are annotated with their lane, e.g. ``[2/3]``.
    """

    def __init__(self, console: Console | None = None):
        self.console = console or Console()
        self.target = ""
        self.headers: List[str] = []
        self.columns: Dict[int, List[AppointmentView]] = {}

    def build(self, target: str, headers: List[str]) -> None:
        self.target = target
        self.headers = list(headers)
        self.columns = {index: [] for index in range(len(self.headers))}

    def add_appointment(self, view: AppointmentView) -> None:
        if view.day_index not in self.columns:
            raise ValueError(f"No day column {view.day_index} in week '{self.target}'")
        self.columns[view.day_index].append(view)

    def _format_cell(self, views: List[AppointmentView]) -> str:
        lines = []
        for view in views:
            line = view.label
            if view.slot_count > 1:
                line += f" [{view.slot_index + 1}/{view.slot_count}]"
            lines.append(escape(line))
        return "\n".join(lines)

    def build_table(self) -> Table:
        table = Table(
            title=self.target,
            show_header=True,
            header_style="bold cyan",
            show_lines=True
        )
        for header in self.headers:
            table.add_column(header, style="yellow")

        table.add_row(*(self._format_cell(self.columns[i]) for i in range(len(self.headers))))
        return table

    def render(self) -> None:
        """Print the collected week."""
        self.console.print()
        self.console.print(self.build_table())
        self.console.print()
