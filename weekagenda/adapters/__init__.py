"""
Adapters layer - Agenda files and rendering surfaces.
"""

from .agenda_file import load_agenda
from .console_renderer import ConsoleWeekRenderer

__all__ = ["load_agenda", "ConsoleWeekRenderer"]
