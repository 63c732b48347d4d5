"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .week_agenda import RenderSurfaceProtocol, WeekAgenda, validate_parameters

__all__ = ["RenderSurfaceProtocol", "WeekAgenda", "validate_parameters"]
