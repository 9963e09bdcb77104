from .engine import WorkCalendarEngine

__all__ = ["WorkCalendarEngine"]
