from .evm import EvmService
from .work_calendar import WorkCalendarEngine

__all__ = ["EvmService", "WorkCalendarEngine"]
