from infra.db.cost_calendar.mapper import (
    calendar_from_orm,
    holiday_from_orm,
    holiday_to_orm,
    time_entry_to_orm,
)
from infra.db.cost_calendar.repository import (
    SqlAlchemyCostRepository,
    SqlAlchemyWorkingCalendarRepository,
)

__all__ = [
    "time_entry_to_orm",
    "calendar_from_orm",
    "holiday_from_orm",
    "holiday_to_orm",
    "SqlAlchemyCostRepository",
    "SqlAlchemyWorkingCalendarRepository",
]
