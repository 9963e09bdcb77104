from datetime import date

from core.domain import Holiday, WorkingCalendar
from core.services.work_calendar import WorkCalendarEngine


def test_default_calendar_is_monday_to_friday():
    engine = WorkCalendarEngine()

    assert engine.is_working_day(date(2024, 1, 5))  # Friday
    assert not engine.is_working_day(date(2024, 1, 6))  # Saturday
    assert not engine.is_working_day(date(2024, 1, 7))
    assert len(list(engine.working_dates(date(2024, 1, 1), date(2024, 1, 14)))) == 10
    assert list(engine.working_dates(date(2024, 1, 14), date(2024, 1, 1))) == []


def test_holidays_are_skipped():
    engine = WorkCalendarEngine(holidays=[date(2024, 1, 1)])
    assert list(engine.working_dates(date(2024, 1, 1), date(2024, 1, 3))) == [
        date(2024, 1, 2),
        date(2024, 1, 3),
    ]


def test_calendar_loaded_from_repository(services):
    session = services["session"]
    repo = services["work_calendar_repo"]
    repo.upsert(WorkingCalendar(id="shift", name="Shift", working_days={5, 6}))
    repo.add_holiday(Holiday.create("shift", date(2024, 1, 6), "Closed"))
    session.commit()

    engine = WorkCalendarEngine.from_repository(repo, "shift")
    assert list(engine.working_dates(date(2024, 1, 1), date(2024, 1, 14))) == [
        date(2024, 1, 7),
        date(2024, 1, 13),
        date(2024, 1, 14),
    ]

    # renaming keeps the stored days
    repo.upsert(WorkingCalendar(id="shift", name="Weekend crew", working_days={5, 6}))
    session.commit()
    assert repo.get("shift").name == "Weekend crew"
    assert repo.get("shift").working_days == {5, 6}


def test_unknown_calendar_falls_back_to_default(services):
    engine = WorkCalendarEngine.from_repository(services["work_calendar_repo"], "missing")
    assert len(list(engine.working_dates(date(2024, 1, 1), date(2024, 1, 7)))) == 5
