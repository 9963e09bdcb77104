# infra/db/models.py
from __future__ import annotations
from datetime import date, datetime
from typing import Optional

from sqlalchemy import (
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from infra.db.base import Base


class ProjectORM(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    parent_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("projects.id", ondelete="CASCADE"), nullable=True
    )

Index("idx_projects_parent", ProjectORM.parent_id)


class VersionORM(Base):
    __tablename__ = "versions"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(String, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    effective_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)


class IssueORM(Base):
    __tablename__ = "issues"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    subject: Mapped[str] = mapped_column(String, nullable=False)
    tracker_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    fixed_version_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("versions.id", ondelete="SET NULL"), nullable=True
    )
    assigned_to_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    due_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    estimated_hours: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    done_ratio: Mapped[int] = mapped_column(Integer, default=0)
    closed_on: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    fixed_version: Mapped[Optional[VersionORM]] = relationship(VersionORM, lazy="joined")

Index("idx_issues_project_id", IssueORM.project_id)
Index("idx_issues_version", IssueORM.fixed_version_id)
Index("idx_issues_tracker", IssueORM.tracker_id)
Index("idx_issues_assignee", IssueORM.assigned_to_id)


class TimeEntryORM(Base):
    __tablename__ = "time_entries"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    issue_id: Mapped[str] = mapped_column(String, ForeignKey("issues.id", ondelete="CASCADE"), nullable=False)
    spent_on: Mapped[date] = mapped_column(Date, nullable=False)
    hours: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

Index("idx_time_entries_issue", TimeEntryORM.issue_id)
Index("idx_time_entries_spent_on", TimeEntryORM.spent_on)


class WorkingCalendarORM(Base):
    __tablename__ = "working_calendars"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    # store working days as a comma-separated string, e.g. "0,1,2,3,4"
    working_days: Mapped[str] = mapped_column(String, nullable=False, default="0,1,2,3,4")


class HolidayORM(Base):
    __tablename__ = "holidays"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    calendar_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("working_calendars.id", ondelete="CASCADE"),
        nullable=False,
    )
    holiday_date: Mapped[date] = mapped_column("date", Date, nullable=False)
    name: Mapped[str] = mapped_column(String, default="")

Index("idx_holiday_calendar_date", HolidayORM.calendar_id, HolidayORM.holiday_date)


class EvmBaselineORM(Base):
    __tablename__ = "evm_baselines"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(String, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    subject: Mapped[str] = mapped_column(String, nullable=False)
    created_on: Mapped[datetime] = mapped_column(DateTime, nullable=False)

Index("idx_baseline_project", EvmBaselineORM.project_id)
Index("idx_baseline_created", EvmBaselineORM.created_on)


class BaselineIssueORM(Base):
    __tablename__ = "evm_baseline_issues"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    baseline_id: Mapped[str] = mapped_column(String, ForeignKey("evm_baselines.id", ondelete="CASCADE"), nullable=False)
    issue_id: Mapped[str] = mapped_column(String, nullable=False)

    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    due_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    estimated_hours: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

Index("idx_baseline_issue_baseline", BaselineIssueORM.baseline_id)
