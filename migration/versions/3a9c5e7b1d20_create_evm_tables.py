"""create evm tables

Revision ID: 3a9c5e7b1d20
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3a9c5e7b1d20"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "projects",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("parent_id", sa.String(), sa.ForeignKey("projects.id", ondelete="CASCADE"), nullable=True),
    )
    op.create_index("idx_projects_parent", "projects", ["parent_id"])

    op.create_table(
        "versions",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("project_id", sa.String(), sa.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("effective_date", sa.Date(), nullable=True),
    )

    op.create_table(
        "issues",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("project_id", sa.String(), sa.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False),
        sa.Column("subject", sa.String(), nullable=False),
        sa.Column("tracker_id", sa.String(), nullable=True),
        sa.Column("fixed_version_id", sa.String(), sa.ForeignKey("versions.id", ondelete="SET NULL"), nullable=True),
        sa.Column("assigned_to_id", sa.String(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("estimated_hours", sa.Float(), nullable=True),
        sa.Column("done_ratio", sa.Integer(), nullable=True),
        sa.Column("closed_on", sa.DateTime(), nullable=True),
    )
    op.create_index("idx_issues_project_id", "issues", ["project_id"])
    op.create_index("idx_issues_version", "issues", ["fixed_version_id"])
    op.create_index("idx_issues_tracker", "issues", ["tracker_id"])
    op.create_index("idx_issues_assignee", "issues", ["assigned_to_id"])

    op.create_table(
        "time_entries",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("issue_id", sa.String(), sa.ForeignKey("issues.id", ondelete="CASCADE"), nullable=False),
        sa.Column("spent_on", sa.Date(), nullable=False),
        sa.Column("hours", sa.Float(), nullable=False),
    )
    op.create_index("idx_time_entries_issue", "time_entries", ["issue_id"])
    op.create_index("idx_time_entries_spent_on", "time_entries", ["spent_on"])

    op.create_table(
        "working_calendars",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("working_days", sa.String(), nullable=False),
    )

    op.create_table(
        "holidays",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "calendar_id",
            sa.String(),
            sa.ForeignKey("working_calendars.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("name", sa.String(), nullable=True),
    )
    op.create_index("idx_holiday_calendar_date", "holidays", ["calendar_id", "date"])

    op.create_table(
        "evm_baselines",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("project_id", sa.String(), sa.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False),
        sa.Column("subject", sa.String(), nullable=False),
        sa.Column("created_on", sa.DateTime(), nullable=False),
    )
    op.create_index("idx_baseline_project", "evm_baselines", ["project_id"])
    op.create_index("idx_baseline_created", "evm_baselines", ["created_on"])

    op.create_table(
        "evm_baseline_issues",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "baseline_id",
            sa.String(),
            sa.ForeignKey("evm_baselines.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("issue_id", sa.String(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("estimated_hours", sa.Float(), nullable=False),
    )
    op.create_index("idx_baseline_issue_baseline", "evm_baseline_issues", ["baseline_id"])


def downgrade() -> None:
    op.drop_table("evm_baseline_issues")
    op.drop_table("evm_baselines")
    op.drop_table("holidays")
    op.drop_table("working_calendars")
    op.drop_table("time_entries")
    op.drop_table("issues")
    op.drop_table("versions")
    op.drop_table("projects")
