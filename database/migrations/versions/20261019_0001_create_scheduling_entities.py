"""create scheduling entities

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    contract_type = sa.Enum("full_time", "half_time", "hourly", name="contract_type")
    teacher_status = sa.Enum("active", "inactive", name="teacher_status")
    classroom_type = sa.Enum("classroom", "lab", "auditorium", "seminar", name="classroom_type")

    op.create_table(
        "teachers",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("contract_type", contract_type, nullable=False),
        sa.Column("max_weekly_hours", sa.Float(), nullable=False, server_default="40"),
        sa.Column("specialties", sa.JSON(), nullable=False),
        sa.Column("status", teacher_status, nullable=False, server_default="active"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_teachers_email", "teachers", ["email"], unique=True)

    op.create_table(
        "classrooms",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False, server_default="30"),
        sa.Column("type", classroom_type, nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_classrooms_name", "classrooms", ["name"], unique=True)

    op.create_table(
        "modules",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("total_hours", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "careers",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_careers_name", "careers", ["name"], unique=True)

    op.create_table(
        "student_groups",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("semester", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("career_id", sa.String(length=36), nullable=False),
        sa.Column("student_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_student_groups_career_id", "student_groups", ["career_id"])

    op.create_table(
        "courses",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("module_id", sa.String(length=36), nullable=False),
        sa.Column("group_id", sa.String(length=36), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("duration_weeks", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("total_hours", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_courses_module_id", "courses", ["module_id"])
    op.create_index("ix_courses_group_id", "courses", ["group_id"])

    op.create_table(
        "recurring_assignments",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("course_id", sa.String(length=36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_recurring_assignments_course_id", "recurring_assignments", ["course_id"])

    weekday = sa.Enum("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", name="weekday")
    op.create_table(
        "schedule_events",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("assignment_id", sa.String(length=36), nullable=True),
        sa.Column("course_id", sa.String(length=36), nullable=False),
        sa.Column("teacher_id", sa.String(length=36), nullable=False),
        sa.Column("classroom_id", sa.String(length=36), nullable=False),
        sa.Column("day", weekday, nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        sa.Column("start_week", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("end_week", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    for column in ("assignment_id", "course_id", "teacher_id", "classroom_id"):
        op.create_index(f"ix_schedule_events_{column}", "schedule_events", [column])

    op.create_table(
        "activity_logs",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("action", sa.String(length=100), nullable=False),
        sa.Column("entity_type", sa.String(length=100), nullable=True),
        sa.Column("entity_id", sa.String(length=100), nullable=True),
        sa.Column("details", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("activity_logs")
    for column in ("classroom_id", "teacher_id", "course_id", "assignment_id"):
        op.drop_index(f"ix_schedule_events_{column}", table_name="schedule_events")
    op.drop_table("schedule_events")
    op.drop_index("ix_recurring_assignments_course_id", table_name="recurring_assignments")
    op.drop_table("recurring_assignments")
    op.drop_index("ix_courses_group_id", table_name="courses")
    op.drop_index("ix_courses_module_id", table_name="courses")
    op.drop_table("courses")
    op.drop_index("ix_student_groups_career_id", table_name="student_groups")
    op.drop_table("student_groups")
    op.drop_index("ix_careers_name", table_name="careers")
    op.drop_table("careers")
    op.drop_table("modules")
    op.drop_index("ix_classrooms_name", table_name="classrooms")
    op.drop_table("classrooms")
    op.drop_index("ix_teachers_email", table_name="teachers")
    op.drop_table("teachers")

    bind = op.get_bind()
    for name in ("weekday", "classroom_type", "teacher_status", "contract_type"):
        sa.Enum(name=name).drop(bind, checkfirst=True)
