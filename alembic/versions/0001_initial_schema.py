"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade():
    op.create_table(
        "students",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("gender", sa.String(20), nullable=False),
        sa.Column("date_of_birth", sa.Date()),
        sa.Column("place_of_birth", sa.String(255)),
        sa.Column("nationality", sa.String(100)),
        sa.Column("religion", sa.String(100)),
        sa.Column("hometown", sa.String(255)),
        sa.Column("home_address", sa.Text(), nullable=False),
        sa.Column("gps_address", sa.String(50)),
        sa.Column("admission_number", sa.String(100), nullable=False),
        sa.Column("admission_date", sa.Date(), nullable=False),
        sa.Column("academic_year", sa.String(9), nullable=False),
        sa.Column("class_name", sa.String(100), nullable=False),
        sa.Column("term", sa.String(20), nullable=False),
        sa.Column("previous_school", sa.String(255)),
        sa.Column("reason_for_transfer", sa.Text()),
        sa.Column("guardian_name", sa.String(255), nullable=False),
        sa.Column("guardian_relationship", sa.String(50), nullable=False),
        sa.Column("guardian_phone", sa.String(50), nullable=False),
        sa.Column("guardian_email", sa.String(255)),
        sa.Column("guardian_occupation", sa.String(100)),
        sa.Column("guardian_address", sa.Text()),
        sa.Column("secondary_guardian_name", sa.String(255)),
        sa.Column("secondary_guardian_relationship", sa.String(50)),
        sa.Column("secondary_guardian_phone", sa.String(50)),
        sa.Column("secondary_guardian_occupation", sa.String(100)),
        sa.Column("emergency_contact_name", sa.String(255)),
        sa.Column("emergency_contact_relationship", sa.String(50)),
        sa.Column("emergency_contact_phone", sa.String(50)),
        sa.Column("emergency_contact_alt_phone", sa.String(50)),
        sa.Column("blood_group", sa.String(10)),
        sa.Column("medical_conditions", sa.Text()),
        sa.Column("allergies", sa.Text()),
        sa.Column("doctor_contact", sa.String(255)),
        sa.Column("languages_spoken", sa.String(255)),
        sa.Column("preferred_communication", sa.String(50)),
        sa.Column("remarks", sa.Text()),
        *timestamps(),
    )
    op.create_index("ix_students_id", "students", ["id"])
    op.create_index("ix_students_admission_number", "students", ["admission_number"], unique=True)

    op.create_table(
        "teachers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("staff_number", sa.String(50), nullable=False, unique=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255)),
        sa.Column("phone", sa.String(50), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("qualification", sa.String(100)),
        sa.Column("experience", sa.Integer()),
        sa.Column("specialization", sa.String(100)),
        sa.Column("employment_date", sa.Date()),
        sa.Column("employment_type", sa.String(50)),
        *timestamps(),
    )
    op.create_index("ix_teachers_id", "teachers", ["id"])

    op.create_table(
        "subjects",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("code", sa.String(20), nullable=False, unique=True),
        sa.Column("description", sa.Text()),
        *timestamps(),
    )
    op.create_index("ix_subjects_id", "subjects", ["id"])

    op.create_table(
        "classes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("level", sa.String(50), nullable=False),
        sa.Column("academic_year", sa.String(9), nullable=False),
        sa.Column("capacity", sa.Integer()),
        *timestamps(),
    )
    op.create_index("ix_classes_id", "classes", ["id"])

    op.create_table(
        "class_students",
        sa.Column("class_id", sa.Integer(), sa.ForeignKey("classes.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("student_id", sa.Integer(), sa.ForeignKey("students.id", ondelete="CASCADE"), primary_key=True),
    )
    op.create_table(
        "teacher_subjects",
        sa.Column("teacher_id", sa.Integer(), sa.ForeignKey("teachers.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("subject_id", sa.Integer(), sa.ForeignKey("subjects.id", ondelete="CASCADE"), primary_key=True),
    )
    op.create_table(
        "teacher_classes",
        sa.Column("teacher_id", sa.Integer(), sa.ForeignKey("teachers.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("class_id", sa.Integer(), sa.ForeignKey("classes.id", ondelete="CASCADE"), primary_key=True),
    )


def downgrade():
    op.drop_table("teacher_classes")
    op.drop_table("teacher_subjects")
    op.drop_table("class_students")
    op.drop_index("ix_classes_id", table_name="classes")
    op.drop_table("classes")
    op.drop_index("ix_subjects_id", table_name="subjects")
    op.drop_table("subjects")
    op.drop_index("ix_teachers_id", table_name="teachers")
    op.drop_table("teachers")
    op.drop_index("ix_students_admission_number", table_name="students")
    op.drop_index("ix_students_id", table_name="students")
    op.drop_table("students")
