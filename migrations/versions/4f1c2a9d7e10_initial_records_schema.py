"""initial academic records schema

Revision ID: 4f1c2a9d7e10
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4f1c2a9d7e10'
down_revision = None
branch_labels = None
depends_on = None


def _audit_columns():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('created_by_fk', sa.Integer(), sa.ForeignKey('user.id', ondelete='SET NULL'), nullable=True),
        sa.Column('updated_by_fk', sa.Integer(), sa.ForeignKey('user.id', ondelete='SET NULL'), nullable=True),
    ]


def upgrade():
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_audit_columns(),
    )

    op.create_table(
        'institution',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('institution_code', sa.String(length=50), nullable=False, unique=True),
        sa.Column('institution_name', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_audit_columns(),
    )

    op.create_table(
        'term_year',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('term_name', sa.String(length=100), nullable=False, unique=True),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('is_current', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_audit_columns(),
    )

    op.create_table(
        'term',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('term_year_fk', sa.Integer(), sa.ForeignKey('term_year.id'), nullable=True),
        sa.Column('term_code', sa.String(length=20), nullable=False, unique=True),
        sa.Column('term_name', sa.String(length=100), nullable=False),
        sa.Column('academic_year', sa.String(length=20), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_audit_columns(),
    )

    op.create_table(
        'program',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('institution_fk', sa.Integer(), sa.ForeignKey('institution.id'), nullable=False),
        sa.Column('term_year_fk', sa.Integer(), sa.ForeignKey('term_year.id'), nullable=True),
        sa.Column('program_code', sa.String(length=50), nullable=False, unique=True),
        sa.Column('program_name', sa.String(length=255), nullable=False),
        sa.Column('degree_type', sa.String(length=50), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_audit_columns(),
    )

    op.create_table(
        'institutional_outcome',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('institution_fk', sa.Integer(), sa.ForeignKey('institution.id'), nullable=False),
        sa.Column('code', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('sequence_num', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_audit_columns(),
        sa.UniqueConstraint('institution_fk', 'code', name='uq_institutional_outcome_code'),
    )

    op.create_table(
        'program_outcome',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('program_fk', sa.Integer(), sa.ForeignKey('program.id'), nullable=False),
        sa.Column('institutional_outcome_fk', sa.Integer(), sa.ForeignKey('institutional_outcome.id'), nullable=True),
        sa.Column('code', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('sequence_num', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_audit_columns(),
        sa.UniqueConstraint('program_fk', 'code', name='uq_program_outcome_code'),
    )

    op.create_table(
        'course',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('term_fk', sa.Integer(), sa.ForeignKey('term.id'), nullable=False),
        sa.Column('course_number', sa.String(length=50), nullable=False, unique=True),
        sa.Column('course_name', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_audit_columns(),
    )

    op.create_table(
        'student_learning_outcome',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('course_fk', sa.Integer(), sa.ForeignKey('course.id'), nullable=False),
        sa.Column('program_outcome_fk', sa.Integer(), sa.ForeignKey('program_outcome.id'), nullable=True),
        sa.Column('slo_code', sa.String(length=50), nullable=False),
        sa.Column('slo_description', sa.Text(), nullable=False),
        sa.Column('sequence_num', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_audit_columns(),
        sa.UniqueConstraint('course_fk', 'slo_code', name='uq_slo_course_code'),
    )

    op.create_table(
        'course_section',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('course_fk', sa.Integer(), sa.ForeignKey('course.id'), nullable=False),
        sa.Column('term_fk', sa.Integer(), sa.ForeignKey('term.id'), nullable=False),
        sa.Column('instructor_fk', sa.Integer(), sa.ForeignKey('user.id'), nullable=True),
        sa.Column('crn', sa.String(length=20), nullable=False),
        sa.Column('section_number', sa.String(length=20), nullable=True),
        sa.Column('max_enrollment', sa.Integer(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_audit_columns(),
        sa.UniqueConstraint('term_fk', 'crn', name='uq_course_section_term_crn'),
    )

    op.create_table(
        'student',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('student_id', sa.String(length=50), nullable=False, unique=True),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_audit_columns(),
    )

    op.create_table(
        'enrollment',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('student_fk', sa.Integer(), sa.ForeignKey('student.id'), nullable=False),
        sa.Column('course_section_fk', sa.Integer(), sa.ForeignKey('course_section.id'), nullable=False),
        sa.Column('enrollment_status', sa.String(length=20), nullable=False, server_default='enrolled'),
        sa.Column('enrollment_date', sa.Date(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_audit_columns(),
        sa.UniqueConstraint('student_fk', 'course_section_fk', name='uq_enrollment_student_section'),
    )

    op.create_table(
        'assessment',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('enrollment_fk', sa.Integer(), sa.ForeignKey('enrollment.id'), nullable=False),
        sa.Column('student_learning_outcome_fk', sa.Integer(), sa.ForeignKey('student_learning_outcome.id'), nullable=False),
        sa.Column('score_value', sa.Numeric(precision=6, scale=2), nullable=False),
        sa.Column('achievement_level', sa.String(length=20), nullable=True),
        sa.Column('assessment_method', sa.String(length=100), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('assessed_date', sa.Date(), nullable=True),
        sa.Column('is_finalized', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_audit_columns(),
        sa.UniqueConstraint('enrollment_fk', 'student_learning_outcome_fk', name='uq_assessment_enrollment_slo'),
    )


def downgrade():
    op.drop_table('assessment')
    op.drop_table('enrollment')
    op.drop_table('student')
    op.drop_table('course_section')
    op.drop_table('student_learning_outcome')
    op.drop_table('course')
    op.drop_table('program_outcome')
    op.drop_table('institutional_outcome')
    op.drop_table('program')
    op.drop_table('term')
    op.drop_table('term_year')
    op.drop_table('institution')
    op.drop_table('user')
