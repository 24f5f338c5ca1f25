from extensions import db
from .mixins import AuditMixin


class InstitutionalOutcome(AuditMixin, db.Model):
    __tablename__ = "institutional_outcome"
    __table_args__ = (
        db.UniqueConstraint("institution_fk", "code", name="uq_institutional_outcome_code"),
    )

    id = db.Column(db.Integer, primary_key=True)
    institution_fk = db.Column(db.Integer, db.ForeignKey("institution.id"), nullable=False)
    code = db.Column(db.String(50), nullable=False)
    description = db.Column(db.Text, nullable=False)
    sequence_num = db.Column(db.Integer, nullable=False, default=0)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    institution = db.relationship("Institution", back_populates="outcomes")
    program_outcomes = db.relationship("ProgramOutcome", back_populates="institutional_outcome")


class ProgramOutcome(AuditMixin, db.Model):
    __tablename__ = "program_outcome"
    __table_args__ = (
        db.UniqueConstraint("program_fk", "code", name="uq_program_outcome_code"),
    )

    id = db.Column(db.Integer, primary_key=True)
    program_fk = db.Column(db.Integer, db.ForeignKey("program.id"), nullable=False)
    institutional_outcome_fk = db.Column(
        db.Integer, db.ForeignKey("institutional_outcome.id"), nullable=True
    )
    code = db.Column(db.String(50), nullable=False)
    description = db.Column(db.Text, nullable=False)
    sequence_num = db.Column(db.Integer, nullable=False, default=0)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    program = db.relationship("Program", back_populates="outcomes")
    institutional_outcome = db.relationship("InstitutionalOutcome", back_populates="program_outcomes")
    student_learning_outcomes = db.relationship(
        "StudentLearningOutcome", back_populates="program_outcome"
    )


class StudentLearningOutcome(AuditMixin, db.Model):
    __tablename__ = "student_learning_outcome"
    __table_args__ = (
        db.UniqueConstraint("course_fk", "slo_code", name="uq_slo_course_code"),
    )

    id = db.Column(db.Integer, primary_key=True)
    course_fk = db.Column(db.Integer, db.ForeignKey("course.id"), nullable=False)
    program_outcome_fk = db.Column(db.Integer, db.ForeignKey("program_outcome.id"), nullable=True)
    slo_code = db.Column(db.String(50), nullable=False)
    slo_description = db.Column(db.Text, nullable=False)
    sequence_num = db.Column(db.Integer, nullable=False, default=0)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    course = db.relationship("Course", back_populates="learning_outcomes")
    program_outcome = db.relationship("ProgramOutcome", back_populates="student_learning_outcomes")
    assessments = db.relationship("Assessment", back_populates="learning_outcome")
