from extensions import db
from .mixins import AuditMixin


ACHIEVEMENT_LEVELS = ("exceeds", "met", "partially_met", "not_met")


class Assessment(AuditMixin, db.Model):
    __tablename__ = "assessment"
    __table_args__ = (
        db.UniqueConstraint(
            "enrollment_fk", "student_learning_outcome_fk", name="uq_assessment_enrollment_slo"
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    enrollment_fk = db.Column(db.Integer, db.ForeignKey("enrollment.id"), nullable=False)
    student_learning_outcome_fk = db.Column(
        db.Integer, db.ForeignKey("student_learning_outcome.id"), nullable=False
    )
    score_value = db.Column(db.Numeric(6, 2), nullable=False)
    achievement_level = db.Column(db.String(20), nullable=True)
    assessment_method = db.Column(db.String(100), nullable=True)
    notes = db.Column(db.Text, nullable=True)
    assessed_date = db.Column(db.Date, nullable=True)
    is_finalized = db.Column(db.Boolean, nullable=False, default=False)

    enrollment = db.relationship("Enrollment", back_populates="assessments")
    learning_outcome = db.relationship("StudentLearningOutcome", back_populates="assessments")
