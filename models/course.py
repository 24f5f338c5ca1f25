from extensions import db
from .mixins import AuditMixin


class Course(AuditMixin, db.Model):
    __tablename__ = "course"

    id = db.Column(db.Integer, primary_key=True)
    term_fk = db.Column(db.Integer, db.ForeignKey("term.id"), nullable=False)
    course_number = db.Column(db.String(50), nullable=False, unique=True)
    course_name = db.Column(db.String(255), nullable=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    term = db.relationship("Term", back_populates="courses")
    sections = db.relationship("CourseSection", back_populates="course")
    learning_outcomes = db.relationship("StudentLearningOutcome", back_populates="course")


class CourseSection(AuditMixin, db.Model):
    __tablename__ = "course_section"
    __table_args__ = (
        db.UniqueConstraint("term_fk", "crn", name="uq_course_section_term_crn"),
    )

    id = db.Column(db.Integer, primary_key=True)
    course_fk = db.Column(db.Integer, db.ForeignKey("course.id"), nullable=False)
    term_fk = db.Column(db.Integer, db.ForeignKey("term.id"), nullable=False)
    instructor_fk = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=True)
    crn = db.Column(db.String(20), nullable=False)
    section_number = db.Column(db.String(20), nullable=True)
    max_enrollment = db.Column(db.Integer, nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    course = db.relationship("Course", back_populates="sections")
    term = db.relationship("Term", back_populates="sections")
    instructor = db.relationship("User", back_populates="sections_taught", foreign_keys=[instructor_fk])
    enrollments = db.relationship("Enrollment", back_populates="course_section")
