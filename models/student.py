from extensions import db
from .mixins import AuditMixin


ENROLLMENT_STATUSES = ("enrolled", "completed", "dropped", "withdrawn")


class Student(AuditMixin, db.Model):
    __tablename__ = "student"

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.String(50), nullable=False, unique=True)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    enrollments = db.relationship(
        "Enrollment", back_populates="student", cascade="all, delete-orphan"
    )


class Enrollment(AuditMixin, db.Model):
    __tablename__ = "enrollment"
    __table_args__ = (
        db.UniqueConstraint("student_fk", "course_section_fk", name="uq_enrollment_student_section"),
    )

    id = db.Column(db.Integer, primary_key=True)
    student_fk = db.Column(db.Integer, db.ForeignKey("student.id"), nullable=False)
    course_section_fk = db.Column(db.Integer, db.ForeignKey("course_section.id"), nullable=False)
    enrollment_status = db.Column(db.String(20), nullable=False, default="enrolled")
    enrollment_date = db.Column(db.Date, nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    student = db.relationship("Student", back_populates="enrollments")
    course_section = db.relationship("CourseSection", back_populates="enrollments")
    assessments = db.relationship("Assessment", back_populates="enrollment")
