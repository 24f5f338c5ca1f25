from extensions import db
from .mixins import AuditMixin


class TermYear(AuditMixin, db.Model):
    __tablename__ = "term_year"

    id = db.Column(db.Integer, primary_key=True)
    term_name = db.Column(db.String(100), nullable=False, unique=True)
    start_date = db.Column(db.Date, nullable=True)
    end_date = db.Column(db.Date, nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    is_current = db.Column(db.Boolean, nullable=False, default=False)

    terms = db.relationship("Term", back_populates="term_year")
    programs = db.relationship("Program", back_populates="term_year")


class Term(AuditMixin, db.Model):
    __tablename__ = "term"

    id = db.Column(db.Integer, primary_key=True)
    term_year_fk = db.Column(db.Integer, db.ForeignKey("term_year.id"), nullable=True)
    term_code = db.Column(db.String(20), nullable=False, unique=True)
    term_name = db.Column(db.String(100), nullable=False)
    academic_year = db.Column(db.String(20), nullable=True)
    start_date = db.Column(db.Date, nullable=True)
    end_date = db.Column(db.Date, nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    term_year = db.relationship("TermYear", back_populates="terms")
    courses = db.relationship("Course", back_populates="term")
    sections = db.relationship("CourseSection", back_populates="term")
