from extensions import db
from .mixins import AuditMixin


class Program(AuditMixin, db.Model):
    __tablename__ = "program"

    id = db.Column(db.Integer, primary_key=True)
    institution_fk = db.Column(db.Integer, db.ForeignKey("institution.id"), nullable=False)
    term_year_fk = db.Column(db.Integer, db.ForeignKey("term_year.id"), nullable=True)
    program_code = db.Column(db.String(50), nullable=False, unique=True)
    program_name = db.Column(db.String(255), nullable=False)
    degree_type = db.Column(db.String(50), nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    institution = db.relationship("Institution", back_populates="programs")
    term_year = db.relationship("TermYear", back_populates="programs")
    outcomes = db.relationship("ProgramOutcome", back_populates="program")
