from extensions import db
from .mixins import AuditMixin


class Institution(AuditMixin, db.Model):
    __tablename__ = "institution"

    id = db.Column(db.Integer, primary_key=True)
    institution_code = db.Column(db.String(50), nullable=False, unique=True)
    institution_name = db.Column(db.String(255), nullable=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    outcomes = db.relationship("InstitutionalOutcome", back_populates="institution")
    programs = db.relationship("Program", back_populates="institution")
