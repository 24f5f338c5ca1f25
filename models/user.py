from werkzeug.security import generate_password_hash, check_password_hash
from flask_login import UserMixin

from extensions import db
from .mixins import AuditMixin


class User(UserMixin, AuditMixin, db.Model):
    __tablename__ = "user"

    id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=True)
    # Reemplaza UserMixin.is_active: Flask-Login rechaza el login de usuarios inactivos
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    sections_taught = db.relationship(
        "CourseSection",
        back_populates="instructor",
        foreign_keys="CourseSection.instructor_fk",
    )

    def set_password(self, password: str):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)
