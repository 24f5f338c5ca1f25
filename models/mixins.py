from datetime import datetime

from sqlalchemy.orm import declared_attr

from extensions import db


class AuditMixin:
    """
    Columnas de auditoría compartidas por todas las entidades administrables.
    Los timestamps y el usuario los asigna el servidor en cada mutación.
    """

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @declared_attr
    def created_by_fk(cls):
        return db.Column(db.Integer, db.ForeignKey("user.id", ondelete="SET NULL"), nullable=True)

    @declared_attr
    def updated_by_fk(cls):
        return db.Column(db.Integer, db.ForeignKey("user.id", ondelete="SET NULL"), nullable=True)

    def stamp(self, user_id: int | None, *, created: bool = False) -> None:
        now = datetime.utcnow()
        if created:
            self.created_at = now
            self.created_by_fk = user_id
        self.updated_at = now
        self.updated_by_fk = user_id
