from datetime import datetime, timezone

from ..db import db


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat_utc(value: datetime) -> str:
    """ISO-8601 en UTC con milisegundos y sufijo Z (2024-05-01T12:00:00.000Z)"""
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


class Order(db.Model):
    """Pedido de impresión; se crea una vez y después solo se lee"""
    __tablename__ = "orders"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    code = db.Column(db.String(6), unique=True, nullable=False, index=True)
    name = db.Column(db.Text, nullable=False)
    email = db.Column(db.Text, nullable=False)
    phone = db.Column(db.Text, nullable=True)
    details = db.Column(db.Text, nullable=False)
    file_filename = db.Column(db.Text, nullable=True)
    file_originalname = db.Column(db.Text, nullable=True)
    created_at = db.Column("createdAt", db.DateTime, nullable=False, default=utcnow)

    CSV_COLUMNS = (
        "id", "code", "name", "email", "phone", "details",
        "file_filename", "file_originalname", "createdAt",
    )

    @property
    def created_at_iso(self):
        return isoformat_utc(self.created_at) if self.created_at else None

    @property
    def url(self) -> str:
        return f"/o/{self.code}"

    def to_row(self) -> dict:
        """Fila plana tal como está guardada (listado y CSV)"""
        return {
            "id": self.id,
            "code": self.code,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "details": self.details,
            "file_filename": self.file_filename,
            "file_originalname": self.file_originalname,
            "createdAt": self.created_at_iso,
        }

    def to_dict(self) -> dict:
        file = None
        if self.file_filename:
            file = {"filename": self.file_filename, "originalname": self.file_originalname}
        return {
            "id": self.id,
            "code": self.code,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "details": self.details,
            "file": file,
            "createdAt": self.created_at_iso,
        }
