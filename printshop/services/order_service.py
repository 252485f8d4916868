"""
Alta y consulta de pedidos de impresión.

El alta valida, asigna un código único, guarda el archivo adjunto e inserta la
fila en un solo commit. El aviso por email sale después, sin bloquear.
"""
import html
import logging
import secrets
from dataclasses import dataclass
from typing import Callable, Mapping, Optional

from email_validator import EmailNotValidError, validate_email
from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..db import db
from ..errors import (
    CodeAllocationExhausted,
    DetailsTooShort,
    InvalidEmail,
    MissingField,
    NotFoundError,
    StorageError,
)
from ..models.order import Order
from .upload_service import StoredFile, discard_upload, save_upload

logger = logging.getLogger("printshop")

# Sin I, L, O, 0 ni 1 para que no se confundan al dictarlos
CODE_ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"
CODE_LENGTH = 6
DETAILS_MIN_LENGTH = 5
REQUIRED_FIELDS = ("name", "email", "details")


@dataclass(frozen=True)
class OrderInput:
    name: str
    email: str
    phone: Optional[str]
    details: str


def generate_code(length: int = CODE_LENGTH) -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def sanitize(value: str) -> str:
    """Escapa &, < y > para poder mostrar el texto en HTML; las comillas se conservan"""
    return html.escape(value, quote=False)


def is_valid_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def validate_order_input(form: Mapping) -> OrderInput:
    """
    Valida los campos del formulario en orden: presencia, email, largo de details.

    Raises:
        MissingField, InvalidEmail o DetailsTooShort.
    """
    # Un valor que no es texto (p. ej. un número en JSON) cuenta como faltante
    values = {}
    for key in (*REQUIRED_FIELDS, "phone"):
        value = form.get(key)
        values[key] = value.strip() if isinstance(value, str) else ""
    for key in REQUIRED_FIELDS:
        if not values[key]:
            raise MissingField(key)

    if not is_valid_email(values["email"]):
        raise InvalidEmail()
    if len(values["details"]) < DETAILS_MIN_LENGTH:
        raise DetailsTooShort()

    return OrderInput(
        name=sanitize(values["name"]),
        email=values["email"],
        phone=sanitize(values["phone"]) if values["phone"] else None,
        details=sanitize(values["details"]),
    )


def code_exists(code: str) -> bool:
    try:
        return db.session.query(Order.id).filter_by(code=code).first() is not None
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise StorageError() from exc


def insert_with_unique_code(
    data: OrderInput,
    stored_file: Optional[StoredFile] = None,
    max_attempts: int = 20,
    code_factory: Optional[Callable[[], str]] = None,
) -> Order:
    """
    Inserta el pedido con un código libre.

    Cada intento genera un código, lo busca en la tabla y, si está libre,
    intenta el INSERT. Una violación de la restricción UNIQUE (otro request
    ganó la carrera) cuenta como intento fallido y se vuelve a generar.
    """
    for attempt in range(1, max_attempts + 1):
        code = (code_factory or generate_code)()
        if code_exists(code):
            logger.debug("Order code %s taken (attempt %d)", code, attempt)
            continue

        order = Order(
            code=code,
            name=data.name,
            email=data.email,
            phone=data.phone,
            details=data.details,
            file_filename=stored_file.filename if stored_file else None,
            file_originalname=stored_file.originalname if stored_file else None,
        )
        db.session.add(order)
        try:
            db.session.commit()
        except IntegrityError as exc:
            db.session.rollback()
            # Si el código sigue libre la violación fue de otra restricción
            if not code_exists(code):
                raise StorageError("DB insert error") from exc
            logger.warning("Order code %s collided on insert (attempt %d)", code, attempt)
            continue
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StorageError("DB insert error") from exc
        return order

    raise CodeAllocationExhausted()


def submit_order(form: Mapping, file=None) -> dict:
    """
    Alta de un pedido desde el formulario público.

    Returns:
        {"code": ..., "url": "/o/<code>"}
    """
    data = validate_order_input(form)
    stored_file = save_upload(file)
    try:
        order = insert_with_unique_code(
            data, stored_file, max_attempts=current_app.config["CODE_MAX_ATTEMPTS"]
        )
    except Exception:
        if stored_file:
            discard_upload(stored_file)
        raise

    logger.info("Order %s created (file=%s)", order.code, bool(stored_file))
    current_app.extensions["notifier"].notify_order(order, order.url)
    return {"code": order.code, "url": order.url}


def get_order(code: str) -> Order:
    order = Order.query.filter_by(code=code).first()
    if order is None:
        raise NotFoundError()
    return order


def list_orders() -> list:
    return Order.query.order_by(Order.id.desc()).all()
