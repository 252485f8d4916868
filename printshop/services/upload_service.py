"""
Guardado de archivos adjuntos a los pedidos (PDF e imágenes)
"""
import logging
import os
import re
from dataclasses import dataclass
from secrets import token_hex
from typing import Optional

from flask import current_app
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ..errors import UploadTooLarge

logger = logging.getLogger("printshop")

# Se compara contra la extensión y contra el mimetype (image/svg+xml, application/pdf...)
ALLOWED_TYPES = re.compile(r"pdf|jpeg|jpg|png|gif|svg|tif|tiff")


@dataclass(frozen=True)
class StoredFile:
    filename: str
    originalname: str


def upload_dir() -> str:
    return current_app.config["UPLOAD_DIR"]


def is_allowed(file: FileStorage) -> bool:
    _, ext = os.path.splitext((file.filename or "").lower())
    return bool(ALLOWED_TYPES.search(ext) or ALLOWED_TYPES.search(file.mimetype or ""))


def _stream_size(file: FileStorage) -> int:
    stream = file.stream
    pos = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(pos)
    return size


def save_upload(file: Optional[FileStorage]) -> Optional[StoredFile]:
    """
    Guarda el archivo con un nombre generado.

    Returns:
        StoredFile, o None si no hay archivo o su tipo no está permitido
        (se descarta sin error).

    Raises:
        UploadTooLarge si supera UPLOAD_MAX_BYTES.
    """
    if not file or not file.filename:
        return None
    if not is_allowed(file):
        logger.info("Archivo descartado por tipo: %r (%s)", file.filename, file.mimetype)
        return None
    if _stream_size(file) > current_app.config["UPLOAD_MAX_BYTES"]:
        raise UploadTooLarge()

    _, ext = os.path.splitext(secure_filename(file.filename))
    new_name = f"{token_hex(16)}{ext.lower()}"
    os.makedirs(upload_dir(), exist_ok=True)
    file.save(os.path.join(upload_dir(), new_name))
    return StoredFile(filename=new_name, originalname=file.filename)


def discard_upload(stored: StoredFile) -> None:
    """Borra un archivo guardado cuyo pedido no llegó a persistirse"""
    path = os.path.join(upload_dir(), stored.filename)
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("No se pudo borrar el archivo huérfano %s: %s", path, exc)
