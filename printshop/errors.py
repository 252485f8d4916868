"""
Errores de dominio del servicio de pedidos.

Cada error lleva el código HTTP con el que se responde; los handlers de la app
los convierten en ``{"success": false, "error": ...}``.
"""
from typing import Optional


class OrderServiceError(Exception):
    status_code = 500
    message = "internal error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message

    def to_dict(self) -> dict:
        return {"success": False, "error": self.message}


class ValidationError(OrderServiceError):
    """Campo faltante o mal formado, corregible por el usuario."""
    status_code = 400
    message = "invalid input"


class MissingField(ValidationError):
    message = "name, email and details are required"

    def __init__(self, field: str):
        super().__init__()
        self.field = field

    def to_dict(self) -> dict:
        return {**super().to_dict(), "field": self.field}


class InvalidEmail(ValidationError):
    message = "invalid email"


class DetailsTooShort(ValidationError):
    message = "details too short"


class UploadTooLarge(OrderServiceError):
    status_code = 413
    message = "file too large"


class AuthError(OrderServiceError):
    status_code = 401
    message = "Unauthorized"


class InvalidCredentials(AuthError):
    status_code = 403
    message = "Invalid credentials"


class NotFoundError(OrderServiceError):
    status_code = 404
    message = "Order not found"


class StorageError(OrderServiceError):
    message = "DB error"


class CodeAllocationExhausted(OrderServiceError):
    """No se encontró un código libre dentro del número de intentos permitido."""
    message = "could not allocate order code"
