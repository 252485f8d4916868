import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def _get_bool(name: str, fallback: str = "false") -> bool:
    return os.getenv(name, fallback).strip().lower() in ("1", "true", "yes")


@dataclass
class AppConfig:
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///orders.db")
    session_secret: str = os.getenv("SESSION_SECRET", "change_this_secret")
    admin_user: str = os.getenv("ADMIN_USER", "admin")
    admin_pass: str = os.getenv("ADMIN_PASS", "password")
    cors_origin: str = os.getenv("CORS_ORIGIN", "http://localhost:3000")

    # SMTP opcional para notificar pedidos nuevos
    smtp_host: str = os.getenv("SMTP_HOST", "")
    smtp_port: int = int(os.getenv("SMTP_PORT") or "587")
    smtp_secure: bool = _get_bool("SMTP_SECURE")
    smtp_user: str = os.getenv("SMTP_USER", "")
    smtp_pass: str = os.getenv("SMTP_PASS", "")
    smtp_from: str = os.getenv("SMTP_FROM", "no-reply@printing.example")
    notify_email: str = os.getenv("NOTIFY_EMAIL", "")

    upload_dir: str = os.getenv("UPLOAD_DIR") or os.path.join(BASE_DIR, "uploads")
    upload_max_bytes: int = int(os.getenv("UPLOAD_MAX_BYTES") or 8 * 1024 * 1024)
    order_rate_limit: str = os.getenv("ORDER_RATE_LIMIT", "10 per minute")
    code_max_attempts: int = int(os.getenv("CODE_MAX_ATTEMPTS") or "20")
    port: int = int(os.getenv("PORT") or "3000")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def cors_origins(self) -> list:
        return [o.strip() for o in self.cors_origin.split(",") if o.strip()]

    def apply(self, app) -> None:
        app.config["SQLALCHEMY_DATABASE_URI"] = self.database_url
        app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
        app.config["SECRET_KEY"] = self.session_secret
        app.config["SESSION_COOKIE_HTTPONLY"] = True
        app.config["SESSION_COOKIE_SAMESITE"] = "Lax"
        app.config["ADMIN_USER"] = self.admin_user
        app.config["ADMIN_PASS"] = self.admin_pass
        app.config["CORS_ORIGINS"] = self.cors_origins

        app.config["SMTP_HOST"] = self.smtp_host
        app.config["SMTP_PORT"] = self.smtp_port
        app.config["SMTP_SECURE"] = self.smtp_secure
        app.config["SMTP_USER"] = self.smtp_user
        app.config["SMTP_PASS"] = self.smtp_pass
        app.config["SMTP_FROM"] = self.smtp_from
        app.config["NOTIFY_EMAIL"] = self.notify_email

        app.config["UPLOAD_DIR"] = self.upload_dir
        app.config["UPLOAD_MAX_BYTES"] = self.upload_max_bytes
        # El límite del request deja margen para los campos del formulario
        app.config["MAX_CONTENT_LENGTH"] = self.upload_max_bytes + 1024 * 1024
        app.config["ORDER_RATE_LIMIT"] = self.order_rate_limit
        app.config["RATELIMIT_ENABLED"] = True
        app.config["RATELIMIT_STORAGE_URI"] = "memory://"
        app.config["CODE_MAX_ATTEMPTS"] = self.code_max_attempts
        app.config["PORT"] = self.port
        app.config["LOG_LEVEL"] = self.log_level
