"""
Aviso por email al operador cuando entra un pedido nuevo.

El envío corre en un pool de hilos: el request nunca espera la entrega y los
fallos solo quedan en el log.
"""
import logging
import smtplib
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Callable, Optional

logger = logging.getLogger("printshop")


@dataclass(frozen=True)
class SmtpSettings:
    host: str
    port: int = 587
    secure: bool = False
    user: str = ""
    password: str = ""
    sender: str = "no-reply@printing.example"

    @classmethod
    def from_config(cls, config) -> Optional["SmtpSettings"]:
        if not config.get("SMTP_HOST"):
            return None
        return cls(
            host=config["SMTP_HOST"],
            port=int(config.get("SMTP_PORT") or 587),
            secure=bool(config.get("SMTP_SECURE")),
            user=config.get("SMTP_USER") or "",
            password=config.get("SMTP_PASS") or "",
            sender=config.get("SMTP_FROM") or "no-reply@printing.example",
        )


def smtp_transport(settings: SmtpSettings) -> Callable[[EmailMessage], None]:
    def send(message: EmailMessage) -> None:
        if settings.secure:
            client = smtplib.SMTP_SSL(settings.host, settings.port, timeout=30)
        else:
            client = smtplib.SMTP(settings.host, settings.port, timeout=30)
        with client:
            if not settings.secure:
                client.ehlo()
                if client.has_extn("starttls"):
                    client.starttls()
                    client.ehlo()
            if settings.user:
                client.login(settings.user, settings.password)
            client.send_message(message)

    return send


def build_order_message(order, url: str, sender: str, recipient: str) -> EmailMessage:
    # name y details ya vienen escapados desde el alta del pedido
    message = EmailMessage()
    message["From"] = sender
    message["To"] = recipient
    message["Subject"] = f"New printing order: {order.code}"
    message.set_content(
        f"Order {order.code} by {order.name} ({order.email})\n\n"
        f"Details:\n{order.details}\n\n"
        f"View: {url}"
    )
    return message


class Notifier:
    def __init__(
        self,
        recipient: str = "",
        sender: str = "no-reply@printing.example",
        transport: Optional[Callable[[EmailMessage], None]] = None,
        max_workers: int = 2,
    ) -> None:
        self.recipient = recipient
        self.sender = sender
        self.transport = transport
        self._max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None

    @classmethod
    def from_config(cls, config) -> "Notifier":
        settings = SmtpSettings.from_config(config)
        return cls(
            recipient=config.get("NOTIFY_EMAIL") or "",
            sender=settings.sender if settings else "no-reply@printing.example",
            transport=smtp_transport(settings) if settings else None,
        )

    @property
    def enabled(self) -> bool:
        return bool(self.transport and self.recipient)

    def notify_order(self, order, url: str) -> Optional[Future]:
        """Encola el aviso del pedido; retorna el future o None si no hay SMTP"""
        if not self.enabled:
            return None
        message = build_order_message(order, url, self.sender, self.recipient)
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._max_workers, thread_name_prefix="notify"
            )
        future = self._executor.submit(self.transport, message)
        future.add_done_callback(self._log_outcome(order.code))
        return future

    @staticmethod
    def _log_outcome(code: str):
        def callback(future: Future) -> None:
            exc = future.exception()
            if exc is not None:
                logger.error("Notification for order %s failed: %s", code, exc)
            else:
                logger.info("Notification sent for order %s", code)

        return callback

    def close(self, wait: bool = True) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
            self._executor = None
