import pytest

from printshop import create_app
from printshop.db import db
from printshop.models.order import Order
from printshop.services.notification_service import Notifier


class FakeTransport:
    def __init__(self):
        self.sent = []

    def __call__(self, message):
        self.sent.append(message)


@pytest.fixture
def make_app(tmp_path):
    apps = []

    def factory(**overrides):
        config = {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'orders.db'}",
            "UPLOAD_DIR": str(tmp_path / "uploads"),
            "RATELIMIT_ENABLED": False,
            "ADMIN_USER": "admin",
            "ADMIN_PASS": "s3cret",
            "SMTP_HOST": "",
            "NOTIFY_EMAIL": "",
            "SESSION_SECRET": "test-secret",
            "SECRET_KEY": "test-secret",
        }
        config.update(overrides)
        app = create_app(config)
        apps.append(app)
        return app

    yield factory

    for app in apps:
        app.extensions["notifier"].close()
        with app.app_context():
            db.session.remove()
            db.engine.dispose()


@pytest.fixture
def app(make_app):
    return make_app()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    resp = client.post("/admin/login", json={"user": "admin", "pass": "s3cret"})
    assert resp.status_code == 200
    return client


@pytest.fixture
def outbox(app):
    transport = FakeTransport()
    app.extensions["notifier"] = Notifier(recipient="ops@example.com", transport=transport)
    return transport


@pytest.fixture
def order_count(app):
    def count():
        with app.app_context():
            return Order.query.count()

    return count
