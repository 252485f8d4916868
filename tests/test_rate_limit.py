from printshop.models.order import Order
from tests.helpers import order_form


def test_eleventh_submission_is_rate_limited(make_app):
    app = make_app(RATELIMIT_ENABLED=True)
    client = app.test_client()

    statuses = [client.post("/orders", data=order_form()).status_code for _ in range(10)]
    resp = client.post("/orders", data=order_form())

    assert statuses == [200] * 10
    assert resp.status_code == 429
    assert resp.get_json() == {"success": False, "error": "Too many requests, slow down"}
    with app.app_context():
        assert Order.query.count() == 10


def test_limit_applies_before_validation(make_app):
    app = make_app(RATELIMIT_ENABLED=True)
    client = app.test_client()

    for _ in range(10):
        assert client.post("/orders", data=order_form(email="bad")).status_code == 400
    resp = client.post("/orders", data=order_form())

    assert resp.status_code == 429
    with app.app_context():
        assert Order.query.count() == 0


def test_limit_is_configurable(make_app):
    app = make_app(RATELIMIT_ENABLED=True, ORDER_RATE_LIMIT="2 per minute")
    client = app.test_client()

    assert client.post("/orders", data=order_form()).status_code == 200
    assert client.post("/orders", data=order_form()).status_code == 200
    assert client.post("/orders", data=order_form()).status_code == 429


def test_lookups_are_not_limited(make_app):
    app = make_app(RATELIMIT_ENABLED=True, ORDER_RATE_LIMIT="1 per minute")
    client = app.test_client()

    for _ in range(5):
        assert client.get("/orders/ZZZZZZ").status_code == 404
