from printshop.models.order import Order


def test_seed_sample_is_idempotent(app):
    runner = app.test_cli_runner()

    first = runner.invoke(args=["seed-sample"])
    second = runner.invoke(args=["seed-sample"])

    assert "code=DEMO01" in first.output
    assert "ya existe" in second.output
    with app.app_context():
        order = Order.query.filter_by(code="DEMO01").one()
        assert order.name == "Jane Doe"
        assert Order.query.count() == 1


def test_seeded_order_is_public(app, client):
    app.test_cli_runner().invoke(args=["seed-sample"])

    body = client.get("/orders/DEMO01").get_json()

    assert body["details"] == "Demo print: 10x A4, color, double-sided"
    assert body["file"] is None


def test_db_reset_requires_confirmation(app, client):
    app.test_cli_runner().invoke(args=["seed-sample"])

    result = app.test_cli_runner().invoke(args=["db-reset"])

    assert "Abortando" in result.output
    assert client.get("/orders/DEMO01").status_code == 200


def test_db_reset_drops_orders(app, client):
    runner = app.test_cli_runner()
    runner.invoke(args=["seed-sample"])

    result = runner.invoke(args=["db-reset", "--yes"])

    assert "reiniciada" in result.output
    assert client.get("/orders/DEMO01").status_code == 404
