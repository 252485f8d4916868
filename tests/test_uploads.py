import io
import os

from printshop.models.order import Order
from tests.helpers import order_form, pdf_file


def _post(client, file, **fields):
    data = order_form(**fields)
    data["file"] = file
    return client.post("/orders", data=data, content_type="multipart/form-data")


def _uploaded(app):
    return os.listdir(app.config["UPLOAD_DIR"])


def test_allowed_file_is_stored_and_served(client, app):
    resp = _post(client, pdf_file(content=b"%PDF-1.4 hello"))

    assert resp.status_code == 200
    code = resp.get_json()["code"]
    with app.app_context():
        order = Order.query.filter_by(code=code).one()
    assert _uploaded(app) == [order.file_filename]
    assert order.file_originalname == "flyer.pdf"

    served = client.get(f"/uploads/{order.file_filename}")
    assert served.status_code == 200
    assert served.data == b"%PDF-1.4 hello"


def test_file_matched_by_mimetype_only(client, app):
    resp = _post(client, (io.BytesIO(b"\x89PNG"), "scan", "image/png"))

    code = resp.get_json()["code"]
    assert client.get(f"/orders/{code}").get_json()["file"]["originalname"] == "scan"
    assert len(_uploaded(app)) == 1


def test_disallowed_file_is_dropped_silently(client, app):
    resp = _post(client, (io.BytesIO(b"plain text"), "notes.txt"))

    assert resp.status_code == 200
    code = resp.get_json()["code"]
    assert client.get(f"/orders/{code}").get_json()["file"] is None
    assert _uploaded(app) == []


def test_oversized_file_is_rejected(make_app, order_count):
    app = make_app(UPLOAD_MAX_BYTES=16)
    client = app.test_client()

    resp = _post(client, pdf_file(content=b"x" * 17))

    assert resp.status_code == 413
    assert resp.get_json() == {"success": False, "error": "file too large"}
    assert order_count() == 0
    assert _uploaded(app) == []


def test_validation_failure_keeps_no_file(client, app, order_count):
    resp = _post(client, pdf_file(), email="not-an-email")

    assert resp.status_code == 400
    assert order_count() == 0
    assert _uploaded(app) == []


def test_unknown_upload_is_404(client):
    resp = client.get("/uploads/missing.pdf")

    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "error": "Not found"}


def test_upload_path_traversal_is_404(client):
    assert client.get("/uploads/../pyproject.toml").status_code == 404
