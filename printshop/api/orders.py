from collections.abc import Mapping

from flask import Blueprint, Response, current_app, jsonify, request, stream_with_context

from ..limiter import limiter
from ..services.export_service import generate_orders_csv
from ..services.order_service import get_order, list_orders, submit_order
from .auth import require_admin


orders_bp = Blueprint("orders", __name__)


def _order_rate_limit() -> str:
    return current_app.config["ORDER_RATE_LIMIT"]


@orders_bp.post("/orders")
@limiter.limit(_order_rate_limit)
def create_order():
    form = request.get_json(silent=True) if request.is_json else request.form
    if not isinstance(form, Mapping):
        form = {}
    result = submit_order(form, request.files.get("file"))
    return jsonify({"success": True, **result})


@orders_bp.get("/orders")
@require_admin
def orders_list():
    return jsonify([o.to_row() for o in list_orders()])


@orders_bp.get("/orders.csv")
@require_admin
def orders_csv():
    headers = {"Content-Disposition": 'attachment; filename="orders.csv"'}
    return Response(
        stream_with_context(generate_orders_csv(list_orders())),
        mimetype="text/csv",
        headers=headers,
    )


@orders_bp.get("/orders/<code>")
def order_detail(code: str):
    return jsonify(get_order(code).to_dict())
