"""
Página pública de confirmación del pedido (/o/<code>)
"""
from flask import Blueprint, render_template

from ..errors import NotFoundError
from ..services.order_service import get_order

pages_bp = Blueprint("pages", __name__)


@pages_bp.get("/o/<code>")
def order_page(code: str):
    try:
        order = get_order(code)
    except NotFoundError:
        return render_template("order.html", order=None, code=code), 404
    return render_template("order.html", order=order, code=code)
