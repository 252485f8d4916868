from functools import wraps
from secrets import compare_digest

from flask import Blueprint, current_app, jsonify, request, session

from ..errors import AuthError, InvalidCredentials

auth_bp = Blueprint("auth", __name__)


def is_admin() -> bool:
    return bool(session.get("is_admin"))


def require_admin(fn):
    """Decorator que requiere una sesión de administrador"""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if not is_admin():
            raise AuthError()
        return fn(*args, **kwargs)

    return wrapper


def _check_credentials(user: str, password: str) -> bool:
    expected_user = current_app.config["ADMIN_USER"]
    expected_pass = current_app.config["ADMIN_PASS"]
    # Se comparan ambos campos siempre para no revelar cuál falló
    user_ok = compare_digest(user.encode("utf-8"), expected_user.encode("utf-8"))
    pass_ok = compare_digest(password.encode("utf-8"), expected_pass.encode("utf-8"))
    return user_ok and pass_ok


@auth_bp.post("/admin/login")
def login():
    """Login del administrador; acepta JSON o formulario"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = request.form
    user = data.get("user")
    password = data.get("pass")
    if not isinstance(user, str) or not isinstance(password, str):
        raise InvalidCredentials()

    if not _check_credentials(user, password):
        raise InvalidCredentials()

    session.clear()
    session["is_admin"] = True
    return jsonify({"success": True})


@auth_bp.post("/admin/logout")
def logout():
    session.clear()
    return jsonify({"success": True})


@auth_bp.get("/admin/session")
def session_status():
    """Usado por el panel para saber si hay sesión activa"""
    return jsonify({"authenticated": is_admin()})
