# api/utils/permissions.py

from functools import wraps

from flask import abort, current_app
from flask_login import current_user

from services.request_context import AdminContext


def get_admin_context() -> AdminContext:
    """
    Contexto explícito del request: usuario logueado + snapshot de la config.
    Las vistas lo construyen y se lo pasan a los servicios.
    """
    return AdminContext.build(current_app.config, current_user)


def require_active_user(f):
    """
    Decorador para las vistas de administración.
    Un usuario desactivado después de loguearse pierde el acceso en el siguiente request.
    Uso (siempre debajo de @login_required):
        @login_required
        @require_active_user
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        if not current_user.is_authenticated or not current_user.is_active:
            abort(403)
        return f(*args, **kwargs)
    return wrapper
