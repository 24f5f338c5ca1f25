# api/utils/__init__.py
from api.utils.permissions import get_admin_context, require_active_user

__all__ = ["get_admin_context", "require_active_user"]
