from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True)
class AdminContext:
    """
    Contexto explícito de cada request de administración:
    usuario autenticado + snapshot de la configuración que usan los servicios.
    """

    user_id: int | None
    user_name: str = ""
    debug_mode: bool = False
    grid_default_length: int = 10
    grid_max_length: int = 500
    preview_length: int = 60

    @classmethod
    def build(cls, config: Mapping, user=None) -> "AdminContext":
        authenticated = bool(user is not None and getattr(user, "is_authenticated", False))
        return cls(
            user_id=user.id if authenticated else None,
            user_name=(user.full_name or user.email) if authenticated else "",
            debug_mode=bool(config.get("DEBUG_MODE", False)),
            grid_default_length=int(config.get("GRID_DEFAULT_LENGTH", 10)),
            grid_max_length=int(config.get("GRID_MAX_LENGTH", 500)),
            preview_length=int(config.get("DESCRIPTION_PREVIEW_LENGTH", 60)),
        )
