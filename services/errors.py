# services/errors.py

from __future__ import annotations

from typing import Iterable


class RecordError(ValueError):
    """
    Error recuperable de una mutación (validación, unicidad, dependencias).
    Acumula todos los mensajes para mostrarlos juntos en un único banner.
    """

    def __init__(self, messages: str | Iterable[str]):
        if isinstance(messages, str):
            messages = [messages]
        self.messages = [m for m in messages if m]
        super().__init__(" ".join(self.messages))


class RecordNotFound(RecordError):
    pass
