# app/posts/pagination.py
"""
Paginación por offset/limit sobre created_at descendente.

El cliente lleva la cuenta del offset (cuántos posts ya tiene) y el server no
devuelve cursores. ``hasMore`` es literalmente "la página vino llena": si el
total es múltiplo exacto de ``limit`` la última página llena reporta
``hasMore=True`` y la siguiente vuelve vacía con ``hasMore=False``.
"""
from dataclasses import dataclass

from app.core.errors import ValidationFailed

DEFAULT_LIMIT = 10
MAX_LIMIT = 50


@dataclass(frozen=True)
class PageWindow:
    limit: int = DEFAULT_LIMIT
    offset: int = 0

    @property
    def start(self) -> int:
        return self.offset

    @property
    def stop(self) -> int:
        return self.offset + self.limit


def page_window(limit: int | None = None, offset: int | None = None) -> PageWindow:
    limit = DEFAULT_LIMIT if limit is None else limit
    offset = 0 if offset is None else offset
    if limit < 1 or limit > MAX_LIMIT:
        raise ValidationFailed(f"limit must be between 1 and {MAX_LIMIT}")
    if offset < 0:
        raise ValidationFailed("offset must be >= 0")
    return PageWindow(limit=limit, offset=offset)


def has_more(returned: int, limit: int) -> bool:
    return returned == limit
