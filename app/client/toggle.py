# app/client/toggle.py
r"""
Máquina de estados de un toggle optimista (like, follow).

    Idle(v) --start--> Pending(prev=v, opt=!v) --confirm--> Idle(!v)
                                              \--rollback--> RolledBack(v)

Todas las transiciones son funciones puras sobre valores inmutables: el
controlador (app/client/interactions.py) solo decide cuándo aplicarlas.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from app.client.errors import ApiError, ConflictError


@dataclass(frozen=True)
class Idle:
    value: bool
    count: int


@dataclass(frozen=True)
class Pending:
    previous_value: bool
    previous_count: int
    value: bool
    count: int


@dataclass(frozen=True)
class RolledBack:
    value: bool
    count: int
    error: ApiError


ToggleState = Union[Idle, Pending, RolledBack]


def start(state: ToggleState) -> Pending:
    """Invierte el booleano y ajusta el contador ±1 (nunca por debajo de 0)."""
    if isinstance(state, Pending):
        raise ValueError("toggle already pending")
    value = not state.value
    count = state.count + 1 if value else max(0, state.count - 1)
    return Pending(
        previous_value=state.value,
        previous_count=state.count,
        value=value,
        count=count,
    )


def confirm(state: Pending) -> Idle:
    return Idle(value=state.value, count=state.count)


def rollback(state: Pending, error: ApiError) -> RolledBack:
    return RolledBack(value=state.previous_value, count=state.previous_count, error=error)


def abort(state: Pending) -> Idle:
    """El request no terminó (tarea cancelada): valores previos, sin error."""
    return Idle(value=state.previous_value, count=state.previous_count)


def resolve(state: Pending, error: ApiError | None = None) -> Idle | RolledBack:
    """
    Resultado del round-trip:
    - sin error → se queda el valor optimista
    - 409 al activar (ya tenía like / ya lo seguía) → también, el estado
      visible ya es el que el usuario quería
    - cualquier otro error → vuelve exactamente a los valores previos
    """
    if error is None:
        return confirm(state)
    if isinstance(error, ConflictError) and state.value:
        return confirm(state)
    return rollback(state, error)
