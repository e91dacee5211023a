# app/client/modals.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

Listener = Callable[["ModalState"], None]


@dataclass
class ModalState:
    """
    Qué modal está abierto: crear post o detalle de un post.

    Se crea una instancia por árbol de UI y se pasa a quien la necesite; los
    cambios solo entran por estos métodos, que avisan a los suscriptores.
    """
    create_post_open: bool = False
    post_id: int | None = None
    _listeners: list[Listener] = field(default_factory=list, init=False, repr=False)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def open_create_post(self) -> None:
        self.create_post_open = True
        self.post_id = None
        self._notify()

    def open_post(self, post_id: int) -> None:
        self.create_post_open = False
        self.post_id = post_id
        self._notify()

    def close(self) -> None:
        if not self.create_post_open and self.post_id is None:
            return
        self.create_post_open = False
        self.post_id = None
        self._notify()
