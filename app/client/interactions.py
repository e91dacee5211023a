# app/client/interactions.py
"""
Controladores de like/follow con actualización optimista.

El estado optimista se asigna antes del primer ``await``: cualquiera que lea
``is_liked``/``likes_count`` mientras el request está en vuelo ve el valor
nuevo. Un segundo toggle mientras hay uno pendiente se ignora.
"""
from __future__ import annotations

import logging
from typing import Awaitable, Callable

from app.client import toggle
from app.client.api import SocialApiClient
from app.client.errors import ApiError, AuthenticationError, SelfFollowError
from app.client.toggle import Idle, Pending, ToggleState

logger = logging.getLogger(__name__)


class OptimisticToggle:
    def __init__(
        self,
        value: bool,
        count: int,
        *,
        authenticated: bool,
        turn_on: Callable[[], Awaitable[None]],
        turn_off: Callable[[], Awaitable[None]],
    ) -> None:
        self._state: ToggleState = Idle(value=value, count=max(0, count))
        self._authenticated = authenticated
        self._turn_on = turn_on
        self._turn_off = turn_off

    @property
    def state(self) -> ToggleState:
        return self._state

    @property
    def value(self) -> bool:
        return self._state.value

    @property
    def count(self) -> int:
        return self._state.count

    @property
    def pending(self) -> bool:
        return isinstance(self._state, Pending)

    def _check(self) -> None:
        if not self._authenticated:
            raise AuthenticationError()

    async def toggle(self) -> ToggleState:
        self._check()
        if isinstance(self._state, Pending):
            return self._state

        pending = toggle.start(self._state)
        self._state = pending

        error: ApiError | None = None
        try:
            if pending.value:
                await self._turn_on()
            else:
                await self._turn_off()
        except ApiError as e:
            error = e
        except BaseException:
            # cancelado o error sin envolver: vuelve al valor previo y propaga
            self._state = toggle.abort(pending)
            raise

        self._state = toggle.resolve(pending, error)
        if error is not None:
            logger.info("toggle resolved with %s: %s", type(error).__name__, type(self._state).__name__)
        return self._state


class LikeToggle(OptimisticToggle):
    def __init__(self, api: SocialApiClient, post_id: int, *, is_liked: bool, likes_count: int):
        self.post_id = post_id
        super().__init__(
            is_liked,
            likes_count,
            authenticated=api.authenticated,
            turn_on=lambda: api.like(post_id),
            turn_off=lambda: api.unlike(post_id),
        )

    @property
    def is_liked(self) -> bool:
        return self.value

    @property
    def likes_count(self) -> int:
        return self.count


class FollowToggle(OptimisticToggle):
    def __init__(
        self,
        api: SocialApiClient,
        user_id: int,
        *,
        viewer_id: int | None,
        is_following: bool,
        followers_count: int,
    ):
        self.user_id = user_id
        self.viewer_id = viewer_id
        super().__init__(
            is_following,
            followers_count,
            authenticated=api.authenticated and viewer_id is not None,
            turn_on=lambda: api.follow(user_id),
            turn_off=lambda: api.unfollow(user_id),
        )

    def _check(self) -> None:
        super()._check()
        # nunca llega a la red: el server igual lo rechazaría con 400
        if self.viewer_id == self.user_id:
            raise SelfFollowError()

    @property
    def is_following(self) -> bool:
        return self.value

    @property
    def followers_count(self) -> int:
        return self.count
