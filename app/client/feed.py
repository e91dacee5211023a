# app/client/feed.py
"""
Feed con scroll infinito del lado cliente.

- El offset de la página siguiente es la cantidad de posts que ya tenemos.
- Las páginas se agregan al final, sin reordenar; ids repetidos se saltan.
- Si una carga falla, la lista queda igual, ``has_more`` pasa a False y el
  error queda visible hasta que el usuario pulsa reintentar.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from app.client.api import SocialApiClient
from app.client.errors import ApiError
from app.client.interactions import LikeToggle
from app.posts.schemas import PostOut

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10


def likes_label(count: int) -> str | None:
    """Etiqueta "좋아요 N개"; con 0 likes no se muestra nada."""
    if count <= 0:
        return None
    return f"좋아요 {count:,}개"


class FeedItem:
    def __init__(self, post: PostOut, like: LikeToggle):
        self.post = post
        self.like = like

    @property
    def id(self) -> int:
        return self.post.id

    @property
    def likes_label(self) -> str | None:
        return likes_label(self.like.likes_count)


@dataclass
class FeedState:
    items: list[FeedItem] = field(default_factory=list)
    has_more: bool = True
    in_flight: bool = False
    error: ApiError | None = None
    current_user_id: int | None = None
    loaded: bool = False

    @property
    def offset(self) -> int:
        return len(self.items)

    def ids(self) -> list[int]:
        return [item.id for item in self.items]


class FeedController:
    def __init__(self, api: SocialApiClient, *, limit: int = DEFAULT_LIMIT, user_id: int | None = None):
        self.api = api
        self.limit = limit
        self.user_id = user_id
        self.state = FeedState()

    def _item(self, post: PostOut) -> FeedItem:
        like = LikeToggle(self.api, post.id, is_liked=post.is_liked, likes_count=post.likes_count)
        return FeedItem(post, like)

    def _merge(self, posts: list[PostOut]) -> int:
        seen = set(self.state.ids())
        added = 0
        for post in posts:
            if post.id in seen:
                continue
            seen.add(post.id)
            self.state.items.append(self._item(post))
            added += 1
        return added

    async def _fetch(self) -> bool:
        state = self.state
        # se marca antes del await: un segundo disparo del sensor ve in_flight
        state.in_flight = True
        offset = state.offset
        try:
            page = await self.api.list_posts(limit=self.limit, offset=offset, user_id=self.user_id)
        except ApiError as e:
            logger.warning("feed page at offset %s failed: %s", offset, e.message)
            state.error = e
            state.has_more = False
            return False
        finally:
            state.in_flight = False

        self._merge(page.posts)
        state.current_user_id = page.current_user_id
        state.has_more = page.pagination.has_more
        state.error = None
        state.loaded = True
        return True

    async def load_initial(self) -> bool:
        if self.state.in_flight or self.state.loaded:
            return False
        return await self._fetch()

    def can_load_more(self) -> bool:
        s = self.state
        return not s.in_flight and s.has_more and s.error is None and len(s.items) > 0

    async def on_sentinel_visible(self) -> bool:
        """El centinela al final de la lista entró en pantalla."""
        if not self.can_load_more():
            return False
        return await self._fetch()

    async def retry(self) -> bool:
        """Limpia el error y vuelve a pedir desde el offset acumulado."""
        if self.state.in_flight:
            return False
        self.state.error = None
        self.state.has_more = True
        return await self._fetch()

    def remove_post(self, post_id: int) -> bool:
        before = len(self.state.items)
        self.state.items = [item for item in self.state.items if item.id != post_id]
        return len(self.state.items) != before

    async def delete_post(self, post_id: int) -> None:
        """Borra en el server y, confirmado, lo saca de la lista."""
        await self.api.delete_post(post_id)
        self.remove_post(post_id)
