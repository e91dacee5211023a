# app/client/api.py
"""
Cliente async del API (httpx).

Cada método hace exactamente un round-trip y devuelve modelos pydantic ya
validados; cualquier respuesta no-2xx o con forma inesperada sale como una
subclase de ``ApiError`` (ver app/client/errors.py).
"""
from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError as SchemaError

from app.client.errors import (
    MalformedResponseError,
    TransientError,
    error_for_status,
)
from app.comments.schemas import CommentResponse
from app.core.config import settings
from app.posts.schemas import FeedPageOut, PostDetailOut
from app.users.schemas import UserProfileResponse

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class SocialApiClient:
    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self.authenticated = bool(token)
        self._http = httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "SocialApiClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # transporte
    # ------------------------------------------------------------------
    async def _request(self, method: str, url: str, **kwargs) -> Any:
        try:
            resp = await self._http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("network error on %s %s: %r", method, url, e)
            raise TransientError(status=0, details=str(e)) from e

        if resp.is_success:
            try:
                return resp.json()
            except ValueError as e:
                raise MalformedResponseError(status=resp.status_code) from e

        server_message = None
        details: Any = None
        try:
            details = resp.json()
            if isinstance(details, dict) and isinstance(details.get("error"), str):
                server_message = details["error"]
        except ValueError:
            details = resp.text or None
        logger.info("%s %s -> %s %s", method, url, resp.status_code, server_message)
        raise error_for_status(resp.status_code, server_message, details)

    @staticmethod
    def _parse(model: type[M], payload: Any) -> M:
        try:
            return model.model_validate(payload)
        except SchemaError as e:
            raise MalformedResponseError(details=e.errors()) from e

    # ------------------------------------------------------------------
    # posts
    # ------------------------------------------------------------------
    async def list_posts(
        self, *, limit: int = 10, offset: int = 0, user_id: int | None = None
    ) -> FeedPageOut:
        params: dict[str, Any] = {"limit": limit, "offset": offset}
        if user_id is not None:
            params["userId"] = user_id
        return self._parse(FeedPageOut, await self._request("GET", "/api/posts", params=params))

    async def get_post(self, post_id: int) -> PostDetailOut:
        return self._parse(PostDetailOut, await self._request("GET", f"/api/posts/{post_id}"))

    async def delete_post(self, post_id: int) -> None:
        await self._request("DELETE", f"/api/posts/{post_id}")

    # ------------------------------------------------------------------
    # likes / follows
    # ------------------------------------------------------------------
    async def like(self, post_id: int) -> None:
        await self._request("POST", "/api/likes", json={"postId": post_id})

    async def unlike(self, post_id: int) -> None:
        await self._request("DELETE", "/api/likes", params={"postId": post_id})

    async def follow(self, user_id: int) -> None:
        await self._request("POST", "/api/follows", json={"followingId": user_id})

    async def unfollow(self, user_id: int) -> None:
        await self._request("DELETE", "/api/follows", params={"followingId": user_id})

    # ------------------------------------------------------------------
    # comments / users
    # ------------------------------------------------------------------
    async def create_comment(self, post_id: int, content: str) -> CommentResponse:
        payload = await self._request(
            "POST", "/api/comments", json={"postId": post_id, "content": content}
        )
        return self._parse(CommentResponse, payload)

    async def delete_comment(self, comment_id: int) -> None:
        await self._request("DELETE", f"/api/comments/{comment_id}")

    async def get_user(self, user_id: int) -> UserProfileResponse:
        return self._parse(UserProfileResponse, await self._request("GET", f"/api/users/{user_id}"))
