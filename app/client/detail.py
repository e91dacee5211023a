# app/client/detail.py
"""
Vista detalle de un post (modal o página /post/{id}).

Después de crear o borrar un comentario se vuelve a pedir el post completo en
lugar de parchear la copia local: los contadores siempre vienen del server.
"""
from __future__ import annotations

from app.client.api import SocialApiClient
from app.client.errors import ApiError, NotFoundError, ValidationError
from app.client.interactions import LikeToggle
from app.comments.service import MAX_COMMENT_LENGTH
from app.posts.schemas import PostOut


class PostDetail:
    def __init__(self, api: SocialApiClient, post_id: int):
        self.api = api
        self.post_id = post_id
        self.post: PostOut | None = None
        self.like: LikeToggle | None = None
        self.current_user_id: int | None = None
        self.error: ApiError | None = None

    @property
    def not_found(self) -> bool:
        """La UI muestra 'ir al inicio' en vez de 'reintentar'."""
        return isinstance(self.error, NotFoundError)

    async def load(self) -> PostOut | None:
        try:
            detail = await self.api.get_post(self.post_id)
        except ApiError as e:
            self.error = e
            return None
        self.error = None
        self.post = detail.post
        self.current_user_id = detail.current_user_id
        self.like = LikeToggle(
            self.api,
            detail.post.id,
            is_liked=detail.post.is_liked,
            likes_count=detail.post.likes_count,
        )
        return self.post

    def can_delete_comment(self, comment_id: int) -> bool:
        if self.post is None or self.current_user_id is None:
            return False
        return any(c.id == comment_id and c.user.id == self.current_user_id for c in self.post.comments)

    async def add_comment(self, content: str) -> PostOut | None:
        # misma regla que el server, así no se gasta un round-trip
        if not content.strip():
            raise ValidationError("댓글 내용을 입력해주세요.")
        if len(content) > MAX_COMMENT_LENGTH:
            raise ValidationError(f"댓글은 최대 {MAX_COMMENT_LENGTH}자까지 입력할 수 있습니다.")
        await self.api.create_comment(self.post_id, content)
        return await self.load()

    async def delete_comment(self, comment_id: int) -> PostOut | None:
        await self.api.delete_comment(comment_id)
        return await self.load()
