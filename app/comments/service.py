# app/comments/service.py
from __future__ import annotations

from app.comments.models import Comment
from app.core.errors import ValidationFailed
from app.users.models import User

MAX_COMMENT_LENGTH = 1000


def clean_content(content: str | None) -> str:
    """
    Recorta y valida el texto del comentario.
    El límite se mide sobre el texto tal cual llega, antes del strip.
    """
    if content is None or not content.strip():
        raise ValidationFailed("comment content is required")
    if len(content) > MAX_COMMENT_LENGTH:
        raise ValidationFailed(f"comment must be at most {MAX_COMMENT_LENGTH} characters")
    return content.strip()


def serialize_comment(comment: Comment, author: User) -> dict:
    return {
        "id": comment.id,
        "post_id": comment.post_id,
        "content": comment.content,
        "created_at": comment.created_at,
        "user": {
            "id": author.id,
            "name": author.name,
            "external_auth_id": author.external_auth_id,
        },
    }
