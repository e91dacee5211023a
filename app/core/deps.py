# app/core/deps.py
"""
Dependencias de identidad compartidas por todos los routers.

El token llega por ``Authorization: Bearer`` o por ``?token=`` (útil para <img>
y para pruebas rápidas desde el navegador).
"""
from fastapi import Depends, Header, Query
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import AuthenticationRequired, NotFound
from app.core.security import decode_access_token
from app.db.session import get_session
from app.users.models import User
from app.users.repository import get_by_external_id


def _extract_token(token: str | None, authorization: str | None) -> str | None:
    if not token and authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1]
    return token or None


async def get_subject(
    token: str | None = Query(None),
    authorization: str | None = Header(None),
) -> str | None:
    """Subject externo del request, o None si es anónimo."""
    tok = _extract_token(token, authorization)
    if not tok:
        return None
    try:
        return decode_access_token(tok)
    except JWTError:
        raise AuthenticationRequired("invalid token")


async def require_subject(subject: str | None = Depends(get_subject)) -> str:
    if not subject:
        raise AuthenticationRequired()
    return subject


async def get_viewer(
    subject: str | None = Depends(get_subject),
    db: AsyncSession = Depends(get_session),
) -> User | None:
    """Usuario actual si hay token y ya fue sincronizado; si no, None."""
    if not subject:
        return None
    return await get_by_external_id(db, subject)


async def require_viewer(
    subject: str = Depends(require_subject),
    db: AsyncSession = Depends(get_session),
) -> User:
    user = await get_by_external_id(db, subject)
    if not user:
        raise NotFound("user not found")
    return user
