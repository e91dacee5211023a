# app/posts/router.py
import logging

from fastapi import (
    APIRouter,
    Depends,
    Query,
    UploadFile,
    File,
    Form,
    status,
)
from sqlalchemy.ext.asyncio import AsyncSession

from app.comments.schemas import DeletedResponse
from app.core.deps import get_viewer, require_viewer
from app.core.errors import NotFound, PermissionDenied
from app.core.json import UTF8JSONResponse
from app.db.session import get_session
from app.media import storage
from app.posts import repository as repo
from app.posts.pagination import DEFAULT_LIMIT, page_window
from app.posts.schemas import FeedPageOut, PostCreatedOut, PostDetailOut
from app.posts.service import clean_caption, feed_page, hydrate_post_out, post_detail
from app.users.models import User

log = logging.getLogger("uvicorn")

router = APIRouter(
    prefix="/api/posts",
    tags=["posts"],
    default_response_class=UTF8JSONResponse,
)


@router.get("", response_model=FeedPageOut)
async def list_feed(
    limit: int = Query(DEFAULT_LIMIT),
    offset: int = Query(0),
    user_id: int | None = Query(None, alias="userId"),
    db: AsyncSession = Depends(get_session),
    viewer: User | None = Depends(get_viewer),
):
    """
    Página del feed (o de un perfil con ?userId=), más recientes primero.
    Anónimos pueden leer; is_liked sale siempre en false para ellos.
    """
    window = page_window(limit, offset)
    return await feed_page(
        db,
        window,
        author_id=user_id,
        viewer_id=viewer.id if viewer else None,
    )


@router.get("/{post_id}", response_model=PostDetailOut)
async def get_post_detail(
    post_id: int,
    db: AsyncSession = Depends(get_session),
    viewer: User | None = Depends(get_viewer),
):
    return await post_detail(db, post_id, viewer_id=viewer.id if viewer else None)


@router.post("", response_model=PostCreatedOut, status_code=status.HTTP_201_CREATED)
async def publish(
    image: UploadFile | None = File(None),
    caption: str | None = Form(None),
    db: AsyncSession = Depends(get_session),
    viewer: User = Depends(require_viewer),
):
    """
    Publica una imagen con caption opcional.
    1. valida imagen y caption (400 antes de tocar storage/DB)
    2. sube a storage: {external_id}/posts/{ts}-{rand}.{ext}
    3. inserta el post; si falla, borra el objeto subido
    """
    data = await storage.read_image(image)
    caption = clean_caption(caption)

    path = storage.build_object_path(viewer.external_auth_id, "posts", image.filename)
    image_url = storage.upload(path, data)

    try:
        post = await repo.create_post(db, user_id=viewer.id, image_url=image_url, caption=caption)
        await db.commit()
    except Exception:
        await db.rollback()
        storage.remove(path)
        raise

    return {"post": await hydrate_post_out(db, post, viewer, viewer_id=viewer.id)}


@router.delete("/{post_id}", response_model=DeletedResponse)
async def delete_post_endpoint(
    post_id: int,
    db: AsyncSession = Depends(get_session),
    viewer: User = Depends(require_viewer),
):
    """
    Elimina una publicación. Solo el autor puede borrar.
    Likes y comentarios caen por cascade; la imagen se borra después (best-effort).
    """
    post = await repo.get_post(db, post_id)
    if not post:
        raise NotFound("post not found")
    if post.user_id != viewer.id:
        raise PermissionDenied("not your post")

    image_url = post.image_url
    await repo.delete_post(db, post)
    await db.commit()

    storage.remove_quietly(image_url)
    return DeletedResponse()
