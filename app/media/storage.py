# app/media/storage.py
"""
Object storage local: guarda las imágenes en MEDIA_DIR y las expone en /media/.

Convención de rutas (igual a la del bucket `uploads` del proveedor):

    {owner_external_id}/{posts|profile}/{epoch_ms}-{random}.{ext}
"""
import os
import time
import uuid
import logging

from fastapi import UploadFile

from app.core.config import settings
from app.core.errors import ValidationFailed

log = logging.getLogger("uvicorn")

IMAGE_EXTS = {"jpg", "jpeg", "png", "gif", "webp", "heic"}
KINDS = {"posts", "profile"}


def _abs(path: str) -> str:
    base = os.path.abspath(settings.MEDIA_DIR)
    abs_path = os.path.abspath(os.path.join(base, path))
    # nada fuera de MEDIA_DIR (../ en el owner o en la url)
    if os.path.commonpath([base, abs_path]) != base:
        raise ValueError(f"path outside media dir: {path!r}")
    return abs_path


def build_object_path(owner_external_id: str, kind: str, filename: str | None) -> str:
    if kind not in KINDS:
        raise ValueError(f"unknown storage kind: {kind}")
    ext = (filename or "").rsplit(".", 1)[-1].lower() if "." in (filename or "") else ""
    if ext not in IMAGE_EXTS:
        ext = "jpg"
    owner = owner_external_id.replace("/", "_")
    name = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}.{ext}"
    return f"{owner}/{kind}/{name}"


def get_public_url(path: str) -> str:
    return f"{settings.MEDIA_BASE_URL.rstrip('/')}/media/{path}"


def path_from_url(url: str | None) -> str | None:
    """Inverso de get_public_url; None si la url no es nuestra."""
    if not url:
        return None
    marker = "/media/"
    idx = url.find(marker)
    if idx < 0:
        return None
    return url[idx + len(marker):] or None


def upload(path: str, data: bytes) -> str:
    """Escribe el objeto (sin upsert) y devuelve su URL pública."""
    abs_path = _abs(path)
    os.makedirs(os.path.dirname(abs_path), exist_ok=True)
    with open(abs_path, "xb") as out:
        out.write(data)
    return get_public_url(path)


def remove(*paths: str) -> None:
    """Borra objetos; los que ya no existen se ignoran."""
    for path in paths:
        if not path:
            continue
        try:
            os.remove(_abs(path))
        except FileNotFoundError:
            pass


def remove_quietly(url: str | None) -> None:
    """
    Limpieza best-effort después de que la DB ya quedó consistente:
    un archivo huérfano no debe tumbar el request.
    """
    path = path_from_url(url)
    if not path:
        return
    try:
        remove(path)
    except (OSError, ValueError) as e:
        log.warning(f"⚠️ no se pudo borrar {path}: {e!r}")


async def read_image(file: UploadFile | None) -> bytes:
    """
    Valida el upload (presente, image/*, ≤ MAX_IMAGE_BYTES) y devuelve los bytes.
    """
    if file is None or not (file.filename or "").strip():
        raise ValidationFailed("image is required")
    if not (file.content_type or "").lower().startswith("image/"):
        raise ValidationFailed("only image files are allowed")
    # leemos uno de más para detectar el exceso sin cargar archivos enormes
    data = await file.read(settings.MAX_IMAGE_BYTES + 1)
    if len(data) > settings.MAX_IMAGE_BYTES:
        raise ValidationFailed("image must be 5MB or smaller")
    if not data:
        raise ValidationFailed("image is empty")
    return data
