# app/media/streaming.py
from __future__ import annotations
import os, hashlib, time
from mimetypes import guess_type
from fastapi import APIRouter, HTTPException, Request
from starlette.responses import FileResponse, Response
from app.core.config import settings

router = APIRouter(tags=["media"])


def _resolve(path: str) -> str:
    base = os.path.abspath(settings.MEDIA_DIR)
    abs_path = os.path.abspath(os.path.join(base, path))
    if os.path.commonpath([base, abs_path]) != base or not os.path.isfile(abs_path):
        raise HTTPException(status_code=404, detail="file not found")
    return abs_path


def _etag(stat: os.stat_result) -> str:
    base = f"{stat.st_mtime_ns}-{stat.st_size}".encode()
    return hashlib.md5(base).hexdigest()


def _headers(abs_path: str) -> dict:
    stat = os.stat(abs_path)
    ct, _ = guess_type(abs_path)
    return {
        "Content-Type": ct or "application/octet-stream",
        # los nombres llevan timestamp+random: un objeto nunca cambia
        "Cache-Control": "public, max-age=31536000, immutable",
        "ETag": _etag(stat),
        "Last-Modified": time.strftime("%a, %d %b %Y %H:%M:%S GMT", time.gmtime(int(stat.st_mtime))),
    }


@router.head("/media/{path:path}")
async def head_media(path: str, request: Request):
    abs_path = _resolve(path)
    headers = _headers(abs_path)
    if request.headers.get("if-none-match") == headers["ETag"]:
        return Response(status_code=304, headers=headers)
    headers["Content-Length"] = str(os.path.getsize(abs_path))
    return Response(status_code=200, headers=headers)


@router.get("/media/{path:path}")
async def get_media(path: str, request: Request):
    abs_path = _resolve(path)
    headers = _headers(abs_path)
    if request.headers.get("if-none-match") == headers["ETag"]:
        return Response(status_code=304, headers=headers)
    return FileResponse(abs_path, headers=headers)
