# app/core/json.py
"""
Serialización JSON del API: UTF-8 sin escapes ``\\uXXXX``.

Captions, bios y comentarios traen hangul y emojis; el front los muestra tal
cual llegan, así que no se escapan.
"""
from typing import Any
import json
from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse


def dumps_utf8(content: Any) -> bytes:
    return json.dumps(
        jsonable_encoder(content),
        ensure_ascii=False,
        allow_nan=False,
        separators=(",", ":"),
    ).encode("utf-8")


class UTF8JSONResponse(JSONResponse):
    media_type = "application/json; charset=utf-8"

    def render(self, content: Any) -> bytes:
        return dumps_utf8(content)


def error_json(status_code: int, message: str, headers: dict | None = None, **extra) -> UTF8JSONResponse:
    """Cuerpo de error único del API: ``{"error": message, ...extra}``."""
    return UTF8JSONResponse({"error": message, **extra}, status_code=status_code, headers=headers)
