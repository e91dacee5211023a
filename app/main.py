# app/main.py
import os
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.json import UTF8JSONResponse
from app.core.config import settings
from app.core.errors import install_error_handlers
from app.db.init_db import init_models

# routers
from app.users.router import router as users_router
from app.posts.router import router as posts_router
from app.likes.router import router as likes_router
from app.comments.router import router as comments_router
from app.follows.router import router as follows_router
from app.media.streaming import router as media_router

log = logging.getLogger("uvicorn")
log.setLevel(settings.LOG_LEVEL.upper())

app = FastAPI(
    title="Snapfeed API",
    default_response_class=UTF8JSONResponse,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allow_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)


@app.on_event("startup")
async def on_startup():
    log.info("🚀 Iniciando servicio…")
    os.makedirs(settings.MEDIA_DIR, exist_ok=True)
    await init_models()
    log.info("✅ Startup listo.")


@app.get("/api/health")
async def health():
    # hangul + emoji para testear transporte UTF-8
    return {"ok": True, "service": "fastapi", "msg": "정상 ✨"}


# routers
app.include_router(users_router)     # /api/users/...
app.include_router(posts_router)     # /api/posts/...
app.include_router(likes_router)     # /api/likes
app.include_router(comments_router)  # /api/comments/...
app.include_router(follows_router)   # /api/follows
app.include_router(media_router)     # /media/...
