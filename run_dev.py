# run_dev.py
import os
import socket


# Carga .env si existe (Settings también lo lee, esto es para HOST/PORT/RELOAD)
if os.path.exists(".env"):
    from dotenv import load_dotenv
    load_dotenv(".env")


def _lan_ip() -> str:
    """Obtiene IP LAN real sin depender de hostname/DNS."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
            s.connect(("8.8.8.8", 80))
            return s.getsockname()[0]
    except OSError:
        return "127.0.0.1"


def main():
    import uvicorn

    app_module = os.getenv("APP_MODULE", "app.main:app")
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    reload_flag = os.getenv("RELOAD", "1").strip() in ("1", "true", "True", "yes", "on")

    print(f"🔗 API local: http://127.0.0.1:{port}")
    print(f"📱 API LAN:   http://{_lan_ip()}:{port}")
    print(f"🌀 reload={'ON' if reload_flag else 'OFF'}")

    uvicorn.run(
        app_module,
        host=host,
        port=port,
        reload=reload_flag,
        reload_dirs=["app"],
        reload_excludes=[".venv", ".git", "__pycache__", "media"],
        timeout_keep_alive=30,
        timeout_graceful_shutdown=15,
        log_level=os.getenv("LOG_LEVEL", "info"),
        lifespan="on",
    )


if __name__ == "__main__":
    main()
