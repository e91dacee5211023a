# app/__init__.py
"""
Snapfeed: API de feed estilo Instagram (FastAPI + SQLAlchemy async) y el
núcleo del cliente (``app.client``) que consume esa API.
"""
