# app/db/integrity.py
"""
Clasifica violaciones de integridad según el SQLSTATE del driver.

- 23505 (unique_violation) → duplicado (409 en el API)
- 23514 (check_violation)  → validación (400 en el API)

asyncpg expone ``sqlstate`` y psycopg ``pgcode``/``sqlstate``; SQLite no tiene
códigos, así que ahí miramos el mensaje.
"""
from sqlalchemy.exc import IntegrityError

UNIQUE_VIOLATION = "23505"
CHECK_VIOLATION = "23514"


def _sqlstate(exc: IntegrityError) -> str | None:
    orig = exc.orig
    for attr in ("sqlstate", "pgcode"):
        code = getattr(orig, attr, None)
        if code:
            return str(code)
    # asyncpg a través del adaptador de SQLAlchemy: la causa real va en __cause__
    cause = getattr(orig, "__cause__", None)
    code = getattr(cause, "sqlstate", None)
    return str(code) if code else None


def is_unique_violation(exc: IntegrityError) -> bool:
    code = _sqlstate(exc)
    if code:
        return code == UNIQUE_VIOLATION
    return "UNIQUE constraint failed" in str(exc.orig)


def is_check_violation(exc: IntegrityError) -> bool:
    code = _sqlstate(exc)
    if code:
        return code == CHECK_VIOLATION
    return "CHECK constraint failed" in str(exc.orig)
