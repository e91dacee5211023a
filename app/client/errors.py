# app/client/errors.py
"""
Errores del cliente, uno por cada rama de la taxonomía del API.

Cada error lleva el ``status`` HTTP (0 si ni siquiera hubo respuesta) y un
``message`` listo para mostrar al usuario.
"""
from __future__ import annotations

NETWORK_MESSAGE = "네트워크 연결을 확인해주세요. 인터넷 연결 상태를 확인하고 다시 시도해주세요."
MALFORMED_MESSAGE = "서버 응답을 처리할 수 없습니다. 잠시 후 다시 시도해주세요."

_STATUS_MESSAGES = {
    400: "잘못된 요청입니다. 입력한 정보를 확인해주세요.",
    401: "로그인이 필요합니다. 다시 로그인해주세요.",
    403: "권한이 없습니다. 이 작업을 수행할 권한이 없습니다.",
    404: "요청한 내용을 찾을 수 없습니다.",
    409: "이미 처리된 요청입니다.",
    413: "파일 크기가 너무 큽니다. 5MB 이하의 파일을 선택해주세요.",
    429: "요청이 너무 많습니다. 잠시 후 다시 시도해주세요.",
}
_SERVER_MESSAGE = "서버 오류가 발생했습니다. 잠시 후 다시 시도해주세요."
_CLIENT_MESSAGE = "요청을 처리할 수 없습니다. 입력한 정보를 확인해주세요."


def message_for_status(status: int) -> str:
    if status in _STATUS_MESSAGES:
        return _STATUS_MESSAGES[status]
    if status >= 500:
        return _SERVER_MESSAGE
    if status >= 400:
        return _CLIENT_MESSAGE
    return NETWORK_MESSAGE


class ApiError(Exception):
    status: int = 0

    def __init__(self, message: str | None = None, *, status: int | None = None, details=None):
        if status is not None:
            self.status = status
        self.message = message or message_for_status(self.status)
        self.details = details
        super().__init__(self.message)

    @property
    def retryable(self) -> bool:
        """True si tiene sentido ofrecer '다시 시도' en la UI."""
        return False


class ValidationError(ApiError):
    status = 400


class SelfFollowError(ValidationError):
    def __init__(self):
        super().__init__("자기 자신은 팔로우할 수 없습니다.")


class AuthenticationError(ApiError):
    status = 401


class AuthorizationError(ApiError):
    status = 403


class NotFoundError(ApiError):
    """La UI ofrece 'volver al inicio', no reintentar."""
    status = 404


class ConflictError(ApiError):
    status = 409


class TransientError(ApiError):
    """5xx o fallo de red (status 0)."""
    status = 0

    @property
    def retryable(self) -> bool:
        return True


class MalformedResponseError(TransientError):
    def __init__(self, message: str = MALFORMED_MESSAGE, *, status: int | None = None, details=None):
        super().__init__(message, status=status, details=details)


_BY_STATUS: dict[int, type[ApiError]] = {
    400: ValidationError,
    401: AuthenticationError,
    403: AuthorizationError,
    404: NotFoundError,
    409: ConflictError,
}


def error_for_status(status: int, server_message: str | None = None, details=None) -> ApiError:
    """
    Construye el error para una respuesta no-2xx. Para 4xx se prefiere el
    mensaje del server; los 5xx siempre muestran el mensaje genérico.
    """
    cls = _BY_STATUS.get(status)
    if cls is None:
        cls = TransientError if status >= 500 or status == 0 else ApiError
    message = server_message if (server_message and status < 500) else None
    return cls(message, status=status, details=details)
