"""Erreurs du client API / API client errors.

Classees par code HTTP / classified by HTTP status code.
"""


class ApiError(Exception):
    """Reponse inattendue du serveur / Unexpected server response."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status
        self.message = message

    def __repr__(self) -> str:
        return f"<{type(self).__name__} status={self.status} {self.message!r}>"


class ValidationError(ApiError):
    """400 / 422."""


class UnauthorizedError(ApiError):
    """401 : token absent ou invalide / missing or invalid token."""


class ForbiddenError(ApiError):
    """403 : authentifie mais pas proprietaire / authenticated but not the owner."""


class NotFoundError(ApiError):
    """404."""


class ConflictError(ApiError):
    """409 : slug ou username deja pris / slug or username already taken."""


class ServerError(ApiError):
    """5xx."""


_BY_STATUS: dict[int, type[ApiError]] = {
    400: ValidationError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
}


def error_for_status(status: int, message: str) -> ApiError:
    """Instancier l'erreur correspondant au code / Build the error matching the status."""
    if status >= 500:
        return ServerError(message, status)
    return _BY_STATUS.get(status, ApiError)(message, status)
