# sentinelmind/core/errors.py
"""
Errores de dominio. Se lanzan en servicios/almacenes y se traducen a HTTP
en los handlers registrados por `register_exception_handlers`.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class SentinelError(Exception):
    reason = "error"

    def __init__(self, reason: str | None = None):
        if reason is not None:
            self.reason = reason
        super().__init__(self.reason)


class DuplicateIdentity(SentinelError):
    reason = "username already exists"


class InvalidCredentials(SentinelError):
    reason = "invalid credentials"


class AuthError(SentinelError):
    """Familia de fallos de token; en la frontera se colapsan a 401/403."""


class MissingToken(AuthError):
    reason = "missing"


class InvalidToken(AuthError):
    reason = "invalid"


class ExpiredToken(AuthError):
    reason = "expired"


class StorageUnavailable(SentinelError):
    reason = "storage unavailable"


class AnalysisUnavailable(SentinelError):
    reason = "analysis provider unavailable"


async def _invalid_credentials(request: Request, exc: InvalidCredentials):
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"error": "Invalid credentials"},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def _auth_error(request: Request, exc: AuthError):
    # El tipo concreto solo se registra; el cliente ve un acceso denegado genérico
    logger.info("token rejected (%s) on %s %s", exc.reason, request.method, request.url.path)
    if isinstance(exc, MissingToken):
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": "Unauthorized"},
            headers={"WWW-Authenticate": "Bearer"},
        )
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"error": "Forbidden"})


async def _duplicate_identity(request: Request, exc: DuplicateIdentity):
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"error": exc.reason})


async def _unavailable(request: Request, exc: SentinelError):
    logger.error("%s on %s %s", exc.reason, request.method, request.url.path)
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"error": exc.reason})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidCredentials, _invalid_credentials)
    app.add_exception_handler(AuthError, _auth_error)
    app.add_exception_handler(DuplicateIdentity, _duplicate_identity)
    app.add_exception_handler(StorageUnavailable, _unavailable)
    app.add_exception_handler(AnalysisUnavailable, _unavailable)
