import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

logger = logging.getLogger(__name__)


class PrepPalError(Exception):
    """
    Erreur de base : porte le status HTTP et le message renvoyé au client.
    """

    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingInput(PrepPalError):
    """Fichier absent ou champ requis manquant / invalide."""

    status_code = HTTP_400_BAD_REQUEST


class NotFound(PrepPalError):
    status_code = HTTP_404_NOT_FOUND


class UpstreamFailure(PrepPalError):
    """Échec du service génératif distant (upload ou génération)."""

    status_code = HTTP_500_INTERNAL_SERVER_ERROR


class UploadFailed(UpstreamFailure):
    """Toutes les tentatives d'upload ont échoué ; garde la dernière erreur."""

    def __init__(self, message: str, last_error: Exception):
        super().__init__(message)
        self.last_error = last_error


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_error_handlers(app: FastAPI) -> None:
    """
    Toutes les erreurs sortent au format {"error": "..."}.
    """

    @app.exception_handler(PrepPalError)
    async def prepal_error_handler(request: Request, exc: PrepPalError):
        if exc.status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(HTTPException)
    async def http_error_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            first = errors[0]
            field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
            message = f"Invalid or missing {field}" if field else first.get("msg", "Invalid request")
        else:
            message = "Invalid request"
        return _error_response(HTTP_400_BAD_REQUEST, message)
