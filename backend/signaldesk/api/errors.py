from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from signaldesk.errors import (
    InvalidRequestError,
    SignalDeskError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error})


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(UpstreamUnavailableError)
    async def handle_upstream_unavailable(
        _request: Request, exc: UpstreamUnavailableError
    ) -> JSONResponse:
        logger.error("Upstream %s unavailable: %s", exc.provider, exc.reason)
        return _error_response(status.HTTP_502_BAD_GATEWAY, "Upstream unavailable")

    @app.exception_handler(InvalidRequestError)
    async def handle_invalid_request(
        _request: Request, exc: InvalidRequestError
    ) -> JSONResponse:
        logger.info("Rejected request: %s", exc.message)
        return _error_response(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(SignalDeskError)
    async def handle_signaldesk_error(
        _request: Request, exc: SignalDeskError
    ) -> JSONResponse:
        logger.error("Unhandled signaldesk error: %s", exc.message)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
        )
