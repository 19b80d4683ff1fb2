from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette import status
import logging

logger = logging.getLogger("exchange.errors")


class ExchangeError(Exception):
    """Base class for every failure the exchange screen knows how to surface."""


class NetworkError(ExchangeError):
    """Timeout, connection failure or non-success HTTP status from the rate API."""


class DecodeError(ExchangeError):
    """Rate API answered with a body that is not the expected quote document."""


class AmountValidationError(ExchangeError):
    """Amount is zero, above the ceiling, or otherwise unusable."""


class AmountParseError(AmountValidationError):
    """Amount text is not a number (e.g. '1.2.3')."""


class ScreenStateError(ExchangeError):
    """Action is not available in the current screen state."""


def http_exception_handler(request: Request, exc):  # type: ignore
    if getattr(exc, "status_code", 404) != 404:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "http_error", "detail": exc.detail},
        )
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "not_found",
            "detail": f"No route for {request.method} {request.url.path}",
        },
    )


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


def upstream_error_handler(request: Request, exc: ExchangeError):  # type: ignore
    logger.warning("rate upstream failed: %s", exc)
    code = "upstream_malformed" if isinstance(exc, DecodeError) else "upstream_unavailable"
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"error": code, "detail": str(exc)},
    )


def wrong_value_handler(request: Request, exc: AmountValidationError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"error": "wrong_value", "detail": str(exc)},
    )


def screen_state_handler(request: Request, exc: ScreenStateError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"error": "invalid_state", "detail": str(exc)},
    )


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "detail": "An unexpected error occurred.",
        },
    )
