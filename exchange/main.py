import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .core import errors
from .routers import health, currencies, rates, convert, screen
from .services.rates.base import RateProvider
from .services.rates.fetcher import RateFetcher
from .services.rates.providers import make_rate_provider
from .services.screen_controller import ScreenController


def create_app(
    settings_override: Settings | None = None,
    provider_override: RateProvider | None = None,
) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment. Falls back to cached get_settings().
    provider_override: use this rate provider instead of the one named by
    settings.exchange_rate_provider (tests, offline runs).
    """
    settings = settings_override or get_settings()
    # Initialize logging early
    init_logging(debug=settings.debug)

    provider = provider_override or make_rate_provider(
        settings.exchange_rate_provider, settings
    )
    fetcher = RateFetcher(provider)
    logging.getLogger("exchange").info(
        "starting", extra={"provider": provider.name, "version": settings.version}
    )

    app = FastAPI(
        title=settings.app_name, debug=settings.debug, version=settings.version
    )
    app.state.settings = settings
    app.state.fetcher = fetcher
    app.state.screen = ScreenController(fetcher, settings)

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.http_exception_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(errors.NetworkError, errors.upstream_error_handler)
    app.add_exception_handler(errors.DecodeError, errors.upstream_error_handler)
    app.add_exception_handler(errors.AmountValidationError, errors.wrong_value_handler)
    app.add_exception_handler(errors.ScreenStateError, errors.screen_state_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(currencies.router)
    app.include_router(rates.router)
    app.include_router(convert.router)
    app.include_router(screen.router)

    @app.get("/")
    async def root():
        return {"message": "Exchange Calculator API", "version": settings.version}

    return app


app = create_app()
