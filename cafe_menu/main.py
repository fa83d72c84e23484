import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from cafe_menu.config import Settings, settings
from cafe_menu.database import build_engine, build_session_factory, create_tables
from cafe_menu.errors import MenuError, StorageError, ValidationError
from cafe_menu.middleware.metrics import MetricsMiddleware
from cafe_menu.middleware.request_id import RequestIDMiddleware
from cafe_menu.models import menu_table  # noqa: F401  registers the Menu table
from cafe_menu.routers import menu
from cafe_menu.services.menu_store import MenuStore
from cafe_menu.utils.logging import SERVICE_NAME, setup_logging
from cafe_menu.utils.tracing import instrument_app, instrument_engine, setup_tracing

setup_logging(settings.log_level, settings.project_id)
logger = logging.getLogger(__name__)


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"][1:]) or "body"
        parts.append(f"{field}: {error['msg']}")
    return "; ".join(parts)


async def _menu_error_handler(request: Request, exc: MenuError) -> JSONResponse:
    if isinstance(exc, StorageError):
        logger.error(
            exc.error,
            extra={
                "request_id": getattr(request.state, "request_id", "unknown"),
                "details": exc.details,
                "path": request.url.path,
            },
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    error = ValidationError("Invalid input data", details=_describe_validation_errors(exc))
    return await _menu_error_handler(request, error)


def create_app(app_settings: Settings = settings) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting up, connecting to the menu store")
        engine = build_engine(app_settings.sqlalchemy_url)
        if app_settings.create_tables:
            await create_tables(engine)
        if app_settings.tracing_enabled:
            instrument_engine(engine)

        app.state.menu_store = MenuStore(build_session_factory(engine))
        logger.info("Startup complete", extra={"port": app_settings.port})

        yield

        await engine.dispose()
        logger.info("Shutting down")

    app = FastAPI(
        title="Café Menu API",
        description="CRUD over café menu items",
        version="1.0.0",
        lifespan=lifespan,
    )

    if app_settings.tracing_enabled:
        setup_tracing(SERVICE_NAME, app_settings.otlp_endpoint, app_settings.project_id)
        instrument_app(app)

    app.add_exception_handler(MenuError, _menu_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)

    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)
    # Fixed policy: any origin, CRUD verbs, JSON bodies
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type"],
    )
    app.include_router(menu.router, prefix="/menu", tags=["menu"])

    # Expose Prometheus metrics at /metrics
    app.mount("/metrics", make_asgi_app())

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
