# grooming_api/main.py

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, load_settings
from .db import build_engine, init_db
from .errors import ApiError
from .routers import appointments_routes, auth_routes, services_routes, system_routes

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # Reduce verbosity of third-party libraries
    logging.getLogger("passlib").setLevel(logging.WARNING)


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    """Build the API.

    Settings and engine may be supplied (tests do); otherwise they are read
    from the environment when the app starts, and a missing JWT_SECRET stops
    startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app_settings = settings or load_settings()
        configure_logging(app_settings.log_level)
        logger.info("Environment: %s", app_settings.environment)

        app_engine = engine or build_engine(app_settings)
        try:
            init_db(app_engine, app_settings)
        except Exception:
            logger.exception("Database initialization error")
            raise

        app.state.settings = app_settings
        app.state.engine = app_engine
        yield
        logger.info("Application shutting down...")
        if engine is None:
            app_engine.dispose()

    app = FastAPI(title="Toelettatura API", version="1.0.0", lifespan=lifespan)

    # The Android app connects from anywhere
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning("Validation error for %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": "Richiesta non valida"})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # unmatched path or method
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content={"error": "Endpoint non trovato"})
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "Errore interno del server"})

    app.include_router(system_routes.router)
    app.include_router(auth_routes.router)
    app.include_router(services_routes.router)
    app.include_router(appointments_routes.router)

    return app


app = create_app()
