"""FastAPI application entrypoint for the contacts service."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from contacts.api.middleware.logging import LoggingMiddleware
from contacts.api.routes import auth as auth_routes
from contacts.api.routes import contacts as contact_routes
from contacts.bootstrap import bootstrap
from contacts.core.config import Settings, settings
from contacts.core.database import database_manager
from contacts.core.exceptions import ApplicationError, ContactValidationError
from contacts.services.container import ServiceContainer, build_container

logger = logging.getLogger(__name__)


def configure_logging(config: Settings = settings) -> None:
    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def create_app(container: Optional[ServiceContainer] = None, config: Settings = settings) -> FastAPI:
    """Build the application; a pre-built container skips backend selection and seeding."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if getattr(app.state, "container", None) is None:
            app.state.container = await build_container(database_manager, config)
            await bootstrap(app.state.container, config)
        try:
            yield
        finally:
            await database_manager.close()

    app = FastAPI(
        title=config.API_TITLE,
        version=config.API_VERSION,
        debug=config.DEBUG,
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["Authorization", "Content-Type"],
    )
    app.add_middleware(LoggingMiddleware)

    # Routers
    app.include_router(auth_routes.router)
    app.include_router(contact_routes.router, prefix="/api")

    @app.get("/health")
    async def healthcheck() -> Dict[str, str]:
        """Liveness probe."""

        return {"status": "ok", "environment": config.ENVIRONMENT}

    @app.exception_handler(ApplicationError)
    async def handle_application_error(_: Request, exc: ApplicationError):
        """Return standardized responses for application layer exceptions."""

        content: Dict[str, Any] = {"detail": exc.message, "code": exc.code}
        if isinstance(exc, ContactValidationError):
            content["violations"] = [violation.model_dump() for violation in exc.violations]
        return JSONResponse(status_code=exc.status_code, content=content)

    return app


app = create_app()
