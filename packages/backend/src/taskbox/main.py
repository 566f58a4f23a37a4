"""FastAPI application factory.

Learn: create_app() returns a configured FastAPI instance. The lifespan
builds the identity resolver and, for memory:// URLs, the shared
in-memory store, then tears them down on shutdown. Middleware, CORS,
error rendering and routers are all registered here.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskbox import __version__
from taskbox.api import api_router
from taskbox.auth.identity import IdentityResolver, build_identity_resolver
from taskbox.config import Settings, settings as default_settings
from taskbox.db import engine as db
from taskbox.errors import Forbidden, NotFound, StoreError, TaskboxError, Unauthenticated
from taskbox.logging_setup import configure_logging
from taskbox.store.memory import InMemoryTaskStore

logger = structlog.get_logger()


def _install_error_handlers(app: FastAPI, conceal_foreign_tasks: bool) -> None:
    @app.exception_handler(TaskboxError)
    async def taskbox_error_handler(request: Request, exc: TaskboxError):
        if isinstance(exc, StoreError):
            # exc carries the cause for the log; the client gets the generic detail
            logger.error("request.store_error", error=str(exc))
        if isinstance(exc, Forbidden) and conceal_foreign_tasks:
            exc = NotFound()

        headers = None
        if isinstance(exc, Unauthenticated):
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=headers,
        )


def create_app(
    settings: Optional[Settings] = None,
    identity_resolver: Optional[IdentityResolver] = None,
) -> FastAPI:
    """Build and return the FastAPI application.

    identity_resolver overrides the one selected by settings (tests use
    this to plug in a fake provider).
    """
    settings = settings or default_settings
    configure_logging(settings.log_level, json=settings.log_json)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "taskbox.starting",
            version=__version__,
            environment=settings.environment,
            identity_provider=settings.identity_provider,
        )
        yield
        logger.info("taskbox.shutdown")
        await app.state.identity_resolver.aclose()
        if db.engine is not None:
            await db.engine.dispose()

    app = FastAPI(
        title="Taskbox",
        description="Personal task lists behind bearer-token auth",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.identity_resolver = identity_resolver or build_identity_resolver(settings)
    app.state.task_store = (
        InMemoryTaskStore() if db.uses_memory_store(settings.database_url) else None
    )

    # ── Middleware stack ──────────────────────────────────────
    # Starlette runs middleware in reverse order of registration.
    # Request flow: RequestId → Security → CORS → handler

    from taskbox.middleware.request_id import RequestIdMiddleware
    from taskbox.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    _install_error_handlers(app, settings.conceal_foreign_tasks)
    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: taskbox.main:app)
app = create_app()
