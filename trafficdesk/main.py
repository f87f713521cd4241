"""Application factory and top-level wiring.

Brings together configuration, logging, the database, templates, routers
and error handling. Run with ``uvicorn trafficdesk.main:app`` or the
``trafficdesk`` console script.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import RedirectResponse
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .core.errors import (
    ActionError,
    action_error_handler,
    http_exception_handler,
    validation_exception_handler,
)
from .core.logging import configure_logging
from .db.session import Base, engine
from .middlewares import RequestIdMiddleware

# Importing the models registers them with the metadata used by ``create_all``.
from .models import traffic_ticket as _traffic_ticket  # noqa: F401
from .models import user as _user  # noqa: F401
from .routers import api as api_router
from .routers import tickets as tickets_router
from .routers import users as users_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info(
        "app.started",
        extra={"extra_data": {"env": settings.APP_ENV, "db_dialect": engine.dialect.name}},
    )
    yield
    engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.add_middleware(RequestIdMiddleware)

    app.include_router(users_router.router)
    app.include_router(tickets_router.router)
    app.include_router(api_router.router)

    app.add_exception_handler(ActionError, action_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.get("/", include_in_schema=False)
    async def index() -> RedirectResponse:
        return RedirectResponse(url="/tickets", status_code=302)

    @app.get("/health")
    async def health() -> dict[str, bool]:
        return {"ok": True}

    Instrumentator().instrument(app).expose(app, include_in_schema=False)
    return app


configure_logging()
app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("trafficdesk.main:app", host=settings.HOST, port=settings.PORT, log_config=None)
