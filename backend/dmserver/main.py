from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from dmserver.api.routes.auth import router as auth_router
from dmserver.core.config import Settings, settings as default_settings
from dmserver.core.logging import configure_logging
from dmserver.db.session import Database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting application...")
    db = Database(app.state.settings.database_url)
    db.init()
    app.state.db = db

    yield

    logger.info("Shutting down application...")
    db.dispose()


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # bad or missing input is a plain 400, as for any malformed request body
    errors = exc.errors()
    logger.info("rejected %s %s: %d validation error(s)", request.method, request.url.path, len(errors))
    # never echo "input": it can hold the submitted password
    detail = [{"loc": e["loc"], "msg": e["msg"], "type": e["type"]} for e in errors]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(detail)},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    app = FastAPI(title="dmserver", version="0.0.1", lifespan=lifespan)
    app.state.settings = settings

    app.add_exception_handler(RequestValidationError, _validation_error)
    app.include_router(auth_router)

    @app.get("/heartbeat", response_class=PlainTextResponse)
    def heartbeat():
        return "healthy\n"

    return app


app = create_app()
