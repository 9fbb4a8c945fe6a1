# main.py
import os
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware
from starlette.staticfiles import StaticFiles

from create_db import init_models, needs_seed
from shared.config import CORS_ORIGINS, DATABASE_PATH, HOST, PORT, STATIC_DIR
from shared.db import build_engine, build_session_factory
from shared.logger import get_logger
from services.book_exchange.controllers.class_service import router as class_router
from services.book_exchange.controllers.announcement_service import router as announcement_router

logger = get_logger(__name__)


class SPAStaticFiles(StaticFiles):
    """Static bundle that answers unknown paths with index.html."""

    async def get_response(self, path: str, scope):
        try:
            return await super().get_response(path, scope)
        except StarletteHTTPException as exc:
            if exc.status_code != 404 or scope["method"] not in ("GET", "HEAD"):
                raise
            return await super().get_response("index.html", scope)


def _store_error_message(exc: SQLAlchemyError) -> str:
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


def create_app(database_path: Optional[str] = None, static_dir: Optional[str] = None) -> FastAPI:
    database_path = database_path or DATABASE_PATH
    static_dir = static_dir or STATIC_DIR

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        seed = needs_seed(database_path)
        engine = build_engine(database_path)
        try:
            await init_models(engine, seed=seed)
        except Exception as e:
            logger.error(f"Could not open database {database_path}: {e}")
            await engine.dispose()
            raise
        app.state.engine = engine
        app.state.session_factory = build_session_factory(engine)
        yield
        await engine.dispose()

    app = FastAPI(title="Book Exchange Backend", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        errors = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return JSONResponse(status_code=400, content={"error": errors})

    @app.exception_handler(SQLAlchemyError)
    async def store_error(request: Request, exc: SQLAlchemyError):
        message = _store_error_message(exc)
        logger.error(f"{request.method} {request.url.path} failed: {message}")
        return JSONResponse(status_code=500, content={"error": message})

    app.include_router(class_router)
    app.include_router(announcement_router)

    # Serve index for any other route (SPA); mounted last so the API wins
    if os.path.isdir(static_dir):
        app.mount("/", SPAStaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.warning(f"Static directory '{static_dir}' not found, serving the API only")

    return app


app = create_app()


class Server(uvicorn.Server):
    async def startup(self, sockets=None):
        await super().startup(sockets=sockets)
        # started stays False when lifespan startup failed
        if self.started:
            logger.info(f"Server listening on port {self.config.port}")


def run() -> None:
    server = Server(uvicorn.Config(app, host=HOST, port=PORT))
    server.run()
    if not server.started:
        sys.exit(1)


if __name__ == "__main__":
    run()
