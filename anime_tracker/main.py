import asyncio
import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from anime_tracker import config
from anime_tracker.database import Base, build_engine, build_sessionmaker
from anime_tracker.errors import NotFound, StorageFailure
# model modules must be imported before create_all
from anime_tracker.models import user_model, show_model, watchlist_model, club_model  # noqa: F401
from anime_tracker.routes import anime_routes, auth, show_routes, watchlist_routes, club_routes, user_routes
from anime_tracker.services.catalog import CatalogClient

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path"))
    msg = first.get("msg", "invalid value")
    return f"{loc}: {msg}" if loc else msg


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _validation_message(exc)})

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Storage failure on %s %s", request.method, request.url.path)
        failure = StorageFailure()
        return JSONResponse(status_code=failure.status_code, content={"error": failure.detail})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(
    database_url: Optional[str] = None,
    catalog_client: Optional[CatalogClient] = None,
    public_dir: Optional[Path] = None,
) -> FastAPI:
    _configure_logging()

    app = FastAPI(title="Anime Tracker API")

    engine = build_engine(database_url)
    app.state.engine = engine
    app.state.sessionmaker = build_sessionmaker(engine)
    app.state.catalog_client = catalog_client or CatalogClient()
    public = Path(public_dir or config.PUBLIC_DIR).resolve()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)

    app.include_router(anime_routes.router)
    app.include_router(show_routes.router)
    app.include_router(watchlist_routes.router)
    app.include_router(club_routes.router)
    app.include_router(auth.router)
    app.include_router(user_routes.router)

    @app.on_event("startup")
    async def on_startup():
        # Tiny retry so a momentary DB disconnect doesn't crash the app.
        for attempt in range(2):
            try:
                async with engine.begin() as conn:
                    await conn.run_sync(Base.metadata.create_all)
                logger.info("[startup] database schema ready")
                break
            except SQLAlchemyError as e:
                if attempt == 0:
                    logger.warning("[startup] DB init failed, retrying once: %r", e)
                    await asyncio.sleep(0.5)
                else:
                    # Tables should already exist from previous runs.
                    logger.error("[startup] Skipping DB init due to error: %r", e)

    @app.on_event("shutdown")
    async def on_shutdown():
        await engine.dispose()

    # Registered last so every API route wins over the shell.
    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_app_shell(full_path: str):
        candidate = (public / full_path).resolve()
        if full_path and candidate.is_file() and public in candidate.parents:
            return FileResponse(candidate)
        index = public / "index.html"
        if not index.is_file():
            raise NotFound("Application shell not found")
        return FileResponse(index)

    return app


app = create_app()
