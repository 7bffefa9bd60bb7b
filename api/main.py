import logging
from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core import config, db
from core.errors import register_error_handlers
from core.observability import setup_logging
from names import router as names_router
from names import schemas as names_schemas
from names.repository import NameRepository

load_dotenv()

ROOT_MESSAGE = "name registry API - server is running"

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = config.get_settings()
    setup_logging(settings.log_level, settings.log_format)

    # Schema must be ready before the app accepts a single request.
    database: db.Database | None = None
    repository = getattr(app.state, "name_repository", None)
    try:
        if repository is None:
            database = db.Database(settings.database)
            await database.connect()
            repository = NameRepository(database)
        await repository.ensure_schema()
    except db.StorageError:
        logger.exception("startup_failed")
        if database is not None:
            await database.close()
        raise

    app.state.name_repository = repository
    logger.info("startup_complete env=%s port=%s", settings.app_env, settings.port)
    try:
        yield
    finally:
        logger.info("shutdown")
        if database is not None:
            app.state.name_repository = None
            await database.close()


def create_app(repository: NameRepository | None = None) -> FastAPI:
    """
    Build the application. A pre-built repository skips the pool setup.
    """
    settings = config.get_settings()
    app = FastAPI(title="Name Registry API", lifespan=lifespan)
    app.state.name_repository = repository

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(names_router.router, tags=["names"])

    @app.get("/", response_model=names_schemas.MessageResponse)
    def root() -> dict:
        return {"message": ROOT_MESSAGE}

    @app.get("/api/health", response_model=names_schemas.HealthResponse)
    async def health(request: Request):
        # Never raises: a missing or unreachable store is reported as disconnected.
        repository = request.app.state.name_repository
        if repository is not None and await repository.health_check():
            return {"status": "OK", "database": "connected"}
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"status": "error", "database": "disconnected"},
        )

    return app


app = create_app()


def run() -> None:
    settings = config.get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
