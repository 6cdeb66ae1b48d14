import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from reflection.api.calendar import router as calendar_router
from reflection.api.check_ins import router as check_ins_router
from reflection.api.deps import build_repositories
from reflection.api.goals import router as goals_router
from reflection.api.local import router as local_router
from reflection.api.profiles import router as profiles_router
from reflection.api.shares import router as shares_router
from reflection.core.config import Settings
from reflection.core.errors import (
    ConflictError,
    NotFoundError,
    ReflectionError,
    TransportError,
    ValidationError,
)
from reflection.core.log import configure_logging
from reflection.db import Store
from reflection.local_storage import LocalStorage

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ValidationError: 422,
    NotFoundError: 404,
    ConflictError: 409,
    TransportError: 503,
}

GENERIC_ERROR = "Something went wrong. Please try again."


async def reflection_error_handler(request: Request, exc: ReflectionError):
    status = next((code for kind, code in ERROR_STATUS.items() if isinstance(exc, kind)), 400)
    if isinstance(exc, TransportError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        detail = GENERIC_ERROR
    else:
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.code, exc.message)
        detail = exc.message
    return JSONResponse(status_code=status, content={"detail": detail, "code": exc.code})


def create_app(settings: Settings | None = None, store: Store | None = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.log_level)

    if store is None:
        store = Store(settings.database_url)
    # Create DB tables (goals, check-ins, etc.) on startup
    store.create_all()

    app = FastAPI(title="Year Reflection")
    app.state.settings = settings
    app.state.store = store
    app.state.repos = build_repositories(store, settings)

    # Allow CORS for local frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ReflectionError, reflection_error_handler)

    app.include_router(goals_router)
    app.include_router(check_ins_router)
    app.include_router(shares_router)
    app.include_router(profiles_router)
    app.include_router(calendar_router)

    if settings.local_mode:
        app.state.local_storage = LocalStorage(settings.local_storage_dir)
        app.include_router(local_router)
        logger.info("Local mode on, data in %s", app.state.local_storage.path)

    @app.get("/")
    def root():
        return {"message": "Year Reflection backend is running"}

    return app


def run() -> None:
    """No-argument launcher: serve the app with settings from env/.env."""
    import uvicorn

    from reflection.core.config import settings

    uvicorn.run(
        "reflection.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    run()
