# app\adapters\api\main.py
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import structlog

from app.shared.container import container
from app.shared.config import settings, AppEnv
from app.shared.logging_config import configure_logging
from app.shared.observability import setup_observability

# Import Routers
# Note: We import the modules directly to ensure 'container.wire' works correctly
from app.adapters.api.routers import health, matching, translation, vocabulary

logger = structlog.get_logger()

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manages the application lifecycle.
    1. Startup: Wires DI container, checks storage.
    2. Shutdown: Unwires.
    """
    logger.info("app_startup", env=settings.APP_ENV.value)

    # We must explicitly tell the container which modules use the @inject decorator.
    container.wire(modules=[
        "app.adapters.api.routers.health",
        "app.adapters.api.routers.matching",
        "app.adapters.api.routers.vocabulary",
    ])

    # Fail loudly in the logs if the store is unusable, but keep serving:
    # phonetic matching does not need storage.
    try:
        store = container.key_value_store()
        if not await store.health_check():
            logger.error("storage_unavailable", backend=settings.STORAGE_BACKEND.value)
    except Exception as e:
        logger.error("storage_init_failed", error=str(e))

    yield

    logger.info("app_shutdown")
    container.unwire()

def create_app() -> FastAPI:
    """Factory function to create the FastAPI application."""
    configure_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        description="Phonetic recall checking for language learners (Hexagonal Architecture)",
        lifespan=lifespan,
        docs_url="/docs" if settings.APP_ENV != AppEnv.PRODUCTION else None,
        redoc_url=None
    )

    origins = ["*"] if settings.DEBUG else []
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_observability(app)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Standardizes HTTP errors (including 401/403 Auth failures)."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "status": "error",
                "code": exc.status_code,
                "message": exc.detail
            }
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Catches unhandled exceptions so stack traces never leak in Prod."""
        logger.error("unhandled_exception", error=str(exc), exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "status": "error",
                "code": 500,
                "message": "Internal Server Error" if not settings.DEBUG else str(exc)
            }
        )

    # Register Routers
    app.include_router(health.router)
    app.include_router(matching.router)
    app.include_router(translation.router)
    app.include_router(vocabulary.router)

    return app

# Entry point for local debugging (e.g. `python -m app.adapters.api.main`)
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.adapters.api.main:create_app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        factory=True
    )
