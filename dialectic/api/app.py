"""FastAPI application setup."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..app import Application
from ..config import get_cors_origins
from ..logging_config import get_logger
from .routes import perspective, provider, synthesis

logger = get_logger(__name__)


# Global application instance
_app: Application | None = None


def get_app() -> Application:
    """Get the global application instance."""
    global _app
    if not _app:
        _app = Application()
    return _app


def create_fastapi_app(application: Application | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    if application is None:
        application = get_app()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifespan."""
        await application.start()
        yield
        await application.stop()

    fastapi_app = FastAPI(
        title="Dialectic API",
        description="Supportive and critical perspectives, streamed, plus synthesis",
        version="0.1.0",
        lifespan=lifespan,
    )

    @fastapi_app.middleware("http")
    async def require_provider_credentials(request: Request, call_next):
        """Refuse every API call while the selected provider has no key."""
        if request.method != "OPTIONS" and request.url.path.startswith("/api/"):
            error = application.config_error
            if error:
                logger.error(
                    "Rejected request: %s",
                    error,
                    extra={"path": request.url.path, "status_code": 500},
                )
                return JSONResponse(status_code=500, content={"error": error})
        return await call_next(request)

    # Outermost middleware: wraps the credential guard
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @fastapi_app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @fastapi_app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        details = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
            for err in exc.errors()
        )
        logger.info("Invalid request body: %s", details, extra={"path": request.url.path})
        return JSONResponse(
            status_code=400,
            content={"error": f"Invalid request body: {details}" if details else "Invalid request body"},
        )

    fastapi_app.include_router(perspective.create_perspective_router(application))
    fastapi_app.include_router(synthesis.create_synthesis_router(application))
    fastapi_app.include_router(provider.create_provider_router(application))

    return fastapi_app
