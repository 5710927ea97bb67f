from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import RedirectResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from prometheus_fastapi_instrumentator import Instrumentator
import uvicorn
import logging
import sys

from sehaty.core.config import settings
from sehaty.core.database_utils import check_database_health, get_missing_tables

# Configure logging
_handlers = [logging.StreamHandler(sys.stdout)]
if settings.LOG_FILE:
    _handlers.append(logging.FileHandler(settings.LOG_FILE))

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=_handlers,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Starting up Sehaty Backend...")

    # Check database tables
    try:
        missing_tables = get_missing_tables()
        if missing_tables:
            logger.warning(f"Missing database tables: {missing_tables}")
            logger.warning("Please run the database setup script before starting the server:")
            logger.warning("python scripts/setup_database.py")
        else:
            logger.info("All required database tables exist")
    except Exception as e:
        logger.warning(f"Could not check database tables: {e}")

    yield

    logger.info("Sehaty Backend shutdown complete")


def create_application() -> FastAPI:
    """Create and configure the FastAPI application"""
    settings.validate_environment_config()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Sehaty - pharmacy catalog, prescriptions and medication reminders",
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
        lifespan=lifespan
    )

    # CORS Middleware - Environment-specific origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    logger.info(f"CORS configured for {settings.ENVIRONMENT} environment with origins: {settings.allowed_cors_origins}")

    # GZip Middleware for response compression
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    from sehaty.api.v1.api import api_router
    app.include_router(api_router, prefix=settings.API_V1_STR)

    if settings.METRICS_ENABLED:
        Instrumentator().instrument(app).expose(app, endpoint="/metrics")
        logger.info("Prometheus metrics exposed at /metrics")

    return app


# Create the FastAPI app instance
app = create_application()


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint that redirects to API documentation"""
    return RedirectResponse(url=f"{settings.API_V1_STR}/docs")


@app.get("/health", tags=["Health Check"])
def health_check():
    """Health check endpoint"""
    db_status = "healthy" if check_database_health() else "unhealthy"
    return {
        "status": "healthy",
        "version": settings.VERSION,
        "project": settings.PROJECT_NAME,
        "database": db_status,
    }


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Global HTTP exception handler"""
    logger.error(f"HTTP {exc.status_code}: {exc.detail} - {request.url}")
    content = {
        "error": True,
        "message": exc.detail,
        "status_code": exc.status_code
    }
    # Structured details (e.g. the echoed payload of a rejected request) are merged in
    if isinstance(exc.detail, dict):
        content.update(exc.detail)
        content["status_code"] = exc.status_code
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled exceptions"""
    logger.error(f"Unhandled exception: {exc} - {request.url}")
    return JSONResponse(
        status_code=500,
        content={
            "error": True,
            "message": "Internal server error",
            "status_code": 500
        }
    )


if __name__ == "__main__":
    uvicorn.run(
        "sehaty.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower()
    )
