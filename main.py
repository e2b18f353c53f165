"""
Recipe Service - Main API Server
Wires configuration, logging, database lifecycle and routes into the FastAPI app
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog
from typing import AsyncGenerator

from core.config import settings
from core.database import init_db, close_db
from core.exceptions import RecipeServiceError, RecipeValidationError
from core.logging import configure_logging
from api.routes import api_router
from api.endpoints import health
from middleware.logging import LoggingMiddleware, get_request_id
from schemas.recipe_schemas import validation_error_details

configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events"""
    logger.info("Starting Recipe Service", environment=settings.ENVIRONMENT)

    try:
        await init_db()
        logger.info("Database connection established")
    except Exception as e:
        # requests will answer 503 until the database is reachable
        logger.error("Failed to initialize database", error=str(e))

    yield

    logger.info("Shutting down Recipe Service")
    await close_db()
    logger.info("Recipe Service shutdown complete")


app = FastAPI(
    title=settings.APP_NAME,
    description="Create, read, update and delete recipe records",
    version=settings.VERSION,
    docs_url="/docs" if not settings.is_production else None,
    redoc_url="/redoc" if not settings.is_production else None,
    lifespan=lifespan
)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["Location", "X-Process-Time", "X-Request-ID"]
)

app.add_middleware(LoggingMiddleware)


@app.exception_handler(RecipeServiceError)
async def recipe_service_exception_handler(request: Request, exc: RecipeServiceError):
    """Map service errors to their HTTP status"""
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "Recipe request rejected",
        error=exc.error,
        message=exc.message,
        status_code=exc.status_code,
        path=request.url.path,
        method=request.method
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed or constraint-violating payloads as 400"""
    error = RecipeValidationError(validation_error_details(exc.errors()))
    return await recipe_service_exception_handler(request, error)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(
        "Unhandled exception",
        exception=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        method=request.method
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": "An unexpected error occurred",
            "request_id": get_request_id() or None
        }
    )


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": settings.APP_NAME,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT
    }


app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(api_router, prefix=settings.API_PREFIX)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development,
        log_config=None  # Use structlog instead
    )
