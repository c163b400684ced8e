"""
Isuumo - Estate Search Service
Main FastAPI application for estate search, nazotte search and recommendation
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from datetime import datetime
import asyncpg
import logging

from .config import settings
from .api import chairs_router, estates_router, initialize_router
from .domain.exceptions import SearchError
from .infrastructure.conditions import load_estate_search_condition
from .infrastructure.database.connection import db_connection

# Configure logging
logging.basicConfig(
    level=logging.INFO if not settings.DEBUG else logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    # Startup
    logger.info("Starting Estate Search Service...")
    app.state.estate_search_condition = load_estate_search_condition(settings.ESTATE_CONDITION_PATH)
    await db_connection.connect()
    logger.info(f"{settings.APP_NAME} v{settings.APP_VERSION} started on port {settings.PORT}")

    yield

    # Shutdown
    logger.info("Shutting down Estate Search Service...")
    await db_connection.disconnect()


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Estate search service with range, nazotte and chair-fit search",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)


@app.exception_handler(SearchError)
async def search_error_handler(request: Request, exc: SearchError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info(f"{request.method} {request.url.path} invalid request: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "invalid request"},
    )


@app.exception_handler(asyncpg.PostgresError)
@app.exception_handler(asyncpg.InterfaceError)
@app.exception_handler(OSError)
async def storage_error_handler(request: Request, exc: Exception):
    logger.error(f"Database execution error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "internal server error"},
    )


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat()
    }


app.include_router(initialize_router)
app.include_router(estates_router)
app.include_router(chairs_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("isuumo_service.main:app", host=settings.HOST, port=settings.PORT)
