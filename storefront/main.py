from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from contextlib import asynccontextmanager
import logging

import uvicorn

from storefront import __version__
from storefront.config import settings
from storefront.db.database import Database
from storefront.api import products, categories, health

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting Storefront API...")
    db = Database(settings.database_url)
    try:
        ready = await db.wait_until_ready(
            max_retries=settings.db_connect_retries,
            retry_delay=settings.db_retry_delay
        )
        if not ready:
            raise RuntimeError(f"Database at {db.display_url} was never reached")
    except Exception:
        db.dispose()
        raise
    app.state.db = db
    logger.info("Storefront API started successfully")
    yield
    # Shutdown
    logger.info("Shutting down Storefront API...")
    db.dispose()


app = FastAPI(
    title="Storefront API",
    description="""
    Product and category records for the storefront frontend.

    **Features:**
    - Category listing with embedded products
    - Category and product CRUD
    """,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# CORS middleware - answers preflights itself, including for unknown paths
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=settings.cors_allow_methods,
    allow_headers=["*"],
)


# Global exception handler for unhandled exceptions
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch all unhandled exceptions and log them properly"""
    logger.error(
        f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
        exc_info=exc,
        extra={
            "path": request.url.path,
            "method": request.method,
        }
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error",
            "error_type": type(exc).__name__,
            "message": str(exc)
        }
    )


# Validation error handler (type coercion failures and malformed JSON bodies)
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors"""
    logger.warning(
        f"Validation error: {exc.errors()}",
        extra={
            "path": request.url.path,
            "method": request.method,
        }
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_encoder(exc.errors())}
    )


# Include routers
app.include_router(health.router)
app.include_router(products.router, prefix="/api")
app.include_router(categories.router, prefix="/api")


@app.get("/")
async def root():
    return {"service": settings.app_name, "version": __version__}


def run():
    """Console entry point: serve the app with uvicorn"""
    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
