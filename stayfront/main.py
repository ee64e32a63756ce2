"""
Stayfront - Main Application Entry Point

Front-end tier of the vacation-rental marketplace:
- Search, listing detail and booking pages over the marketplace REST API
- Per-browser session with the auth token kept in memory or Redis
- Structured logging with request correlation
- Prometheus metrics for outbound API calls and booking outcomes
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from stayfront.core.config import get_settings
from stayfront.core.errors import StayfrontError, Unauthorized
from stayfront.core.logging import setup_logging, get_logger
from stayfront.core.metrics import metrics_endpoint
from stayfront.api.router import page_router
from stayfront.api.middleware import RequestLoggingMiddleware
from stayfront.infrastructure.redis_client import close_redis
from stayfront.services.api_client import ApiClient
from stayfront.services.cache_service import get_cache_stats
from stayfront.services.store_factory import get_token_store

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        api_url=settings.API_URL,
    )

    app.state.api_client = ApiClient.from_settings()
    store = await get_token_store()
    logger.info("token_store_ready", store=type(store).__name__)

    yield

    await app.state.api_client.close()
    await close_redis()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Vacation-rental marketplace front-end",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Custom middleware
app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(Unauthorized)
async def unauthorized_handler(request: Request, exc: Unauthorized):
    """Lost or missing session: send the browser to the login page."""
    logger.info("redirect_to_login", path=request.url.path)
    return RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)


@app.exception_handler(StayfrontError)
async def stayfront_error_handler(request: Request, exc: StayfrontError):
    logger.warning("page_error", error=exc.message, error_type=type(exc).__name__)
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for Docker and load balancers."""
    cache_stats = await get_cache_stats()
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "cache": cache_stats,
    }


@app.get("/metrics", tags=["Health"], include_in_schema=False)
async def metrics():
    return metrics_endpoint()


# Pages
app.include_router(page_router)
