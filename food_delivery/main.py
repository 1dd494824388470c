"""
Food Delivery API - FastAPI Backend Application
"""

import logging
import sys
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from food_delivery import __version__, database
from food_delivery.config import settings
from food_delivery.api import addresses, auth, cart, orders, payments, restaurants, reviews
from food_delivery.api.errors import register_exception_handlers


def configure_logging() -> None:
    """Configure structured logging on top of stdlib logging"""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("Starting Food Delivery API", version=__version__)
    database.init_db(settings.database_url, echo=settings.db_echo)
    if settings.auto_create_schema:
        await database.create_schema()
    yield
    await database.close_db()
    logger.info("Shutting down Food Delivery API")


# Create FastAPI application
app = FastAPI(
    title="Food Delivery API",
    description="Restaurant browsing, cart, checkout, payments and reviews",
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


# Health check endpoints
@app.get("/health")
async def health():
    """Basic health check"""
    return {"status": "healthy", "service": "api", "version": __version__}


@app.get("/health/ready")
async def ready():
    """Readiness check with dependency verification"""
    checks = {}

    # Check database
    if database.SessionLocal is None:
        checks["database"] = "failed: not initialized"
    else:
        try:
            async with database.SessionLocal() as db:
                await db.execute(text("SELECT 1"))
            checks["database"] = "ok"
        except Exception as e:
            logger.warning("Readiness check failed", check="database", error=str(e))
            checks["database"] = f"failed: {type(e).__name__}"

    all_ok = all(v == "ok" for v in checks.values())

    return {
        "status": "ready" if all_ok else "not_ready",
        "checks": checks,
    }


# Include API routers
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(restaurants.router, prefix="/restaurants", tags=["Restaurants"])
app.include_router(cart.router, prefix="/cart", tags=["Cart"])
app.include_router(orders.router, prefix="/orders", tags=["Orders"])
app.include_router(addresses.router, prefix="/addresses", tags=["Addresses"])
app.include_router(payments.router, prefix="/payments", tags=["Payments"])
app.include_router(reviews.router, prefix="/reviews", tags=["Reviews"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "food_delivery.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
