"""
FastAPI application initialization
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from api.routes import health, parcels, payments, tracking, users, riders
from api.errors import register_exception_handlers
from api.middleware import RequestContextMiddleware
from core.config import Settings, settings as default_settings
from core.database import create_engine_from_settings, create_session_maker, create_tables
from core.logging import setup_logging
from core.security import IdentityProvider
from services.gateway import PaymentGateway
import logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the shared engine once; every request borrows sessions from it"""
    settings: Settings = app.state.settings
    setup_logging(settings)

    logger.info("Starting Parcel Marketplace API")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Database: {settings.DATABASE_URL.split('@')[1] if '@' in settings.DATABASE_URL else 'configured'}")

    engine = create_engine_from_settings(settings)
    app.state.session_maker = create_session_maker(engine)
    if settings.AUTO_CREATE_TABLES:
        await create_tables(engine)

    yield

    logger.info("Shutting down Parcel Marketplace API")
    await engine.dispose()


def create_app(settings: Settings = default_settings) -> FastAPI:
    app = FastAPI(
        title="Parcel Marketplace API",
        description="Parcels, payments, tracking, riders and user roles for a delivery marketplace",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.identity_provider = IdentityProvider.from_settings(settings)
    app.state.payment_gateway = PaymentGateway.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(parcels.router)
    app.include_router(payments.router)
    app.include_router(tracking.router)
    app.include_router(users.router)
    app.include_router(riders.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=default_settings.API_HOST,
        port=default_settings.API_PORT
    )
