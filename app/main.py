from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.api.v1.api import api_router
from app.api.v1.responses import register_error_handlers
from app.core.config import get_settings, Settings
from app.core.context import build_context
from app.core.metrics import instrument_app
from app.core.logging import get_logger, set_log_level
from app.utils.clock import Clock, utcnow
from app.utils.decorators import log_request

logger = get_logger(__name__)


def create_app(settings: Settings | None = None, clock: Clock = utcnow) -> FastAPI:
    """
    Builds the application. The database connection and schema are set up
    here, so a StoreConnectionError stops the process before it serves traffic.

    Serve with: uvicorn app.main:create_app --factory
    """
    settings = settings or get_settings()
    set_log_level(settings.LOG_LEVEL)

    context = build_context(settings, clock=clock)

    app = FastAPI(title="Customer Service API")
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True, # Allows cookies to be included in requests
        allow_methods=["*"],    # Allows all methods (GET, POST, PUT, etc.)
        allow_headers=["*"],    # Allows all headers
    )

    register_error_handlers(app)

    if settings.ENABLE_METRICS:
        # Instrument the app with Prometheus metrics
        instrument_app(app)

    app.include_router(api_router, prefix="/api")

    @app.on_event("startup")
    async def startup_event():
        logger.info("Application startup")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Application shutdown")
        context.close()

    @app.get("/")
    @log_request
    async def read_root():
        return {"message": "Welcome to the Customer Service API"}

    return app
