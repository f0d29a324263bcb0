from .gateway import APIGateway
from .routers import documents, folders
from .routers.dependencies import initialize_database, initialize_services, shutdown_services
from .core.config import DATABASE_TYPE, ENVIRONMENT, OWNER_HEADER, RATE_LIMIT_ENABLED, RATE_LIMIT_PER_MINUTE
from .core.logging_config import setup_logging, get_logger

# Initialize logging
setup_logging()
logger = get_logger(__name__)

gateway = APIGateway(
    title="FolderVault API",
    description="Per-user folder hierarchy with ownership checks, cascading deletes and tree views",
    version="1.0.0"
)

# Setup middleware (CORS, rate limiting, logging, error handling)
gateway.setup_middleware()

gateway.register_router(folders.router, prefix="/api/v1", tags=["Folders"])
gateway.register_router(documents.router, prefix="/api/v1", tags=["Documents"])

gateway.register_health_endpoints()

app = gateway.get_app()


@app.on_event("startup")
async def startup_event():
    """Initialize application on startup."""
    logger.info("=" * 60)
    logger.info("Starting FolderVault Backend...")
    logger.info("=" * 60)

    logger.info(f"  → Environment: {ENVIRONMENT}")
    logger.info(f"  → Database Backend: {DATABASE_TYPE.upper()}")
    logger.info(f"  → Owner Header: {OWNER_HEADER}")
    logger.info(f"  → Rate Limiting: {RATE_LIMIT_PER_MINUTE}/minute" if RATE_LIMIT_ENABLED else "  → Rate Limiting: disabled")

    await initialize_database()
    await initialize_services()

    logger.info("✅ FolderVault Backend initialized successfully")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    logger.info("Shutting down FolderVault Backend...")
    await shutdown_services()
    logger.info("FolderVault Backend shutdown complete")
