"""
Shared dependencies for routers.
Provides database and service initialization, and resolution of the calling owner.

Authentication happens upstream; the gateway in front of this service puts the
authenticated user's id in the owner header.
"""
from pathlib import Path
from typing import Optional

from fastapi import Header, HTTPException, Request, status

from ..services.database import DatabaseFactory, DatabaseInterface
from ..services.document_service import DocumentService
from ..services.folder_service import FolderService
from ..services.interfaces import IDocumentService, IFolderService
from ..core.config import DATABASE_TYPE, JSON_DB_PATH, OWNER_HEADER
from ..core.logging_config import get_logger

logger = get_logger(__name__)

# Global services (initialized on startup)
db_service: Optional[DatabaseInterface] = None
folder_service: Optional[IFolderService] = None
document_service: Optional[IDocumentService] = None


async def initialize_database():
    """Initialize database adapter based on configuration."""
    global db_service

    logger.info(f"Initializing database: {DATABASE_TYPE}")

    if DATABASE_TYPE.lower() == "json":
        data_dir = Path(JSON_DB_PATH) if JSON_DB_PATH else None
        logger.info("  → Database Type: JSON (file-based)")
        logger.debug(f"  → Database Path: {data_dir}")
        db_service = await DatabaseFactory.create_and_initialize("json", data_dir=data_dir)
    elif DATABASE_TYPE.lower() == "memory":
        logger.info("  → Database Type: Memory (in-memory, non-persistent)")
        db_service = await DatabaseFactory.create_and_initialize("memory")
    else:
        raise ValueError(f"Unsupported DATABASE_TYPE: {DATABASE_TYPE}. Supported types: 'memory', 'json'")


async def initialize_services():
    """Initialize folder and document services after database is ready."""
    global folder_service, document_service

    if db_service is None:
        await initialize_database()

    folder_service = FolderService(db_service)
    document_service = DocumentService(db_service)
    logger.info("✅ Folder and document services initialized")


async def shutdown_services():
    """Close the database and drop service references."""
    global db_service, folder_service, document_service

    if db_service is not None:
        await db_service.close()
    db_service = None
    folder_service = None
    document_service = None


def get_db_service() -> DatabaseInterface:
    """Get database service (dependency injection)."""
    if db_service is None:
        raise RuntimeError("Database service not initialized")
    return db_service


def get_folder_service() -> IFolderService:
    """Get folder service (dependency injection)."""
    if folder_service is None:
        raise RuntimeError("Folder service not initialized")
    return folder_service


def get_document_service() -> IDocumentService:
    """Get document service (dependency injection)."""
    if document_service is None:
        raise RuntimeError("Document service not initialized")
    return document_service


def get_owner_id(request: Request) -> int:
    """Resolve the calling owner from the owner header."""
    raw_owner = request.headers.get(OWNER_HEADER)
    try:
        return int(raw_owner)
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing or invalid {OWNER_HEADER} header"
        )


def get_expected_version(if_match: Optional[str] = Header(None)) -> Optional[int]:
    """Parse an optional If-Match header carrying the version the client last saw."""
    if if_match is None:
        return None
    try:
        return int(if_match.strip().strip('"'))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="If-Match must be an integer version"
        )
