"""
Database Factory for creating database adapters.
Implements Factory Pattern for plug-and-play database support.
"""
from pathlib import Path
from typing import Optional

from .base import DatabaseInterface
from .memory_adapter import MemoryAdapter
from .json_adapter import JSONAdapter
from ...core.config import DATABASE_TYPE
from ...core.logging_config import get_logger

logger = get_logger(__name__)


class DatabaseFactory:
    """
    Factory for creating database adapters.
    Supports Memory (in-memory) and JSON (file-based) database backends.
    """

    @staticmethod
    def create(database_type: Optional[str] = None, **kwargs) -> DatabaseInterface:
        """
        Create a database adapter instance.

        Args:
            database_type: Type of database ('memory', 'json', or None for configured default)
            **kwargs: Additional arguments for specific database adapters

        Returns:
            DatabaseInterface instance

        Examples:
            # Memory (in-memory, non-persistent)
            db = DatabaseFactory.create('memory')

            # JSON (file-based, persistent)
            db = DatabaseFactory.create('json', data_dir=Path('data/json_db'))
        """
        database_type = (database_type or DATABASE_TYPE).lower()

        if database_type == "memory":
            return DatabaseFactory._create_memory(**kwargs)
        elif database_type == "json":
            return DatabaseFactory._create_json(**kwargs)
        else:
            raise ValueError(
                f"Unsupported database type: {database_type}. "
                f"Supported types: 'memory', 'json'"
            )

    @staticmethod
    def _create_memory(**kwargs) -> MemoryAdapter:
        """Create in-memory adapter (for demos and testing)."""
        return MemoryAdapter()

    @staticmethod
    def _create_json(**kwargs) -> JSONAdapter:
        """Create JSON file-based adapter."""
        data_dir = kwargs.get("data_dir")
        if data_dir:
            data_dir = Path(data_dir) if isinstance(data_dir, str) else data_dir
        return JSONAdapter(data_dir=data_dir)

    @staticmethod
    async def create_and_initialize(database_type: Optional[str] = None, **kwargs) -> DatabaseInterface:
        """
        Create database adapter and initialize it.

        Args:
            database_type: Type of database
            **kwargs: Additional arguments

        Returns:
            Initialized DatabaseInterface instance
        """
        db = DatabaseFactory.create(database_type, **kwargs)
        await db.initialize()
        logger.info(f"Database initialized: {type(db).__name__}")
        return db
