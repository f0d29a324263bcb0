"""
Abstract base classes for database adapters.
All database implementations must inherit from these classes.

Records are plain dicts with an integer "id" and "version". Every read and
write goes through a StoreSession obtained from DatabaseInterface.transaction();
staged writes become visible atomically when the transaction commits and are
discarded if the transaction body raises.
"""
from abc import ABC, abstractmethod
from typing import Any, AsyncContextManager, Awaitable, Callable, Dict, Iterable, List, Optional, TypeVar

from ...core.logging_config import get_logger

logger = get_logger(__name__)

FOLDERS = "folders"
DOCUMENTS = "documents"
TABLES = (FOLDERS, DOCUMENTS)

T = TypeVar("T")


class StoreError(Exception):
    """Raised for any store-level failure."""
    pass


class VersionConflict(StoreError):
    """Raised when a row's version no longer matches the expected version."""
    pass


class IntegrityViolation(StoreError):
    """Raised when a commit would leave a dangling folder reference."""
    pass


class StoreSession(ABC):
    """
    Transaction-scoped handle to the store.
    A session is only valid inside the transaction that produced it.
    """

    @abstractmethod
    async def get(self, table: str, record_id: int) -> Optional[Dict]:
        """Point lookup by id."""
        pass

    @abstractmethod
    async def get_many(self, table: str, **filters: Any) -> List[Dict]:
        """Get all records whose fields equal the given filters, ordered by id."""
        pass

    @abstractmethod
    async def insert(self, table: str, record: Dict) -> Dict:
        """Insert a record; the store assigns "id" and the initial "version"."""
        pass

    @abstractmethod
    async def update_with_version_check(self, table: str, record: Dict, expected_version: int) -> Dict:
        """
        Replace a record if its stored version equals expected_version.

        Returns:
            The stored record with its incremented version

        Raises:
            VersionConflict: If the record is gone or its version moved on
        """
        pass

    @abstractmethod
    async def delete_many(self, table: str, ids: Iterable[int]) -> int:
        """Delete records by id and return how many existed."""
        pass


class DatabaseInterface(ABC):
    """
    Abstract interface for the transactional entity store.
    This allows plug-and-play database support without changing business logic.
    """

    @abstractmethod
    def transaction(self) -> AsyncContextManager[StoreSession]:
        """Open a transaction; it commits when the block exits without error."""
        pass

    async def run_in_transaction(self, fn: Callable[[StoreSession], Awaitable[T]]) -> T:
        """Run fn with a fresh session and commit its writes atomically."""
        async with self.transaction() as session:
            return await fn(session)

    @abstractmethod
    async def initialize(self):
        """Initialize database (create tables/collections, indexes, etc.)."""
        pass

    @abstractmethod
    async def close(self):
        """Close database connection."""
        pass
