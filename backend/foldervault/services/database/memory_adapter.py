"""
In-memory adapter implementing DatabaseInterface.
Perfect for demos and testing - stores all data in memory using Python dicts.
Data is lost on restart (on-demand, no persistence).
"""
import asyncio
import copy
from contextlib import asynccontextmanager
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from .base import (
    DOCUMENTS,
    FOLDERS,
    TABLES,
    DatabaseInterface,
    IntegrityViolation,
    StoreError,
    StoreSession,
    VersionConflict,
)
from ...core.logging_config import get_logger

logger = get_logger(__name__)

Tables = Dict[str, Dict[int, Dict]]


class MemorySession(StoreSession):
    """
    Session that stages writes until its transaction commits.
    Reads see the rows committed when the transaction opened, overlaid with
    this session's own staged writes.
    """

    def __init__(self, adapter: "MemoryAdapter"):
        self._adapter = adapter
        # Commits swap in new table dicts, so this stays the state seen at open
        self._committed: Tables = adapter._tables
        self._inserts: Tables = {table: {} for table in TABLES}
        # id -> (record, version the commit must still find)
        self._updates: Dict[str, Dict[int, Tuple[Dict, int]]] = {table: {} for table in TABLES}
        self._deletes: Dict[str, Set[int]] = {table: set() for table in TABLES}
        self.closed = False

    def _check_open(self, table: str) -> None:
        if self.closed:
            raise StoreError("Session used outside of its transaction")
        if table not in TABLES:
            raise StoreError(f"Unknown table: {table}")

    def _visible(self, table: str, record_id: int) -> Optional[Dict]:
        if record_id in self._deletes[table]:
            return None
        if record_id in self._inserts[table]:
            return self._inserts[table][record_id]
        if record_id in self._updates[table]:
            return self._updates[table][record_id][0]
        return self._committed[table].get(record_id)

    async def get(self, table: str, record_id: int) -> Optional[Dict]:
        self._check_open(table)
        record = self._visible(table, record_id)
        return copy.deepcopy(record) if record else None

    async def get_many(self, table: str, **filters: Any) -> List[Dict]:
        self._check_open(table)
        ids = set(self._committed[table]) | set(self._inserts[table])
        results = []
        for record_id in sorted(ids):
            record = self._visible(table, record_id)
            if record is None:
                continue
            if all(record.get(key) == value for key, value in filters.items()):
                results.append(copy.deepcopy(record))
        return results

    async def insert(self, table: str, record: Dict) -> Dict:
        self._check_open(table)
        stored = copy.deepcopy(record)
        stored["id"] = self._adapter._next_id(table)
        stored["version"] = 1
        self._inserts[table][stored["id"]] = stored
        return copy.deepcopy(stored)

    async def update_with_version_check(self, table: str, record: Dict, expected_version: int) -> Dict:
        self._check_open(table)
        record_id = record["id"]
        current = self._visible(table, record_id)
        if current is None or current["version"] != expected_version:
            raise VersionConflict(
                f"{table} row {record_id} does not match version {expected_version}"
            )

        stored = copy.deepcopy(record)
        stored["version"] = expected_version + 1
        if record_id in self._inserts[table]:
            self._inserts[table][record_id] = stored
        elif record_id in self._updates[table]:
            # Keep the version the committed row must still have
            self._updates[table][record_id] = (stored, self._updates[table][record_id][1])
        else:
            self._updates[table][record_id] = (stored, expected_version)
        return copy.deepcopy(stored)

    async def delete_many(self, table: str, ids: Iterable[int]) -> int:
        self._check_open(table)
        deleted = 0
        for record_id in ids:
            if self._visible(table, record_id) is None:
                continue
            self._deletes[table].add(record_id)
            self._inserts[table].pop(record_id, None)
            self._updates[table].pop(record_id, None)
            deleted += 1
        return deleted

    def has_writes(self) -> bool:
        return any(self._inserts[t] or self._updates[t] or self._deletes[t] for t in TABLES)


class MemoryAdapter(DatabaseInterface):
    """
    In-memory database adapter using Python dictionaries.
    Stores all data in memory - perfect for demos and testing.
    Data is lost when the application restarts.

    Commits check row versions, folder references and folder acyclicity before
    any staged write becomes visible, so a commit applies completely or not at all.
    """

    def __init__(self):
        """
        Initialize in-memory adapter.
        Creates empty tables for documents and folders.
        """
        self._tables: Tables = {table: {} for table in TABLES}
        self._sequences: Dict[str, int] = {table: 0 for table in TABLES}
        self._commit_lock = asyncio.Lock()

    async def initialize(self):
        """Initialize database (no-op for in-memory, but required by interface)."""
        # Clear any existing data (useful for testing)
        for table in TABLES:
            self._tables[table].clear()
            self._sequences[table] = 0

    async def close(self):
        """Close database connection (no-op for in-memory)."""
        pass

    def _next_id(self, table: str) -> int:
        # Ids are never reused, even when the inserting transaction rolls back
        self._sequences[table] += 1
        return self._sequences[table]

    @asynccontextmanager
    async def transaction(self):
        session = MemorySession(self)
        try:
            yield session
            if session.has_writes():
                await self._commit(session)
        finally:
            session.closed = True

    async def _commit(self, session: MemorySession):
        async with self._commit_lock:
            staged: Tables = {table: dict(self._tables[table]) for table in TABLES}

            for table in TABLES:
                for record_id, (record, expected_version) in session._updates[table].items():
                    current = self._tables[table].get(record_id)
                    if current is None or current["version"] != expected_version:
                        raise VersionConflict(
                            f"{table} row {record_id} changed since it was read"
                        )
                    staged[table][record_id] = record
                for record_id in session._deletes[table]:
                    staged[table].pop(record_id, None)
                staged[table].update(session._inserts[table])

            self._check_integrity(staged)
            await self._persist(staged)
            self._tables = staged

    @staticmethod
    def _check_integrity(tables: Tables):
        folders = tables[FOLDERS]
        for folder in folders.values():
            parent_id = folder.get("parent_folder_id")
            if parent_id is not None and parent_id not in folders:
                raise IntegrityViolation(
                    f"Folder {folder['id']} references missing parent folder {parent_id}"
                )

        # Every parent chain must end at a root
        acyclic: Set[int] = set()
        for folder_id in folders:
            chain: List[int] = []
            on_chain: Set[int] = set()
            current_id = folder_id
            while current_id is not None and current_id not in acyclic:
                if current_id in on_chain:
                    raise IntegrityViolation(
                        f"Folder {current_id} would become its own ancestor"
                    )
                chain.append(current_id)
                on_chain.add(current_id)
                current_id = folders[current_id].get("parent_folder_id")
            acyclic.update(chain)

        for document in tables[DOCUMENTS].values():
            folder_id = document.get("folder_id")
            if folder_id is not None and folder_id not in folders:
                raise IntegrityViolation(
                    f"Document {document['id']} references missing folder {folder_id}"
                )

    async def _persist(self, tables: Tables):
        """Hook for adapters that write committed state somewhere durable."""
        pass
