"""
JSON file-based adapter implementing DatabaseInterface.
Perfect for local demos - stores all data in JSON files for persistence.
Data persists between restarts, no database setup needed.
"""
import asyncio
import json
import os
from pathlib import Path
from threading import Lock
from typing import Dict, Optional

from .base import TABLES
from .memory_adapter import MemoryAdapter, Tables
from ...core.config import BASE_DIR
from ...core.logging_config import get_logger

logger = get_logger(__name__)


class JSONAdapter(MemoryAdapter):
    """
    JSON file-based database adapter.
    Keeps committed state in memory and rewrites the JSON files on every commit.
    A commit whose files cannot be written fails and leaves the in-memory state untouched.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        """
        Initialize JSON adapter.

        Args:
            data_dir: Directory to store JSON files (defaults to backend/data/json_db)
        """
        super().__init__()
        if data_dir is None:
            data_dir = BASE_DIR / "data" / "json_db"

        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self.sequences_file = self.data_dir / "sequences.json"

        # Lock for thread-safe file operations
        self._file_lock = Lock()

    def _table_file(self, table: str) -> Path:
        return self.data_dir / f"{table}.json"

    async def initialize(self):
        """Initialize database - load data from JSON files."""
        await super().initialize()
        self._load_data()

    async def close(self):
        """Close database - save data to JSON files."""
        await self._persist(self._tables)

    def _load_data(self):
        """Load data from JSON files into memory."""
        for table in TABLES:
            path = self._table_file(table)
            if not path.exists():
                continue
            with open(path, 'r', encoding='utf-8') as f:
                rows = json.load(f)
            # JSON object keys are strings
            self._tables[table] = {int(record_id): row for record_id, row in rows.items()}

        if self.sequences_file.exists():
            with open(self.sequences_file, 'r', encoding='utf-8') as f:
                self._sequences.update(json.load(f))

        for table in TABLES:
            highest = max(self._tables[table], default=0)
            self._sequences[table] = max(self._sequences[table], highest)

        logger.info(
            f"Loaded JSON database from {self.data_dir}: "
            f"{len(self._tables['folders'])} folders, {len(self._tables['documents'])} documents"
        )

    async def _persist(self, tables: Tables):
        """Save the given state to JSON files."""
        snapshot: Dict[str, Dict] = {
            table: {str(record_id): row for record_id, row in tables[table].items()}
            for table in TABLES
        }
        sequences = dict(self._sequences)

        def _save():
            with self._file_lock:
                for table, rows in snapshot.items():
                    self._write_atomically(self._table_file(table), rows)
                self._write_atomically(self.sequences_file, sequences)

        # Run in executor to avoid blocking
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, _save)

    @staticmethod
    def _write_atomically(path: Path, data: Dict):
        tmp_path = path.with_suffix(".json.tmp")
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, path)
