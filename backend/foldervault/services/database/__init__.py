"""
Database abstraction layer for plug-and-play database support.
Supports Memory (in-memory) and JSON (file-based) database backends.
"""
from .base import (
    DOCUMENTS,
    FOLDERS,
    DatabaseInterface,
    IntegrityViolation,
    StoreError,
    StoreSession,
    VersionConflict,
)
from .memory_adapter import MemoryAdapter
from .json_adapter import JSONAdapter
from .factory import DatabaseFactory

__all__ = [
    "DOCUMENTS",
    "FOLDERS",
    "DatabaseInterface",
    "IntegrityViolation",
    "StoreError",
    "StoreSession",
    "VersionConflict",
    "MemoryAdapter",
    "JSONAdapter",
    "DatabaseFactory",
]
