"""
Service Interfaces Module - Define contracts for business logic services.

This module provides interfaces following the Interface Segregation Principle.
Each interface is in its own file for better organization and maintainability.
"""
from .idocument_service import IDocumentService
from .ifolder_service import IFolderService

__all__ = [
    "IDocumentService",
    "IFolderService",
]
