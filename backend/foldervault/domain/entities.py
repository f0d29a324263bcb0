"""
Domain entities - Core business objects.
These represent the business concepts, not database models.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from .value_objects import DocumentId, FolderId, OwnerId, Version, INITIAL_VERSION


@dataclass
class Folder:
    """
    Folder entity - a node of an owner's folder forest.
    A folder without a parent is a root folder.
    """
    owner_id: OwnerId
    name: str
    created_date: datetime
    parent_folder_id: Optional[FolderId] = None
    id: Optional[FolderId] = None
    version: Version = INITIAL_VERSION

    def is_owned_by(self, owner_id: OwnerId) -> bool:
        return self.owner_id == owner_id


@dataclass
class Document:
    """
    Document entity - represents a document in the domain.
    A document without a folder is unfiled.
    """
    owner_id: OwnerId
    title: str
    content: str
    content_type: str
    created_date: datetime
    folder_id: Optional[FolderId] = None
    id: Optional[DocumentId] = None
    version: Version = INITIAL_VERSION

    def is_unfiled(self) -> bool:
        """Check if document is not filed under any folder."""
        return self.folder_id is None

    def is_owned_by(self, owner_id: OwnerId) -> bool:
        return self.owner_id == owner_id


@dataclass
class TreeNode:
    """Read-only projection of a folder and its child folders."""
    id: FolderId
    name: str
    created_date: datetime
    parent_folder_id: Optional[FolderId]
    children: List["TreeNode"] = field(default_factory=list)


@dataclass
class DocumentSummary:
    """Document payload as listed inside a folder detail view."""
    id: DocumentId
    title: str
    content: str
    content_type: str
    created_date: datetime


@dataclass
class FolderDetail:
    """Shallow projection of a folder with its direct children and documents."""
    id: FolderId
    name: str
    created_date: datetime
    parent_folder_id: Optional[FolderId]
    children: List[TreeNode] = field(default_factory=list)
    documents: List[DocumentSummary] = field(default_factory=list)


@dataclass
class DocumentWithFolder:
    """A document together with the shallow projection of its folder, if any."""
    document: Document
    folder: Optional[TreeNode] = None
