"""
Data Transfer Objects (DTOs) for API layer.
Separates API contracts from domain entities.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class FolderCreateDTO(BaseModel):
    """Request body for creating a folder."""
    name: str
    parent_folder_id: Optional[int] = None


class FolderUpdateDTO(BaseModel):
    """Request body for renaming/reparenting a folder. A null parent makes it a root folder."""
    name: str
    parent_folder_id: Optional[int] = None


class DocumentCreateDTO(BaseModel):
    """Request body for creating a document."""
    title: str
    content: str = ""
    content_type: str = "text/plain"
    folder_id: Optional[int] = None


class DocumentUpdateDTO(BaseModel):
    """Request body for updating a document. A folder_id of 0 or null leaves it unfiled."""
    title: str
    content: str = ""
    content_type: str = "text/plain"
    folder_id: Optional[int] = 0


class FolderDTO(BaseModel):
    """Folder DTO for API responses, children expanded recursively."""
    folder_id: int
    name: str
    created_date: datetime
    parent_folder_id: Optional[int]
    children_folders: List["FolderDTO"] = Field(default_factory=list)


class DocumentDTO(BaseModel):
    """Document DTO for listings."""
    document_id: int
    title: str
    content: str
    content_type: str
    created_date: datetime


class DocumentDetailDTO(DocumentDTO):
    """Document DTO including its folder assignment (0 when unfiled) and version."""
    folder_id: int
    version: int


class DocumentResponseDTO(BaseModel):
    """A document together with its folder."""
    folder: Optional[FolderDTO]
    document: DocumentDetailDTO


class FolderDetailDTO(BaseModel):
    """Folder with its direct child folders and documents."""
    folder_id: int
    name: str
    created_date: datetime
    parent_folder_id: Optional[int]
    documents: List[DocumentDTO]
    children_folders: List[FolderDTO]


FolderDTO.model_rebuild()
