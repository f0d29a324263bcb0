"""
Mappers between domain entities and DTOs.
Separates domain layer from API layer.
"""
from typing import List, Optional

from ..domain.entities import (
    Document,
    DocumentSummary,
    DocumentWithFolder,
    Folder,
    FolderDetail,
    TreeNode,
)
from .dto import DocumentDetailDTO, DocumentDTO, DocumentResponseDTO, FolderDetailDTO, FolderDTO


class FolderMapper:
    """Maps between folder projections and folder DTOs."""

    @staticmethod
    def to_dto(node: TreeNode) -> FolderDTO:
        """Convert a tree node, with all of its children, to a DTO."""
        return FolderDTO(
            folder_id=node.id,
            name=node.name,
            created_date=node.created_date,
            parent_folder_id=node.parent_folder_id,
            children_folders=[FolderMapper.to_dto(child) for child in node.children]
        )

    @staticmethod
    def entity_to_dto(folder: Folder) -> FolderDTO:
        """Convert a folder entity to a DTO without children."""
        return FolderDTO(
            folder_id=folder.id,
            name=folder.name,
            created_date=folder.created_date,
            parent_folder_id=folder.parent_folder_id
        )

    @staticmethod
    def to_dto_list(nodes: List[TreeNode]) -> List[FolderDTO]:
        return [FolderMapper.to_dto(node) for node in nodes]

    @staticmethod
    def detail_to_dto(detail: FolderDetail) -> FolderDetailDTO:
        return FolderDetailDTO(
            folder_id=detail.id,
            name=detail.name,
            created_date=detail.created_date,
            parent_folder_id=detail.parent_folder_id,
            documents=[DocumentMapper.summary_to_dto(summary) for summary in detail.documents],
            children_folders=[FolderMapper.to_dto(child) for child in detail.children]
        )


class DocumentMapper:
    """Maps between Document entity and document DTOs."""

    @staticmethod
    def to_dto(document: Document) -> DocumentDTO:
        return DocumentDTO(
            document_id=document.id,
            title=document.title,
            content=document.content,
            content_type=document.content_type,
            created_date=document.created_date
        )

    @staticmethod
    def to_dto_list(documents: List[Document]) -> List[DocumentDTO]:
        """Convert list of entities to DTOs."""
        return [DocumentMapper.to_dto(doc) for doc in documents]

    @staticmethod
    def summary_to_dto(summary: DocumentSummary) -> DocumentDTO:
        return DocumentDTO(
            document_id=summary.id,
            title=summary.title,
            content=summary.content,
            content_type=summary.content_type,
            created_date=summary.created_date
        )

    @staticmethod
    def to_response_dto(result: DocumentWithFolder) -> DocumentResponseDTO:
        document = result.document
        folder: Optional[FolderDTO] = FolderMapper.to_dto(result.folder) if result.folder else None
        return DocumentResponseDTO(
            folder=folder,
            document=DocumentDetailDTO(
                document_id=document.id,
                title=document.title,
                content=document.content,
                content_type=document.content_type,
                created_date=document.created_date,
                folder_id=document.folder_id or 0,
                version=document.version
            )
        )
