"""
Documents Router - Handles document CRUD operations.

Architecture:
- Router handles HTTP request/response only
- Business logic delegated to DocumentService

Example Usage:
    GET /documents - List the caller's documents
    GET /documents/{document_id} - Get document with its folder
    POST /documents - Create document
    PUT /documents/{document_id} - Replace document payload and folder
    DELETE /documents/{document_id} - Delete document
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from .dependencies import get_document_service, get_expected_version, get_owner_id
from ..api.dto import DocumentCreateDTO, DocumentDTO, DocumentResponseDTO, DocumentUpdateDTO
from ..api.mappers import DocumentMapper
from ..services.interfaces import IDocumentService
from ..core.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/documents", response_model=List[DocumentDTO])
async def get_documents(
    owner_id: int = Depends(get_owner_id),
    document_service: IDocumentService = Depends(get_document_service)
):
    """Get every document of the caller, filed or not."""
    documents = await document_service.list_documents(owner_id)
    return DocumentMapper.to_dto_list(documents)


@router.get("/documents/{document_id}", response_model=DocumentResponseDTO)
async def get_document(
    document_id: int,
    owner_id: int = Depends(get_owner_id),
    document_service: IDocumentService = Depends(get_document_service)
):
    """
    Get a document together with its folder.

    Status Codes:
        200: Success
        404: Document not found or owned by another user
    """
    result = await document_service.get_document(document_id, owner_id)
    return DocumentMapper.to_response_dto(result)


@router.post("/documents", response_model=DocumentResponseDTO, status_code=status.HTTP_201_CREATED)
async def create_document(
    body: DocumentCreateDTO,
    owner_id: int = Depends(get_owner_id),
    document_service: IDocumentService = Depends(get_document_service)
):
    """
    Create a document, unfiled unless folder_id is given.

    Status Codes:
        201: Created
        400: Empty title, or folder missing or owned by another user
    """
    result = await document_service.create_document(
        body.title, body.content, body.content_type, owner_id, body.folder_id
    )
    return DocumentMapper.to_response_dto(result)


@router.put("/documents/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_document(
    document_id: int,
    body: DocumentUpdateDTO,
    owner_id: int = Depends(get_owner_id),
    expected_version: Optional[int] = Depends(get_expected_version),
    document_service: IDocumentService = Depends(get_document_service)
):
    """
    Replace a document's title, content, content type and folder.
    A folder_id of 0 or null leaves the document unfiled.

    Status Codes:
        204: Updated
        403: Document or target folder owned by another user
        404: Document not found
        409: Document changed since the version in If-Match
    """
    document = await document_service.update_document(
        document_id, owner_id, body.title, body.content, body.content_type,
        body.folder_id, expected_version
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers={"ETag": f'"{document.version}"'})


@router.delete("/documents/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: int,
    owner_id: int = Depends(get_owner_id),
    document_service: IDocumentService = Depends(get_document_service)
):
    """
    Delete a document. Its folder is not affected.

    Status Codes:
        204: Deleted
        404: Document not found or owned by another user
    """
    deleted = await document_service.delete_document(document_id, owner_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Document {document_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
