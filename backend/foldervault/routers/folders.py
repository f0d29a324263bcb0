"""
Folders Router - Handles folder operations.

Example Usage:
    GET /folders - Full folder tree of the caller
    GET /folders/{folder_id} - Folder with direct children and documents
    POST /folders - Create folder
    PUT /folders/{folder_id} - Rename and/or move folder
    DELETE /folders/{folder_id} - Delete folder with everything below it
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from .dependencies import get_expected_version, get_folder_service, get_owner_id
from ..api.dto import FolderCreateDTO, FolderDetailDTO, FolderDTO, FolderUpdateDTO
from ..api.mappers import FolderMapper
from ..services.interfaces import IFolderService
from ..core.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/folders", response_model=List[FolderDTO])
async def get_folder_tree(
    owner_id: int = Depends(get_owner_id),
    folder_service: IFolderService = Depends(get_folder_service)
):
    """
    Get every root folder of the caller, with all descendant folders expanded.
    Documents are not included.
    """
    nodes = await folder_service.get_folder_tree(owner_id)
    return FolderMapper.to_dto_list(nodes)


@router.get("/folders/{folder_id}", response_model=FolderDetailDTO)
async def get_folder(
    folder_id: int,
    owner_id: int = Depends(get_owner_id),
    folder_service: IFolderService = Depends(get_folder_service)
):
    """
    Get a folder with its direct child folders and documents.

    Status Codes:
        200: Success
        404: Folder not found or owned by another user
    """
    detail = await folder_service.get_folder_detail(folder_id, owner_id)
    return FolderMapper.detail_to_dto(detail)


@router.post("/folders", response_model=FolderDTO, status_code=status.HTTP_201_CREATED)
async def create_folder(
    body: FolderCreateDTO,
    owner_id: int = Depends(get_owner_id),
    folder_service: IFolderService = Depends(get_folder_service)
):
    """
    Create a folder. Root folders have no parent_folder_id.

    Status Codes:
        201: Created
        400: Invalid name, or parent missing or owned by another user
    """
    folder = await folder_service.create_folder(body.name, owner_id, body.parent_folder_id)
    return FolderMapper.entity_to_dto(folder)


@router.put("/folders/{folder_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_folder(
    folder_id: int,
    body: FolderUpdateDTO,
    owner_id: int = Depends(get_owner_id),
    expected_version: Optional[int] = Depends(get_expected_version),
    folder_service: IFolderService = Depends(get_folder_service)
):
    """
    Rename a folder and replace its parent (null parent moves it to the root).

    Status Codes:
        204: Updated
        400: Invalid name or parent, or the move would create a cycle
        403: Folder owned by another user
        404: Folder not found
        409: Folder changed since the version in If-Match
    """
    folder = await folder_service.update_folder(
        folder_id, owner_id, body.name, body.parent_folder_id, expected_version
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers={"ETag": f'"{folder.version}"'})


@router.delete("/folders/{folder_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_folder(
    folder_id: int,
    owner_id: int = Depends(get_owner_id),
    folder_service: IFolderService = Depends(get_folder_service)
):
    """
    Delete a folder, all of its descendant folders and every document under them.

    Status Codes:
        204: Deleted
        404: Folder not found or owned by another user
        500: Deletion failed; re-read the folder before retrying
    """
    deleted = await folder_service.delete_folder(folder_id, owner_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Folder {folder_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
