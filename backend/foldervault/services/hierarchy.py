"""
Hierarchy traversal helpers shared by the folder service.

Both walks are iterative so that depth is bounded by data, not by the call
stack, and both keep a visited set so a corrupted cycle cannot loop forever.
"""
from dataclasses import dataclass, field
from typing import List, Set

from ..domain.value_objects import DocumentId, FolderId
from ..repositories.interfaces import IDocumentRepository, IFolderRepository
from ..core.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class DeletionSet:
    """Every folder and document removed by deleting one folder."""
    folder_ids: List[FolderId] = field(default_factory=list)
    document_ids: List[DocumentId] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.folder_ids) + len(self.document_ids)


async def collect_subtree(
    folders: IFolderRepository,
    documents: IDocumentRepository,
    root_id: FolderId
) -> DeletionSet:
    """
    Collect a folder, all of its descendant folders and every document filed
    anywhere under them.

    Folders are visited depth-first, each parent recorded before its children.
    """
    deletion = DeletionSet()
    visited: Set[FolderId] = set()
    stack: List[FolderId] = [root_id]

    while stack:
        folder_id = stack.pop()
        if folder_id in visited:
            logger.warning(f"Folder {folder_id} reached twice while collecting subtree of {root_id}")
            continue
        visited.add(folder_id)
        deletion.folder_ids.append(folder_id)

        for document in await documents.get_in_folder(folder_id):
            deletion.document_ids.append(document.id)

        children = await folders.get_children(folder_id)
        # Reversed so the first child is popped first
        stack.extend(child.id for child in reversed(children))

    return deletion


async def is_same_or_descendant(
    folders: IFolderRepository,
    folder_id: FolderId,
    candidate_id: FolderId
) -> bool:
    """
    Check whether candidate_id is folder_id itself or lies below it, by walking
    the ancestor chain upwards from the candidate.
    """
    seen: Set[FolderId] = set()
    current_id = candidate_id

    while current_id is not None:
        if current_id == folder_id:
            return True
        if current_id in seen:
            logger.warning(f"Ancestor chain of folder {candidate_id} contains a cycle at {current_id}")
            return False
        seen.add(current_id)
        current = await folders.get_by_id(current_id)
        if current is None:
            return False
        current_id = current.parent_folder_id

    return False
