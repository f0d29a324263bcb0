"""
Tree Projector - turns stored folders and documents into read-only tree views.

Two shapes are produced:
- a shallow folder detail (direct child folders and direct documents), and
- the full folder forest of an owner, expanded to any depth, without documents.
"""
from typing import FrozenSet, List, Tuple

from ..domain.entities import Document, DocumentSummary, Folder, FolderDetail, TreeNode
from ..domain.value_objects import FolderId, OwnerId
from ..repositories.interfaces import IDocumentRepository, IFolderRepository
from ..core.logging_config import get_logger

logger = get_logger(__name__)


def to_tree_node(folder: Folder) -> TreeNode:
    """Project a folder without expanding its children."""
    return TreeNode(
        id=folder.id,
        name=folder.name,
        created_date=folder.created_date,
        parent_folder_id=folder.parent_folder_id
    )


def to_document_summary(document: Document) -> DocumentSummary:
    return DocumentSummary(
        id=document.id,
        title=document.title,
        content=document.content,
        content_type=document.content_type,
        created_date=document.created_date
    )


class TreeProjector:
    """
    Builds projections from the repositories of one store session.
    Siblings are ordered by ascending folder id.
    """

    def __init__(self, folders: IFolderRepository, documents: IDocumentRepository):
        self._folders = folders
        self._documents = documents

    async def project_detail(self, folder: Folder) -> FolderDetail:
        """Project a folder with its direct child folders and direct documents."""
        children = await self._folders.get_children(folder.id)
        documents = await self._documents.get_in_folder(folder.id)
        return FolderDetail(
            id=folder.id,
            name=folder.name,
            created_date=folder.created_date,
            parent_folder_id=folder.parent_folder_id,
            children=[to_tree_node(child) for child in children],
            documents=[to_document_summary(document) for document in documents]
        )

    async def project_forest(self, owner_id: OwnerId) -> List[TreeNode]:
        """Expand every root folder of the owner into its full descendant tree."""
        roots = await self._folders.get_roots(owner_id)
        return [await self.project_tree(root) for root in roots]

    async def project_tree(self, root: Folder) -> TreeNode:
        """
        Expand one folder into its full descendant tree.

        A folder already present on the path from the root is not expanded
        again, so a corrupted parent cycle cannot recurse forever.
        """
        root_node = to_tree_node(root)
        # (node to fill, ids on the path from the root down to that node)
        stack: List[Tuple[TreeNode, FrozenSet[FolderId]]] = [(root_node, frozenset([root.id]))]

        while stack:
            node, path = stack.pop()
            for child in await self._folders.get_children(node.id):
                if child.id in path:
                    logger.warning(
                        f"Folder {child.id} is its own ancestor under folder {node.id}, not expanding it"
                    )
                    continue
                child_node = to_tree_node(child)
                node.children.append(child_node)
                stack.append((child_node, path | {child.id}))

        return root_node
