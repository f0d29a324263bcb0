import pytest

from foldervault.repositories import DocumentRepository, FolderRepository
from foldervault.services.database import FOLDERS
from foldervault.services.hierarchy import collect_subtree, is_same_or_descendant
from foldervault.services.tree_projector import TreeProjector

pytestmark = pytest.mark.asyncio

OWNER = 1


async def build_tree(folder_service, document_service):
    """
    a
    ├── b
    │   └── c  (doc2)
    └── d      (doc1 in a)
    """
    a = await folder_service.create_folder("a", OWNER)
    b = await folder_service.create_folder("b", OWNER, a.id)
    c = await folder_service.create_folder("c", OWNER, b.id)
    d = await folder_service.create_folder("d", OWNER, a.id)
    doc1 = await document_service.create_document("doc1", "", "text/plain", OWNER, a.id)
    doc2 = await document_service.create_document("doc2", "", "text/plain", OWNER, c.id)
    return a, b, c, d, doc1.document, doc2.document


async def test_collect_subtree_visits_parents_before_children(db, folder_service, document_service):
    a, b, c, d, doc1, doc2 = await build_tree(folder_service, document_service)

    async with db.transaction() as session:
        deletion = await collect_subtree(FolderRepository(session), DocumentRepository(session), a.id)

    assert deletion.folder_ids == [a.id, b.id, c.id, d.id]
    assert deletion.document_ids == [doc1.id, doc2.id]
    assert len(deletion) == 6


async def test_collect_subtree_of_a_leaf(db, folder_service, document_service):
    _, _, _, d, _, _ = await build_tree(folder_service, document_service)

    async with db.transaction() as session:
        deletion = await collect_subtree(FolderRepository(session), DocumentRepository(session), d.id)

    assert deletion.folder_ids == [d.id]
    assert deletion.document_ids == []


async def test_is_same_or_descendant(db, folder_service, document_service):
    a, b, c, d, _, _ = await build_tree(folder_service, document_service)

    async with db.transaction() as session:
        folders = FolderRepository(session)
        assert await is_same_or_descendant(folders, a.id, a.id)
        assert await is_same_or_descendant(folders, a.id, c.id)
        assert not await is_same_or_descendant(folders, b.id, d.id)
        assert not await is_same_or_descendant(folders, c.id, a.id)


async def test_projection_stops_at_a_corrupted_cycle(db, folder_service):
    a = await folder_service.create_folder("a", OWNER)
    b = await folder_service.create_folder("b", OWNER, a.id)
    # Corrupt the committed state directly: a -> b -> a
    db._tables[FOLDERS][a.id]["parent_folder_id"] = b.id

    async with db.transaction() as session:
        folders = FolderRepository(session)
        projector = TreeProjector(folders, DocumentRepository(session))
        tree = await projector.project_tree(await folders.get_by_id(a.id))
        assert not await is_same_or_descendant(folders, 99, a.id)

    assert [child.id for child in tree.children] == [b.id]
    assert tree.children[0].children == []
