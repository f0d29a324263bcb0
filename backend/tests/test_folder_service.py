import asyncio

import pytest

from foldervault.domain.exceptions import (
    ConcurrencyConflict,
    DeletionFailed,
    Forbidden,
    InvalidParent,
    NotFound,
    ValidationFailed,
)
from foldervault.repositories import DocumentRepository, FolderRepository
from foldervault.services.database import DOCUMENTS, FOLDERS, IntegrityViolation, JSONAdapter, StoreError
from foldervault.services.hierarchy import collect_subtree
from foldervault.services.folder_service import FolderService

pytestmark = pytest.mark.asyncio

OWNER = 1
OTHER_OWNER = 2


async def all_ids(db, table):
    async with db.transaction() as session:
        return {record["id"] for record in await session.get_many(table)}


async def test_create_root_and_child_folder(folder_service):
    root = await folder_service.create_folder("Invoices", OWNER)
    child = await folder_service.create_folder("2024", OWNER, root.id)

    assert root.parent_folder_id is None
    assert root.version == 1
    assert child.parent_folder_id == root.id
    assert child.owner_id == OWNER
    assert child.created_date.tzinfo is not None


async def test_multiple_root_folders_per_owner(folder_service):
    await folder_service.create_folder("A", OWNER)
    await folder_service.create_folder("B", OWNER)

    tree = await folder_service.get_folder_tree(OWNER)
    assert [node.name for node in tree] == ["A", "B"]


async def test_create_under_foreign_parent_fails_and_persists_nothing(db, folder_service):
    foreign = await folder_service.create_folder("Theirs", OTHER_OWNER)

    with pytest.raises(InvalidParent):
        await folder_service.create_folder("Mine", OWNER, foreign.id)

    assert await all_ids(db, FOLDERS) == {foreign.id}


async def test_create_under_missing_parent_fails(folder_service):
    with pytest.raises(InvalidParent):
        await folder_service.create_folder("Orphan", OWNER, 404)


@pytest.mark.parametrize("name", ["", "   ", "a/b", "what?"])
async def test_create_rejects_invalid_names(folder_service, name):
    with pytest.raises(ValidationFailed):
        await folder_service.create_folder(name, OWNER)


async def test_folder_detail_lists_direct_children_and_documents(folder_service, document_service):
    root = await folder_service.create_folder("Root", OWNER)
    child = await folder_service.create_folder("Child", OWNER, root.id)
    await folder_service.create_folder("Grandchild", OWNER, child.id)
    await document_service.create_document("Top", "body", "text/plain", OWNER, root.id)
    await document_service.create_document("Nested", "body", "text/plain", OWNER, child.id)

    detail = await folder_service.get_folder_detail(root.id, OWNER)

    assert [c.name for c in detail.children] == ["Child"]
    assert detail.children[0].children == []
    assert [d.title for d in detail.documents] == ["Top"]


async def test_folder_detail_hides_foreign_folders(folder_service):
    foreign = await folder_service.create_folder("Theirs", OTHER_OWNER)

    with pytest.raises(NotFound):
        await folder_service.get_folder_detail(foreign.id, OWNER)
    with pytest.raises(NotFound):
        await folder_service.get_folder_detail(999, OWNER)


async def test_folder_tree_expands_every_level_for_the_owner_only(folder_service):
    a = await folder_service.create_folder("A", OWNER)
    b = await folder_service.create_folder("B", OWNER, a.id)
    await folder_service.create_folder("C", OWNER, b.id)
    await folder_service.create_folder("D", OWNER, a.id)
    await folder_service.create_folder("Other", OTHER_OWNER)

    tree = await folder_service.get_folder_tree(OWNER)

    assert len(tree) == 1
    assert [child.name for child in tree[0].children] == ["B", "D"]
    assert [child.name for child in tree[0].children[0].children] == ["C"]
    assert await folder_service.get_folder_tree(3) == []


async def test_update_renames_and_reparents(folder_service):
    a = await folder_service.create_folder("A", OWNER)
    b = await folder_service.create_folder("B", OWNER)

    updated = await folder_service.update_folder(b.id, OWNER, "B2", a.id)

    assert (updated.name, updated.parent_folder_id, updated.version) == ("B2", a.id, 2)
    assert updated.created_date == b.created_date


async def test_update_without_parent_moves_folder_to_root(folder_service):
    a = await folder_service.create_folder("A", OWNER)
    b = await folder_service.create_folder("B", OWNER, a.id)

    updated = await folder_service.update_folder(b.id, OWNER, "B")

    assert updated.parent_folder_id is None


async def test_update_by_other_owner_is_forbidden_and_leaves_folder_unchanged(folder_service):
    x = await folder_service.create_folder("X", OWNER)

    with pytest.raises(Forbidden):
        await folder_service.update_folder(x.id, OTHER_OWNER, "Stolen")

    detail = await folder_service.get_folder_detail(x.id, OWNER)
    assert detail.name == "X"


async def test_update_missing_folder_is_not_found(folder_service):
    with pytest.raises(NotFound):
        await folder_service.update_folder(12, OWNER, "Ghost")


async def test_nested_folder_cannot_move_under_foreign_parent(folder_service):
    root = await folder_service.create_folder("Root", OWNER)
    nested = await folder_service.create_folder("Nested", OWNER, root.id)
    foreign = await folder_service.create_folder("Theirs", OTHER_OWNER)

    with pytest.raises(InvalidParent):
        await folder_service.update_folder(nested.id, OWNER, "Nested", foreign.id)


async def test_folder_cannot_become_its_own_parent(folder_service):
    a = await folder_service.create_folder("A", OWNER)

    with pytest.raises(InvalidParent):
        await folder_service.update_folder(a.id, OWNER, "A", a.id)


async def test_folder_cannot_move_under_its_descendant(folder_service):
    a = await folder_service.create_folder("A", OWNER)
    b = await folder_service.create_folder("B", OWNER, a.id)
    c = await folder_service.create_folder("C", OWNER, b.id)

    with pytest.raises(InvalidParent):
        await folder_service.update_folder(a.id, OWNER, "A", c.id)

    tree = await folder_service.get_folder_tree(OWNER)
    assert [node.id for node in tree] == [a.id]


async def test_concurrent_opposite_moves_cannot_form_a_cycle(tmp_path):
    db = JSONAdapter(data_dir=tmp_path)
    await db.initialize()
    service = FolderService(db)
    a = await service.create_folder("A", OWNER)
    b = await service.create_folder("B", OWNER)

    # Writing the JSON files yields, so the second move reads before the first commits
    results = await asyncio.gather(
        service.update_folder(a.id, OWNER, "A", b.id),
        service.update_folder(b.id, OWNER, "B", a.id),
        return_exceptions=True
    )

    assert sum(isinstance(result, InvalidParent) for result in results) == 1
    tree = await service.get_folder_tree(OWNER)
    assert len(tree) == 1
    assert len(tree[0].children) == 1


async def test_stale_version_token_conflicts(folder_service):
    folder = await folder_service.create_folder("Shared", OWNER)
    seen_version = folder.version

    await folder_service.update_folder(folder.id, OWNER, "First", expected_version=seen_version)

    with pytest.raises(ConcurrencyConflict) as excinfo:
        await folder_service.update_folder(folder.id, OWNER, "Second", expected_version=seen_version)

    assert excinfo.value.current_version == 2
    detail = await folder_service.get_folder_detail(folder.id, OWNER)
    assert detail.name == "First"


async def test_delete_cascades_to_exactly_the_subtree(db, folder_service, document_service):
    a = await folder_service.create_folder("A", OWNER)
    b = await folder_service.create_folder("B", OWNER, a.id)
    c = await folder_service.create_folder("C", OWNER, b.id)
    sibling = await folder_service.create_folder("Sibling", OWNER)
    in_a = await document_service.create_document("in-a", "", "text/plain", OWNER, a.id)
    in_c = await document_service.create_document("in-c", "", "text/plain", OWNER, c.id)
    in_sibling = await document_service.create_document("in-sibling", "", "text/plain", OWNER, sibling.id)
    unfiled = await document_service.create_document("unfiled", "", "text/plain", OWNER)

    assert await folder_service.delete_folder(a.id, OWNER) is True

    assert await all_ids(db, FOLDERS) == {sibling.id}
    assert await all_ids(db, DOCUMENTS) == {in_sibling.document.id, unfiled.document.id}
    assert in_a.document.id not in await all_ids(db, DOCUMENTS)
    assert in_c.document.id not in await all_ids(db, DOCUMENTS)


async def test_delete_missing_or_foreign_folder_is_a_no_op(db, folder_service):
    foreign = await folder_service.create_folder("Theirs", OTHER_OWNER)

    assert await folder_service.delete_folder(999, OWNER) is False
    assert await folder_service.delete_folder(foreign.id, OWNER) is False
    assert await all_ids(db, FOLDERS) == {foreign.id}


async def test_delete_store_failure_is_fatal_and_commits_nothing(db, folder_service, monkeypatch):
    a = await folder_service.create_folder("A", OWNER)
    await folder_service.create_folder("B", OWNER, a.id)

    async def failing_persist(tables):
        raise StoreError("connection lost")

    monkeypatch.setattr(db, "_persist", failing_persist)

    with pytest.raises(DeletionFailed):
        await folder_service.delete_folder(a.id, OWNER)

    monkeypatch.undo()
    assert len(await all_ids(db, FOLDERS)) == 2


async def test_child_created_after_collection_blocks_the_delete(db, folder_service):
    root = await folder_service.create_folder("Root", OWNER)

    with pytest.raises(IntegrityViolation):
        async with db.transaction() as session:
            folders = FolderRepository(session)
            documents = DocumentRepository(session)
            deletion = await collect_subtree(folders, documents, root.id)

            # Commits while the delete is still in flight
            late = await folder_service.create_folder("Late", OWNER, root.id)

            await documents.delete_many(deletion.document_ids)
            await folders.delete_many(deletion.folder_ids)

    assert await all_ids(db, FOLDERS) == {root.id, late.id}


async def test_child_staged_before_parent_delete_cannot_become_an_orphan(db, folder_service):
    from datetime import datetime, timezone
    from foldervault.domain.entities import Folder

    root = await folder_service.create_folder("Root", OWNER)

    with pytest.raises(IntegrityViolation):
        async with db.transaction() as session:
            await FolderRepository(session).create(Folder(
                owner_id=OWNER,
                name="Child",
                parent_folder_id=root.id,
                created_date=datetime.now(timezone.utc)
            ))
            assert await folder_service.delete_folder(root.id, OWNER) is True

    assert await all_ids(db, FOLDERS) == set()
