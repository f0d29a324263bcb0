import pytest

from foldervault.domain.exceptions import (
    ConcurrencyConflict,
    Forbidden,
    InvalidFolder,
    NotFound,
    ValidationFailed,
)

pytestmark = pytest.mark.asyncio

OWNER = 1
OTHER_OWNER = 2


async def test_create_unfiled_document(document_service):
    result = await document_service.create_document("Notes", "hello", "text/plain", OWNER)

    assert result.folder is None
    assert result.document.is_unfiled()
    assert result.document.id == 1
    assert result.document.version == 1


async def test_create_document_in_owned_folder_returns_the_folder(folder_service, document_service):
    folder = await folder_service.create_folder("Work", OWNER)

    result = await document_service.create_document("Plan", "", "text/markdown", OWNER, folder.id)

    assert result.document.folder_id == folder.id
    assert result.folder.id == folder.id
    assert result.folder.name == "Work"


async def test_create_in_foreign_or_missing_folder_is_rejected(folder_service, document_service):
    foreign = await folder_service.create_folder("Theirs", OTHER_OWNER)

    with pytest.raises(InvalidFolder):
        await document_service.create_document("Sneaky", "", "text/plain", OWNER, foreign.id)
    with pytest.raises(InvalidFolder):
        await document_service.create_document("Lost", "", "text/plain", OWNER, 77)

    assert await document_service.list_documents(OWNER) == []


async def test_create_requires_a_title(document_service):
    with pytest.raises(ValidationFailed):
        await document_service.create_document("  ", "", "text/plain", OWNER)


async def test_get_document_attaches_its_folder(folder_service, document_service):
    folder = await folder_service.create_folder("Work", OWNER)
    created = await document_service.create_document("Plan", "body", "text/plain", OWNER, folder.id)

    result = await document_service.get_document(created.document.id, OWNER)

    assert result.document.content == "body"
    assert result.folder.id == folder.id


async def test_get_document_of_other_owner_is_not_found(document_service):
    created = await document_service.create_document("Private", "", "text/plain", OTHER_OWNER)

    with pytest.raises(NotFound):
        await document_service.get_document(created.document.id, OWNER)
    with pytest.raises(NotFound):
        await document_service.get_document(500, OWNER)


async def test_list_documents_returns_only_the_owners_documents(folder_service, document_service):
    folder = await folder_service.create_folder("Work", OWNER)
    await document_service.create_document("filed", "", "text/plain", OWNER, folder.id)
    await document_service.create_document("unfiled", "", "text/plain", OWNER)
    await document_service.create_document("foreign", "", "text/plain", OTHER_OWNER)

    titles = [d.title for d in await document_service.list_documents(OWNER)]

    assert titles == ["filed", "unfiled"]


async def test_update_replaces_payload_and_moves_between_folders(folder_service, document_service):
    first = await folder_service.create_folder("First", OWNER)
    second = await folder_service.create_folder("Second", OWNER)
    created = await document_service.create_document("Doc", "v1", "text/plain", OWNER, first.id)

    updated = await document_service.update_document(
        created.document.id, OWNER, "Doc v2", "v2", "text/html", second.id
    )

    assert (updated.title, updated.content, updated.content_type) == ("Doc v2", "v2", "text/html")
    assert updated.folder_id == second.id
    assert updated.version == 2


@pytest.mark.parametrize("folder_id", [0, None])
async def test_update_with_zero_or_no_folder_unfiles_the_document(folder_service, document_service, folder_id):
    folder = await folder_service.create_folder("Work", OWNER)
    created = await document_service.create_document("Doc", "", "text/plain", OWNER, folder.id)

    updated = await document_service.update_document(
        created.document.id, OWNER, "Doc", "", "text/plain", folder_id
    )

    assert updated.folder_id is None


async def test_update_into_foreign_or_missing_folder_is_forbidden(folder_service, document_service):
    foreign = await folder_service.create_folder("Theirs", OTHER_OWNER)
    created = await document_service.create_document("Doc", "", "text/plain", OWNER)

    with pytest.raises(Forbidden):
        await document_service.update_document(created.document.id, OWNER, "Doc", "", "text/plain", foreign.id)
    with pytest.raises(Forbidden):
        await document_service.update_document(created.document.id, OWNER, "Doc", "", "text/plain", 404)

    result = await document_service.get_document(created.document.id, OWNER)
    assert result.document.folder_id is None


async def test_update_by_other_owner_is_forbidden_and_changes_nothing(document_service):
    created = await document_service.create_document("Mine", "original", "text/plain", OWNER)

    with pytest.raises(Forbidden):
        await document_service.update_document(created.document.id, OTHER_OWNER, "Hijacked", "", "text/plain")

    result = await document_service.get_document(created.document.id, OWNER)
    assert (result.document.title, result.document.content) == ("Mine", "original")


async def test_update_missing_document_is_not_found(document_service):
    with pytest.raises(NotFound):
        await document_service.update_document(9, OWNER, "Ghost", "", "text/plain")


async def test_update_with_stale_version_conflicts(document_service):
    created = await document_service.create_document("Doc", "", "text/plain", OWNER)
    seen = created.document.version

    await document_service.update_document(created.document.id, OWNER, "A", "", "text/plain", expected_version=seen)

    with pytest.raises(ConcurrencyConflict) as excinfo:
        await document_service.update_document(created.document.id, OWNER, "B", "", "text/plain", expected_version=seen)

    assert excinfo.value.current_version == 2


async def test_delete_document_leaves_its_folder(folder_service, document_service):
    folder = await folder_service.create_folder("Work", OWNER)
    created = await document_service.create_document("Doc", "", "text/plain", OWNER, folder.id)

    assert await document_service.delete_document(created.document.id, OWNER) is True

    detail = await folder_service.get_folder_detail(folder.id, OWNER)
    assert detail.documents == []
    with pytest.raises(NotFound):
        await document_service.get_document(created.document.id, OWNER)


async def test_delete_missing_or_foreign_document_is_a_no_op(document_service):
    foreign = await document_service.create_document("Theirs", "", "text/plain", OTHER_OWNER)

    assert await document_service.delete_document(123, OWNER) is False
    assert await document_service.delete_document(foreign.document.id, OWNER) is False
    assert len(await document_service.list_documents(OTHER_OWNER)) == 1


async def test_documents_under_a_deleted_folder_are_gone(folder_service, document_service):
    a = await folder_service.create_folder("A", OWNER)
    b = await folder_service.create_folder("B", OWNER, a.id)
    created = await document_service.create_document("d1", "", "text/plain", OWNER, b.id)

    assert await folder_service.delete_folder(a.id, OWNER) is True

    with pytest.raises(NotFound):
        await document_service.get_document(created.document.id, OWNER)
    assert await folder_service.get_folder_tree(OWNER) == []
