"""
Ownership Validator - confirms that a referenced folder or document exists
and belongs to the calling owner.

Ownership is never cached: every call reads through the given repository, so
it always reflects the transaction the caller is running in.
"""
from ..domain.entities import Document, Folder
from ..domain.exceptions import Forbidden, NotFound
from ..domain.value_objects import DocumentId, FolderId, OwnerId
from ..repositories.interfaces import IDocumentRepository, IFolderRepository


async def resolve_folder(folders: IFolderRepository, folder_id: FolderId, owner_id: OwnerId) -> Folder:
    """
    Look up a folder and check its owner.

    Raises:
        NotFound: If no folder has this id
        Forbidden: If the folder belongs to another owner
    """
    folder = await folders.get_by_id(folder_id)
    if folder is None:
        raise NotFound(f"Folder {folder_id} not found")
    if not folder.is_owned_by(owner_id):
        raise Forbidden(f"User {owner_id} does not own folder {folder_id}")
    return folder


async def resolve_document(documents: IDocumentRepository, doc_id: DocumentId, owner_id: OwnerId) -> Document:
    """
    Look up a document and check its owner.

    Raises:
        NotFound: If no document has this id
        Forbidden: If the document belongs to another owner
    """
    document = await documents.get_by_id(doc_id)
    if document is None:
        raise NotFound(f"Document {doc_id} not found")
    if not document.is_owned_by(owner_id):
        raise Forbidden(f"User {owner_id} does not own document {doc_id}")
    return document
