"""
Value Objects - Immutable objects that represent domain concepts.
These have no identity and are compared by value.
"""
from typing import NewType

# Value objects for type safety and domain clarity
OwnerId = NewType("OwnerId", int)
FolderId = NewType("FolderId", int)
DocumentId = NewType("DocumentId", int)
Version = NewType("Version", int)

INITIAL_VERSION = Version(1)

# Characters rejected in folder names
INVALID_NAME_CHARS = ['/', '\\', ':', '*', '?', '"', '<', '>', '|']
