"""
Validation utilities - Pure validation functions.
"""
from ..domain.exceptions import ValidationFailed
from ..domain.value_objects import INVALID_NAME_CHARS


def validate_folder_name(name: str) -> str:
    """
    Validate folder name.

    Returns:
        The name stripped of surrounding whitespace

    Raises:
        ValidationFailed: If folder name is invalid
    """
    name = (name or "").strip()
    if not name:
        raise ValidationFailed("Folder name cannot be empty")

    found_chars = [char for char in INVALID_NAME_CHARS if char in name]
    if found_chars:
        raise ValidationFailed(f"Folder name cannot contain: {', '.join(found_chars)}")
    return name


def validate_title(title: str) -> str:
    """
    Validate document title.

    Raises:
        ValidationFailed: If title is empty
    """
    title = (title or "").strip()
    if not title:
        raise ValidationFailed("Document title cannot be empty")
    return title
