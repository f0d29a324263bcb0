"""
Utility functions - Pure functions with no dependencies.
These can be used across all layers.
"""
from .validators import validate_folder_name, validate_title

__all__ = [
    "validate_folder_name",
    "validate_title"
]
