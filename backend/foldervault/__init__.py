"""FolderVault - per-user folder and document hierarchy service."""

__version__ = "1.0.0"
