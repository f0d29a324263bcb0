import os
import sys
from pathlib import Path

import pytest

# Configure before the application modules read the environment
os.environ.setdefault("ENVIRONMENT", "test")
os.environ["DATABASE_TYPE"] = "memory"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_FILE_ENABLED"] = "false"

# Add the backend directory to sys.path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from foldervault.services.database import MemoryAdapter  # noqa: E402
from foldervault.services.document_service import DocumentService  # noqa: E402
from foldervault.services.folder_service import FolderService  # noqa: E402

OWNER = 1
OTHER_OWNER = 2


@pytest.fixture
def db():
    return MemoryAdapter()


@pytest.fixture
def folder_service(db):
    return FolderService(db)


@pytest.fixture
def document_service(db):
    return DocumentService(db)


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from foldervault.main import app

    with TestClient(app) as test_client:
        yield test_client
