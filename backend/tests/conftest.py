"""Shared test fixtures and configuration for backend tests."""
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.storage import InMemoryObjectStore
from app.uploads.service import UploadService, set_upload_service


@pytest.fixture
def memory_store() -> InMemoryObjectStore:
    """In-memory object store installed as the upload service's backend."""
    store = InMemoryObjectStore()
    set_upload_service(UploadService(store))
    yield store
    set_upload_service(None)


@pytest.fixture
def api_client(memory_store):
    """Provide a TestClient for the main FastAPI app, backed by memory_store."""
    return TestClient(app)
