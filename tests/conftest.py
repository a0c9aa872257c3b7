"""
Shared fixtures.
"""
import os
import shutil
import tempfile

import pytest
from fastapi.testclient import TestClient

from mlworkflow.app import app
from mlworkflow.repositories.dataset_repo import DatasetStore, get_store


@pytest.fixture
def temp_dir():
    """Create a temporary working directory."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def upload_dir(temp_dir):
    """Storage directory path that does not exist yet."""
    return os.path.join(temp_dir, "uploads")


@pytest.fixture
def store(upload_dir):
    return DatasetStore(upload_dir)


@pytest.fixture
def api(store):
    """TestClient wired to a temporary dataset store."""
    app.dependency_overrides[get_store] = lambda: store
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def csv_bytes():
    return b"feature,target\n1,0\n2,1\n3,0\n"
