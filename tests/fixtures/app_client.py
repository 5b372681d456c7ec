"""App and upload directory fixtures for tests."""
import pytest
from fastapi.testclient import TestClient

from tests.consts import TEST_ENGINE
from uploads_api.config.settings import Settings
from uploads_api.main import create_app
from uploads_api.storage.artifacts import UploadDirectory


@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def directory(upload_dir) -> UploadDirectory:
    return UploadDirectory(path=upload_dir)


@pytest.fixture
def settings(upload_dir, tmp_path) -> Settings:
    return Settings(
        upload_dir=upload_dir,
        static_dir=tmp_path / "public",
        upload_engine=TEST_ENGINE,
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client
