import pytest
from fastapi.testclient import TestClient

from docupload.config import MB, Settings
from docupload.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(upload_dir=tmp_path / "uploads", metadata_path=tmp_path / "data" / "metadata.json")


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def png_2mb():
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * (2 * MB - 8)


@pytest.fixture
def stored_files(settings):
    """Names in the upload directory, without the metadata store."""

    def _list() -> set[str]:
        if not settings.upload_dir.exists():
            return set()
        return {p.name for p in settings.upload_dir.iterdir() if p != settings.metadata_path}

    return _list
