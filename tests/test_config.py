"""
Tests for environment-backed settings.
"""

from pathlib import Path

from docupload.config import Settings


def test_defaults(monkeypatch):
    for name in ("UPLOAD_DIR", "METADATA_PATH", "MAX_UPLOAD_MB", "PORT", "HOST"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.upload_dir == Path("uploads")
    assert settings.metadata_path == Path("data/metadata.json")
    assert settings.max_upload_bytes == 8 * 1024 * 1024
    assert settings.port == 3000


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "files"))
    monkeypatch.setenv("MAX_UPLOAD_MB", "2")
    monkeypatch.setenv("PORT", "8080")

    settings = Settings()

    assert settings.upload_dir == tmp_path / "files"
    assert settings.max_upload_mb == 2
    assert settings.port == 8080


def test_explicit_zero_is_not_replaced_by_environment(monkeypatch):
    monkeypatch.setenv("MAX_UPLOAD_MB", "8")
    monkeypatch.setenv("PORT", "3000")

    settings = Settings(max_upload_mb=0, port=0)

    assert settings.max_upload_mb == 0
    assert settings.port == 0
