"""
Tests for upload validation (allow-list and size limit).
"""

import pytest

from docupload.config import MB, Settings
from docupload.errors import SizeLimitError, ValidationError
from docupload.validation import validate_upload


@pytest.fixture
def settings(tmp_path):
    return Settings(upload_dir=tmp_path)


@pytest.mark.parametrize(
    "mime_type",
    [
        "application/pdf",
        "image/jpeg",
        "image/png",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ],
)
def test_allowed_types_pass(settings, mime_type):
    result = validate_upload(mime_type, 1024, settings)
    assert result.accepted
    assert result.reason is None


@pytest.mark.parametrize("mime_type", ["text/plain", "image/gif", "application/zip", "", None])
def test_disallowed_type_is_rejected(settings, mime_type):
    result = validate_upload(mime_type, 1024, settings)
    assert not result.accepted
    assert isinstance(result.error, ValidationError)
    assert result.reason == "Tipo de archivo no permitido"


def test_exactly_at_limit_passes(settings):
    assert validate_upload("application/pdf", 8 * MB, settings).accepted


def test_one_byte_over_limit_is_rejected(settings):
    result = validate_upload("application/pdf", 8 * MB + 1, settings)
    assert not result.accepted
    assert isinstance(result.error, SizeLimitError)
    assert "8 MB" in result.reason


def test_unknown_size_is_left_to_streaming(settings):
    assert validate_upload("image/png", None, settings).accepted


def test_type_is_checked_before_size(settings):
    result = validate_upload("text/plain", 100 * MB, settings)
    assert isinstance(result.error, ValidationError)


def test_limit_follows_settings(tmp_path):
    small = Settings(upload_dir=tmp_path, max_upload_mb=1)
    assert not validate_upload("image/jpeg", MB + 1, small).accepted
    assert validate_upload("image/jpeg", MB, small).accepted
