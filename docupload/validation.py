"""
Upload validation: allow-listed MIME types and the size limit.
Pure functions, no I/O. Called before anything touches the disk.
"""

from dataclasses import dataclass
from typing import Optional

from docupload.config import Settings
from docupload.errors import SizeLimitError, UploadError, ValidationError


@dataclass(frozen=True)
class ValidationResult:
    accepted: bool
    error: Optional[UploadError] = None

    @property
    def reason(self) -> Optional[str]:
        return self.error.message if self.error else None


ACCEPTED = ValidationResult(accepted=True)


def check_mime_type(mime_type: Optional[str], settings: Settings) -> ValidationResult:
    if mime_type not in settings.allowed_mime_types:
        return ValidationResult(accepted=False, error=ValidationError())
    return ACCEPTED


def check_size(size_bytes: Optional[int], settings: Settings) -> ValidationResult:
    """Unknown size passes here; the limit is then enforced while streaming."""
    if size_bytes is not None and size_bytes > settings.max_upload_bytes:
        return ValidationResult(accepted=False, error=SizeLimitError(settings.max_upload_mb))
    return ACCEPTED


def validate_upload(mime_type: Optional[str], size_bytes: Optional[int], settings: Settings) -> ValidationResult:
    """
    Validate a file part before it is stored.

    The MIME check runs first, so a disallowed type is reported as such
    even when the file is also too large.
    """
    result = check_mime_type(mime_type, settings)
    if not result.accepted:
        return result
    return check_size(size_bytes, settings)
