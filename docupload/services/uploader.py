"""
The upload flow: validate → store file → append metadata.

Either both the file and its metadata record are persisted, or neither:
a failed append removes the file that was just written.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import UploadFile

from docupload.config import Settings
from docupload.errors import InternalError, MissingFileError, SizeLimitError
from docupload.schemas import UploadedFileRecord
from docupload.services import storage
from docupload.services.metadata_store import MetadataStore
from docupload.validation import validate_upload

logger = logging.getLogger(__name__)


def _utc_timestamp() -> str:
    # UTC, millisecond precision: 2024-05-01T12:00:00.000Z
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_record(
    original_name: str,
    stored: storage.StoredFile,
    mime_type: str,
    requester_name: Optional[str] = None,
    requester_email: Optional[str] = None,
) -> UploadedFileRecord:
    return UploadedFileRecord(
        original_name=original_name,
        stored_name=stored.stored_name,
        size_bytes=stored.size_bytes,
        mime_type=mime_type,
        url=f"/uploads/{stored.stored_name}",
        uploaded_at=_utc_timestamp(),
        requester_name=requester_name or None,
        requester_email=requester_email or None,
    )


async def handle_upload(
    upload: Optional[UploadFile],
    requester_name: Optional[str],
    requester_email: Optional[str],
    settings: Settings,
    store: MetadataStore,
) -> UploadedFileRecord:
    """
    Validate and persist one uploaded file plus its metadata record.

    Raises MissingFileError, ValidationError or SizeLimitError before anything
    is left on disk, and InternalError when the filesystem fails.
    """
    if upload is None or not upload.filename:
        raise MissingFileError()

    result = validate_upload(upload.content_type, upload.size, settings)
    if not result.accepted:
        logger.info("Rejected upload %r (%s): %s", upload.filename, upload.content_type, result.reason)
        raise result.error

    try:
        stored = await storage.save_upload(upload, settings)
    except SizeLimitError:
        logger.info("Rejected upload %r: exceeded %d MB while streaming", upload.filename, settings.max_upload_mb)
        raise
    except OSError as exc:
        logger.exception("Could not store upload %r", upload.filename)
        raise InternalError() from exc

    record = build_record(upload.filename, stored, upload.content_type, requester_name, requester_email)

    try:
        total = store.append(record.to_json_dict())
    except Exception as exc:
        logger.error("Metadata append failed for %s; removing the stored file", stored.stored_name, exc_info=True)
        storage.remove_stored(stored)
        raise InternalError() from exc

    logger.info(
        "Stored %r as %s (%d bytes, %s); %d record(s) in store",
        upload.filename, stored.stored_name, stored.size_bytes, upload.content_type, total,
    )
    return record
