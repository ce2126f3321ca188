"""
Stores uploaded bytes on disk under a generated unique name.

Bytes are streamed into a .part file next to the destination and renamed
into place only once the whole file is within the size limit.
"""

import logging
import os
import uuid
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from fastapi import UploadFile

from docupload.config import Settings
from docupload.errors import SizeLimitError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True)
class StoredFile:
    stored_name: str
    path: Path
    size_bytes: int


def extension_of(original_name: str) -> str:
    """Last suffix of the base name: 'a/report.tar.gz' -> '.gz', '.bashrc' -> ''."""
    base = original_name.replace("\\", "/").rsplit("/", 1)[-1]
    return PurePosixPath(base).suffix


def generate_stored_name(original_name: str) -> str:
    return f"{uuid.uuid4()}{extension_of(original_name)}"


def ensure_upload_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


async def save_upload(upload: UploadFile, settings: Settings) -> StoredFile:
    """
    Stream an UploadFile into settings.upload_dir.

    Raises SizeLimitError (after removing the partial file) when the stream
    grows past settings.max_upload_bytes. OSError propagates to the caller.
    """
    ensure_upload_dir(settings.upload_dir)
    stored_name = generate_stored_name(upload.filename or "")
    final_path = settings.upload_dir / stored_name
    part_path = settings.upload_dir / f"{stored_name}.part"

    size = 0
    try:
        with open(part_path, "wb") as fh:
            while chunk := await upload.read(CHUNK_SIZE):
                size += len(chunk)
                if size > settings.max_upload_bytes:
                    raise SizeLimitError(settings.max_upload_mb)
                fh.write(chunk)
        os.replace(part_path, final_path)
    except Exception:
        part_path.unlink(missing_ok=True)
        raise

    logger.debug("Wrote %d bytes to %s", size, final_path)
    return StoredFile(stored_name=stored_name, path=final_path, size_bytes=size)


def remove_stored(stored: StoredFile) -> None:
    try:
        stored.path.unlink(missing_ok=True)
    except OSError:
        logger.exception("Could not remove %s", stored.path)
