import os
from pathlib import Path
from typing import Optional

MB = 1024 * 1024

ALLOWED_MIME_TYPES = frozenset({
    "application/pdf",
    "image/jpeg",
    "image/png",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
})


class Settings:
    """Runtime configuration, read from the environment unless given explicitly."""

    def __init__(
        self,
        upload_dir: Optional[Path] = None,
        metadata_path: Optional[Path] = None,
        max_upload_mb: Optional[int] = None,
        port: Optional[int] = None,
        host: Optional[str] = None,
    ) -> None:
        self.upload_dir = Path(upload_dir or os.getenv("UPLOAD_DIR", "uploads"))
        # Kept outside upload_dir so the /uploads static mount never serves it.
        self.metadata_path = Path(metadata_path or os.getenv("METADATA_PATH", "data/metadata.json"))
        if max_upload_mb is None:
            max_upload_mb = os.getenv("MAX_UPLOAD_MB", "8")
        self.max_upload_mb = int(max_upload_mb)
        if port is None:
            port = os.getenv("PORT", "3000")
        self.port = int(port)
        self.host = host or os.getenv("HOST", "0.0.0.0")
        self.allowed_mime_types = ALLOWED_MIME_TYPES

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * MB
