"""
Append-only JSON array of upload records.

Each append is a read-modify-write of the whole file. A lock serializes
appends within the process, and the new content is written to a temporary
file that replaces the store in one rename. Separate processes sharing the
same file are not coordinated.
"""

import json
import logging
import os
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class MetadataStore:
    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def read_all(self) -> list[dict]:
        """Current records. Absent, blank or corrupt stores read as empty."""
        records = self._load()
        return records if records is not None else []

    def append(self, record: dict) -> int:
        """Append one record and return the new record count."""
        with self._lock:
            records = self._load()
            if records is None:
                self._quarantine()
                records = []
            records.append(record)
            self._write(records)
            return len(records)

    def _load(self) -> Optional[list[dict]]:
        """Parsed array, [] when absent or blank, None when corrupt."""
        if not self.path.exists():
            return []
        try:
            raw = self.path.read_bytes().decode("utf-8")
        except UnicodeDecodeError:
            return None
        if not raw.strip():
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            return None
        if not isinstance(data, list):
            return None
        return data

    def _quarantine(self) -> None:
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
        backup = self.path.with_name(f"{self.path.name}.corrupt-{timestamp}")
        os.replace(self.path, backup)
        logger.warning("Metadata store %s was not a JSON array; moved it to %s and started empty", self.path, backup)

    def _write(self, records: list[dict]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        with open(tmp_path, "w", encoding="utf-8") as fh:
            json.dump(records, fh, indent=2, ensure_ascii=False)
        os.replace(tmp_path, self.path)
