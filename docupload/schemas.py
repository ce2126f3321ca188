"""
Pydantic models for the upload API.
UploadedFileRecord is the source of truth for the metadata.json shape.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class UploadedFileRecord(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    original_name: str
    stored_name: str
    size_bytes: int
    mime_type: str
    url: str
    uploaded_at: str
    requester_name: Optional[str] = None
    requester_email: Optional[str] = None

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class UploadResponse(BaseModel):
    ok: bool = True
    metadata: dict


class ErrorResponse(BaseModel):
    ok: bool = False
    error: str
