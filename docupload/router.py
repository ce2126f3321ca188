"""
API endpoints for document uploads.

GET  /        — the upload form
POST /upload  — one file in field 'documento', optional 'name' and 'email'
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, File, Form, Request, UploadFile
from fastapi.responses import FileResponse, JSONResponse

from docupload.errors import InternalError, UploadError
from docupload.schemas import UploadResponse
from docupload.services import uploader

_FORM_PATH = Path(__file__).parent / "static" / "form.html"

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", include_in_schema=False)
def upload_form() -> FileResponse:
    return FileResponse(_FORM_PATH, media_type="text/html")


@router.post("/upload", status_code=201, response_model=UploadResponse)
async def upload_document(
    request: Request,
    documento: Optional[UploadFile] = File(None, description="Document to store (PDF, JPEG, PNG, DOC or DOCX)"),
    name: Optional[str] = Form(None, description="Requester name"),
    email: Optional[str] = Form(None, description="Requester email"),
) -> JSONResponse:
    """
    Store one uploaded document and append its metadata record.

    Returns 201 with the record, 400 when the file is missing, of a
    disallowed type or too large, and 500 on unexpected failures.
    """
    settings = request.app.state.settings
    store = request.app.state.metadata_store

    try:
        record = await uploader.handle_upload(documento, name, email, settings, store)
    except UploadError:
        raise
    except Exception as exc:
        logger.exception("Upload failed for %r", documento.filename if documento else None)
        raise InternalError() from exc
    finally:
        if documento is not None:
            await documento.close()

    body = UploadResponse(metadata=record.to_json_dict())
    return JSONResponse(status_code=201, content=body.model_dump())
