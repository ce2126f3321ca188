"""
FastAPI application entry point.
Builds the app around one Settings instance, mounts the router and the
/uploads static files, and registers the error envelope handlers.
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

# Load .env from project root, regardless of where the app is started from
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))

from docupload.config import Settings
from docupload.errors import UploadError
from docupload.router import router
from docupload.schemas import ErrorResponse
from docupload.services.metadata_store import MetadataStore
from docupload.services.storage import ensure_upload_dir

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


async def upload_error_handler(request: Request, exc: UploadError) -> JSONResponse:
    return _error_response(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Malformed form submission to %s: %s", request.url.path, exc.errors())
    return _error_response(400, "Formulario inválido")


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Raised by the framework itself, e.g. a multipart body it cannot parse.
    response = _error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        ensure_upload_dir(settings.upload_dir)
        logger.info("Serving uploads from %s on port %d", settings.upload_dir, settings.port)
        yield

    app = FastAPI(title="Documento Upload", lifespan=lifespan)
    app.state.settings = settings
    app.state.metadata_store = MetadataStore(settings.metadata_path)

    app.add_exception_handler(UploadError, upload_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    app.include_router(router)
    app.mount("/uploads", StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")
    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
