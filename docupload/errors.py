"""
Error taxonomy for the upload path.

Every error carries the HTTP status and the message the client sees.
The exception handler in main.py renders them as {"ok": false, "error": ...}.
"""

from typing import Optional


class UploadError(Exception):
    status_code = 400
    default_message = "Solicitud inválida"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(UploadError):
    """The declared MIME type is not in the allow-list."""

    default_message = "Tipo de archivo no permitido"


class SizeLimitError(UploadError):
    """The file is larger than the configured limit."""

    def __init__(self, limit_mb: int) -> None:
        self.limit_mb = limit_mb
        super().__init__(f"El archivo excede el límite de tamaño de {limit_mb} MB")


class MissingFileError(UploadError):
    default_message = "No se envió archivo"


class InternalError(UploadError):
    # Details stay in the server log, never in the response.
    status_code = 500
    default_message = "Error interno"
