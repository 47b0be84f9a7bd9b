"""Upload helpers: extension gate and content-type resolution."""
import mimetypes
from typing import Optional

from app.errors import ValidationError

SUPPORTED_EXTENSIONS = ("jpg", "jpeg", "png", "pdf")

UNSUPPORTED_MESSAGE = "Only .jpg, .jpeg, .png images or .pdf documents are supported"


def file_extension(filename: str) -> str:
    return (filename or "").rsplit(".", 1)[-1].lower()


def require_supported(filename: str) -> str:
    ext = file_extension(filename)
    if ext not in SUPPORTED_EXTENSIONS:
        raise ValidationError(UNSUPPORTED_MESSAGE)
    return ext


def resolve_mime_type(filename: str, declared: Optional[str]) -> str:
    declared = (declared or "").strip().lower()
    if declared and declared != "application/octet-stream":
        return declared
    guessed, _ = mimetypes.guess_type(f"upload.{file_extension(filename)}")
    return guessed or "application/octet-stream"
