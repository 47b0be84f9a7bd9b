"""
Error taxonomy shared by the extraction and grading endpoints.

Each error carries the HTTP status the API answers with, a human readable
message and, where available, upstream diagnostic detail.
"""
from typing import Any, Optional


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(ServiceError):
    """Bad or missing input."""
    status_code = 400


class EmptyContentError(ServiceError):
    """Nothing readable could be extracted."""
    status_code = 400


class ConfigurationError(ServiceError):
    """A required endpoint or key is not configured."""


# OCR service

class OcrError(ServiceError):
    pass


class UpstreamProtocolError(OcrError):
    pass


class UpstreamProcessingError(OcrError):
    pass


class OcrTimeoutError(OcrError, TimeoutError):
    pass


# Text generation

class GradingError(ServiceError):
    pass


class MalformedResponseError(GradingError):
    def __init__(self, message: str, raw: str):
        super().__init__(message, details=raw)
        self.raw = raw


class InvalidShapeError(GradingError):
    pass
