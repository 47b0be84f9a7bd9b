"""Azure Document Intelligence read client.

The service answers a submission with an ``operation-location`` header and
the result has to be polled for. Polling is a fixed count, fixed interval
loop with no cancellation; the caller owns the overall request timeout.
"""
from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import requests

from app.errors import (
    ConfigurationError,
    OcrTimeoutError,
    UpstreamProcessingError,
    UpstreamProtocolError,
)
from app.utils.config import OcrSettings

logger = logging.getLogger(__name__)


class JobStatus(enum.Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "JobStatus":
        status = str((payload or {}).get("status") or "").strip().lower()
        if status == "succeeded":
            return cls.SUCCEEDED
        if status == "failed":
            return cls.FAILED
        # notStarted / running / anything unknown
        return cls.PENDING


@dataclass
class OcrJob:
    submit_url: str
    poll_url: str
    status: JobStatus = JobStatus.PENDING


def poll_job(
    fetch: Callable[[], Dict[str, Any]],
    attempts: int,
    interval: float,
    sleep: Callable[[float], None] = time.sleep,
    job: Optional[OcrJob] = None,
) -> Dict[str, Any]:
    """Poll until a terminal status; return the succeeded payload.

    Sleeps before every fetch, like the service asks for.
    """
    for attempt in range(1, attempts + 1):
        sleep(interval)
        payload = fetch()
        status = JobStatus.from_payload(payload)
        if job is not None:
            job.status = status
        logger.debug("OCR poll %d/%d: %s", attempt, attempts, status.value)
        if status is JobStatus.SUCCEEDED:
            return payload
        if status is JobStatus.FAILED:
            raise UpstreamProcessingError("Azure OCR failed", details=payload.get("error"))
    raise OcrTimeoutError("OCR timeout")


def flatten_lines(payload: Dict[str, Any]) -> str:
    result = payload.get("analyzeResult") or {}
    lines = []
    for page in result.get("pages") or []:
        for line in page.get("lines") or []:
            lines.append(line.get("content") or "")
    return "\n".join(lines)


class OcrClient:
    def __init__(
        self,
        settings: OcrSettings,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings
        self.session = session or requests.Session()
        self.sleep = sleep

    def _headers(self, content_type: Optional[str] = None) -> Dict[str, str]:
        headers = {"Ocp-Apim-Subscription-Key": self.settings.key}
        if content_type:
            headers["Content-Type"] = content_type
        return headers

    def submit(self, data: bytes, mime_type: str) -> OcrJob:
        ok, msg = self.settings.ready()
        if not ok:
            raise ConfigurationError("OCR service is not configured", details=msg)

        url = self.settings.analyze_url
        r = self.session.post(
            url,
            data=data,
            headers=self._headers(mime_type),
            timeout=self.settings.request_timeout,
        )
        r.raise_for_status()
        location = r.headers.get("operation-location")
        if not location:
            raise UpstreamProtocolError("Azure did not return operation-location")
        logger.info("OCR job submitted (%d bytes, %s)", len(data), mime_type)
        return OcrJob(submit_url=url, poll_url=location)

    def fetch_status(self, job: OcrJob) -> Dict[str, Any]:
        r = self.session.get(
            job.poll_url,
            headers=self._headers(),
            timeout=self.settings.request_timeout,
        )
        r.raise_for_status()
        try:
            payload = r.json()
        except ValueError:
            raise UpstreamProtocolError("Azure returned an unreadable poll response", details=r.text)
        if not isinstance(payload, dict):
            raise UpstreamProtocolError("Azure returned an unreadable poll response", details=payload)
        return payload

    def extract_text(self, data: bytes, mime_type: str) -> str:
        job = self.submit(data, mime_type)
        payload = poll_job(
            lambda: self.fetch_status(job),
            attempts=self.settings.poll_attempts,
            interval=self.settings.poll_interval,
            sleep=self.sleep,
            job=job,
        )
        return flatten_lines(payload)
