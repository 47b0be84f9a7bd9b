"""
Request models

Key Models:
- UploadedFile: file handed to the extraction endpoint
- GradingRequest: question/answer/rubric payload for essay grading

Nothing here is persisted; every value lives for a single request.
"""
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict

from app.errors import ValidationError

DEFAULT_MAX_SCORE = 10
DEFAULT_CRITERIA_COUNT = 4


@dataclass
class UploadedFile:
    name: str
    mime_type: str
    data: bytes = b""

    @classmethod
    def from_storage(cls, file_storage) -> "UploadedFile":
        return cls(
            name=getattr(file_storage, "filename", "") or "",
            mime_type=getattr(file_storage, "mimetype", "") or "",
            data=file_storage.read(),
        )


@dataclass
class GradingRequest:
    question: str
    answer: str
    rubric: Dict[str, Any] = field(default_factory=dict)
    max_score: float = DEFAULT_MAX_SCORE
    bloom_level: str = ""

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "GradingRequest":
        payload = payload if isinstance(payload, dict) else {}
        question = payload.get("question")
        answer = payload.get("answer")

        if not question or not answer:
            raise ValidationError("Missing required fields: question and answer are required.")
        if not isinstance(answer, str) or not answer.strip():
            raise ValidationError("Answer cannot be empty.")

        rubric = payload.get("rubric")
        if rubric is None:
            rubric = {}
        if not isinstance(rubric, dict):
            raise ValidationError("rubric must be an object mapping criterion to description.")

        max_score = payload.get("max_score")
        if max_score is None:
            max_score = DEFAULT_MAX_SCORE
        if isinstance(max_score, bool) or not isinstance(max_score, Real) or max_score <= 0:
            raise ValidationError("max_score must be a positive number.")

        return cls(
            question=str(question),
            answer=answer,
            rubric=rubric,
            max_score=max_score,
            bloom_level=str(payload.get("bloom_level") or ""),
        )

    @property
    def criteria_count(self) -> int:
        return len(self.rubric) or DEFAULT_CRITERIA_COUNT

    @property
    def max_per_criterion(self) -> float:
        return self.max_score / max(1, self.criteria_count)
