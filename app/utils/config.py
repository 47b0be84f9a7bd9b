"""
Settings objects handed to the OCR client and the essay grader.

Built once from the Flask config in the application factory so neither
collaborator reads process state on its own.
"""
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple


@dataclass(frozen=True)
class OcrSettings:
    endpoint: str
    key: str
    model: str = "prebuilt-read"
    api_version: str = "2023-07-31"
    poll_attempts: int = 15
    poll_interval: float = 1.0
    request_timeout: Optional[float] = None

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, Any]) -> "OcrSettings":
        timeout = float(cfg.get("OCR_REQUEST_TIMEOUT") or 0)
        return cls(
            endpoint=(cfg.get("AZURE_OCR_ENDPOINT") or "").strip().rstrip("/"),
            key=(cfg.get("AZURE_OCR_KEY") or "").strip(),
            model=cfg.get("AZURE_OCR_MODEL") or "prebuilt-read",
            api_version=cfg.get("AZURE_OCR_API_VERSION") or "2023-07-31",
            poll_attempts=int(cfg.get("OCR_POLL_ATTEMPTS", 15)),
            poll_interval=float(cfg.get("OCR_POLL_INTERVAL", 1.0)),
            request_timeout=timeout if timeout > 0 else None,
        )

    @property
    def analyze_url(self) -> str:
        return (
            f"{self.endpoint}/formrecognizer/documentModels/{self.model}:analyze"
            f"?api-version={self.api_version}"
        )

    def ready(self) -> Tuple[bool, str]:
        if not self.endpoint:
            return False, "AZURE_OCR_ENDPOINT is missing"
        if not self.key:
            return False, "AZURE_OCR_KEY is missing"
        return True, ""


@dataclass(frozen=True)
class GradingSettings:
    api_key: str
    model: str = "gpt-4"
    temperature: float = 0.5
    max_tokens: int = 1000
    timeout: float = 60.0
    strict_breakdown: bool = False

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, Any]) -> "GradingSettings":
        return cls(
            api_key=(cfg.get("OPENAI_API_KEY") or "").strip(),
            model=(cfg.get("OPENAI_MODEL") or "").strip() or "gpt-4",
            temperature=float(cfg.get("GRADING_TEMPERATURE", 0.5)),
            max_tokens=int(cfg.get("GRADING_MAX_TOKENS", 1000)),
            timeout=float(cfg.get("OPENAI_TIMEOUT", 60)),
            strict_breakdown=bool(cfg.get("FEATURE_STRICT_BREAKDOWN", False)),
        )

    def ready(self) -> Tuple[bool, str]:
        if not self.api_key:
            return False, "OPENAI_API_KEY is missing"
        return True, ""
