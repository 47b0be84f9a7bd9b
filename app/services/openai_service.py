"""OpenAI essay grading.

Prompt construction, the chat completion call and parsing of the JSON
grading result the model sends back.
"""
from __future__ import annotations

import json
import logging
import re
from numbers import Real
from typing import Any, Dict, Optional

from openai import OpenAI

from app.errors import ConfigurationError, InvalidShapeError, MalformedResponseError
from app.models import GradingRequest
from app.utils.config import GradingSettings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an expert educator who provides fair, constructive feedback on student essays. "
    "Always return valid JSON responses."
)

_FENCE_RE = re.compile(r"```(?:json)?", flags=re.IGNORECASE)


def _points(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def grading_prompt(req: GradingRequest) -> str:
    per = f"{req.max_per_criterion:.1f}"
    total = _points(req.max_score)
    criteria = "\n".join(f"- {name}: {desc}" for name, desc in req.rubric.items())
    breakdown = ",\n    ".join(
        f'"{name}": {{ "score": <score>, "max": {per}, "comment": "<brief comment>" }}'
        for name in req.rubric
    )
    return f"""
You are an expert educator evaluating a student's essay response. Grade the essay based on the following criteria and return a JSON response.

**Question:** {req.question}

**Student's Answer:**
{req.answer}

**Bloom's Taxonomy Level:** {req.bloom_level or 'Not specified'}

**Rubric Criteria ({total} points total, {per} points per criterion):**
{criteria}

**Instructions:**
1. Evaluate the essay against each rubric criterion
2. Assign a score for each criterion (0 to {per} points)
3. Provide constructive feedback
4. Calculate the total score

**Return ONLY valid JSON in this exact format:**
{{
  "score": <total score>,
  "max_score": {total},
  "feedback": "<overall constructive feedback>",
  "breakdown": {{
    {breakdown}
  }}
}}

Ensure scores are realistic and feedback is constructive and encouraging.
""".strip()


def strip_code_fences(raw: str) -> str:
    return _FENCE_RE.sub("", raw or "").strip()


def parse_grading_response(
    raw: str,
    rubric: Optional[Dict[str, Any]] = None,
    strict: bool = False,
) -> Dict[str, Any]:
    """Parse the model output into a grading result.

    Only the shape is checked: a numeric ``score``, a non-empty ``feedback``
    and a ``breakdown``. Breakdown keys are compared with the rubric only
    when ``strict`` is set.
    """
    text = strip_code_fences(raw)
    try:
        obj = json.loads(text)
    except ValueError:
        logger.error("JSON parse failed. Raw response: %s", text)
        raise MalformedResponseError("Failed to parse AI response.", raw=text)

    if not isinstance(obj, dict):
        raise InvalidShapeError("Invalid grading response structure from AI.", details="expected a JSON object")

    problems = []
    score = obj.get("score")
    if isinstance(score, bool) or not isinstance(score, Real):
        problems.append("score must be a number")
    if not obj.get("feedback"):
        problems.append("feedback is missing")
    breakdown = obj.get("breakdown")
    if not breakdown and breakdown != {}:
        problems.append("breakdown is missing")
    elif strict and rubric:
        if not isinstance(breakdown, dict) or set(breakdown) != set(rubric):
            problems.append("breakdown keys do not match rubric criteria")

    if problems:
        logger.error("Invalid grading result structure: %s", obj)
        raise InvalidShapeError("Invalid grading response structure from AI.", details="; ".join(problems))
    return obj


class EssayGrader:
    def __init__(self, settings: GradingSettings, client: Optional[Any] = None):
        self.settings = settings
        self._client = client

    @property
    def client(self):
        if self._client is None:
            ok, msg = self.settings.ready()
            if not ok:
                raise ConfigurationError("Essay grading failed.", details=msg)
            self._client = OpenAI(api_key=self.settings.api_key, timeout=self.settings.timeout)
        return self._client

    def complete(self, prompt: str) -> str:
        res = self.client.chat.completions.create(
            model=self.settings.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=self.settings.temperature,
            max_tokens=self.settings.max_tokens,
        )
        return (res.choices[0].message.content or "").strip()

    def grade(self, req: GradingRequest) -> Dict[str, Any]:
        raw = self.complete(grading_prompt(req))
        logger.debug("Raw AI response: %s", raw)
        return parse_grading_response(raw, rubric=req.rubric, strict=self.settings.strict_breakdown)
