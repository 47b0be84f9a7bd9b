"""
API Blueprint - text extraction and essay grading

- POST /             image/PDF upload -> {"text": ...}
- POST /grade-essay  question/answer/rubric -> grading result
"""
from typing import Any, Dict

import requests
from flask import Blueprint, current_app, jsonify, request
from openai import OpenAIError

from app.errors import (
    ConfigurationError,
    InvalidShapeError,
    MalformedResponseError,
    ServiceError,
    ValidationError,
)
from app.models import GradingRequest, UploadedFile
from app.services.pdf_service import extract_from_image, extract_from_pdf
from app.utils.uploads import require_supported, resolve_mime_type

api_bp = Blueprint('api', __name__)


# ============ Helper Functions ============

def ocr_client():
    return current_app.extensions["ocr_client"]


def essay_grader():
    return current_app.extensions["essay_grader"]


def upstream_details(exc: requests.RequestException) -> Any:
    resp = getattr(exc, "response", None)
    if resp is not None:
        try:
            return resp.json()
        except ValueError:
            return resp.text or str(exc)
    return str(exc)


# ============ API Routes ============

@api_bp.route("/", methods=["POST"])
def extract_text():
    file = request.files.get("file")
    if not file:
        return jsonify({"error": "No file uploaded"}), 400

    log = current_app.logger
    try:
        ext = require_supported(file.filename)
        upload = UploadedFile.from_storage(file)

        if ext == "pdf":
            log.info("Processing PDF file %s (%d bytes)", upload.name, len(upload.data))
            text = extract_from_pdf(upload.data, ocr_client())
        else:
            mime_type = resolve_mime_type(upload.name, upload.mime_type)
            log.info("Processing image file %s (%s)", upload.name, mime_type)
            text = extract_from_image(upload.data, mime_type, ocr_client())
    except ServiceError as e:
        if e.status_code < 500:
            return jsonify(e.to_dict()), e.status_code
        log.error("Text extraction error: %s", e)
        details = e.details if e.details is not None else e.message
        return jsonify({"error": "Text extraction failed", "details": details}), 500
    except requests.RequestException as e:
        log.error("Text extraction error: %s", e)
        return jsonify({"error": "Text extraction failed", "details": upstream_details(e)}), 500
    except Exception as e:
        log.exception("Text extraction error")
        return jsonify({"error": "Text extraction failed", "details": f"{type(e).__name__}: {e}"}), 500

    log.info("Returning %d characters", len(text))
    return jsonify({"text": text}), 200


@api_bp.route("/grade-essay", methods=["POST"])
def grade_essay():
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    log = current_app.logger

    try:
        req = GradingRequest.from_payload(payload)
    except ValidationError as e:
        return jsonify(e.to_dict()), e.status_code

    try:
        result = essay_grader().grade(req)
    except MalformedResponseError as e:
        return jsonify({"error": "Failed to parse AI response.", "details": e.raw}), 500
    except InvalidShapeError as e:
        return jsonify({"error": "Invalid grading response structure from AI.", "details": e.details}), 500
    except (OpenAIError, ConfigurationError) as e:
        log.error("Error grading essay: %s", e)
        details = e.details if isinstance(e, ConfigurationError) else str(e)
        return jsonify({"error": "Essay grading failed.", "details": details}), 500
    except Exception as e:
        log.exception("Error grading essay")
        return jsonify({"error": "Essay grading failed.", "details": f"{type(e).__name__}: {e}"}), 500

    log.info("Essay graded successfully: %s / %s", result.get("score"), req.max_score)
    return jsonify(result), 200
