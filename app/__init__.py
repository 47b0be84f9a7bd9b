"""
Scribegrade Application Factory
"""
import logging
import os
from datetime import datetime, timezone

from flask import Flask, jsonify
from werkzeug.exceptions import RequestEntityTooLarge

from config import config

# Version info
APP_VERSION = os.environ.get("APP_VERSION", "2026.10")
BUILD_TIME = os.environ.get("BUILD_TIME", "")
GIT_COMMIT = os.environ.get("GIT_COMMIT", "")


def create_app(config_name='default'):
    app = Flask(__name__)
    app.config.from_object(config[config_name])
    # Grading results are relayed verbatim, breakdown order included
    app.json.sort_keys = False

    logging.getLogger('app').setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    from app.services.ocr_service import OcrClient
    from app.services.openai_service import EssayGrader
    from app.utils.config import GradingSettings, OcrSettings

    ocr_settings = OcrSettings.from_mapping(app.config)
    grading_settings = GradingSettings.from_mapping(app.config)
    app.extensions['ocr_client'] = OcrClient(ocr_settings)
    app.extensions['essay_grader'] = EssayGrader(grading_settings)

    from app.api import api_bp
    app.register_blueprint(api_bp)  # No prefix - extraction is served at /

    @app.errorhandler(RequestEntityTooLarge)
    def too_large(e):
        return jsonify({"error": "Uploaded file is too large"}), 413

    # Health check endpoint
    @app.route('/healthz')
    def healthz():
        """Health check for load balancers and monitoring"""
        ocr_ok, ocr_msg = ocr_settings.ready()
        openai_ok, openai_msg = grading_settings.ready()
        return jsonify({
            "status": "ok" if (ocr_ok and openai_ok) else "degraded",
            "version": APP_VERSION,
            "ocr_ready": ocr_ok,
            "ocr_message": ocr_msg,
            "openai_ready": openai_ok,
            "openai_message": openai_msg,
            "model": grading_settings.model,
            "timestamp": datetime.now(timezone.utc).isoformat()
        })

    # Version endpoint
    @app.route('/version')
    def version():
        """Version and build info"""
        return jsonify({
            "version": APP_VERSION,
            "build_time": BUILD_TIME,
            "git_commit": GIT_COMMIT,
            "features": {
                "pdf_ocr_merge": True,
                "essay_grading": True,
                "strict_breakdown": grading_settings.strict_breakdown,
            }
        })

    if not ocr_settings.ready()[0]:
        app.logger.warning('OCR service not configured: %s', ocr_settings.ready()[1])
    if not grading_settings.ready()[0]:
        app.logger.warning('OpenAI not configured: %s', grading_settings.ready()[1])

    return app
