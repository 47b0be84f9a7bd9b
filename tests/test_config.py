"""
Configuration Tests
"""
import logging
from types import SimpleNamespace

import config


def failing_boto3():
    def client(*args, **kwargs):
        raise RuntimeError("no credentials")
    return SimpleNamespace(client=client)


class TestGetParameter:
    """Test Parameter Store lookups"""

    def test_environment_takes_precedence(self, monkeypatch):
        monkeypatch.setenv("AZURE_OCR_KEY", "from-env")
        assert config.get_parameter("azure-ocr-key", "default") == "from-env"

    def test_parameter_store_failure_logs_and_falls_back(self, monkeypatch, caplog):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        monkeypatch.setenv("USE_PARAMETER_STORE", "1")
        monkeypatch.setattr(config, "boto3", failing_boto3())

        with caplog.at_level(logging.WARNING, logger="config"):
            value = config.get_parameter("openai-api-key", "fallback")

        assert value == "fallback"
        assert "Could not load openai-api-key from Parameter Store" in caplog.text

    def test_get_config(self):
        assert config.get_config("testing") is config.TestingConfig
        assert config.get_config("unknown") is config.DevelopmentConfig
