"""
Scribegrade Configuration
Supports AWS Parameter Store for production secrets
"""
import logging
import os
from functools import lru_cache

try:
    import boto3
except ImportError:
    boto3 = None


def get_parameter(name: str, default: str = "") -> str:
    """Get parameter from AWS Parameter Store or environment"""
    # Environment variable takes precedence
    env_key = name.upper().replace("-", "_").replace("/", "_")
    if env_key in os.environ:
        return os.environ[env_key]

    if boto3 and os.environ.get("USE_PARAMETER_STORE"):
        try:
            ssm = boto3.client("ssm", region_name=os.environ.get("AWS_REGION", "us-west-2"))
            path = os.environ.get("PARAMETER_STORE_PATH", "/scribegrade/prod/")
            response = ssm.get_parameter(Name=f"{path}{name}", WithDecryption=True)
            return response["Parameter"]["Value"]
        except Exception as e:
            logging.getLogger(__name__).warning("Could not load %s from Parameter Store: %s", name, e)

    return default


class Config:
    """Base configuration"""
    # Flask
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-change-in-production")

    # File uploads
    MAX_CONTENT_LENGTH = 20 * 1024 * 1024  # 20MB

    # Azure Document Intelligence (OCR)
    AZURE_OCR_ENDPOINT = os.environ.get("AZURE_OCR_ENDPOINT", "").rstrip("/")
    AZURE_OCR_KEY = os.environ.get("AZURE_OCR_KEY", "")
    AZURE_OCR_MODEL = os.environ.get("AZURE_OCR_MODEL", "prebuilt-read")
    AZURE_OCR_API_VERSION = os.environ.get("AZURE_OCR_API_VERSION", "2023-07-31")
    OCR_POLL_ATTEMPTS = int(os.environ.get("OCR_POLL_ATTEMPTS", "15"))
    OCR_POLL_INTERVAL = float(os.environ.get("OCR_POLL_INTERVAL", "1.0"))
    # 0 disables the timeout on outbound OCR calls
    OCR_REQUEST_TIMEOUT = float(os.environ.get("OCR_REQUEST_TIMEOUT", "60"))

    # OpenAI
    OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY", "")
    OPENAI_MODEL = os.environ.get("OPENAI_MODEL", "gpt-4")
    OPENAI_TIMEOUT = float(os.environ.get("OPENAI_TIMEOUT", "60"))
    GRADING_TEMPERATURE = float(os.environ.get("GRADING_TEMPERATURE", "0.5"))
    GRADING_MAX_TOKENS = int(os.environ.get("GRADING_MAX_TOKENS", "1000"))

    # Logging
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # App Version
    APP_VERSION = os.environ.get("APP_VERSION", "2026.10")
    BUILD_TIME = os.environ.get("BUILD_TIME", "")
    GIT_COMMIT = os.environ.get("GIT_COMMIT", "")

    # Feature Flags
    FEATURE_STRICT_BREAKDOWN = os.environ.get("FEATURE_STRICT_BREAKDOWN", "0") == "1"


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False

    # Override with Parameter Store in production
    SECRET_KEY = get_parameter("secret-key", Config.SECRET_KEY)
    AZURE_OCR_KEY = get_parameter("azure-ocr-key", Config.AZURE_OCR_KEY)
    OPENAI_API_KEY = get_parameter("openai-api-key", Config.OPENAI_API_KEY)


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = True
    TESTING = True
    AZURE_OCR_ENDPOINT = "https://ocr.test"
    AZURE_OCR_KEY = "test-ocr-key"
    OPENAI_API_KEY = "test-openai-key"
    OCR_POLL_INTERVAL = 0.0
    FEATURE_STRICT_BREAKDOWN = False


config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}


@lru_cache()
def get_config(env: str = None):
    """Get configuration by environment name"""
    env = env or os.environ.get("FLASK_ENV", "development")
    return config.get(env, DevelopmentConfig)
