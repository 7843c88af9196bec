import os
from dotenv import load_dotenv

# Load .env variables (make sure you have a .env file in project root)
load_dotenv()


def _env_flag(name: str, default: str = "true") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Base configuration shared across environments."""
    SECRET_KEY = os.getenv("SECRET_KEY", "supersecretkey")

    # Placeholder bearer token guarding patient creation
    API_TOKEN = os.getenv("API_TOKEN", "mysecrettoken")
    PATIENT_CREATE_REQUIRES_AUTH = _env_flag("PATIENT_CREATE_REQUIRES_AUTH", "true")

    # memory | redis
    STORE_BACKEND = os.getenv("STORE_BACKEND", "memory")
    REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
    REDIS_PORT = int(os.getenv("REDIS_PORT", 6379))
    REDIS_DB = int(os.getenv("REDIS_DB", 0))
    REDIS_PREFIX = os.getenv("REDIS_PREFIX", "clinic")

    CLINIC_TIMEZONE = os.getenv("CLINIC_TIMEZONE", "Asia/Kolkata")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

    LOG_DIR = os.getenv("LOG_DIR", "logs")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    PORT = int(os.getenv("PORT", 3001))


class DevConfig(Config):
    """Local development configuration"""
    DEBUG = True


class ProdConfig(Config):
    """Production configuration"""
    DEBUG = False


class TestConfig(Config):
    """Used by the pytest fixtures"""
    TESTING = True
    STORE_BACKEND = "memory"
    API_TOKEN = "mysecrettoken"
    PATIENT_CREATE_REQUIRES_AUTH = True


class ClientConfig:
    """Settings for the HTTP client data layer."""
    API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:3001")
    API_TOKEN = os.getenv("API_TOKEN", "mysecrettoken")
    API_TIMEOUT = float(os.getenv("API_TIMEOUT", 10))
    API_RETRIES = int(os.getenv("API_RETRIES", 3))
    API_BACKOFF = float(os.getenv("API_BACKOFF", 2.0))
