import os
from dotenv import load_dotenv

load_dotenv()


def env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Single persisted record holding the whole site content
    CONTENT_RECORD_ID = os.getenv("CONTENT_RECORD_ID", "main")
    CONTENT_SAVE_DELAY = float(os.getenv("CONTENT_SAVE_DELAY", "1.0"))

    # Default-content detection
    DEFAULT_DETECTION_THRESHOLD = os.getenv("DEFAULT_DETECTION_THRESHOLD", "3")
    DEFAULT_DETECTION_FALLBACK = os.getenv("DEFAULT_DETECTION_FALLBACK", "strict")

    TRUST_STORED_DEFAULT = env_flag("TRUST_STORED_DEFAULT")
    RESET_PERSISTS = env_flag("RESET_PERSISTS")

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI")

class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")

class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    CONTENT_SAVE_DELAY = 0.01
    DEFAULT_DETECTION_THRESHOLD = "3"
    DEFAULT_DETECTION_FALLBACK = "strict"
    TRUST_STORED_DEFAULT = False
    RESET_PERSISTS = False

config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
