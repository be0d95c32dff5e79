import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Security
    ACCESS_CONTROL_ENABLED = _env_flag("ACCESS_CONTROL_ENABLED", True)
    FULL_ACCESS_ROLES = [
        role.strip()
        for role in os.getenv("FULL_ACCESS_ROLES", "superuser").split(",")
        if role.strip()
    ]
    # Level granted when a page carries no access rules
    DEFAULT_ACCESS_LEVEL = os.getenv("DEFAULT_ACCESS_LEVEL", "read_write")

    # Urls
    URL_TRAILING_SLASH = _env_flag("URL_TRAILING_SLASH", True)

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///pagecms-dev.db")

class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")

class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET_KEY = "testing-secret-key-with-enough-length"
    ACCESS_CONTROL_ENABLED = True
    FULL_ACCESS_ROLES = ["superuser"]
    URL_TRAILING_SLASH = True

config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
