import os
from dotenv import load_dotenv

load_dotenv()


def env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "dev-jwt-secret-change-me-in-production")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # "sql" -> SqlAlchemyPageRepository, "memory" -> InMemoryPageRepository
    PAGE_STORE = os.getenv("PAGE_STORE", "sql")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Rich-text createdAt/lastModifiedAt do not count as a change when
    # deciding whether a revert needs a backup version.
    REVERT_IGNORE_METADATA_TIMESTAMPS = env_flag("REVERT_IGNORE_METADATA_TIMESTAMPS", True)
    DEFAULT_AUTHOR_ID = os.getenv("DEFAULT_AUTHOR_ID", "system")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///pagebuilder-dev.db")


class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")


class TestingConfig(BaseConfig):
    TESTING = True
    DEBUG = False
    JWT_SECRET_KEY = "testing-jwt-secret-key-0123456789abcdef"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    PAGE_STORE = "memory"
    LOG_LEVEL = "WARNING"
    REVERT_IGNORE_METADATA_TIMESTAMPS = True
    DEFAULT_AUTHOR_ID = "system"


config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
