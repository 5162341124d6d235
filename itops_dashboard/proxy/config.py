import os
from typing import Dict, Type

from ..config import CACHE_TTL, FETCH_TIMEOUT, SHEET_URLS


class Config:
    DEBUG = False
    TESTING = False
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    HOST = os.environ.get("PROXY_HOST", "0.0.0.0")
    PORT = int(os.environ.get("PROXY_PORT", "3000"))
    CACHE_TTL = CACHE_TTL
    FETCH_TIMEOUT = FETCH_TIMEOUT
    SHEET_URLS = SHEET_URLS


class DevelopmentConfig(Config):
    DEBUG = True


class ProductionConfig(Config):
    DEBUG = False


class TestingConfig(Config):
    TESTING = True


config_by_name: Dict[str, Type[Config]] = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
