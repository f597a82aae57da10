from dotenv import load_dotenv
load_dotenv()  # Load environment variables from .env file

import os


def _flag(name, default="false"):
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


class Config:
    """Base configuration class."""
    APP_NAME = os.getenv("APP_NAME", "Jewelry Back-Office API")
    APP_ENV = os.getenv("APP_ENV", "development")

    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    DEBUG = False
    TESTING = False
    PORT = int(os.getenv("PORT", "3000"))

    # ========================================
    # DOCUMENT STORE
    # ========================================
    MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    DB_NAME = os.getenv("DB_NAME", "jewelry")

    # ========================================
    # IDENTITY PROVIDER (FIREBASE)
    # ========================================
    FIREBASE_CREDENTIALS = os.getenv("FIREBASE_CREDENTIALS", "serviceAccountKey.json")
    FIREBASE_KEY = os.getenv("FIREBASE_KEY")  # inline service-account JSON
    FIREBASE_API_KEY = os.getenv("FIREBASE_API_KEY")
    FIREBASE_AUTH_URL = os.getenv(
        "FIREBASE_AUTH_URL",
        "https://identitytoolkit.googleapis.com/v1/accounts:signInWithPassword",
    )
    FIREBASE_TIMEOUT = int(os.getenv("FIREBASE_TIMEOUT", "15"))
    CHECK_REVOKED_TOKENS = _flag("CHECK_REVOKED_TOKENS", "true")

    # ========================================
    # HTTP
    # ========================================
    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if o.strip()]
    RATELIMIT_ENABLED = _flag("RATELIMIT_ENABLED", "true")
    RATELIMIT_STORAGE_URI = os.getenv("RATE_LIMIT_STORAGE_URI", "memory://")
    EXPOSE_ERROR_DETAILS = _flag("EXPOSE_ERROR_DETAILS", "false")

    # ========================================
    # OPENAPI (flask-smorest)
    # ========================================
    API_TITLE = "Jewelry Back-Office API"
    API_VERSION = "v1"
    OPENAPI_VERSION = "3.0.3"
    OPENAPI_URL_PREFIX = "/api"
    OPENAPI_JSON_PATH = "openapi.json"
    OPENAPI_SWAGGER_UI_PATH = "/docs"
    OPENAPI_SWAGGER_UI_URL = "https://cdn.jsdelivr.net/npm/swagger-ui-dist/"


class DevelopmentConfig(Config):
    DEBUG = True
    EXPOSE_ERROR_DETAILS = _flag("EXPOSE_ERROR_DETAILS", "true")


class ProductionConfig(Config):
    DEBUG = False


class TestingConfig(Config):
    TESTING = True
    DB_NAME = "jewelry_test"
    RATELIMIT_ENABLED = False
    EXPOSE_ERROR_DETAILS = True
    CHECK_REVOKED_TOKENS = True
    CORS_ORIGINS = ["*"]


CONFIG_BY_ENV = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def load_config(app, config_object=None):
    """
    Load configuration into the Flask app.

    An explicit `config_object` wins; otherwise the class is picked from APP_ENV.
    """
    if config_object is None:
        config_object = CONFIG_BY_ENV.get(os.getenv("APP_ENV", "development"), DevelopmentConfig)
    app.config.from_object(config_object)
    return app.config
