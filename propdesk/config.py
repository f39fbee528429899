import os
from datetime import timedelta


def _env_bool(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


class Config:
    # Secret key for sessions / JWT - REQUIRED (checked in create_app)
    SECRET_KEY = os.environ.get("SECRET_KEY")

    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///propdesk.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JWT Configuration
    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY", SECRET_KEY)
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(
        hours=int(os.environ.get("JWT_ACCESS_TOKEN_EXPIRES_HOURS", 12))
    )

    # Mail (Flask-Mail)
    MAIL_SERVER = os.environ.get("MAIL_SERVER", "localhost")
    MAIL_PORT = int(os.environ.get("MAIL_PORT", 25))
    MAIL_USE_TLS = _env_bool("MAIL_USE_TLS")
    MAIL_USERNAME = os.environ.get("MAIL_USERNAME")
    MAIL_PASSWORD = os.environ.get("MAIL_PASSWORD")
    MAIL_DEFAULT_SENDER = os.environ.get(
        "MAIL_DEFAULT_SENDER", "Property Management <noreply@propdesk.local>"
    )
    MAIL_SUPPRESS_SEND = _env_bool("MAIL_SUPPRESS_SEND")

    # Demo account accepted by login
    DEMO_ENABLED = _env_bool("DEMO_ENABLED", "true")
    DEMO_EMAIL = os.environ.get("DEMO_EMAIL", "admin@realestate.com")
    DEMO_PASSWORD = os.environ.get("DEMO_PASSWORD", "admin123")

    LEASE_EXPIRY_WINDOW_DAYS = int(os.environ.get("LEASE_EXPIRY_WINDOW_DAYS", 30))

    API_PREFIX = os.environ.get("API_PREFIX", "/api")
    JSON_SORT_KEYS = False

    # Flask Configuration
    FLASK_ENV = os.environ.get("FLASK_ENV", "production")
    FLASK_DEBUG = os.environ.get("FLASK_DEBUG", "False").lower() == "true"


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    JWT_SECRET_KEY = SECRET_KEY
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    MAIL_SUPPRESS_SEND = True
    MAIL_DEFAULT_SENDER = "noreply@propdesk.test"
    DEMO_ENABLED = True
    DEMO_EMAIL = "admin@realestate.com"
    DEMO_PASSWORD = "admin123"
