import os
from dotenv import load_dotenv

load_dotenv("secrets.env")


def _env_flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    # Secret key for session management
    SECRET_KEY = os.environ.get("SECRET_KEY") or "dailywell-secret-key-123"

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(__file__))
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL"
    ) or "sqlite:///" + os.path.join(basedir, "dailywell.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Identity header set by the auth gateway
    USER_ID_HEADER = os.environ.get("USER_ID_HEADER") or "X-User-Id"

    # Dashboard cache
    CACHE_TYPE = os.environ.get("CACHE_TYPE") or "SimpleCache"
    CACHE_DEFAULT_TIMEOUT = int(os.environ.get("CACHE_DEFAULT_TIMEOUT") or 300)

    # Reminders
    DEFAULT_REMINDER_TIME = os.environ.get("DEFAULT_REMINDER_TIME") or "09:00"

    # Text-generation providers for general assistant questions
    OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY")
    COHERE_API_KEY = os.environ.get("COHERE_API_KEY")
    HUGGINGFACE_API_TOKEN = os.environ.get("HUGGINGFACE_API_TOKEN")
    HUGGINGFACE_ENABLED = _env_flag("HUGGINGFACE_ENABLED", True)
    ADVICE_PROVIDER_TIMEOUT = float(os.environ.get("ADVICE_PROVIDER_TIMEOUT") or 10)

    MAIL_SERVER = os.environ.get("MAIL_SERVER")
    MAIL_PORT = int(os.environ.get("MAIL_PORT") or 25)
    MAIL_USE_SSL = _env_flag("MAIL_USE_SSL")
    MAIL_USE_TLS = _env_flag("MAIL_USE_TLS")
    MAIL_USERNAME = os.environ.get("MAIL_USERNAME")
    MAIL_PASSWORD = os.environ.get("MAIL_PASSWORD")
    MAIL_DEFAULT_SENDER = os.environ.get("MAIL_DEFAULT_SENDER")

    LOG_LEVEL = os.environ.get("LOG_LEVEL") or "INFO"

    @staticmethod
    def init_app(app):
        pass


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    CACHE_TYPE = "SimpleCache"
    MAIL_SUPPRESS_SEND = True
    MAIL_DEFAULT_SENDER = "reminders@dailywell.test"
    WTF_CSRF_ENABLED = False
    OPENAI_API_KEY = None
    COHERE_API_KEY = None
    HUGGINGFACE_API_TOKEN = None
    HUGGINGFACE_ENABLED = False
    LOG_LEVEL = "WARNING"
