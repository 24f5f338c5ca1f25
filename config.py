# config.py
import os


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "super-secret-key"
    _BASE_DIR = os.path.abspath(os.path.dirname(__file__))
    _DEFAULT_DB_PATH = os.path.join(_BASE_DIR, "instance", "mosaic.db")
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL") or f"sqlite:///{_DEFAULT_DB_PATH}"
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Muestra la traza de errores inesperados en los banners de administración
    DEBUG_MODE = _env_flag("MOSAIC_DEBUG_MODE")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    # Grillas server-side
    GRID_DEFAULT_LENGTH = 10
    GRID_MAX_LENGTH = 500
    DESCRIPTION_PREVIEW_LENGTH = 60

    WTF_CSRF_TIME_LIMIT = None


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "testing-secret-key"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    WTF_CSRF_ENABLED = False
    DEBUG_MODE = False
    LOG_LEVEL = "WARNING"
