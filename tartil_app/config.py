# File: tartil_app/config.py

import os
from dotenv import load_dotenv

load_dotenv()

# tartil_app/config.py -> project root is one level up
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

# Default SQLite database location
DATABASE_PATH = os.path.join(BASE_DIR, "database", "tartil.db")


class Config:
    """Tartil application configuration."""

    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        # Fallback for development, env is preferred
        SECRET_KEY = 'dev-secret-key-replace-in-production'

    SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI') or f'sqlite:///{DATABASE_PATH}'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'connect_args': {'timeout': 30},
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_DIR = os.environ.get('LOG_DIR') or os.path.join(BASE_DIR, 'logs')
    LOG_JSON = os.environ.get('LOG_JSON', '0') == '1'
    LOG_TO_FILE = os.environ.get('LOG_TO_FILE', '1') == '1'

    # Hifz scheduler
    HIFZ_DUE_LIMIT = int(os.environ.get('HIFZ_DUE_LIMIT', 20))
    HIFZ_PERFECT_BONUS_MULTIPLIER = float(os.environ.get('HIFZ_PERFECT_BONUS_MULTIPLIER', 0.5))

    @classmethod
    def init_app(cls, app):
        """Create directories the app writes to."""
        uri = app.config.get('SQLALCHEMY_DATABASE_URI', '')
        if uri == f'sqlite:///{DATABASE_PATH}':
            os.makedirs(os.path.dirname(DATABASE_PATH), exist_ok=True)
