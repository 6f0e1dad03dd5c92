"""Application configuration, read from the environment."""
import os
import re


# Languages accepted as targets when SUPPORTED_LANGUAGES is not set (DeepL set)
DEFAULT_LANGUAGES = [
    'ar', 'bg', 'cs', 'da', 'de', 'el', 'en', 'es', 'et', 'fi', 'fr', 'hu',
    'id', 'it', 'ja', 'ko', 'lt', 'lv', 'nb', 'nl', 'pl', 'pt', 'ro', 'ru',
    'sk', 'sl', 'sv', 'tr', 'uk', 'zh',
]

# Local dev servers are always allowed through CORS
LOCAL_ORIGINS = [
    re.compile(r'^https?://localhost(:\d+)?$'),
    re.compile(r'^https?://127\.0\.0\.1(:\d+)?$'),
]


def _split_env(name, default=''):
    return [s.strip() for s in os.getenv(name, default).split(',') if s.strip()]


def _database_url():
    """Resolve the database URL.

    Order: POOL_DATABASE_URL, DATABASE_URL, then the DB_* parts.
    """
    url = os.getenv('POOL_DATABASE_URL') or os.getenv('DATABASE_URL')
    if not url:
        host = os.getenv('DB_HOST')
        name = os.getenv('DB_NAME')
        user = os.getenv('DB_USER')
        password = os.getenv('DB_PASSWORD')
        if host and name and user and password:
            from urllib.parse import quote
            port = os.getenv('DB_PORT', '5432')
            url = f"postgresql://{quote(user)}:{quote(password)}@{host}:{port}/{name}"
    if not url:
        url = 'sqlite:///transcache.db'  # Local development fallback
    # Handle Render's postgres:// vs postgresql:// issue
    if url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url


class Config:
    SQLALCHEMY_DATABASE_URI = _database_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    TESTING = False

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    API_TOKEN = os.getenv('API_TOKEN')
    ADMIN_TOKEN = os.getenv('ADMIN_TOKEN')

    PROJECT_ID = os.getenv('PROJECT_ID')
    TRANSLATION_MODE = os.getenv('TRANSLATION_MODE', 'cache-only').strip()
    SUPPORTED_LANGUAGES = [s.lower() for s in _split_env('SUPPORTED_LANGUAGES')] or DEFAULT_LANGUAGES

    DEEPL_API_KEY = os.getenv('DEEPL_API_KEY', '')
    DEEPL_API_URL = os.getenv('DEEPL_API_URL', 'https://api-free.deepl.com/v2/translate')
    OPENAI_API_KEY = os.getenv('OPENAI_API_KEY', '')
    OPENAI_TRANSLATION_MODEL = os.getenv('OPENAI_TRANSLATION_MODEL', 'gpt-4o-mini')
    PROVIDER_TIMEOUT = float(os.getenv('PROVIDER_TIMEOUT', '15'))

    CORS_ORIGINS = _split_env('ALLOWED_ORIGINS') + LOCAL_ORIGINS


class DevelopmentConfig(Config):
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG').upper()


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    API_TOKEN = None
    ADMIN_TOKEN = 'test-admin-token'
    PROJECT_ID = 'test-project'
    TRANSLATION_MODE = 'cache-only'
    SUPPORTED_LANGUAGES = DEFAULT_LANGUAGES
    DEEPL_API_KEY = 'test-deepl-key'
    OPENAI_API_KEY = 'test-openai-key'


class ProductionConfig(Config):
    pass


CONFIGS = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
}


def get_config(name):
    return CONFIGS.get(name, DevelopmentConfig)
