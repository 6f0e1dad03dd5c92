"""Database models for the translation cache."""

from .translation import Translation
from .app_config import AppConfig
from .usage_stat import UsageStat

__all__ = ['Translation', 'AppConfig', 'UsageStat']
