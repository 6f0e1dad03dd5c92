"""Operating mode: whether a cache miss may be escalated to a paid provider.

The mode lives in the ``app_config`` table so every worker sees the same
value. It is read once per request and handed to the orchestrator.
"""
import logging

from flask import current_app

from transcache import db
from transcache.errors import ValidationError
from transcache.models import AppConfig

logger = logging.getLogger(__name__)

MODE_KEY = 'mode'
CACHE_ONLY = 'cache-only'
ESCALATION_PREFIX = 'cache+'


def available_modes():
    from transcache.services.providers import PROVIDERS
    return [CACHE_ONLY] + [f'{ESCALATION_PREFIX}{name}' for name in PROVIDERS]


def get_mode() -> str:
    """Stored mode, else the TRANSLATION_MODE setting."""
    row = db.session.get(AppConfig, MODE_KEY)
    if row and row.value and row.value.strip():
        return row.value.strip()
    return current_app.config.get('TRANSLATION_MODE') or CACHE_ONLY


def set_mode(value: str) -> str:
    value = (value or '').strip()
    if value not in available_modes():
        raise ValidationError(f"mode must be one of: {', '.join(available_modes())}")

    row = db.session.get(AppConfig, MODE_KEY)
    if row:
        row.value = value
    else:
        db.session.add(AppConfig(key=MODE_KEY, value=value))
    db.session.commit()
    logger.info(f"Translation mode set to {value}")
    return value


def provider_for_mode(mode: str):
    """Provider name a mode escalates to, or None when escalation is forbidden."""
    if mode and mode.startswith(ESCALATION_PREFIX):
        return mode[len(ESCALATION_PREFIX):] or None
    return None
