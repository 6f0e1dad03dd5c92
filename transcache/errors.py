"""Error types surfaced to API callers, and their Flask handlers."""
import logging

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class TranscacheError(Exception):
    """Base error carrying the HTTP status it maps to."""
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'error': self.message}


class ValidationError(TranscacheError):
    """Missing required field or unsupported language."""
    status_code = 400


class NotFoundError(TranscacheError):
    status_code = 404


class CacheMissError(TranscacheError):
    """No cache entry matched and the current mode forbids escalation.

    Not a fault: this is the expected answer in cache-only mode.
    """
    status_code = 404

    def __init__(self, note='cache-only mode'):
        super().__init__('miss')
        self.note = note

    def to_dict(self):
        return {'error': 'miss', 'note': self.note}


class ProviderError(TranscacheError):
    """The external translation provider failed (network, quota, bad payload)."""
    status_code = 502

    def __init__(self, provider, message):
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class StorageError(TranscacheError):
    status_code = 500


def register_error_handlers(app):
    """Map domain errors and database failures to JSON responses."""
    from transcache import db

    @app.errorhandler(TranscacheError)
    def handle_transcache_error(e):
        if e.status_code >= 500:
            logger.error(f"{type(e).__name__}: {e.message}")
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_db_error(e):
        db.session.rollback()
        logger.exception("Storage error")
        return jsonify({'error': str(e)}), 500
