"""Translate orchestration endpoint."""
import logging

from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError

from transcache import db
from transcache.errors import TranscacheError
from transcache.services.mode import get_mode
from transcache.services.translation import TranslateRequest, translate_request
from transcache.utils.auth import api_token_required

logger = logging.getLogger(__name__)

translate_bp = Blueprint('translate', __name__)


@translate_bp.route('/translate', methods=['POST'])
@api_token_required
def translate():
    """Translate one text, from cache when possible.

    Body:
        projectId, sourceLang, targetLang, sourceText: required
        contextUrl, pagePath, selectorHash: optional page context

    Returns {from, text}; 404 {error: "miss"} when the mode forbids escalation.
    """
    req = TranslateRequest.from_json(request.get_json(silent=True), current_app.config.get('PROJECT_ID'))
    try:
        result = translate_request(req, get_mode(), current_app.config['SUPPORTED_LANGUAGES'])
        return jsonify(result), 200
    except (TranscacheError, SQLAlchemyError):
        raise
    except Exception as e:
        db.session.rollback()
        logger.exception("translate error")
        return jsonify({'error': str(e)}), 500
