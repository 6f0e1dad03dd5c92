"""Health and connectivity checks (never behind auth)."""
import logging

from flask import Blueprint, jsonify
from sqlalchemy import text

from transcache import db

logger = logging.getLogger(__name__)

public_bp = Blueprint('public', __name__)


@public_bp.route('/', methods=['GET'])
@public_bp.route('/health', methods=['GET'])
@public_bp.route('/healthz', methods=['GET'])
def health():
    return 'OK', 200


@public_bp.route('/dbping', methods=['GET'])
def dbping():
    """Round-trip to the database."""
    try:
        now = db.session.execute(text('SELECT CURRENT_TIMESTAMP')).scalar()
        return jsonify({'ok': True, 'now': str(now)}), 200
    except Exception as e:
        db.session.rollback()
        logger.error(f"dbping failed: {e}")
        return jsonify({'ok': False, 'error': str(e)}), 500
