"""Shared authentication utilities.

Two static bearer tokens protect the service:
- API_TOKEN for the public translate/cache routes (open when unset)
- ADMIN_TOKEN for /admin (admin routes refuse to work when unset)
"""

from functools import wraps
import hmac

from flask import request, jsonify, current_app


def _bearer_token():
    auth_header = request.headers.get('Authorization', '')
    if auth_header.startswith('Bearer '):
        return auth_header[7:]
    return None


def _matches(candidate, expected):
    """Timing-safe token comparison."""
    if not candidate or not expected:
        return False
    return hmac.compare_digest(str(candidate), str(expected))


def api_token_required(f):
    """
    Decorator requiring ``Authorization: Bearer <API_TOKEN>``.

    When API_TOKEN is not configured the route is open.

    Usage:
        @bp.route('/translate', methods=['POST'])
        @api_token_required
        def translate():
            ...
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        expected = current_app.config.get('API_TOKEN')
        if expected and not _matches(_bearer_token(), expected):
            return jsonify({'error': 'Unauthorized'}), 401
        return f(*args, **kwargs)
    return decorated


def admin_required(f):
    """
    Decorator requiring the admin token.

    The token may come from the bearer header, a ``token`` query parameter
    or a ``token`` field of the JSON body.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        expected = current_app.config.get('ADMIN_TOKEN')
        if not expected:
            return jsonify({'error': 'ADMIN_TOKEN not set'}), 500

        body = request.get_json(silent=True) or {}
        token = _bearer_token() or request.args.get('token') or body.get('token')
        if not _matches(token, expected):
            return jsonify({'error': 'Unauthorized (admin)'}), 401
        return f(*args, **kwargs)
    return decorated
