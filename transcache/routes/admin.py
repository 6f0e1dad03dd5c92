"""Admin routes: operating mode, usage stats and translation management."""
from flask import Blueprint, jsonify, request

from transcache.errors import ValidationError
from transcache.services import persistence
from transcache.services.mode import available_modes, get_mode, set_mode
from transcache.services.usage import today_stats
from transcache.utils.auth import admin_required

admin_bp = Blueprint('admin', __name__)


# ============================================================================
# MODE
# ============================================================================

@admin_bp.route('/mode', methods=['GET'])
@admin_required
def read_mode():
    return jsonify({'mode': get_mode(), 'available': available_modes()}), 200


@admin_bp.route('/mode', methods=['POST'])
@admin_required
def write_mode():
    """Switch between cache-only and cache+<provider>."""
    data = request.get_json(silent=True) or {}
    mode = set_mode(data.get('mode'))
    return jsonify({'mode': mode}), 200


# ============================================================================
# STATS
# ============================================================================

@admin_bp.route('/stats', methods=['GET'])
@admin_required
def stats():
    return jsonify({'today': today_stats()}), 200


# ============================================================================
# TRANSLATIONS
# ============================================================================

@admin_bp.route('/api/translations', methods=['GET'])
@admin_required
def list_translations():
    """List translations with pagination and search.

    Query params:
    - q: text contained in the source or the translation
    - status: auto, approved, review_needed, rejected
    - from / to: source / target language
    - page_path: page path (matched on its canonical form)
    - page, limit: pagination (limit 1..100, default 25)
    """
    result = persistence.list_entries(
        page=request.args.get('page', 1, type=int),
        limit=request.args.get('limit', 25, type=int),
        q=request.args.get('q', '').strip(),
        status=request.args.get('status', '').strip(),
        source_lang=request.args.get('from', '').strip(),
        target_lang=request.args.get('to', '').strip(),
        page_path=request.args.get('page_path', '').strip(),
    )
    return jsonify(result), 200


@admin_bp.route('/api/translations/<int:entry_id>', methods=['GET'])
@admin_required
def get_translation(entry_id):
    return jsonify(persistence.get_entry(entry_id).to_dict()), 200


@admin_bp.route('/api/edit', methods=['POST'])
@admin_required
def edit_translation():
    """Human correction: sets the text, approves and locks the entry."""
    data = request.get_json(silent=True) or {}
    entry_id = data.get('id')
    new_text = data.get('newText')
    if not entry_id or not new_text:
        raise ValidationError('Missing id or newText')

    entry = persistence.edit_entry(entry_id, new_text)
    return jsonify({'ok': True, 'translation': entry.to_dict()}), 200


@admin_bp.route('/api/lock', methods=['POST'])
@admin_required
def lock_translation():
    data = request.get_json(silent=True) or {}
    if not data.get('id'):
        raise ValidationError('Missing id')

    entry = persistence.set_lock(data['id'], data.get('locked', True))
    return jsonify({'ok': True, 'translation': entry.to_dict()}), 200


@admin_bp.route('/api/status', methods=['POST'])
@admin_required
def status_translation():
    data = request.get_json(silent=True) or {}
    if not data.get('id'):
        raise ValidationError('Missing id')

    entry = persistence.set_status(data['id'], data.get('status'))
    return jsonify({'ok': True, 'translation': entry.to_dict()}), 200


@admin_bp.route('/api/translations/<int:entry_id>', methods=['DELETE'])
@admin_required
def delete_translation(entry_id):
    persistence.delete_entry(entry_id)
    return jsonify({'ok': True}), 200
