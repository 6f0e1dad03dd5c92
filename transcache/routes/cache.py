"""Direct cache access: lookup without escalation, and seeding."""

from flask import Blueprint, request, jsonify, current_app

from transcache.errors import ValidationError
from transcache.services.masker import build_pattern_key, mask
from transcache.services.persistence import upsert_entry, upsert_template
from transcache.services.resolver import TranslateRequest, resolve
from transcache.utils.auth import api_token_required

cache_bp = Blueprint('cache', __name__)


@cache_bp.route('/find', methods=['POST'])
@api_token_required
def find():
    """Resolve a text against the cache only. Never calls a provider."""
    req = TranslateRequest.from_json(request.get_json(silent=True), current_app.config.get('PROJECT_ID'))
    req.validate()

    resolution = resolve(req)
    return jsonify({
        'from': resolution.outcome,
        'text': resolution.text,
        'hit': resolution.entry.to_dict() if resolution.entry else None,
    }), 200


@cache_bp.route('/upsert', methods=['POST'])
@api_token_required
def upsert():
    """Seed or refresh a translation.

    Body: the translate fields plus ``translatedText``. With ``isTemplate``
    the source is stored as a numeric template and ``translatedText`` must
    use the placeholders __TOK0__, __TOK1__ ... in the order mask() gives them.
    A locked entry keeps its text.
    """
    data = request.get_json(silent=True) or {}
    req = TranslateRequest.from_json(data, current_app.config.get('PROJECT_ID'))
    req.validate()

    translated_text = data.get('translatedText')
    if not translated_text:
        raise ValidationError('Missing fields')

    context = dict(context_url=req.context_url, page_path=req.page_path, selector_hash=req.selector_hash)

    if data.get('isTemplate'):
        masked = mask(req.source_text)
        if not masked.has_tokens:
            raise ValidationError('Template source must contain at least one number')
        entry = upsert_template(
            req.project_id, req.source_lang, req.target_lang,
            pattern_key=build_pattern_key(req.source_text),
            masked_source=masked.masked_text,
            translated_template=translated_text,
            **context
        )
    else:
        entry = upsert_entry(
            req.project_id, req.source_lang, req.target_lang,
            source_text=req.source_text,
            translated_text=translated_text,
            **context
        )

    return jsonify({'saved': entry.to_dict()}), 200
