"""Translate orchestration: cache first, provider only when the mode allows.

FAST PATHS (no provider call):
- Same language, numbers, dimensions, contact details (bypass)
- Template matching the numeric pattern of the text
- Exact fingerprint, then same normalized text under any selector
"""
import logging

from transcache.errors import CacheMissError
from transcache.services import providers
from transcache.services.masker import unmask
from transcache.services.mode import provider_for_mode
from transcache.services.persistence import upsert_entry, upsert_template
from transcache.services.resolver import OUTCOME_BYPASS, TranslateRequest, resolve
from transcache.services.usage import log_usage

logger = logging.getLogger(__name__)

__all__ = ['TranslateRequest', 'translate_request']


def translate_request(req: TranslateRequest, mode: str, supported_languages=None) -> dict:
    """
    Resolve ``req`` and escalate a miss to the provider named by ``mode``.

    Args:
        req: The request to translate
        mode: Operating mode read for this request ('cache-only', 'cache+deepl', ...)
        supported_languages: Accepted target language codes (None accepts any)

    Returns:
        {'from': <outcome>, 'text': <translation>}

    Raises:
        ValidationError: missing field or unsupported target language
        CacheMissError: nothing cached and the mode forbids escalation
        ProviderError: the provider call failed (nothing is stored)
    """
    req.validate(supported_languages)

    resolution = resolve(req)
    if resolution.outcome == OUTCOME_BYPASS:
        return {'from': OUTCOME_BYPASS, 'text': req.source_text}

    scope = dict(project_id=req.project_id, source_lang=req.source_lang, target_lang=req.target_lang)

    if resolution.is_hit:
        log_usage(**scope, from_cache=True, provider='cache', chars=len(req.source_text))
        return {'from': resolution.outcome, 'text': resolution.text}

    provider = provider_for_mode(mode)
    if not provider:
        log_usage(**scope, from_cache=False, provider='none', chars=0)
        logger.info(f"Cache miss in {mode} mode for project {req.project_id}")
        raise CacheMissError(f'{mode} mode')

    masked = resolution.mask
    translated = providers.translate(provider, masked.masked_text, req.source_lang, req.target_lang)
    log_usage(**scope, from_cache=False, provider=provider, chars=len(req.source_text))

    context = dict(context_url=req.context_url, page_path=req.page_path, selector_hash=req.selector_hash)

    if masked.has_tokens:
        entry = upsert_template(
            **scope,
            pattern_key=resolution.pattern_key,
            masked_source=masked.masked_text,
            translated_template=translated,
            **context
        )
        return {'from': f'{provider}-template', 'text': unmask(entry.translated_text, masked.tokens)}

    entry = upsert_entry(
        **scope,
        source_text=req.source_text,
        translated_text=translated,
        source_norm=resolution.source_norm,
        checksum=resolution.checksum,
        **context
    )
    return {'from': provider, 'text': entry.translated_text}
