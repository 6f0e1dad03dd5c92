"""Cache resolution: bypass, template, exact fingerprint, normalized fallback."""
import logging
from dataclasses import dataclass, field
from typing import Optional

from transcache.errors import ValidationError
from transcache.models import Translation
from transcache.services.bypass import bypass_reason
from transcache.services.fingerprint import fingerprint
from transcache.services.masker import MaskResult, build_pattern_key, mask, unmask
from transcache.services.normalizer import normalize

logger = logging.getLogger(__name__)

OUTCOME_BYPASS = 'bypass'
OUTCOME_TEMPLATE = 'cache-template'
OUTCOME_CACHE = 'cache'
OUTCOME_MISS = 'miss'


@dataclass
class TranslateRequest:
    """One translate / lookup request as received from a client."""
    project_id: str
    source_lang: str
    target_lang: str
    source_text: str
    context_url: Optional[str] = None
    page_path: Optional[str] = None
    selector_hash: Optional[str] = None

    @classmethod
    def from_json(cls, data, default_project_id=None):
        """Build from a camelCase JSON body. Language codes are lowercased."""
        data = data or {}
        return cls(
            project_id=data.get('projectId') or default_project_id,
            source_lang=(data.get('sourceLang') or '').strip().lower(),
            target_lang=(data.get('targetLang') or '').strip().lower(),
            source_text=data.get('sourceText') or '',
            context_url=data.get('contextUrl') or None,
            page_path=data.get('pagePath') or None,
            selector_hash=data.get('selectorHash') or None,
        )

    def validate(self, supported_languages=None):
        if not (self.project_id and self.source_lang and self.target_lang and self.source_text):
            raise ValidationError('Missing fields')
        if supported_languages and self.target_lang not in supported_languages:
            raise ValidationError(f"Unsupported target language: {self.target_lang}")


@dataclass
class Resolution:
    """Outcome of a cache lookup.

    ``mask``, ``source_norm``, ``pattern_key`` and ``checksum`` are the keys
    computed along the way, reused when the caller escalates a miss.
    """
    outcome: str
    text: Optional[str] = None
    entry: Optional[Translation] = None
    mask: MaskResult = field(default_factory=lambda: MaskResult(''))
    source_norm: str = ''
    pattern_key: str = ''
    checksum: str = ''

    @property
    def is_hit(self) -> bool:
        return self.outcome in (OUTCOME_BYPASS, OUTCOME_TEMPLATE, OUTCOME_CACHE)


def _scoped(req, **filters):
    return Translation.query.filter_by(
        project_id=req.project_id,
        source_lang=req.source_lang,
        target_lang=req.target_lang,
        **filters
    )


def find_template(req, pattern_key):
    return _scoped(req, is_template=True, pattern_key=pattern_key).order_by(
        Translation.updated_at.desc(), Translation.id.desc()
    ).first()


def find_by_checksum(req, checksum):
    return _scoped(req, is_template=False, checksum=checksum).first()


def find_by_source_norm(req, source_norm):
    """Same text under any selector hash, most recently updated first."""
    return _scoped(req, is_template=False, source_norm=source_norm).order_by(
        Translation.updated_at.desc(), Translation.id.desc()
    ).first()


def resolve(req: TranslateRequest) -> Resolution:
    """Look ``req`` up in the cache without ever calling a provider.

    Order: bypass rules, template by pattern key, exact fingerprint,
    normalized text ignoring the selector hash. Storage errors propagate.
    """
    reason = bypass_reason(req.source_text, req.source_lang, req.target_lang)
    if reason:
        logger.debug(f"Bypass ({reason}) for project {req.project_id}")
        return Resolution(OUTCOME_BYPASS, text=req.source_text)

    masked = mask(req.source_text)
    pattern_key = build_pattern_key(req.source_text)
    source_norm = normalize(req.source_text)
    checksum = fingerprint(source_norm, req.target_lang, req.selector_hash or '')
    keys = dict(mask=masked, source_norm=source_norm, pattern_key=pattern_key, checksum=checksum)

    template = find_template(req, pattern_key)
    if template:
        # Fill the stored template with this request's numbers
        text = unmask(template.translated_text, masked.tokens)
        return Resolution(OUTCOME_TEMPLATE, text=text, entry=template, **keys)

    entry = find_by_checksum(req, checksum) or find_by_source_norm(req, source_norm)
    if entry:
        return Resolution(OUTCOME_CACHE, text=entry.translated_text, entry=entry, **keys)

    return Resolution(OUTCOME_MISS, **keys)
