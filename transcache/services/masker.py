"""Numeric / unit masking for template translations.

Numbers are swapped for placeholders before text reaches a provider, so the
provider cannot alter them, and so one cached template can serve every
numeric variant of the same sentence.

Two passes, numbered together by position:
    1. numbers bound to a unit or currency ("12,50 €", "-3 kg", "$40", "15%")
    2. remaining bare digit runs, with embedded spaces, dots, commas, hyphens
"""
import re
from dataclasses import dataclass

from transcache.services.normalizer import normalize

PLACEHOLDER = '__TOK{}__'
PATTERN_MARKER = '__NUM__'

_SPACE = r'[ \u00a0\u202f]'
_NUMBER = r'\d(?:[\d \u00a0\u202f.,\-]*\d)?'
_UNIT = r'(?:€|EUR|£|GBP|\$|USD|CHF|¥|JPY|kg|g|cm|mm|m|h|%)'
_CURRENCY_PREFIX = r'[€£$¥]'

# Placeholders already in the text are matched as "keep" and left alone
_KEEP = r'(?P<keep>__TOK\d+__)'

_UNIT_BOUND_RX = re.compile(
    rf'{_KEEP}|[+\-\u2212]?(?:{_NUMBER}{_SPACE}?{_UNIT}(?![^\W\d_])|{_CURRENCY_PREFIX}{_SPACE}?{_NUMBER})',
    re.IGNORECASE,
)
_BARE_NUMBER_RX = re.compile(rf'{_KEEP}|{_NUMBER}')

# Stands in for unit-bound runs during the bare pass
_FILLER = '\x00'

# Placeholders as they come out of normalize()
_NORMALIZED_PLACEHOLDER_RX = re.compile(r'__tok\d+__')


@dataclass(frozen=True)
class MaskResult:
    """Masked text plus the ordered (placeholder, original) pairs."""
    masked_text: str
    tokens: tuple = ()

    @property
    def has_tokens(self) -> bool:
        return bool(self.tokens)


def _find_runs(text):
    """(start, end) of every numeric run, in order of appearance.

    Unit-bound runs are blanked out before the bare pass, so the two passes
    never overlap.
    """
    unit_spans = [m.span() for m in _UNIT_BOUND_RX.finditer(text) if not m.group('keep')]

    residual = list(text)
    for start, end in unit_spans:
        residual[start:end] = _FILLER * (end - start)
    residual = ''.join(residual)

    bare_spans = [m.span() for m in _BARE_NUMBER_RX.finditer(residual) if not m.group('keep')]
    return sorted(unit_spans + bare_spans)


def mask(text) -> MaskResult:
    """Replace numeric runs with ``__TOK0__``, ``__TOK1__``, ... left to right."""
    if not isinstance(text, str):
        text = ''
    pieces = []
    pairs = []
    pos = 0
    for start, end in _find_runs(text):
        token = PLACEHOLDER.format(len(pairs))
        pieces.append(text[pos:start])
        pieces.append(token)
        pairs.append((token, text[start:end]))
        pos = end
    pieces.append(text[pos:])
    return MaskResult(masked_text=''.join(pieces), tokens=tuple(pairs))


def unmask(text, tokens) -> str:
    """Put the original values back, first occurrence of each placeholder, in token order."""
    if not isinstance(text, str):
        return ''
    for placeholder, original in tokens:
        text = text.replace(placeholder, original, 1)
    return text


def build_pattern_key(text) -> str:
    """Normalized text with every numeric run replaced by ``__NUM__``.

    "Prix: 12€" and "Prix: 99€" share a key. The runs are the ones ``mask``
    finds on the raw text, so a key has exactly one marker per token.
    """
    masked = mask(text).masked_text
    return _NORMALIZED_PLACEHOLDER_RX.sub(PATTERN_MARKER, normalize(masked))
