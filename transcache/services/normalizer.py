"""Text and page-path canonicalization used for cache matching."""
import re
import unicodedata
from urllib.parse import urlsplit

_WHITESPACE_RX = re.compile(r'\s+')

# Trailing id segment: /complete/2574 -> /complete
_TRAILING_ID_RX = re.compile(r'/(?:\d+|[0-9a-f]{6,}|[0-9a-f-]{8,})/?$', re.IGNORECASE)


def collapse_whitespace(text) -> str:
    """Collapse whitespace runs to a single space and trim the ends."""
    if not isinstance(text, str):
        return ''
    return _WHITESPACE_RX.sub(' ', text).strip()


def normalize(text) -> str:
    """Canonical form of ``text`` for matching.

    Decomposes (NFKD), lowercases, strips combining marks and collapses
    whitespace. Idempotent; non-string input yields ''.
    """
    if not isinstance(text, str):
        return ''
    # Decompose again after lowercasing: compatibility characters like U+2121
    # expand to uppercase letters on the first pass.
    decomposed = unicodedata.normalize('NFKD', unicodedata.normalize('NFKD', text).lower())
    stripped = ''.join(ch for ch in decomposed if not unicodedata.combining(ch))
    return collapse_whitespace(stripped.lower())


def canonicalize_path(raw):
    """Page path with a trailing numeric/hex/uuid segment removed.

    Accepts a bare path or an absolute URL. Returns None for empty input.
    """
    if not raw:
        return None
    path = urlsplit(str(raw)).path or '/'
    return _TRAILING_ID_RX.sub('', path) or '/'
