"""Exact-match cache key for literal translations."""
import hashlib

# \x1f is whitespace to normalize(), so normalized text can never contain it
SEPARATOR = '::\x1f'


def fingerprint(source_norm: str, target_lang: str, selector_hash: str = '') -> str:
    """SHA-256 hex digest of normalized text, target language and selector hash."""
    payload = SEPARATOR.join([source_norm or '', target_lang or '', selector_hash or ''])
    return hashlib.sha256(payload.encode('utf-8')).hexdigest()
