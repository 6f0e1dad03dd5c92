"""Shared utilities for the translation cache.

This package contains helpers shared across the route modules.
"""

from transcache.utils.auth import api_token_required, admin_required

__all__ = [
    'api_token_required',
    'admin_required',
]
