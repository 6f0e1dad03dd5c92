"""Tests for the persisted operating mode."""
import pytest

from transcache.errors import ValidationError
from transcache.services.mode import available_modes, get_mode, provider_for_mode, set_mode


class TestMode:

    def test_defaults_to_config(self, app, db_session):
        assert get_mode() == app.config['TRANSLATION_MODE'] == 'cache-only'

    def test_set_and_get(self, db_session):
        assert set_mode('cache+deepl') == 'cache+deepl'
        assert get_mode() == 'cache+deepl'
        set_mode(' cache-only ')
        assert get_mode() == 'cache-only'

    @pytest.mark.parametrize('value', ['', None, 'deepl', 'cache+unknown', 'CACHE-ONLY'])
    def test_rejects_unknown_modes(self, db_session, value):
        with pytest.raises(ValidationError):
            set_mode(value)

    def test_available_modes(self):
        assert available_modes() == ['cache-only', 'cache+deepl', 'cache+openai']

    @pytest.mark.parametrize('mode,provider', [
        ('cache-only', None),
        ('cache+deepl', 'deepl'),
        ('cache+openai', 'openai'),
        ('cache+', None),
        ('', None),
        (None, None),
    ])
    def test_provider_for_mode(self, mode, provider):
        assert provider_for_mode(mode) == provider
