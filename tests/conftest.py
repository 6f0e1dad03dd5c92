"""
Pytest configuration and fixtures for testing the translation cache.
"""

import os
import sys
from datetime import datetime, timedelta

import pytest
from faker import Faker

# Add the parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from transcache import create_app, db
from transcache.models import Translation
from transcache.services import providers
from transcache.services.fingerprint import fingerprint
from transcache.services.masker import build_pattern_key, mask
from transcache.services.normalizer import normalize

fake = Faker()

ADMIN_TOKEN = 'test-admin-token'
PROJECT_ID = 'test-project'


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app('testing')

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client for each test function."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Empty every table and keep an app context open for the test."""
    with app.app_context():
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
        yield db.session
        db.session.rollback()


@pytest.fixture
def admin_headers():
    return {'Authorization': f'Bearer {ADMIN_TOKEN}'}


class FakeProvider:
    """Records calls and answers from a fixed table (or echoes with a prefix)."""

    def __init__(self, answers=None, error=None):
        self.calls = []
        self.answers = answers or {}
        self.error = error

    def __call__(self, text, source_lang, target_lang):
        self.calls.append((text, source_lang, target_lang))
        if self.error:
            raise self.error
        return self.answers.get(text, f'[{target_lang}] {text}')

    @property
    def call_count(self):
        return len(self.calls)


@pytest.fixture
def fake_deepl(monkeypatch):
    """Replace the DeepL provider with a recording fake."""
    fake_provider = FakeProvider()
    monkeypatch.setitem(providers.PROVIDERS, 'deepl', fake_provider)
    return fake_provider


def create_entry(source_text, translated_text, source_lang='fr', target_lang='nl',
                 project_id=PROJECT_ID, selector_hash=None, locked=False, updated_at=None, **overrides):
    """Insert a literal translation row directly."""
    source_norm = normalize(source_text)
    fields = dict(
        project_id=project_id,
        source_lang=source_lang,
        target_lang=target_lang,
        checksum=fingerprint(source_norm, target_lang, selector_hash or ''),
        source_text=source_text,
        source_norm=source_norm,
        translated_text=translated_text,
        selector_hash=selector_hash,
        is_locked=locked,
        updated_at=updated_at or datetime.utcnow(),
    )
    fields.update(overrides)
    entry = Translation(**fields)
    db.session.add(entry)
    db.session.commit()
    return entry


def create_template(source_text, translated_template, source_lang='fr', target_lang='nl',
                    project_id=PROJECT_ID, updated_at=None, **overrides):
    """Insert a template row for ``source_text`` (its numbers become placeholders)."""
    pattern_key = build_pattern_key(source_text)
    fields = dict(
        project_id=project_id,
        source_lang=source_lang,
        target_lang=target_lang,
        pattern_key=pattern_key,
        source_text=mask(source_text).masked_text,
        source_norm=pattern_key,
        translated_text=translated_template,
        is_template=True,
        updated_at=updated_at or datetime.utcnow(),
    )
    fields.update(overrides)
    entry = Translation(**fields)
    db.session.add(entry)
    db.session.commit()
    return entry


def an_hour_ago():
    return datetime.utcnow() - timedelta(hours=1)
