"""Tests for the upsert / lock semantics and admin writes."""
from datetime import datetime

import pytest

from conftest import PROJECT_ID, an_hour_ago, create_entry, fake
from transcache import db
from transcache.errors import NotFoundError, ValidationError
from transcache.models import Translation
from transcache.services import persistence


def upsert(text='Bonjour', translated='Hallo', **kwargs):
    return persistence.upsert_entry(PROJECT_ID, 'fr', 'nl', text, translated, **kwargs)


class TestUpsertEntry:

    def test_insert(self, db_session):
        entry = upsert(page_path='/complete/2574', selector_hash='h1')
        assert entry.id is not None
        assert entry.translated_text == 'Hallo'
        assert entry.status == 'auto'
        assert entry.is_locked is False
        assert entry.is_template is False
        assert entry.pattern_key is None
        assert entry.page_canonical == '/complete'
        assert entry.source_norm == 'bonjour'

    def test_conflict_overwrites_unlocked(self, db_session):
        first = upsert(translated='Hallo')
        second = upsert(translated='Goeiedag')
        assert second.id == first.id
        assert second.translated_text == 'Goeiedag'
        assert Translation.query.count() == 1

    def test_locked_text_survives_automated_write(self, db_session):
        existing = create_entry('Bonjour', 'Bonjour', locked=True, context_url='https://old.test/',
                                updated_at=an_hour_ago())
        before = existing.updated_at

        entry = upsert(translated='Hallo', context_url='https://new.test/page', page_path='/page')

        assert entry.id == existing.id
        assert entry.translated_text == 'Bonjour'
        assert entry.updated_at > before
        assert entry.context_url == 'https://new.test/page'
        assert entry.page_path == '/page'
        assert entry.page_canonical == '/page'

    def test_null_context_does_not_erase(self, db_session):
        upsert(context_url='https://site.test/a', page_path='/a')
        entry = upsert(translated='Hallo!')
        assert entry.context_url == 'https://site.test/a'
        assert entry.page_path == '/a'

    def test_selector_hash_is_part_of_the_key(self, db_session):
        upsert(selector_hash='a')
        upsert(selector_hash='b')
        assert Translation.query.count() == 2


class TestUpsertTemplate:

    def test_insert_and_refresh(self, db_session):
        args = (PROJECT_ID, 'fr', 'nl', 'prix: __NUM__', 'Prix: __TOK0__')
        first = persistence.upsert_template(*args, 'Prijs: __TOK0__')
        second = persistence.upsert_template(*args, 'Kost: __TOK0__', page_path='/p/12')

        assert second.id == first.id
        assert second.is_template is True
        assert second.checksum is None
        assert second.translated_text == 'Kost: __TOK0__'
        assert second.page_canonical == '/p'

    def test_locked_template_keeps_text(self, db_session):
        args = (PROJECT_ID, 'fr', 'nl', 'prix: __NUM__', 'Prix: __TOK0__')
        entry = persistence.upsert_template(*args, 'Prijs: __TOK0__')
        persistence.set_lock(entry.id, True)

        entry = persistence.upsert_template(*args, 'Kost: __TOK0__')
        assert entry.translated_text == 'Prijs: __TOK0__'

    def test_template_and_literal_do_not_collide(self, db_session):
        persistence.upsert_template(PROJECT_ID, 'fr', 'nl', 'bonjour', 'Bonjour', 'Hallo')
        upsert()
        assert Translation.query.count() == 2


class TestAdminWrites:

    def test_edit_locks_and_approves(self, db_session):
        entry = create_entry('Bonjour', 'Hallo', updated_at=an_hour_ago())
        edited = persistence.edit_entry(entry.id, 'Goedendag')
        assert edited.translated_text == 'Goedendag'
        assert edited.is_locked is True
        assert edited.status == 'approved'
        assert edited.updated_at > an_hour_ago()

        # A later machine translation of the same content keeps the human text
        assert upsert(translated='Hallo').translated_text == 'Goedendag'

    def test_edit_missing(self, db_session):
        with pytest.raises(NotFoundError):
            persistence.edit_entry(9999, 'x')

    def test_edit_requires_text(self, db_session):
        entry = create_entry('Bonjour', 'Hallo')
        with pytest.raises(ValidationError):
            persistence.edit_entry(entry.id, '   ')

    def test_set_status(self, db_session):
        entry = create_entry('Bonjour', 'Hallo')
        assert persistence.set_status(entry.id, 'review_needed').status == 'review_needed'
        with pytest.raises(ValidationError):
            persistence.set_status(entry.id, 'bogus')

    def test_delete(self, db_session):
        entry = create_entry('Bonjour', 'Hallo')
        persistence.delete_entry(entry.id)
        assert db.session.get(Translation, entry.id) is None
        with pytest.raises(NotFoundError):
            persistence.delete_entry(entry.id)


class TestListEntries:

    def test_filters_and_pagination(self, db_session):
        for i in range(30):
            create_entry(f'{fake.sentence()} {i}', fake.sentence(), page_path=f'/product/{i + 100}',
                         page_canonical='/product')
        create_entry('Panier', 'Winkelwagen', target_lang='de', status='approved',
                     page_path='/cart', page_canonical='/cart')

        page = persistence.list_entries(page=2, limit=10)
        assert page['total'] == 31
        assert page['lastPage'] == 4
        assert len(page['items']) == 10

        assert persistence.list_entries(q='winkel')['total'] == 1
        assert persistence.list_entries(status='approved')['total'] == 1
        assert persistence.list_entries(target_lang='DE')['total'] == 1
        assert persistence.list_entries(page_path='/product/555')['total'] == 30

    def test_limit_is_clamped(self, db_session):
        assert persistence.list_entries(limit=1000)['lastPage'] == 1
        create_entry('Bonjour', 'Hallo')
        assert len(persistence.list_entries(limit=0)['items']) == 1

    def test_newest_first(self, db_session):
        create_entry('Ancien', 'Oud', updated_at=datetime(2020, 1, 1))
        create_entry('Nouveau', 'Nieuw')
        items = persistence.list_entries()['items']
        assert [i['source_text'] for i in items] == ['Nouveau', 'Ancien']
