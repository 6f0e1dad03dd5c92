"""Writes to the translations table.

Automated writes go through an atomic insert-or-update keyed on the scope
plus content key (checksum for literal rows, pattern key for templates).
On conflict the stored translation is kept when the row is locked, so a
human correction survives later machine translations of the same content.
"""
import logging
import math
from datetime import datetime

from sqlalchemy import case, func, or_

from transcache import db
from transcache.errors import NotFoundError, StorageError, ValidationError
from transcache.models import Translation
from transcache.services.fingerprint import fingerprint
from transcache.services.normalizer import canonicalize_path, normalize

logger = logging.getLogger(__name__)

SCOPE_COLUMNS = ['project_id', 'source_lang', 'target_lang']
CONTEXT_COLUMNS = ['context_url', 'page_path', 'page_canonical', 'selector_hash']


def dialect_insert():
    dialect = db.session.get_bind().dialect.name
    if dialect == 'postgresql':
        from sqlalchemy.dialects.postgresql import insert
    elif dialect == 'sqlite':
        from sqlalchemy.dialects.sqlite import insert
    else:
        raise StorageError(f"Upsert not supported on {dialect}")
    return insert


def _upsert(values, key_column):
    """INSERT ... ON CONFLICT (scope, key_column) DO UPDATE, honouring the lock."""
    table = Translation.__table__
    now = datetime.utcnow()
    values = dict(values, created_at=now, updated_at=now)

    insert = dialect_insert()
    stmt = insert(table).values(**values)
    excluded = stmt.excluded

    updates = {
        'translated_text': case(
            (table.c.is_locked.is_(True), table.c.translated_text),
            else_=excluded.translated_text,
        ),
        key_column: excluded[key_column],
        'updated_at': now,
    }
    for column in CONTEXT_COLUMNS:
        updates[column] = func.coalesce(excluded[column], table.c[column])

    stmt = stmt.on_conflict_do_update(index_elements=SCOPE_COLUMNS + [key_column], set_=updates)
    db.session.execute(stmt)
    db.session.commit()

    return Translation.query.filter_by(
        **{c: values[c] for c in SCOPE_COLUMNS},
        **{key_column: values[key_column]}
    ).one()


def _context(context_url, page_path, selector_hash):
    return {
        'context_url': context_url,
        'page_path': page_path,
        'page_canonical': canonicalize_path(page_path or context_url),
        'selector_hash': selector_hash,
    }


def upsert_template(project_id, source_lang, target_lang, pattern_key, masked_source, translated_template,
                    context_url=None, page_path=None, selector_hash=None) -> Translation:
    """Store a template translation (texts still hold __TOKn__ placeholders)."""
    values = {
        'project_id': project_id,
        'source_lang': source_lang,
        'target_lang': target_lang,
        'pattern_key': pattern_key,
        'checksum': None,
        'source_text': masked_source,
        'source_norm': pattern_key,
        'translated_text': translated_template,
        'is_template': True,
        'status': Translation.STATUS_AUTO,
        'is_locked': False,
        **_context(context_url, page_path, selector_hash),
    }
    entry = _upsert(values, 'pattern_key')
    logger.debug(f"Upserted template {entry.id} for pattern '{pattern_key}'")
    return entry


def upsert_entry(project_id, source_lang, target_lang, source_text, translated_text,
                 context_url=None, page_path=None, selector_hash=None, source_norm=None,
                 checksum=None) -> Translation:
    """Store a literal translation keyed by its fingerprint."""
    source_norm = source_norm or normalize(source_text)
    checksum = checksum or fingerprint(source_norm, target_lang, selector_hash or '')
    values = {
        'project_id': project_id,
        'source_lang': source_lang,
        'target_lang': target_lang,
        'pattern_key': None,
        'checksum': checksum,
        'source_text': source_text,
        'source_norm': source_norm,
        'translated_text': translated_text,
        'is_template': False,
        'status': Translation.STATUS_AUTO,
        'is_locked': False,
        **_context(context_url, page_path, selector_hash),
    }
    entry = _upsert(values, 'checksum')
    logger.debug(f"Upserted translation {entry.id} ({source_lang}->{target_lang})")
    return entry


def get_entry(entry_id) -> Translation:
    entry = db.session.get(Translation, entry_id)
    if not entry:
        raise NotFoundError('Not found')
    return entry


def edit_entry(entry_id, new_text) -> Translation:
    """Human edit: replaces the text, approves and locks the entry."""
    if not new_text or not str(new_text).strip():
        raise ValidationError('Missing id or newText')
    entry = get_entry(entry_id)
    entry.translated_text = new_text
    entry.status = Translation.STATUS_APPROVED
    entry.is_locked = True
    entry.updated_at = datetime.utcnow()
    db.session.commit()
    logger.info(f"Translation {entry_id} edited and locked")
    return entry


def set_lock(entry_id, locked: bool) -> Translation:
    entry = get_entry(entry_id)
    entry.is_locked = bool(locked)
    entry.updated_at = datetime.utcnow()
    db.session.commit()
    return entry


def set_status(entry_id, status) -> Translation:
    if status not in Translation.VALID_STATUSES:
        raise ValidationError(f"status must be one of: {', '.join(Translation.VALID_STATUSES)}")
    entry = get_entry(entry_id)
    entry.status = status
    entry.updated_at = datetime.utcnow()
    db.session.commit()
    return entry


def delete_entry(entry_id):
    entry = get_entry(entry_id)
    db.session.delete(entry)
    db.session.commit()
    logger.info(f"Translation {entry_id} deleted")


def list_entries(page=1, limit=25, q=None, status=None, source_lang=None, target_lang=None, page_path=None):
    """Paginated admin listing, most recently updated first."""
    page = max(1, page or 1)
    limit = min(100, max(1, limit or 25))

    query = Translation.query
    if q:
        term = f'%{q}%'
        query = query.filter(or_(Translation.source_text.ilike(term), Translation.translated_text.ilike(term)))
    if status:
        query = query.filter(Translation.status == status)
    if source_lang:
        query = query.filter(Translation.source_lang == source_lang.lower())
    if target_lang:
        query = query.filter(Translation.target_lang == target_lang.lower())
    if page_path:
        query = query.filter(Translation.page_canonical.ilike(f'%{canonicalize_path(page_path)}%'))

    total = query.count()
    items = query.order_by(Translation.updated_at.desc(), Translation.id.desc()) \
        .offset((page - 1) * limit).limit(limit).all()

    return {
        'page': page,
        'lastPage': max(1, math.ceil(total / limit)),
        'total': total,
        'items': [item.to_dict() for item in items],
    }
