"""Daily usage counters (cache hits, misses, provider calls and characters)."""
import logging
from datetime import date, datetime

from sqlalchemy import case, func

from transcache import db
from transcache.models import UsageStat
from transcache.services.persistence import dialect_insert

logger = logging.getLogger(__name__)

SCOPE_COLUMNS = ['day', 'project_id', 'source_lang', 'target_lang', 'from_cache', 'provider']


def log_usage(project_id, source_lang, target_lang, from_cache, provider, chars=0):
    """Add one call to today's counter row.

    Metering must never break a translation, so failures are only logged.
    """
    table = UsageStat.__table__
    now = datetime.utcnow()
    try:
        insert = dialect_insert()
        stmt = insert(table).values(
            day=date.today(),
            project_id=project_id,
            source_lang=source_lang,
            target_lang=target_lang,
            from_cache=bool(from_cache),
            provider=provider,
            chars_count=max(0, int(chars or 0)),
            calls_count=1,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=SCOPE_COLUMNS,
            set_={
                'chars_count': table.c.chars_count + stmt.excluded.chars_count,
                'calls_count': table.c.calls_count + 1,
                'updated_at': now,
            },
        )
        db.session.execute(stmt)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        logger.warning(f"usage_stats ({provider}) error: {e}")


def today_stats(day=None):
    """Provider calls and chars, cache hits and misses for one day (default today)."""
    day = day or date.today()
    is_provider = UsageStat.from_cache.is_(False) & (UsageStat.provider != 'none')

    row = db.session.query(
        func.coalesce(func.sum(case((is_provider, UsageStat.calls_count), else_=0)), 0),
        func.coalesce(func.sum(case((is_provider, UsageStat.chars_count), else_=0)), 0),
        func.coalesce(func.sum(case((UsageStat.from_cache.is_(True), UsageStat.calls_count), else_=0)), 0),
        func.coalesce(func.sum(case((UsageStat.provider == 'none', UsageStat.calls_count), else_=0)), 0),
    ).filter(UsageStat.day == day).one()

    by_provider = db.session.query(
        UsageStat.provider,
        func.sum(UsageStat.calls_count),
        func.sum(UsageStat.chars_count),
    ).filter(UsageStat.day == day, UsageStat.from_cache.is_(False), UsageStat.provider != 'none') \
        .group_by(UsageStat.provider).all()

    rows = UsageStat.query.filter_by(day=day) \
        .order_by(UsageStat.project_id, UsageStat.source_lang, UsageStat.target_lang, UsageStat.provider).all()

    return {
        'day': day.isoformat(),
        'provider_calls': int(row[0]),
        'provider_chars': int(row[1]),
        'cache_hits': int(row[2]),
        'cache_miss': int(row[3]),
        'providers': {
            provider: {'calls': int(calls or 0), 'chars': int(chars or 0)}
            for provider, calls, chars in by_provider
        },
        'rows': [r.to_dict() for r in rows],
    }
