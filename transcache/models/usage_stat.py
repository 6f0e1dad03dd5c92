"""Daily usage counters per project, language pair and provider."""
from datetime import datetime

from transcache import db


class UsageStat(db.Model):
    """Aggregated calls and characters for one day / scope / provider."""

    __tablename__ = 'usage_stats'

    id = db.Column(db.Integer, primary_key=True)
    day = db.Column(db.Date, nullable=False, index=True)
    project_id = db.Column(db.String(100), nullable=False)
    source_lang = db.Column(db.String(10), nullable=False)
    target_lang = db.Column(db.String(10), nullable=False)
    from_cache = db.Column(db.Boolean, nullable=False)
    provider = db.Column(db.String(20), nullable=False)  # 'cache', 'none', 'deepl', 'openai'

    chars_count = db.Column(db.Integer, default=0, nullable=False)
    calls_count = db.Column(db.Integer, default=0, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.UniqueConstraint('day', 'project_id', 'source_lang', 'target_lang', 'from_cache', 'provider',
                            name='uq_usage_stats_scope'),
    )

    def to_dict(self):
        return {
            'day': self.day.isoformat() if self.day else None,
            'project_id': self.project_id,
            'source_lang': self.source_lang,
            'target_lang': self.target_lang,
            'from_cache': self.from_cache,
            'provider': self.provider,
            'chars_count': self.chars_count,
            'calls_count': self.calls_count,
        }
