"""Translation model: one cached translation, literal or template."""
from datetime import datetime

from transcache import db


class Translation(db.Model):
    """A stored translation scoped to a project and language pair.

    Literal entries are keyed by ``checksum`` (fingerprint of the normalized
    text, target language and selector hash). Template entries are keyed by
    ``pattern_key`` and their texts still hold ``__TOKn__`` placeholders.
    """
    __tablename__ = 'translations'

    STATUS_AUTO = 'auto'
    STATUS_APPROVED = 'approved'
    STATUS_REVIEW_NEEDED = 'review_needed'
    STATUS_REJECTED = 'rejected'
    VALID_STATUSES = [STATUS_AUTO, STATUS_APPROVED, STATUS_REVIEW_NEEDED, STATUS_REJECTED]

    id = db.Column(db.Integer, primary_key=True)

    # Scope key
    project_id = db.Column(db.String(100), nullable=False)
    source_lang = db.Column(db.String(10), nullable=False)
    target_lang = db.Column(db.String(10), nullable=False)

    # Content key: checksum for literal rows, pattern_key for templates
    checksum = db.Column(db.String(64), nullable=True)
    pattern_key = db.Column(db.Text, nullable=True)

    source_text = db.Column(db.Text, nullable=False)
    source_norm = db.Column(db.Text, nullable=False)
    translated_text = db.Column(db.Text, nullable=False)

    is_template = db.Column(db.Boolean, default=False, nullable=False)
    status = db.Column(db.String(20), default=STATUS_AUTO, nullable=False, index=True)
    is_locked = db.Column(db.Boolean, default=False, nullable=False)

    # Page context
    context_url = db.Column(db.Text, nullable=True)
    page_path = db.Column(db.Text, nullable=True)
    page_canonical = db.Column(db.Text, nullable=True)
    selector_hash = db.Column(db.String(128), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False, index=True)

    __table_args__ = (
        db.UniqueConstraint('project_id', 'source_lang', 'target_lang', 'checksum',
                            name='uq_translations_checksum'),
        db.UniqueConstraint('project_id', 'source_lang', 'target_lang', 'pattern_key',
                            name='uq_translations_pattern_key'),
        db.Index('ix_translations_source_norm', 'project_id', 'source_lang', 'target_lang', 'source_norm'),
    )

    def __repr__(self):
        kind = 'template' if self.is_template else 'literal'
        return f'<Translation {self.id} {self.source_lang}->{self.target_lang} {kind}>'

    def to_dict(self):
        return {
            'id': self.id,
            'project_id': self.project_id,
            'source_lang': self.source_lang,
            'target_lang': self.target_lang,
            'source_text': self.source_text,
            'source_norm': self.source_norm,
            'translated_text': self.translated_text,
            'is_template': self.is_template,
            'pattern_key': self.pattern_key,
            'status': self.status,
            'is_locked': self.is_locked,
            'context_url': self.context_url,
            'page_path': self.page_path,
            'page_canonical': self.page_canonical,
            'selector_hash': self.selector_hash,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
