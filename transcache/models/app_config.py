"""Key/value settings persisted outside the process (e.g. the translation mode)."""
from datetime import datetime

from transcache import db


class AppConfig(db.Model):
    __tablename__ = 'app_config'

    key = db.Column(db.String(100), primary_key=True)
    value = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<AppConfig {self.key}={self.value}>'
