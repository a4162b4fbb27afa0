"""Translation model: one localized string per (key, locale, context)."""
from datetime import datetime
from sqlalchemy.dialects.postgresql import JSONB
from translation_hub import db


class Translation(db.Model):
    """A localized text string.

    The (key, locale, context) triple is unique. SQL treats NULLs as
    distinct, so records without a context get their own partial unique
    index on (key, locale).
    """

    __tablename__ = 'translations'

    id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(255), nullable=False)
    locale = db.Column(db.String(5), nullable=False, index=True)
    content = db.Column(db.Text, nullable=False)
    context = db.Column(db.String(100), nullable=True, index=True)
    tags = db.Column(db.JSON().with_variant(JSONB(), 'postgresql'), nullable=False, default=list)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow,
                           nullable=False, index=True)

    __table_args__ = (
        db.UniqueConstraint('key', 'locale', 'context', name='uq_translations_key_locale_context'),
        db.Index(
            'uq_translations_key_locale_no_context',
            key, locale,
            unique=True,
            sqlite_where=context.is_(None),
            postgresql_where=context.is_(None),
        ),
    )

    def to_dict(self):
        """Convert translation to dictionary."""
        return {
            'id': self.id,
            'key': self.key,
            'locale': self.locale,
            'content': self.content,
            'context': self.context,
            'tags': list(self.tags or []),
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<Translation {self.key} [{self.locale}/{self.context}]>'


def export_projection(key, content, context, tags):
    return {
        'key': key,
        'content': content,
        'context': context,
        'tags': list(tags or []),
    }
