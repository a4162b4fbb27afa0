"""Single-row counter used to invalidate cached exports."""
from translation_hub import db


class TranslationVersion(db.Model):
    """Holds the version token bumped by every translation write."""

    __tablename__ = 'translation_versions'

    id = db.Column(db.Integer, primary_key=True)
    value = db.Column(db.BigInteger, nullable=False, default=0)

    def __repr__(self):
        return f'<TranslationVersion {self.value}>'
