"""Database models for the translation service."""

from .user import User
from .translation import Translation
from .translation_version import TranslationVersion

__all__ = ['User', 'Translation', 'TranslationVersion']
