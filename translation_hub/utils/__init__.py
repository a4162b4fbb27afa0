"""Shared utilities for the translation service routes."""

from translation_hub.utils.auth import token_required, issue_token
from translation_hub.utils.validation import validate_create, validate_update

__all__ = [
    'token_required',
    'issue_token',
    'validate_create',
    'validate_update',
]
