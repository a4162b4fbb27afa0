"""Error taxonomy for the translation store.

Route handlers catch these and turn them into JSON responses:

- ValidationError (and its DuplicateKey / AmbiguousKey subclasses) -> 422
- NotFound -> 404
- StoreUnavailable -> 500 with a generic message only
"""


class TranslationStoreError(Exception):
    """Base class for errors raised by the translation store."""


class ValidationError(TranslationStoreError):
    """Malformed or missing input, reported per field."""

    def __init__(self, errors: dict[str, list[str]]):
        super().__init__('Validation failed')
        self.errors = errors


class DuplicateKey(ValidationError):
    """The (key, locale, context) triple is already taken."""

    def __init__(self):
        super().__init__({
            'key': ['The key has already been taken for this locale and context.']
        })


class AmbiguousKey(ValidationError):
    """More than one translation matches an update without a context."""

    def __init__(self, key: str, locale: str):
        super().__init__({
            'context': [
                f"Several translations match key '{key}' and locale '{locale}'; "
                "the context field is required to pick one."
            ]
        })


class NotFound(TranslationStoreError):
    """Lookup or update target does not exist."""


class StoreUnavailable(TranslationStoreError):
    """The database could not be reached or failed mid-operation."""
