"""Locale export: flat list of translations for client applications."""

import logging
from sqlalchemy.exc import SQLAlchemyError
from translation_hub import db
from translation_hub.errors import StoreUnavailable
from translation_hub.models.translation import export_projection
from translation_hub.services import version_counter
from translation_hub.services.export_cache import (
    get_cached_export,
    normalize_contexts,
    store_export,
)
from translation_hub.services.filters import export_conditions
from translation_hub.services.translation_store import scan_translations

logger = logging.getLogger(__name__)


def export_for_locale(locale: str, contexts=None) -> list[dict]:
    """Export every translation of `locale`, optionally limited to contexts.

    The version is read once and used for both the cache lookup and the
    cache write, so an export computed while a write lands is stored under
    the old (already dead) key.
    """
    contexts = normalize_contexts(contexts)

    try:
        version = version_counter.current()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to read translation version: {e}", exc_info=True)
        raise StoreUnavailable() from e

    cached = get_cached_export(locale, contexts, version)
    if cached is not None:
        logger.debug(f"Export cache hit for {locale} (contexts={contexts}, v{version})")
        return cached

    logger.info(f"Export cache miss for {locale} (contexts={contexts}, v{version}), building")
    try:
        payload = [
            export_projection(key, content, context, tags)
            for key, content, context, tags in scan_translations(export_conditions(locale, contexts))
        ]
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to export translations for {locale}: {e}", exc_info=True)
        raise StoreUnavailable() from e

    store_export(locale, contexts, version, payload)
    return payload
