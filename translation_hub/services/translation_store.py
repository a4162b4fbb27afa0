"""Record store for translations.

Every successful create/update also advances the version counter in the
same transaction, which invalidates cached exports. Duplicate detection is
left to the database unique indexes.
"""

import logging
from flask import current_app
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from translation_hub import db
from translation_hub.errors import AmbiguousKey, DuplicateKey, NotFound, StoreUnavailable
from translation_hub.models import Translation
from translation_hub.services import version_counter
from translation_hub.services.filters import context_condition

logger = logging.getLogger(__name__)

# Marks "context not supplied" as opposed to an explicit null context
MISSING = object()

UPDATABLE_FIELDS = ('content', 'tags')


def create_translation(data: dict) -> Translation:
    """Insert a translation; raises DuplicateKey if the triple is taken."""
    translation = Translation(
        key=data['key'],
        locale=data['locale'],
        content=data['content'],
        context=data.get('context'),
        tags=data.get('tags') or [],
    )

    try:
        db.session.add(translation)
        db.session.flush()
    except IntegrityError:
        db.session.rollback()
        logger.info(
            f"Duplicate translation rejected: {data['key']} [{data['locale']}/{data.get('context')}]"
        )
        raise DuplicateKey()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to insert translation {data['key']}: {e}", exc_info=True)
        raise StoreUnavailable() from e

    try:
        version = version_counter.advance()
        db.session.commit()
    except StoreUnavailable:
        db.session.rollback()
        raise
    except IntegrityError:
        # Unique violation surfaced at commit time instead of flush
        db.session.rollback()
        raise DuplicateKey()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to commit translation {data['key']}: {e}", exc_info=True)
        raise StoreUnavailable() from e

    logger.info(f"Created translation {translation.id} ({translation.key}/{translation.locale}), version {version}")
    return translation


def update_translation(key: str, locale: str, fields: dict, context=MISSING) -> Translation:
    """Update content/tags of the translation identified by key and locale.

    `context` narrows the match when given (None selects the record without
    a context). Without it, the (key, locale) pair must match exactly one
    record, otherwise AmbiguousKey is raised.
    """
    try:
        stmt = select(Translation).where(Translation.key == key, Translation.locale == locale)
        if context is not MISSING:
            stmt = stmt.where(context_condition(context))
        matches = db.session.execute(stmt.order_by(Translation.id).limit(2)).scalars().all()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to look up translation {key} for update: {e}", exc_info=True)
        raise StoreUnavailable() from e

    if not matches:
        raise NotFound(f"Translation with key '{key}' not found.")
    if len(matches) > 1:
        raise AmbiguousKey(key, locale)

    translation = matches[0]
    for name in UPDATABLE_FIELDS:
        if name in fields:
            value = fields[name]
            if name == 'tags':
                value = value or []
            setattr(translation, name, value)

    try:
        version = version_counter.advance()
        db.session.commit()
    except StoreUnavailable:
        db.session.rollback()
        raise
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to update translation {key}: {e}", exc_info=True)
        raise StoreUnavailable() from e

    logger.info(f"Updated translation {translation.id} ({key}/{locale}), version {version}")
    return translation


def find_translation(key: str, locale: str | None = None, context: str | None = None) -> Translation | None:
    """Exact lookup by key; locale and context are optional equality filters."""
    stmt = select(Translation).where(Translation.key == key)
    if locale:
        stmt = stmt.where(Translation.locale == locale)
    if context:
        stmt = stmt.where(Translation.context == context)

    try:
        return db.session.execute(stmt.order_by(Translation.id).limit(1)).scalars().first()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to look up translation {key}: {e}", exc_info=True)
        raise StoreUnavailable() from e


def scan_translations(conditions, batch_size: int | None = None):
    """Stream (key, content, context, tags) rows matching `conditions`.

    Rows come back in id order and are fetched `batch_size` at a time, so
    the table is never loaded into memory at once.
    """
    if batch_size is None:
        batch_size = current_app.config.get('EXPORT_SCAN_BATCH_SIZE', 1000)

    stmt = (
        select(Translation.key, Translation.content, Translation.context, Translation.tags)
        .where(*conditions)
        .order_by(Translation.id)
        .execution_options(yield_per=batch_size)
    )
    result = db.session.execute(stmt)
    try:
        for row in result:
            yield tuple(row)
    finally:
        result.close()
