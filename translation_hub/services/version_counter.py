"""Version counter used to invalidate cached locale exports.

The counter is a single row in ``translation_versions``. Writers call
``advance()`` inside their own transaction, so the bump commits (or rolls
back) together with the translation it belongs to. The row lock taken by
the UPDATE serializes concurrent writers: two advances always return two
distinct, consecutive values.
"""

import logging
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from translation_hub import db
from translation_hub.errors import StoreUnavailable
from translation_hub.models import TranslationVersion

logger = logging.getLogger(__name__)

COUNTER_ID = 1


def ensure_counter():
    """Create the counter row (value 0) if it does not exist yet."""
    if db.session.get(TranslationVersion, COUNTER_ID) is not None:
        return
    db.session.add(TranslationVersion(id=COUNTER_ID, value=0))
    try:
        db.session.commit()
        logger.info("Initialized translation version counter")
    except IntegrityError:
        # Another worker created it first
        db.session.rollback()


def current() -> int:
    """Return the current version (0 before the first write)."""
    value = db.session.execute(
        select(TranslationVersion.value).where(TranslationVersion.id == COUNTER_ID)
    ).scalar()
    return int(value or 0)


def advance() -> int:
    """Increment the version by one and return the new value.

    Does not commit; the caller's commit publishes the new version. The
    counter row must exist (``ensure_counter()`` or the migration seeds it);
    without it StoreUnavailable is raised and the caller rolls back.
    """
    stmt = (
        update(TranslationVersion)
        .where(TranslationVersion.id == COUNTER_ID)
        .values(value=TranslationVersion.value + 1)
        .returning(TranslationVersion.value)
        .execution_options(synchronize_session=False)
    )
    value = db.session.execute(stmt).scalar()
    if value is None:
        logger.error("Translation version counter row is missing; run init_db.py or the migrations")
        raise StoreUnavailable()
    return int(value)
