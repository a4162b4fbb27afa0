"""Filter engine for translation lookups, searches and exports.

Criteria are optional and combined with AND:

- key: case-sensitive prefix match
- locale, context: exact equality
- tag: the record's tag set contains the value

Empty strings count as "not given".
"""

import logging
from dataclasses import dataclass, field
from flask import current_app
from sqlalchemy import and_, cast, func, select
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.exc import SQLAlchemyError
from translation_hub import db
from translation_hub.errors import StoreUnavailable
from translation_hub.models import Translation

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
FILTER_FIELDS = ('key', 'locale', 'context', 'tag')


@dataclass
class SimplePage:
    """One page of results without a total count."""
    items: list = field(default_factory=list)
    page: int = 1
    per_page: int = DEFAULT_PAGE_SIZE
    has_more: bool = False


def clean_filters(raw) -> dict:
    """Keep only known, non-blank criteria.

    Values are kept verbatim: a trailing space is part of a key prefix.
    """
    filters = {}
    for name in FILTER_FIELDS:
        value = raw.get(name) if raw else None
        if isinstance(value, str) and not value.strip():
            continue
        if value:
            filters[name] = value
    return filters


def key_prefix_condition(prefix: str):
    # LIKE can use an index; substr keeps the match case-sensitive on SQLite
    return and_(
        Translation.key.startswith(prefix, autoescape=True),
        func.substr(Translation.key, 1, len(prefix)) == prefix,
    )


def tag_condition(tag: str):
    dialect = db.session.get_bind().dialect.name
    if dialect == 'postgresql':
        return cast(Translation.tags, JSONB).contains([tag])
    # SQLite: compare each array element exactly
    elements = func.json_each(Translation.tags).table_valued('value')
    return select(elements.c.value).where(elements.c.value == tag).exists()


def context_condition(context):
    if context is None:
        return Translation.context.is_(None)
    return Translation.context == context


def build_conditions(filters: dict) -> list:
    """Translate cleaned filter criteria into SQLAlchemy conditions."""
    conditions = []
    if filters.get('key'):
        conditions.append(key_prefix_condition(filters['key']))
    if filters.get('locale'):
        conditions.append(Translation.locale == filters['locale'])
    if filters.get('context'):
        conditions.append(Translation.context == filters['context'])
    if filters.get('tag'):
        conditions.append(tag_condition(filters['tag']))
    return conditions


def export_conditions(locale: str, contexts: list[str] | None) -> list:
    """Conditions for a locale export, optionally narrowed to some contexts."""
    conditions = [Translation.locale == locale]
    if contexts:
        conditions.append(Translation.context.in_(contexts))
    return conditions


def search(filters: dict, page: int = 1, per_page: int | None = None) -> SimplePage:
    """Run a filtered search with forward-only ("simple") pagination.

    Fetches one extra row to find out whether a next page exists instead of
    counting the whole result set.
    """
    if per_page is None:
        per_page = current_app.config.get('SEARCH_PAGE_SIZE', DEFAULT_PAGE_SIZE)
    page = max(page or 1, 1)

    stmt = (
        select(Translation)
        .where(*build_conditions(clean_filters(filters)))
        .order_by(Translation.id)
        .offset((page - 1) * per_page)
        .limit(per_page + 1)
    )
    try:
        rows = db.session.execute(stmt).scalars().all()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to search translations: {e}", exc_info=True)
        raise StoreUnavailable() from e

    return SimplePage(
        items=rows[:per_page],
        page=page,
        per_page=per_page,
        has_more=len(rows) > per_page,
    )
