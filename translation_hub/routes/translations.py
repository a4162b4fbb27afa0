"""Translation routes: create, update by key, lookup and search.

All routes require a bearer token. The caller id is only logged.
"""

from flask import request
from flask_restx import Namespace, Resource, fields
from translation_hub.errors import NotFound, StoreUnavailable, ValidationError
from translation_hub.services import filters
from translation_hub.services.translation_store import (
    MISSING,
    create_translation,
    find_translation,
    update_translation,
)
from translation_hub.utils import token_required, validate_create, validate_update
import logging

logger = logging.getLogger(__name__)

translations_ns = Namespace('translations', description='Manage translation records')

translation_input = translations_ns.model('TranslationInput', {
    'key': fields.String(required=True, max_length=255, example='welcome_message'),
    'locale': fields.String(required=True, max_length=5, example='en'),
    'content': fields.String(required=True, example='Welcome!'),
    'context': fields.String(max_length=100, example='web'),
    'tags': fields.List(fields.String, example=['web']),
})

translation_update = translations_ns.model('TranslationUpdate', {
    'locale': fields.String(required=True, max_length=5, description='Locale of the record to update'),
    'context': fields.String(max_length=100, description='Selects the record when the key is ambiguous; null picks the one without context'),
    'content': fields.String,
    'tags': fields.List(fields.String),
})

translation_output = translations_ns.model('Translation', {
    'id': fields.Integer,
    'key': fields.String,
    'locale': fields.String,
    'content': fields.String,
    'context': fields.String,
    'tags': fields.List(fields.String),
    'created_at': fields.DateTime,
    'updated_at': fields.DateTime,
})

translation_page = translations_ns.model('TranslationPage', {
    'translations': fields.List(fields.Nested(translation_output)),
    'page': fields.Integer,
    'per_page': fields.Integer,
    'has_more': fields.Boolean,
})


def validation_response(e):
    return {'message': 'Validation failed', 'errors': e.errors}, 422


@translations_ns.route('')
@translations_ns.doc(security='Bearer')
class TranslationList(Resource):
    method_decorators = [token_required]

    @translations_ns.doc(params={
        'key': 'Key prefix (case-sensitive)',
        'locale': 'Exact locale',
        'context': 'Exact context',
        'tag': 'Translations whose tags include this value',
        'page': 'Page number (default 1); page size is fixed',
    })
    @translations_ns.response(200, 'Success', translation_page)
    def get(self, current_user_id):
        """Search translations."""
        page = request.args.get('page', 1, type=int)
        try:
            result = filters.search(request.args, page=page)
        except StoreUnavailable:
            return {'message': 'Failed to fetch translations'}, 500

        return {
            'translations': [t.to_dict() for t in result.items],
            'page': result.page,
            'per_page': result.per_page,
            'has_more': result.has_more
        }, 200

    @translations_ns.expect(translation_input)
    @translations_ns.response(201, 'Created', translation_output)
    @translations_ns.response(422, 'Validation failed or duplicate (key, locale, context)')
    def post(self, current_user_id):
        """Create a new translation."""
        try:
            data = validate_create(request.get_json(silent=True))
            translation = create_translation(data)
            logger.info(f"User {current_user_id} created translation {translation.id}")
            return translation.to_dict(), 201
        except ValidationError as e:
            return validation_response(e)
        except StoreUnavailable:
            return {'message': 'Failed to create translation'}, 500


@translations_ns.route('/<string:key>')
@translations_ns.doc(security='Bearer')
@translations_ns.param('key', 'Translation key')
class TranslationItem(Resource):
    method_decorators = [token_required]

    @translations_ns.doc(params={'locale': 'Exact locale', 'context': 'Exact context'})
    @translations_ns.response(200, 'Success', translation_output)
    @translations_ns.response(404, 'Translation not found')
    def get(self, current_user_id, key):
        """Get a translation by key, optionally narrowed by locale and context."""
        try:
            translation = find_translation(
                key,
                locale=request.args.get('locale') or None,
                context=request.args.get('context') or None,
            )
        except StoreUnavailable:
            return {'message': 'Failed to retrieve translation'}, 500

        if not translation:
            return {'message': 'Translation not found'}, 404
        return translation.to_dict(), 200

    @translations_ns.expect(translation_update)
    @translations_ns.response(200, 'Updated', translation_output)
    @translations_ns.response(404, 'Translation not found')
    @translations_ns.response(422, 'Validation failed or ambiguous key')
    def put(self, current_user_id, key):
        """Update a translation identified by key + locale (+ context)."""
        try:
            data = validate_update(request.get_json(silent=True))
            locale = data.pop('locale')
            context = data.pop('context', MISSING)
            translation = update_translation(key, locale, data, context=context)
            logger.info(f"User {current_user_id} updated translation {translation.id}")
            return translation.to_dict(), 200
        except ValidationError as e:
            return validation_response(e)
        except NotFound:
            return {'message': 'Translation not found'}, 404
        except StoreUnavailable:
            return {'message': 'Failed to update translation'}, 500
