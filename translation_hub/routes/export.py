"""Public locale export for client applications."""

from flask import request
from flask_restx import Namespace, Resource, fields
from translation_hub.errors import StoreUnavailable
from translation_hub.services.export import export_for_locale
import logging

logger = logging.getLogger(__name__)

export_ns = Namespace('export', description='Cached per-locale JSON exports')

export_entry = export_ns.model('ExportEntry', {
    'key': fields.String,
    'content': fields.String,
    'context': fields.String,
    'tags': fields.List(fields.String),
})


@export_ns.route('/<string:locale>.json')
@export_ns.param('locale', 'Locale to export, e.g. en')
class LocaleExport(Resource):

    @export_ns.doc(params={'context': 'Comma-separated contexts to include (default: all)'})
    @export_ns.response(200, 'Translations in id order', [export_entry])
    def get(self, locale):
        """Export all translations of a locale as a JSON array."""
        try:
            payload = export_for_locale(locale, request.args.get('context') or None)
        except StoreUnavailable:
            return {'message': 'Failed to export translations.'}, 500
        return payload, 200
