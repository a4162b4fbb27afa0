"""Routes package for the translation service."""

from flask import Blueprint
from flask_restx import Api

authorizations = {
    'Bearer': {
        'type': 'apiKey',
        'in': 'header',
        'name': 'Authorization',
        'description': 'JWT from /api/auth/login, as "Bearer <token>"',
    }
}


def register_routes(app):
    """Register all route blueprints with the application.

    Translation and export routes live on a flask-restx Api, which serves
    the OpenAPI document at /api/swagger.json and the UI at /api/docs.
    """
    from .auth import auth_bp
    from .translations import translations_ns
    from .export import export_ns

    api_bp = Blueprint('api', __name__)
    api = Api(
        api_bp,
        version='1.0',
        title='Translation Hub API',
        description='Translation records, search and cached locale exports',
        doc='/docs',
        authorizations=authorizations,
    )
    api.add_namespace(translations_ns, path='/translations')
    api.add_namespace(export_ns, path='/export')

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(api_bp, url_prefix='/api')
