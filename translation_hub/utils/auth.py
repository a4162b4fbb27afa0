"""Shared authentication utilities.

Callers authenticate with a bearer JWT. The decoded user id is handed to
the route as an opaque caller identity; the translation store never looks
at it.
"""

from datetime import datetime, timedelta
from functools import wraps
from flask import request, current_app
import jwt


def _get_secret_key():
    """Get JWT secret from Flask app config (single source of truth)."""
    return current_app.config['JWT_SECRET_KEY']


def issue_token(user):
    """Create a signed access token for `user`."""
    payload = {
        'user_id': user.id,
        'email': user.email,
        'exp': datetime.utcnow() + timedelta(seconds=current_app.config['JWT_ACCESS_TOKEN_EXPIRES'])
    }
    return jwt.encode(payload, _get_secret_key(), algorithm='HS256')


def token_required(f):
    """
    Decorator to require valid JWT token.

    Extracts user_id from JWT token and passes it as the first argument
    to the decorated function.

    Usage:
        @bp.route('/protected')
        @token_required
        def protected_route(current_user_id):
            return {'user_id': current_user_id}
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        auth_header = request.headers.get('Authorization')

        if not auth_header:
            return {'message': 'Token is missing'}, 401

        try:
            # Support both "Bearer <token>" and raw token formats
            token = auth_header.split(' ')[1] if ' ' in auth_header else auth_header
            payload = jwt.decode(token, _get_secret_key(), algorithms=['HS256'])
            current_user_id = payload['user_id']
        except jwt.ExpiredSignatureError:
            return {'message': 'Token has expired'}, 401
        except (jwt.InvalidTokenError, KeyError, IndexError):
            return {'message': 'Token is invalid'}, 401

        return f(current_user_id, *args, **kwargs)
    return decorated
