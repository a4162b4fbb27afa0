"""Authentication routes: registration, login and current user."""

from flask import Blueprint, request, jsonify
from translation_hub import db
from translation_hub.models import User
from translation_hub.utils import token_required, issue_token
import logging
import re

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)

# Email validation regex
EMAIL_REGEX = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


@auth_bp.route('/register', methods=['POST'])
def register():
    """Register a new API user and return a token."""
    data = request.get_json(silent=True)

    if not data or not all(k in data for k in ['name', 'email', 'password']):
        return jsonify({'message': 'Missing required fields'}), 400

    name = str(data['name']).strip()
    email = str(data['email']).strip().lower()
    password = data['password']

    if not name or len(name) > 255:
        return jsonify({'message': 'Name must be between 1 and 255 characters'}), 400

    if not EMAIL_REGEX.match(email) or len(email) > 254:
        return jsonify({'message': 'Invalid email format'}), 400

    if not isinstance(password, str) or len(password) < 6:
        return jsonify({'message': 'Password must be at least 6 characters'}), 400

    if User.query.filter_by(email=email).first():
        return jsonify({'message': 'Email already exists'}), 409

    try:
        user = User(name=name, email=email)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info(f"Registered user {user.id}")
    return jsonify({
        'message': 'User registered successfully',
        'token': issue_token(user),
        'user': user.to_dict()
    }), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """Authenticate user and return JWT token."""
    data = request.get_json(silent=True)

    if not data or not all(k in data for k in ['email', 'password']):
        return jsonify({'message': 'Missing email or password'}), 400

    user = User.query.filter_by(email=str(data['email']).strip().lower()).first()

    if not user or not user.check_password(data['password']):
        return jsonify({'message': 'Invalid email or password'}), 401

    if not user.is_active:
        return jsonify({'message': 'Account is disabled'}), 403

    return jsonify({
        'message': 'Login successful',
        'token': issue_token(user),
        'user': user.to_dict()
    }), 200


@auth_bp.route('/me', methods=['GET'])
@token_required
def me(current_user_id):
    """Return the authenticated user."""
    user = db.session.get(User, current_user_id)
    if not user:
        return jsonify({'message': 'User not found'}), 401
    return jsonify(user.to_dict()), 200
