"""
Pytest configuration and fixtures for testing the Translation API.
"""

import os
import sys
import pytest
from faker import Faker

# Add the parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Exports must use the in-process cache during tests
os.environ.pop('REDIS_URL', None)

from translation_hub import create_app, db
from translation_hub.models import Translation, User
from translation_hub.services.export_cache import clear_local_cache
from translation_hub.services.redis_client import reset_redis
from translation_hub.services.version_counter import ensure_counter

fake = Faker()


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    os.environ['JWT_SECRET_KEY'] = 'test-secret-key-for-testing'

    app = create_app('testing')

    with app.app_context():
        db.create_all()
        ensure_counter()

    yield app

    with app.app_context():
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client for each test function."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Fresh tables, version counter and export cache for each test."""
    reset_redis()
    clear_local_cache()
    with app.app_context():
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
        ensure_counter()
        yield db.session
        db.session.rollback()


def _create_user(password='testpassword123', **overrides):
    """Helper to create a user with sensible defaults."""
    data = {
        'name': fake.name(),
        'email': fake.unique.email(),
    }
    data.update(overrides)
    user = User(**data)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return {
        'id': user.id,
        'name': user.name,
        'email': user.email,
        'password': password,
    }


@pytest.fixture
def test_user(app, db_session):
    """Create a test user."""
    with app.app_context():
        return _create_user()


@pytest.fixture
def auth_headers(client, test_user):
    """Get authentication headers for test user."""
    resp = client.post('/api/auth/login', json={
        'email': test_user['email'],
        'password': test_user['password'],
    })
    data = resp.get_json()
    if not data or 'token' not in data:
        raise RuntimeError(f"Login failed: status={resp.status_code}, body={data}")
    return {'Authorization': f"Bearer {data['token']}"}


def make_translation(**overrides):
    """Insert a translation directly (bypasses the version counter)."""
    data = {
        'key': f"{fake.word()}_{fake.pystr(min_chars=6, max_chars=6)}",
        'locale': 'en',
        'content': fake.sentence(),
        'context': 'web',
        'tags': ['web'],
    }
    data.update(overrides)
    translation = Translation(**data)
    db.session.add(translation)
    db.session.commit()
    return translation


@pytest.fixture
def seeded_translations(app, db_session):
    """A small mixed set covering prefixes, locales, contexts and tags."""
    with app.app_context():
        rows = [
            make_translation(key='welcome_message', locale='en', content='Welcome!',
                             context='web', tags=['web']),
            make_translation(key='welcome_back', locale='en', content='Welcome back!',
                             context='mobile', tags=['mobile', 'web']),
            make_translation(key='greet', locale='en', content='Hello',
                             context='web', tags=['web']),
            make_translation(key='greet', locale='fr', content='Bonjour',
                             context='mobile', tags=['mobile']),
            make_translation(key='Welcome_title', locale='en', content='Title',
                             context=None, tags=[]),
        ]
        return [r.id for r in rows]


@pytest.fixture
def translation_factory(app, db_session):
    """Expose make_translation to tests."""
    return make_translation
