#!/usr/bin/env python3
"""Seed the translations table with a large synthetic data set.

Used to check search and export behaviour against a realistically sized
table. Rows are bulk-inserted in chunks; the version counter is advanced
once per chunk so any cached export is invalidated.

Usage:
    python scripts/seed_translations.py [total] [chunk]
"""

import sys
import os
import random
import uuid

# Add parent directory to path to import translation_hub
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from sqlalchemy import insert
from translation_hub import create_app, db
from translation_hub.models import Translation
from translation_hub.services import version_counter

DEFAULT_TOTAL = 100_000
DEFAULT_CHUNK = 1_000

LOCALES = ['en', 'fr', 'es', 'de', 'it']
CONTEXTS = ['web', 'mobile', 'desktop', 'email', 'admin']
TAGS = ['mobile', 'desktop', 'web']
WORDS = [
    'welcome', 'account', 'settings', 'profile', 'logout', 'save', 'cancel',
    'delete', 'confirm', 'search', 'results', 'error', 'success', 'loading',
    'message', 'notification', 'password', 'email', 'language', 'help',
]


def make_row():
    """Build one random translation row."""
    return {
        'key': f"{random.choice(WORDS)}_{uuid.uuid4().hex[:12]}",
        'locale': random.choice(LOCALES),
        'content': ' '.join(random.choices(WORDS, k=random.randint(3, 10))).capitalize() + '.',
        'context': random.choice(CONTEXTS),
        'tags': random.sample(TAGS, random.randint(1, 2)),
    }


def seed_translations(total=DEFAULT_TOTAL, chunk=DEFAULT_CHUNK):
    """Insert `total` random translations in chunks of `chunk`."""
    app = create_app()
    iterations = -(-total // chunk)

    with app.app_context():
        print(f"Seeding {total} translations in chunks of {chunk}...")

        remaining = total
        for i in range(1, iterations + 1):
            size = min(chunk, remaining)
            db.session.execute(insert(Translation), [make_row() for _ in range(size)])
            version = version_counter.advance()
            db.session.commit()
            remaining -= size
            print(f"Inserted chunk {i}/{iterations} (version {version})")

        print("Seeding completed!")


if __name__ == '__main__':
    total = int(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_TOTAL
    chunk = int(sys.argv[2]) if len(sys.argv) > 2 else DEFAULT_CHUNK
    seed_translations(total, chunk)
