#!/usr/bin/env python
"""Database initialization script for the translation service.

Creates all tables from the SQLAlchemy models and the version counter row.
Run this once before starting the application for the first time (or use
`flask db upgrade` with the migrations).

Usage:
    python init_db.py
"""

import os
import sys
from translation_hub import create_app, db
from translation_hub.services.version_counter import ensure_counter, current


def init_database():
    """Initialize the database by creating all tables."""
    config_name = os.getenv('FLASK_ENV', 'development')
    app = create_app(config_name)

    print(f"\n{'='*60}")
    print(f"Database Initialization for {config_name.upper()} Environment")
    print(f"{'='*60}\n")

    with app.app_context():
        try:
            print(f"Database URI: {app.config['SQLALCHEMY_DATABASE_URI']}\n")
            db.create_all()
            ensure_counter()

            tables_info = [
                ("users", "API users and authentication"),
                ("translations", "Localized strings keyed by key/locale/context"),
                ("translation_versions", "Export cache version counter"),
            ]

            print("Created tables:")
            for table_name, description in tables_info:
                print(f"  - {table_name:<25} {description}")

            print(f"\nTranslation version: {current()}")
            print("Database initialization complete!\n")
            print("Next steps:")
            print("  1. Start the server: python wsgi.py")
            print("  2. Register a user: POST /api/auth/register\n")
            return True

        except Exception as e:
            print(f"Error creating database: {type(e).__name__}: {e}\n")
            return False


if __name__ == '__main__':
    success = init_database()
    sys.exit(0 if success else 1)
