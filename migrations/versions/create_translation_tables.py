"""Create users, translations and translation_versions tables

Revision ID: create_translation_tables
Revises:
Create Date: 2025-09-25

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = 'create_translation_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'translations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('key', sa.String(255), nullable=False),
        sa.Column('locale', sa.String(5), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('context', sa.String(100), nullable=True),
        sa.Column('tags', sa.JSON().with_variant(postgresql.JSONB(), 'postgresql'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('key', 'locale', 'context', name='uq_translations_key_locale_context')
    )
    # NULL contexts are distinct in a plain unique constraint
    op.create_index(
        'uq_translations_key_locale_no_context', 'translations', ['key', 'locale'],
        unique=True,
        sqlite_where=sa.text('context IS NULL'),
        postgresql_where=sa.text('context IS NULL'),
    )
    op.create_index('ix_translations_locale', 'translations', ['locale'])
    op.create_index('ix_translations_context', 'translations', ['context'])
    op.create_index('ix_translations_updated_at', 'translations', ['updated_at'])

    version_table = op.create_table(
        'translation_versions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('value', sa.BigInteger(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id')
    )
    op.bulk_insert(version_table, [{'id': 1, 'value': 0}])


def downgrade():
    op.drop_table('translation_versions')
    op.drop_index('ix_translations_updated_at', table_name='translations')
    op.drop_index('ix_translations_context', table_name='translations')
    op.drop_index('ix_translations_locale', table_name='translations')
    op.drop_index('uq_translations_key_locale_no_context', table_name='translations')
    op.drop_table('translations')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
