"""Create translations, app_config and usage_stats tables.

Revision ID: create_translation_tables
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'create_translation_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('translations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('project_id', sa.String(length=100), nullable=False),
        sa.Column('source_lang', sa.String(length=10), nullable=False),
        sa.Column('target_lang', sa.String(length=10), nullable=False),
        sa.Column('checksum', sa.String(length=64), nullable=True),
        sa.Column('pattern_key', sa.Text(), nullable=True),
        sa.Column('source_text', sa.Text(), nullable=False),
        sa.Column('source_norm', sa.Text(), nullable=False),
        sa.Column('translated_text', sa.Text(), nullable=False),
        sa.Column('is_template', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='auto'),
        sa.Column('is_locked', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('context_url', sa.Text(), nullable=True),
        sa.Column('page_path', sa.Text(), nullable=True),
        sa.Column('page_canonical', sa.Text(), nullable=True),
        sa.Column('selector_hash', sa.String(length=128), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('project_id', 'source_lang', 'target_lang', 'checksum',
                            name='uq_translations_checksum'),
        sa.UniqueConstraint('project_id', 'source_lang', 'target_lang', 'pattern_key',
                            name='uq_translations_pattern_key'),
    )
    op.create_index('ix_translations_source_norm', 'translations',
                    ['project_id', 'source_lang', 'target_lang', 'source_norm'], unique=False)
    op.create_index(op.f('ix_translations_status'), 'translations', ['status'], unique=False)
    op.create_index(op.f('ix_translations_updated_at'), 'translations', ['updated_at'], unique=False)

    op.create_table('app_config',
        sa.Column('key', sa.String(length=100), nullable=False),
        sa.Column('value', sa.Text(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('key')
    )

    op.create_table('usage_stats',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('day', sa.Date(), nullable=False),
        sa.Column('project_id', sa.String(length=100), nullable=False),
        sa.Column('source_lang', sa.String(length=10), nullable=False),
        sa.Column('target_lang', sa.String(length=10), nullable=False),
        sa.Column('from_cache', sa.Boolean(), nullable=False),
        sa.Column('provider', sa.String(length=20), nullable=False),
        sa.Column('chars_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('calls_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('day', 'project_id', 'source_lang', 'target_lang', 'from_cache', 'provider',
                            name='uq_usage_stats_scope'),
    )
    op.create_index(op.f('ix_usage_stats_day'), 'usage_stats', ['day'], unique=False)


def downgrade():
    op.drop_index(op.f('ix_usage_stats_day'), table_name='usage_stats')
    op.drop_table('usage_stats')
    op.drop_table('app_config')
    op.drop_index(op.f('ix_translations_updated_at'), table_name='translations')
    op.drop_index(op.f('ix_translations_status'), table_name='translations')
    op.drop_index('ix_translations_source_norm', table_name='translations')
    op.drop_table('translations')
