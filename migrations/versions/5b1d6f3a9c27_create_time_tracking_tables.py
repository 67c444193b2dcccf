"""create_time_tracking_tables

Revision ID: 5b1d6f3a9c27
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '5b1d6f3a9c27'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, catalog, hours, tags, taggings and audits tables."""
    op.create_table('users',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )

    op.create_table('clients',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table('projects',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('client_id', sa.UUID(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['client_id'], ['clients.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_projects_client_id', 'projects', ['client_id'], unique=False)

    op.create_table('categories',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table('hours',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('project_id', sa.UUID(), nullable=False),
        sa.Column('category_id', sa.UUID(), nullable=False),
        sa.Column('starting_time', sa.DateTime(), nullable=False),
        sa.Column('ending_time', sa.DateTime(), nullable=True),
        sa.Column('value', sa.Float(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('search_text', sa.Text(), server_default='', nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id']),
        sa.ForeignKeyConstraint(['category_id'], ['categories.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_hours_user_id', 'hours', ['user_id'], unique=False)
    op.create_index('ix_hours_project_id', 'hours', ['project_id'], unique=False)
    op.create_index('ix_hours_category_id', 'hours', ['category_id'], unique=False)
    op.create_index('ix_hours_starting_time', 'hours', ['starting_time'], unique=False)
    op.create_index('ix_hours_created_at', 'hours', ['created_at'], unique=False)
    # Open entries are looked up per user
    op.create_index(
        'ix_hours_open_per_user',
        'hours',
        ['user_id'],
        unique=False,
        postgresql_where=sa.text('ending_time IS NULL'),
    )

    op.create_table('tags',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('name_key', sa.String(length=100), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_tags_name', 'tags', ['name'], unique=False)
    op.create_index('ix_tags_name_key', 'tags', ['name_key'], unique=True)

    op.create_table('taggings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('hour_id', sa.UUID(), nullable=False),
        sa.Column('tag_id', sa.UUID(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['hour_id'], ['hours.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tag_id'], ['tags.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('hour_id', 'tag_id'),
    )
    op.create_index('ix_taggings_hour_id', 'taggings', ['hour_id'], unique=False)
    op.create_index('ix_taggings_tag_id', 'taggings', ['tag_id'], unique=False)

    op.create_table('audits',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('auditable_type', sa.String(length=50), nullable=False),
        sa.Column('auditable_id', sa.UUID(), nullable=False),
        sa.Column('action', sa.String(length=20), nullable=False),
        sa.Column('audited_changes', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('user_id', sa.UUID(), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint("action IN ('create', 'update', 'destroy')", name='ck_audits_action'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_audits_auditable_version',
        'audits',
        ['auditable_type', 'auditable_id', 'version'],
        unique=True,
    )


def downgrade() -> None:
    """Drop all time tracking tables."""
    op.drop_index('ix_audits_auditable_version', table_name='audits')
    op.drop_table('audits')
    op.drop_index('ix_taggings_tag_id', table_name='taggings')
    op.drop_index('ix_taggings_hour_id', table_name='taggings')
    op.drop_table('taggings')
    op.drop_index('ix_tags_name_key', table_name='tags')
    op.drop_index('ix_tags_name', table_name='tags')
    op.drop_table('tags')
    op.drop_index('ix_hours_open_per_user', table_name='hours')
    op.drop_index('ix_hours_created_at', table_name='hours')
    op.drop_index('ix_hours_starting_time', table_name='hours')
    op.drop_index('ix_hours_category_id', table_name='hours')
    op.drop_index('ix_hours_project_id', table_name='hours')
    op.drop_index('ix_hours_user_id', table_name='hours')
    op.drop_table('hours')
    op.drop_table('categories')
    op.drop_index('ix_projects_client_id', table_name='projects')
    op.drop_table('projects')
    op.drop_table('clients')
    op.drop_table('users')
