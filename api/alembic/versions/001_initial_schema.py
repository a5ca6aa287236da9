"""Create user, topic and lesson tables

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """
    Create the content tables.

    Topic slugs are unique globally, lesson slugs only within their topic.
    """
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False, server_default='user'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='user_pkey'),
        sa.CheckConstraint("role IN ('admin', 'user')", name='user_role_check'),
    )
    op.create_index(op.f('ix_user_email'), 'user', ['email'], unique=True)

    op.create_table(
        'topic',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=False),
        sa.Column('icon', sa.String(), nullable=False),
        sa.Column('color', sa.String(), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_published', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_by_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['created_by_id'], ['user.id'], name='topic_created_by_id_fkey'),
        sa.PrimaryKeyConstraint('id', name='topic_pkey'),
    )
    op.create_index(op.f('ix_topic_slug'), 'topic', ['slug'], unique=True)
    op.create_index(op.f('ix_topic_is_published'), 'topic', ['is_published'], unique=False)

    op.create_table(
        'lesson',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('topic_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('level', sa.String(), nullable=True, server_default='beginner'),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('sample_code', sa.Text(), nullable=False, server_default=''),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_published', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_by_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['topic_id'], ['topic.id'], name='lesson_topic_id_fkey'),
        sa.ForeignKeyConstraint(['created_by_id'], ['user.id'], name='lesson_created_by_id_fkey'),
        sa.PrimaryKeyConstraint('id', name='lesson_pkey'),
        sa.UniqueConstraint('topic_id', 'slug', name='uq_lesson_topic_id_slug'),
        sa.CheckConstraint(
            "level IN ('beginner', 'intermediate', 'advanced')",
            name='lesson_level_check'
        ),
    )
    op.create_index(op.f('ix_lesson_topic_id'), 'lesson', ['topic_id'], unique=False)
    op.create_index(op.f('ix_lesson_slug'), 'lesson', ['slug'], unique=False)
    op.create_index(op.f('ix_lesson_is_published'), 'lesson', ['is_published'], unique=False)


def downgrade() -> None:
    """
    Drop the content tables.
    """
    op.drop_index(op.f('ix_lesson_is_published'), table_name='lesson')
    op.drop_index(op.f('ix_lesson_slug'), table_name='lesson')
    op.drop_index(op.f('ix_lesson_topic_id'), table_name='lesson')
    op.drop_table('lesson')
    op.drop_index(op.f('ix_topic_is_published'), table_name='topic')
    op.drop_index(op.f('ix_topic_slug'), table_name='topic')
    op.drop_table('topic')
    op.drop_index(op.f('ix_user_email'), table_name='user')
    op.drop_table('user')
