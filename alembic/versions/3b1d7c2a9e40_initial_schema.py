"""initial_schema

Revision ID: 3b1d7c2a9e40
Revises:
Create Date: 2026-10-19 10:12:31.482915

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b1d7c2a9e40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


# (join table, parent table, parent column)
IMAGE_LINK_TABLES = [
    ('about_sections_images', 'about_sections', 'about_section_id'),
    ('albums_images', 'albums', 'album_id'),
    ('blog_posts_images', 'blog_posts', 'blog_post_id'),
    ('works_images', 'works', 'work_id'),
]


def upgrade() -> None:
    op.create_table(
        'images',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('path', sa.String(), nullable=False),
        sa.Column('title', sa.String(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
    )
    op.create_index(op.f('ix_images_id'), 'images', ['id'], unique=False)

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)

    op.create_table(
        'about_sections',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('text', sa.Text(), nullable=False),
    )
    op.create_table(
        'albums',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
    )
    op.create_table(
        'blog_posts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('date', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('subtitle', sa.String(), nullable=True),
        sa.Column('text', sa.Text(), nullable=False),
    )
    op.create_table(
        'works',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('link', sa.String(), nullable=True),
    )
    op.create_table(
        'contacts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('contact', sa.String(), nullable=False),
        sa.Column('mail', sa.String(), nullable=False),
        sa.Column('address', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
    )
    op.create_table(
        'events',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('dates', sa.String(), nullable=False),
        sa.Column('location', sa.String(), nullable=False),
        sa.Column('link', sa.String(), nullable=True),
    )
    op.create_table(
        'social_media',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('link', sa.String(), nullable=False),
    )

    for table in ('about_sections', 'albums', 'blog_posts', 'works', 'contacts', 'events', 'social_media'):
        op.create_index(op.f(f'ix_{table}_id'), table, ['id'], unique=False)

    for link_table, parent_table, parent_column in IMAGE_LINK_TABLES:
        op.create_table(
            link_table,
            sa.Column(parent_column, sa.Integer(), sa.ForeignKey(f'{parent_table}.id'), primary_key=True),
            sa.Column('image_id', sa.Integer(), sa.ForeignKey('images.id'), primary_key=True),
        )


def downgrade() -> None:
    for link_table, _, _ in reversed(IMAGE_LINK_TABLES):
        op.drop_table(link_table)

    for table in ('social_media', 'events', 'contacts', 'works', 'blog_posts', 'albums', 'about_sections'):
        op.drop_index(op.f(f'ix_{table}_id'), table_name=table)
        op.drop_table(table)

    op.drop_index(op.f('ix_users_username'), table_name='users')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')

    op.drop_index(op.f('ix_images_id'), table_name='images')
    op.drop_table('images')
