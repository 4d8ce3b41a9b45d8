"""Initial schema: albums, album members, images

Revision ID: 001
Revises:
Create Date: 2026-10-19 10:00:00

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'albums',
        sa.Column('album_id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('owner_id', sa.String(255), nullable=False),
        sa.Column('owner_email', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_albums_owner_id', 'albums', ['owner_id'])
    op.create_index('ix_albums_created_at', 'albums', ['created_at'])

    op.create_table(
        'album_members',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('album_id', sa.String(36), sa.ForeignKey('albums.album_id', ondelete='CASCADE'), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('added_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('album_id', 'email', name='uq_album_members_album_email'),
    )
    op.create_index('ix_album_members_album_id', 'album_members', ['album_id'])
    op.create_index('ix_album_members_email', 'album_members', ['email'])

    # album_id is a plain reference: cascade is done by the application
    op.create_table(
        'images',
        sa.Column('image_id', sa.String(36), primary_key=True),
        sa.Column('album_id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(500), nullable=False),
        sa.Column('filename', sa.String(500), nullable=False),
        sa.Column('size_bytes', sa.BigInteger(), nullable=False),
        sa.Column('storage_url', sa.String(2048), nullable=False),
        sa.Column('storage_object_id', sa.String(1024), nullable=False),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('person', sa.String(255), nullable=False, server_default=''),
        sa.Column('is_favorite', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('comments', sa.JSON(), nullable=False),
        sa.Column('uploaded_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('uploaded_by', sa.String(255), nullable=False),
    )
    op.create_index('ix_images_album_id', 'images', ['album_id'])
    op.create_index('ix_images_uploaded_at', 'images', ['uploaded_at'])


def downgrade() -> None:
    op.drop_index('ix_images_uploaded_at', table_name='images')
    op.drop_index('ix_images_album_id', table_name='images')
    op.drop_table('images')
    op.drop_index('ix_album_members_email', table_name='album_members')
    op.drop_index('ix_album_members_album_id', table_name='album_members')
    op.drop_table('album_members')
    op.drop_index('ix_albums_created_at', table_name='albums')
    op.drop_index('ix_albums_owner_id', table_name='albums')
    op.drop_table('albums')
