"""create blog schema

Revision ID: 3f1b9c2d7a10
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '3f1b9c2d7a10'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps(updated=True):
    cols = [sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)]
    if updated:
        cols.append(sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False))
    return cols


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('password_hash', sa.String(length=254), nullable=False),
        sa.Column('nickname', sa.String(length=50), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )
    op.create_table(
        'articles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('like_count', sa.Integer(), server_default='0', nullable=False),
        *_timestamps(),
        sa.CheckConstraint('like_count >= 0', name='ck_articles_like_count_non_negative'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_articles_user_id_users'),
        sa.PrimaryKeyConstraint('id', name='pk_articles'),
    )
    op.create_index('ix_articles_user_id', 'articles', ['user_id'])
    op.create_table(
        'comments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('article_id', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['article_id'], ['articles.id'], name='fk_comments_article_id_articles'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_comments_user_id_users'),
        sa.PrimaryKeyConstraint('id', name='pk_comments'),
    )
    op.create_index('ix_comments_article_id', 'comments', ['article_id'])
    op.create_index('ix_comments_user_id', 'comments', ['user_id'])
    for table in ('article_likes', 'article_bookmarks'):
        op.create_table(
            table,
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('article_id', sa.Integer(), nullable=False),
            *_timestamps(updated=False),
            sa.ForeignKeyConstraint(['article_id'], ['articles.id'], name=f'fk_{table}_article_id_articles'),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], name=f'fk_{table}_user_id_users'),
            sa.PrimaryKeyConstraint('id', name=f'pk_{table}'),
            sa.UniqueConstraint('user_id', 'article_id', name=f'uq_{table}_user_id_article_id'),
        )
        op.create_index(f'ix_{table}_article_id', table, ['article_id'])


def downgrade():
    for table in ('article_bookmarks', 'article_likes'):
        op.drop_index(f'ix_{table}_article_id', table_name=table)
        op.drop_table(table)
    op.drop_index('ix_comments_user_id', table_name='comments')
    op.drop_index('ix_comments_article_id', table_name='comments')
    op.drop_table('comments')
    op.drop_index('ix_articles_user_id', table_name='articles')
    op.drop_table('articles')
    op.drop_table('users')
