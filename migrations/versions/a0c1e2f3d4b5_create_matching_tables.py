"""create matching tables

Revision ID: a0c1e2f3d4b5
Revises:
Create Date: 2026-10-17 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = 'a0c1e2f3d4b5'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, job posts, the swipe ledger, matches and reviews.

    The unique constraints on swipes (triple + side) and matches (triple)
    are what make swipe recording idempotent and match creation
    exactly-once under concurrent writers.
    """
    user_role = postgresql.ENUM('FAMILY', 'CAREGIVER', name='userrole')
    user_role.create(op.get_bind(), checkfirst=True)

    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('role', postgresql.ENUM('FAMILY', 'CAREGIVER', name='userrole', create_type=False), nullable=False),
        sa.Column('name', sa.String(length=255)),
        sa.Column('bio', sa.Text()),
        sa.Column('phone', sa.String(length=30)),
        sa.Column('location', sa.String(length=255)),
        sa.Column('avatar_url', sa.String(length=500)),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True)),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])
    op.create_index('ix_users_location', 'users', ['location'])
    op.create_index('ix_users_created_at', 'users', ['created_at'])

    op.create_table(
        'job_posts',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('family_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('location', sa.String(length=255)),
        sa.Column('hours_per_week', sa.Float(), nullable=False),
        sa.Column('rate_per_hour', sa.Float(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True)),
        sa.CheckConstraint('hours_per_week > 0', name='ck_job_posts_hours_positive'),
        sa.CheckConstraint('rate_per_hour > 0', name='ck_job_posts_rate_positive'),
    )
    op.create_index('ix_job_posts_family_id', 'job_posts', ['family_id'])
    op.create_index('ix_job_posts_location', 'job_posts', ['location'])
    op.create_index('ix_job_posts_created_at', 'job_posts', ['created_at'])

    op.create_table(
        'swipes',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('family_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('caregiver_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('job_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('job_posts.id'), nullable=False),
        sa.Column('actor_role', sa.String(length=10), nullable=False),
        sa.Column('direction', sa.String(length=10), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.UniqueConstraint('family_id', 'caregiver_id', 'job_id', 'actor_role', name='unique_swipe_triple_side'),
    )
    op.create_index('ix_swipes_family_id', 'swipes', ['family_id'])
    op.create_index('ix_swipes_caregiver_id', 'swipes', ['caregiver_id'])
    op.create_index('ix_swipes_job_id', 'swipes', ['job_id'])
    op.create_index('ix_swipes_created_at', 'swipes', ['created_at'])
    # Supports the like count behind the reciprocity test
    op.create_index(
        'idx_swipes_triple_direction',
        'swipes',
        ['family_id', 'caregiver_id', 'job_id', 'direction'],
    )

    op.create_table(
        'matches',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('family_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('caregiver_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('job_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('job_posts.id'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.UniqueConstraint('family_id', 'caregiver_id', 'job_id', name='unique_match_triple'),
    )
    op.create_index('ix_matches_family_id', 'matches', ['family_id'])
    op.create_index('ix_matches_caregiver_id', 'matches', ['caregiver_id'])
    op.create_index('ix_matches_job_id', 'matches', ['job_id'])
    op.create_index('ix_matches_created_at', 'matches', ['created_at'])

    op.create_table(
        'reviews',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('reviewer_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('reviewee_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.UniqueConstraint('reviewer_id', 'reviewee_id', name='unique_reviewer_reviewee'),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_reviews_rating_range'),
    )
    op.create_index('ix_reviews_reviewer_id', 'reviews', ['reviewer_id'])
    op.create_index('ix_reviews_reviewee_id', 'reviews', ['reviewee_id'])


def downgrade() -> None:
    """Drop the matching tables."""
    op.drop_table('reviews')
    op.drop_table('matches')
    op.drop_table('swipes')
    op.drop_table('job_posts')
    op.drop_table('users')
    postgresql.ENUM(name='userrole').drop(op.get_bind(), checkfirst=True)
