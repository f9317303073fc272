"""baseline_marketplace_schema

Revision ID: 3c1a7e52b9d0
Revises:
Create Date: 2026-10-19 09:12:41.518204

Production-safe migration: Only creates tables that do not exist yet.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '3c1a7e52b9d0'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name: str) -> bool:
    """Check if a table exists in the database."""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
    ]


def upgrade() -> None:
    if not table_exists('users'):
        op.create_table('users',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('password_hash', sa.String(), nullable=True),
            sa.Column('role', sa.String(), nullable=False),
            sa.Column('first_name', sa.String(), nullable=True),
            sa.Column('last_name', sa.String(), nullable=True),
            sa.Column('phone', sa.String(), nullable=True),
            sa.Column('whatsapp', sa.String(), nullable=True),
            sa.Column('company_name', sa.String(), nullable=True),
            sa.Column('location', sa.String(), nullable=True),
            sa.Column('commune', sa.String(), nullable=True),
            sa.Column('quartier', sa.String(), nullable=True),
            sa.Column('applications_created_count', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('jobs_published', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('subscription_plan', sa.String(), nullable=False, server_default='free'),
            sa.Column('subscription_end', sa.DateTime(timezone=True), nullable=True),
            *_timestamps(),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_users_id', 'users', ['id'])
        op.create_index('ix_users_email', 'users', ['email'], unique=True)
        op.create_index('ix_users_role', 'users', ['role'])
        op.create_index('ix_users_subscription_plan', 'users', ['subscription_plan'])

    if not table_exists('jobs'):
        op.create_table('jobs',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('recruiter_id', sa.Integer(), nullable=False),
            sa.Column('title', sa.String(length=255), nullable=False),
            sa.Column('description', sa.Text(), nullable=False),
            sa.Column('category', sa.String(), nullable=True),
            sa.Column('amount', sa.Float(), nullable=False, server_default='0'),
            sa.Column('currency', sa.String(length=10), nullable=False, server_default='FCFA'),
            sa.Column('location', sa.String(), nullable=False),
            sa.Column('commune', sa.String(), nullable=True),
            sa.Column('quartier', sa.String(), nullable=True),
            sa.Column('contact_phone', sa.String(), nullable=True),
            sa.Column('contact_whatsapp', sa.String(), nullable=True),
            sa.Column('status', sa.String(), nullable=False, server_default='open'),
            sa.Column('is_featured', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('views_count', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('applications_count', sa.Integer(), nullable=False, server_default='0'),
            *_timestamps(),
            sa.ForeignKeyConstraint(['recruiter_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_jobs_id', 'jobs', ['id'])
        op.create_index('ix_jobs_recruiter_id', 'jobs', ['recruiter_id'])
        op.create_index('ix_jobs_category', 'jobs', ['category'])
        op.create_index('ix_jobs_location', 'jobs', ['location'])
        op.create_index('ix_jobs_status', 'jobs', ['status'])
        op.create_index('ix_jobs_created_at', 'jobs', ['created_at'])

    if not table_exists('applications'):
        op.create_table('applications',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('candidate_id', sa.Integer(), nullable=False),
            sa.Column('job_id', sa.Integer(), nullable=False),
            sa.Column('message', sa.Text(), nullable=True),
            sa.Column('status', sa.String(), nullable=False, server_default='pending'),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
            sa.Column('status_updated_at', sa.DateTime(timezone=True), nullable=True),
            sa.ForeignKeyConstraint(['candidate_id'], ['users.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('candidate_id', 'job_id', name='uq_application_candidate_job')
        )
        op.create_index('ix_applications_id', 'applications', ['id'])
        op.create_index('ix_applications_candidate_id', 'applications', ['candidate_id'])
        op.create_index('ix_applications_job_id', 'applications', ['job_id'])
        op.create_index('ix_applications_status', 'applications', ['status'])

    if not table_exists('candidate_posts'):
        op.create_table('candidate_posts',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('candidate_id', sa.Integer(), nullable=False),
            sa.Column('title', sa.String(length=255), nullable=False),
            sa.Column('description', sa.Text(), nullable=False),
            sa.Column('hourly_rate', sa.Float(), nullable=False),
            sa.Column('currency', sa.String(length=10), nullable=False, server_default='FCFA'),
            sa.Column('location', sa.String(), nullable=False),
            sa.Column('skills', sa.JSON(), nullable=False),
            sa.Column('availability', sa.String(), nullable=False),
            sa.Column('status', sa.String(), nullable=False, server_default='active'),
            *_timestamps(),
            sa.ForeignKeyConstraint(['candidate_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_candidate_posts_id', 'candidate_posts', ['id'])
        op.create_index('ix_candidate_posts_candidate_id', 'candidate_posts', ['candidate_id'], unique=True)
        op.create_index('ix_candidate_posts_location', 'candidate_posts', ['location'])
        op.create_index('ix_candidate_posts_status', 'candidate_posts', ['status'])
        op.create_index('ix_candidate_posts_created_at', 'candidate_posts', ['created_at'])

    if not table_exists('notifications'):
        op.create_table('notifications',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('type', sa.String(), nullable=False),
            sa.Column('title', sa.String(length=255), nullable=False),
            sa.Column('message', sa.Text(), nullable=False),
            sa.Column('related_id', sa.Integer(), nullable=True),
            sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_notifications_id', 'notifications', ['id'])
        op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])
        op.create_index('ix_notifications_is_read', 'notifications', ['is_read'])
        op.create_index('ix_notifications_created_at', 'notifications', ['created_at'])

    if not table_exists('conversations'):
        op.create_table('conversations',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('application_id', sa.Integer(), nullable=False),
            sa.Column('job_id', sa.Integer(), nullable=False),
            sa.Column('candidate_id', sa.Integer(), nullable=False),
            sa.Column('recruiter_id', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
            sa.ForeignKeyConstraint(['application_id'], ['applications.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['candidate_id'], ['users.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['recruiter_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('application_id')
        )
        op.create_index('ix_conversations_id', 'conversations', ['id'])
        op.create_index('ix_conversations_candidate_id', 'conversations', ['candidate_id'])
        op.create_index('ix_conversations_recruiter_id', 'conversations', ['recruiter_id'])

    if not table_exists('messages'):
        op.create_table('messages',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('conversation_id', sa.Integer(), nullable=False),
            sa.Column('sender_id', sa.Integer(), nullable=False),
            sa.Column('content', sa.Text(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
            sa.ForeignKeyConstraint(['conversation_id'], ['conversations.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['sender_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_messages_id', 'messages', ['id'])
        op.create_index('ix_messages_conversation_id', 'messages', ['conversation_id'])
        op.create_index('ix_messages_created_at', 'messages', ['created_at'])

    if not table_exists('subscriptions'):
        op.create_table('subscriptions',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('plan', sa.String(), nullable=False, server_default='free'),
            sa.Column('status', sa.String(), nullable=False, server_default='inactive'),
            sa.Column('paystack_subscription_id', sa.String(), nullable=True),
            sa.Column('paystack_customer_code', sa.String(), nullable=True),
            sa.Column('plan_id', sa.String(), nullable=True),
            sa.Column('amount', sa.Integer(), nullable=True),
            sa.Column('currency', sa.String(length=10), nullable=True),
            sa.Column('jobs_limit', sa.Integer(), nullable=True),
            sa.Column('trial_days', sa.Integer(), nullable=True),
            sa.Column('renew_date', sa.DateTime(timezone=True), nullable=True),
            sa.Column('next_payment_date', sa.DateTime(timezone=True), nullable=True),
            sa.Column('trial_end_date', sa.DateTime(timezone=True), nullable=True),
            *_timestamps(),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('user_id')
        )
        op.create_index('ix_subscriptions_id', 'subscriptions', ['id'])
        op.create_index('ix_subscriptions_paystack_subscription_id', 'subscriptions', ['paystack_subscription_id'])

    if not table_exists('knowledge_base'):
        op.create_table('knowledge_base',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('question', sa.Text(), nullable=False),
            sa.Column('answer', sa.Text(), nullable=False),
            sa.Column('category', sa.String(), nullable=True),
            sa.Column('keywords', sa.JSON(), nullable=False),
            *_timestamps(),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_knowledge_base_id', 'knowledge_base', ['id'])

    if not table_exists('ai_sessions'):
        op.create_table('ai_sessions',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=True),
            sa.Column('session_type', sa.String(), nullable=False, server_default='openai'),
            sa.Column('messages', sa.JSON(), nullable=False),
            *_timestamps(),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_ai_sessions_id', 'ai_sessions', ['id'])
        op.create_index('ix_ai_sessions_user_id', 'ai_sessions', ['user_id'])


def downgrade() -> None:
    for table_name in (
        'ai_sessions',
        'knowledge_base',
        'subscriptions',
        'messages',
        'conversations',
        'notifications',
        'candidate_posts',
        'applications',
        'jobs',
        'users',
    ):
        if table_exists(table_name):
            op.drop_table(table_name)
