"""Create reward vault tables

Revision ID: 20261019_000001
Revises: 
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Reward accounts (credentials stored as AES-GCM blobs)
    op.create_table(
        'reward_accounts',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('service_name', sa.String(255), nullable=False),
        sa.Column('account_type', sa.String(255), nullable=False),
        sa.Column('category', sa.String(32), nullable=False),
        sa.Column('encrypted_credentials', sa.Text(), nullable=False,
                  comment='base64(IV || TAG || CIPHERTEXT), AES-256-GCM'),
        sa.Column('subscription_duration', sa.String(255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(32), nullable=False, server_default='AVAILABLE'),
        sa.Column('assigned_to_submission_id', sa.Integer(), nullable=True),
        sa.Column('assigned_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('assigned_to_submission_id'),
    )
    op.create_index('ix_reward_accounts_category', 'reward_accounts', ['category'])
    op.create_index('ix_reward_accounts_status', 'reward_accounts', ['status'])
    op.create_index('ix_reward_accounts_created_by', 'reward_accounts', ['created_by'])
    op.create_index('ix_reward_accounts_status_category', 'reward_accounts', ['status', 'category'])
    op.create_index('ix_reward_accounts_status_created', 'reward_accounts', ['status', 'created_at'])

    # Append-only audit log; rows outlive deleted accounts
    op.create_table(
        'reward_audit_logs',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('reward_account_id', sa.Integer(), nullable=False),
        sa.Column('action', sa.String(32), nullable=False),
        sa.Column('performed_by', sa.Integer(), nullable=True),
        sa.Column('performed_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_reward_audit_logs_reward_account_id', 'reward_audit_logs', ['reward_account_id'])
    op.create_index(
        'ix_reward_audit_logs_account_performed', 'reward_audit_logs', ['reward_account_id', 'performed_at']
    )
    op.create_index('ix_reward_audit_logs_action_performed', 'reward_audit_logs', ['action', 'performed_at'])

    # Submissions: one reward account at most
    op.create_table(
        'submissions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('selected_category', sa.String(32), nullable=True),
        sa.Column('assigned_reward_account_id', sa.Integer(), nullable=True),
        sa.Column('reward_assigned_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('reward_assigned_by', sa.Integer(), nullable=True),
        sa.Column('reward_notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['assigned_reward_account_id'], ['reward_accounts.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('assigned_reward_account_id'),
    )


def downgrade() -> None:
    op.drop_table('submissions')

    op.drop_index('ix_reward_audit_logs_action_performed', 'reward_audit_logs')
    op.drop_index('ix_reward_audit_logs_account_performed', 'reward_audit_logs')
    op.drop_index('ix_reward_audit_logs_reward_account_id', 'reward_audit_logs')
    op.drop_table('reward_audit_logs')

    op.drop_index('ix_reward_accounts_status_created', 'reward_accounts')
    op.drop_index('ix_reward_accounts_status_category', 'reward_accounts')
    op.drop_index('ix_reward_accounts_created_by', 'reward_accounts')
    op.drop_index('ix_reward_accounts_status', 'reward_accounts')
    op.drop_index('ix_reward_accounts_category', 'reward_accounts')
    op.drop_table('reward_accounts')
