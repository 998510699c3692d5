"""create accounts and session_credentials

Revision ID: 4b1d0e7a9c21
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '4b1d0e7a9c21'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'accounts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_accounts'),
        sa.UniqueConstraint('email', name='uq_accounts_email'),
    )
    op.create_index('ix_accounts_email', 'accounts', ['email'])

    op.create_table(
        'session_credentials',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('token_hash', sa.String(length=128), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(
            ['account_id'],
            ['accounts.id'],
            name='fk_session_credentials_account_id_accounts',
            ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_session_credentials'),
    )
    op.create_index('ix_session_credentials_account_id', 'session_credentials', ['account_id'])
    op.create_index('ix_session_credentials_expires_at', 'session_credentials', ['expires_at'])


def downgrade():
    op.drop_index('ix_session_credentials_expires_at', table_name='session_credentials')
    op.drop_index('ix_session_credentials_account_id', table_name='session_credentials')
    op.drop_table('session_credentials')
    op.drop_index('ix_accounts_email', table_name='accounts')
    op.drop_table('accounts')
