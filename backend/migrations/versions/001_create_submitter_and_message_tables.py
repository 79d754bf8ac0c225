"""Create submitter and message tables

Revision ID: 001
Revises:
Create Date: 2026-10-16 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'submitter',
        sa.Column('id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('email', sa.Text(), nullable=False),
        sa.Column('first_name', sa.Text(), nullable=False),
        sa.Column('last_name', sa.Text(), nullable=False),
        sa.Column('phone', sa.Text(), nullable=True),
        sa.Column('verified', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('verification_token', sa.Text(), nullable=True),
        sa.Column('token_expires_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email', name='uq_submitter_email'),
        sa.CheckConstraint(
            "(verification_token IS NULL) OR (token_expires_at IS NOT NULL)",
            name='ck_submitter_token_has_expiry'
        ),
        sa.CheckConstraint(
            "(verified = false) OR (verification_token IS NULL AND token_expires_at IS NULL)",
            name='ck_submitter_verified_has_no_token'
        ),
    )
    op.create_index('idx_submitter_verification_token', 'submitter', ['verification_token'])

    op.create_table(
        'message',
        sa.Column('id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('submitter_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['submitter_id'], ['submitter.id'], ondelete='RESTRICT'),
    )
    op.create_index('idx_message_submitter_created', 'message', ['submitter_id', 'created_at'])


def downgrade():
    op.drop_index('idx_message_submitter_created', table_name='message')
    op.drop_table('message')
    op.drop_index('idx_submitter_verification_token', table_name='submitter')
    op.drop_table('submitter')
