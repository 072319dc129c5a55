"""dashboard_warnings

Revision ID: 8b2e4d61c3a5
Revises: 3f1c2a9d7b10
Create Date: 2026-10-17 15:40:02.518904

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '8b2e4d61c3a5'
down_revision = '3f1c2a9d7b10'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'warnings',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('urgency', sa.String(20), nullable=False, server_default='low'),
        sa.Column('target_audience', sa.String(50), nullable=False, server_default='all'),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_warnings_id', 'warnings', ['id'])
    op.create_index('ix_warnings_active', 'warnings', ['active'])


def downgrade() -> None:
    op.drop_index('ix_warnings_active', table_name='warnings')
    op.drop_index('ix_warnings_id', table_name='warnings')
    op.drop_table('warnings')
