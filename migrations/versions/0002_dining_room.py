"""dining room: tables, call-waiter requests, feedback, footer settings

Revision ID: 0002_dining_room
Revises: 0001_initial_schema
Create Date: 2026-10-19 14:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0002_dining_room'
down_revision = '0001_initial_schema'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'tables',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('table_number', sa.Integer(), nullable=False),
        sa.Column('menu_url', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('table_number'),
    )

    op.create_table(
        'call_waiter_requests',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('table_number', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['table_number'], ['tables.table_number'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_call_waiter_requests_table_number', 'call_waiter_requests', ['table_number'])

    op.create_table(
        'feedback',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'footer_settings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('label', sa.String(length=100), nullable=False),
        sa.Column('value', sa.String(length=500), nullable=False),
        sa.Column('display_name', sa.String(length=100), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade() -> None:
    op.drop_table('footer_settings')
    op.drop_table('feedback')
    op.drop_index('ix_call_waiter_requests_table_number', table_name='call_waiter_requests')
    op.drop_table('call_waiter_requests')
    op.drop_table('tables')
