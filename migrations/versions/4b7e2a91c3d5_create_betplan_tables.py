"""Create capital plan, bets, weekly plans and settings tables

Revision ID: 4b7e2a91c3d5
Revises:
Create Date: 2026-10-19 09:12:41.118532

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4b7e2a91c3d5'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'capital_state',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('initial_capital', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('current_capital', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('monthly_growth_target', sa.Numeric(precision=6, scale=4), nullable=False),
        sa.Column('start_month', sa.Integer(), nullable=False),
        sa.Column('start_year', sa.Integer(), nullable=False),
        sa.Column('current_month', sa.Integer(), nullable=False),
        sa.Column('current_year', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'monthly_capital',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('capital_id', sa.Integer(), nullable=False),
        sa.Column('month', sa.Integer(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('initial_capital', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('current_capital', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('target_capital', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.ForeignKeyConstraint(['capital_id'], ['capital_state.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('capital_id', 'month', 'year', name='unique_capital_month')
    )

    op.create_table(
        'bets',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('match_name', sa.String(length=200), nullable=False),
        sa.Column('league', sa.String(length=100), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('odds', sa.Numeric(precision=8, scale=3), nullable=False),
        sa.Column('stake', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('bet_type', sa.String(length=10), nullable=False),
        sa.Column('result', sa.String(length=10), nullable=False),
        sa.Column('profit', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('month', sa.Integer(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('week', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    # Period lookups drive every cascade and the statistics filters
    op.create_index('idx_bet_period', 'bets', ['year', 'month', 'week'], unique=False)

    op.create_table(
        'weekly_plans',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('month', sa.Integer(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('week', sa.Integer(), nullable=False),
        sa.Column('target_bets', sa.Integer(), nullable=False),
        sa.Column('average_odds', sa.Numeric(precision=6, scale=2), nullable=False),
        sa.Column('unit_size', sa.Numeric(precision=6, scale=4), nullable=False),
        sa.Column('bets_placed', sa.Integer(), nullable=False),
        sa.Column('bets_won', sa.Integer(), nullable=False),
        sa.Column('bets_lost', sa.Integer(), nullable=False),
        sa.Column('bets_pending', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('month', 'year', 'week', name='unique_plan_week')
    )

    op.create_table(
        'settings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('key', sa.String(length=100), nullable=False),
        sa.Column('value', sa.String(length=500), nullable=True),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.Column('setting_type', sa.String(length=50), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('key')
    )


def downgrade():
    op.drop_table('settings')
    op.drop_table('weekly_plans')
    op.drop_index('idx_bet_period', table_name='bets')
    op.drop_table('bets')
    op.drop_table('monthly_capital')
    op.drop_table('capital_state')
