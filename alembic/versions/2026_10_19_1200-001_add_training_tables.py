"""Add training log and sparring session tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create training_logs and sparring_sessions tables."""
    op.create_table('training_logs', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('type', sqlmodel.sql.sqltypes.AutoString(length=10), nullable=False),
        sa.Column('notes', sqlmodel.sql.sqltypes.AutoString(length=2000), nullable=True),
        sa.Column('reflection', sqlmodel.sql.sqltypes.AutoString(length=2000), nullable=True),
        sa.Column('tournament_name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column('weight_class', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column('location', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column('competition_style', sqlmodel.sql.sqltypes.AutoString(length=10), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_training_logs_user_id'), 'training_logs', ['user_id'], unique=False)
    op.create_index(op.f('ix_training_logs_date'), 'training_logs', ['date'], unique=False)

    op.create_table('sparring_sessions', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('training_log_id', sa.Integer(), nullable=False),
        sa.Column('session_number', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('partner_name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column('notes', sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.Column('submission_events', sa.JSON(), nullable=False),
        sa.Column('sweep_events', sa.JSON(), nullable=False),
        sa.Column('position_scores', sa.JSON(), nullable=False),
        sa.Column('is_competition_match', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('result', sqlmodel.sql.sqltypes.AutoString(length=10), nullable=True),
        sa.Column('method', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=True),
        sa.Column('stage', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=True),
        sa.Column('submission_technique', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.ForeignKeyConstraint(['training_log_id'], ['training_logs.id'], ),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_sparring_sessions_training_log_id'), 'sparring_sessions', ['training_log_id'],
                    unique=False)


def downgrade() -> None:
    """Drop sparring_sessions and training_logs tables."""
    op.drop_index(op.f('ix_sparring_sessions_training_log_id'), table_name='sparring_sessions')
    op.drop_table('sparring_sessions')
    op.drop_index(op.f('ix_training_logs_date'), table_name='training_logs')
    op.drop_index(op.f('ix_training_logs_user_id'), table_name='training_logs')
    op.drop_table('training_logs')
