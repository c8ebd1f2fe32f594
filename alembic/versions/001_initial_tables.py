"""Initial tables

Revision ID: 001
Revises:
Create Date: 2025-01-14

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

gender_enum = postgresql.ENUM('male', 'female', name='gender', create_type=False)
test_type_enum = postgresql.ENUM('60_30', '30_30', '30_60', name='test_type', create_type=False)


def upgrade() -> None:
    bind = op.get_bind()
    postgresql.ENUM('male', 'female', name='gender').create(bind, checkfirst=True)
    postgresql.ENUM('60_30', '30_30', '30_60', name='test_type').create(bind, checkfirst=True)

    # Players
    op.create_table(
        'players',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=False),
        sa.Column('gender', gender_enum, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_players_name', 'players', ['name'])

    # Tests
    op.create_table(
        'tests',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('test_type', test_type_enum, nullable=False),
        sa.Column('date_conducted', sa.Date(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_tests_test_type', 'tests', ['test_type'])

    # Test results
    op.create_table(
        'test_results',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('player_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('test_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('left_hand_score', sa.Integer(), nullable=False),
        sa.Column('right_hand_score', sa.Integer(), nullable=False),
        sa.Column('forehand_score', sa.Integer(), nullable=False),
        sa.Column('backhand_score', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('left_hand_score >= 0', name='ck_test_results_left_hand_non_negative'),
        sa.CheckConstraint('right_hand_score >= 0', name='ck_test_results_right_hand_non_negative'),
        sa.CheckConstraint('forehand_score >= 0', name='ck_test_results_forehand_non_negative'),
        sa.CheckConstraint('backhand_score >= 0', name='ck_test_results_backhand_non_negative'),
        sa.ForeignKeyConstraint(['player_id'], ['players.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['test_id'], ['tests.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_test_results_player_id', 'test_results', ['player_id'])
    op.create_index('ix_test_results_test_id', 'test_results', ['test_id'])

    # Admin sessions
    op.create_table(
        'admin_sessions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('session_token_hash', sa.String(length=128), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('revoked_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('user_agent', sa.String(length=512), nullable=True),
        sa.Column('ip_address', sa.String(length=64), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_admin_sessions_session_token_hash', 'admin_sessions', ['session_token_hash'], unique=True)


def downgrade() -> None:
    op.drop_index('ix_admin_sessions_session_token_hash', table_name='admin_sessions')
    op.drop_table('admin_sessions')
    op.drop_index('ix_test_results_test_id', table_name='test_results')
    op.drop_index('ix_test_results_player_id', table_name='test_results')
    op.drop_table('test_results')
    op.drop_index('ix_tests_test_type', table_name='tests')
    op.drop_table('tests')
    op.drop_index('ix_players_name', table_name='players')
    op.drop_table('players')
    test_type_enum.drop(op.get_bind(), checkfirst=True)
    gender_enum.drop(op.get_bind(), checkfirst=True)
