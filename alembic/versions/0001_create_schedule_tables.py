"""create_schedule_tables

Revision ID: 0001_schedule_tables
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_schedule_tables'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


SESSION_STATUSES = ('scheduled', 'confirmed', 'completed', 'cancelled', 'no_show')
NOTIFICATION_TYPES = ('reminder', 'confirmation', 'cancellation', 'completion', 'no_show')


def upgrade() -> None:
    """Upgrade schema.

    Create workout_plans, workout_templates, training_sessions and
    session_notifications. Status and notification type are stored as
    constrained VARCHAR columns rather than native enums.
    """
    op.create_table(
        'workout_plans',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('client_id', sa.Integer(), nullable=False),
        sa.Column('trainer_id', sa.Integer(), nullable=True),
        sa.Column('name', sa.String(200), nullable=False, server_default=''),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('schedule_data', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint('end_date >= start_date', name='check_workout_plan_date_range'),
    )
    op.create_index('ix_workout_plans_id', 'workout_plans', ['id'])
    op.create_index('ix_workout_plans_client_id', 'workout_plans', ['client_id'])
    op.create_index('ix_workout_plans_trainer_id', 'workout_plans', ['trainer_id'])
    op.create_index(
        'idx_workout_plans_client_range', 'workout_plans', ['client_id', 'start_date', 'end_date']
    )

    op.create_table(
        'workout_templates',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(100), nullable=True),
        sa.Column('is_rest_day', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('estimated_duration_minutes', sa.Integer(), nullable=True),
        sa.Column('exercises', sa.JSON(), nullable=False),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_workout_templates_id', 'workout_templates', ['id'])

    op.create_table(
        'training_sessions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('client_id', sa.Integer(), nullable=False),
        sa.Column('trainer_id', sa.Integer(), nullable=True),
        sa.Column(
            'plan_id',
            sa.Integer(),
            sa.ForeignKey('workout_plans.id', ondelete='SET NULL'),
            nullable=True,
        ),
        sa.Column(
            'template_id',
            sa.Integer(),
            sa.ForeignKey('workout_templates.id', ondelete='SET NULL'),
            nullable=True,
        ),
        sa.Column('scheduled_date', sa.Date(), nullable=False),
        sa.Column('scheduled_time', sa.String(16), nullable=True),
        sa.Column('duration_minutes', sa.Integer(), nullable=True),
        sa.Column('type', sa.String(50), nullable=False, server_default='personal_training'),
        sa.Column('location', sa.String(200), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='scheduled'),
        sa.Column('exercises_completed', sa.JSON(), nullable=True),
        sa.Column('trainer_notes', sa.Text(), nullable=True),
        sa.Column('client_feedback', sa.Text(), nullable=True),
        sa.Column('session_rating', sa.Integer(), nullable=True),
        sa.Column('completed_duration_minutes', sa.Integer(), nullable=True),
        sa.Column('completion_data', sa.JSON(), nullable=True),
        sa.Column('confirmed_at', sa.DateTime(), nullable=True),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.Column('cancelled_at', sa.DateTime(), nullable=True),
        sa.Column('cancellation_reason', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint(
            "status IN ('" + "', '".join(SESSION_STATUSES) + "')",
            name='check_training_session_status_valid',
        ),
        sa.CheckConstraint(
            'session_rating IS NULL OR (session_rating >= 1 AND session_rating <= 5)',
            name='check_training_session_rating_range',
        ),
    )
    op.create_index('ix_training_sessions_id', 'training_sessions', ['id'])
    op.create_index('ix_training_sessions_client_id', 'training_sessions', ['client_id'])
    op.create_index('ix_training_sessions_trainer_id', 'training_sessions', ['trainer_id'])
    op.create_index(
        'idx_training_sessions_client_date', 'training_sessions', ['client_id', 'scheduled_date']
    )
    op.create_index(
        'idx_training_sessions_trainer_date', 'training_sessions', ['trainer_id', 'scheduled_date']
    )

    op.create_table(
        'session_notifications',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column(
            'session_id',
            sa.Integer(),
            sa.ForeignKey('training_sessions.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('client_id', sa.Integer(), nullable=True),
        sa.Column('trainer_id', sa.Integer(), nullable=True),
        sa.Column('notification_type', sa.String(20), nullable=False),
        sa.Column('title', sa.String(200), nullable=False, server_default=''),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('scheduled_for', sa.DateTime(), nullable=False),
        sa.Column('sent', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('sent_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint(
            "notification_type IN ('" + "', '".join(NOTIFICATION_TYPES) + "')",
            name='check_session_notification_type_valid',
        ),
    )
    op.create_index('ix_session_notifications_id', 'session_notifications', ['id'])
    op.create_index('ix_session_notifications_session_id', 'session_notifications', ['session_id'])
    op.create_index('idx_session_notifications_due', 'session_notifications', ['sent', 'scheduled_for'])
    # One pending reminder per session
    op.create_index(
        'uq_session_notifications_unsent_reminder',
        'session_notifications',
        ['session_id', 'notification_type'],
        unique=True,
        postgresql_where=sa.text("sent = false AND notification_type = 'reminder'"),
    )


def downgrade() -> None:
    """Downgrade schema.

    Drop the scheduling tables in dependency order.
    """
    op.drop_table('session_notifications')
    op.drop_table('training_sessions')
    op.drop_table('workout_templates')
    op.drop_table('workout_plans')
