"""create workout sets, day routines, custom exercises, coach recommendations

Revision ID: 4b1d2c7e9a10
Revises:
Create Date: 2026-10-19 10:12:41.318204

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b1d2c7e9a10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # 1) workout_sets (append-only log)
    op.create_table(
        'workout_sets',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=120), nullable=False),
        sa.Column('exercise_name', sa.String(length=120), nullable=False),
        sa.Column('weight', sa.Float(), nullable=False),
        sa.Column('reps', sa.Integer(), nullable=False),
        sa.Column('rpe', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('day', sa.String(length=16), nullable=True),
        sa.Column('volume', sa.Float(), nullable=False),
        sa.Column('estimated_1rm', sa.Float(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_workout_sets_exercise_name', 'workout_sets', ['exercise_name'])
    op.create_index('ix_workout_sets_user_created', 'workout_sets', ['user_id', 'created_at'])
    op.create_index('ix_workout_sets_user_exercise_created', 'workout_sets', ['user_id', 'exercise_name', 'created_at'])

    # 2) day_routines, one per (user, day)
    op.create_table(
        'day_routines',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=120), nullable=False, index=True),
        sa.Column('day', sa.String(length=16), nullable=False),
        sa.Column('exercises', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint('user_id', 'day', name='uq_day_routines_user_day'),
    )

    # 3) custom_exercises
    op.create_table(
        'custom_exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=120), nullable=False, index=True),
        sa.Column('muscle', sa.String(length=60), nullable=False, index=True),
        sa.Column('equipments', sa.JSON(), nullable=False),
        sa.Column('difficulty', sa.String(length=30), nullable=False, server_default='beginner'),
        sa.Column('instructions', sa.Text(), nullable=False, server_default=''),
        sa.Column('type', sa.String(length=60), nullable=False, server_default='strength'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )

    # 4) coach_recommendations, latest per user
    op.create_table(
        'coach_recommendations',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=120), nullable=False, unique=True),
        sa.Column('recommendations', sa.JSON(), nullable=False),
        sa.Column('data_snapshot', sa.JSON(), nullable=False),
        sa.Column('generated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )


def downgrade() -> None:
    op.drop_table('coach_recommendations')
    op.drop_table('custom_exercises')
    op.drop_table('day_routines')
    op.drop_index('ix_workout_sets_user_exercise_created', table_name='workout_sets')
    op.drop_index('ix_workout_sets_user_created', table_name='workout_sets')
    op.drop_index('ix_workout_sets_exercise_name', table_name='workout_sets')
    op.drop_table('workout_sets')
