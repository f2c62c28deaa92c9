"""add body profiles and body measurements

Revision ID: 9e3a5f0c2d17
Revises: 4b1d2c7e9a10
Create Date: 2026-10-20 09:04:12.551893

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '9e3a5f0c2d17'
down_revision: Union[str, None] = '4b1d2c7e9a10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # 1) body_profiles, one per user
    op.create_table(
        'body_profiles',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=120), nullable=False, unique=True),
        sa.Column('weight', sa.Float(), nullable=True),
        sa.Column('height', sa.Float(), nullable=True),
        sa.Column('fat_mass', sa.Float(), nullable=True),
        sa.Column('muscle_mass', sa.Float(), nullable=True),
        sa.Column('body_fat_percentage', sa.Float(), nullable=True),
        sa.Column('bmi', sa.Float(), nullable=True),
        sa.Column('waist', sa.Float(), nullable=True),
        sa.Column('chest', sa.Float(), nullable=True),
        sa.Column('arms', sa.Float(), nullable=True),
        sa.Column('thighs', sa.Float(), nullable=True),
        sa.Column('age', sa.Integer(), nullable=True),
        sa.Column('gender', sa.String(length=30), nullable=True),
        sa.Column('goal_weight', sa.Float(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=False, server_default=''),
        sa.Column('custom_fields', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )

    # 2) body_measurements (append-only history)
    op.create_table(
        'body_measurements',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=120), nullable=False),
        sa.Column('weight', sa.Float(), nullable=True),
        sa.Column('fat_mass', sa.Float(), nullable=True),
        sa.Column('muscle_mass', sa.Float(), nullable=True),
        sa.Column('body_fat_percentage', sa.Float(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=False, server_default=''),
        sa.Column('recorded_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_body_measurements_user_recorded', 'body_measurements', ['user_id', 'recorded_at'])


def downgrade() -> None:
    op.drop_index('ix_body_measurements_user_recorded', table_name='body_measurements')
    op.drop_table('body_measurements')
    op.drop_table('body_profiles')
