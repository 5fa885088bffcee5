"""initial schema

Revision ID: 0001_initial
Revises: 
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("display_name", sa.String(length=64), nullable=False),
        sa.Column("weight_kg", sa.Float(), nullable=False),
        sa.Column("height_cm", sa.Float(), nullable=False),
        sa.Column("age", sa.Integer(), nullable=False),
        sa.Column("gender", sa.String(length=16), nullable=False),
        sa.Column("activity_level", sa.String(length=16), nullable=False),
        sa.Column("goal", sa.String(length=16), nullable=False),
        sa.Column("protein_factor", sa.Float(), nullable=False),
        sa.Column("fat_percentage", sa.Float(), nullable=False),
        sa.Column("bmr_kcal", sa.Float(), nullable=True),
        sa.Column("tdee_kcal", sa.Integer(), nullable=True),
        sa.Column("calorie_target", sa.Integer(), nullable=True),
        sa.Column("protein_g_target", sa.Integer(), nullable=True),
        sa.Column("fat_g_target", sa.Integer(), nullable=True),
        sa.Column("carb_g_target", sa.Integer(), nullable=True),
        sa.Column("baseline_date", sa.Date(), nullable=True),
        sa.Column("baseline_calorie_target", sa.Integer(), nullable=True),
        sa.Column("baseline_weight_kg", sa.Float(), nullable=True),
        sa.Column("baseline_json", sa.Text(), nullable=True),
    )

    op.create_table(
        "foods",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("name", sa.String(length=256), nullable=False),
        sa.Column("serving_size", sa.Float(), nullable=False),
        sa.Column("serving_unit", sa.String(length=16), nullable=False),
        sa.Column("calories", sa.Float(), nullable=False),
        sa.Column("protein_g", sa.Float(), nullable=False),
        sa.Column("carbs_g", sa.Float(), nullable=False),
        sa.Column("fat_g", sa.Float(), nullable=False),
        sa.Column("fiber_g", sa.Float(), nullable=False),
        sa.Column("category", sa.String(length=64), nullable=False),
        sa.Column("tags_json", sa.Text(), nullable=True),
    )
    op.create_index("ix_foods_category", "foods", ["category"], unique=False)

    op.create_table(
        "food_logs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("meal", sa.String(length=16), nullable=False),
        sa.Column("food_id", sa.Integer(), nullable=False),
        sa.Column("food_name", sa.String(length=256), nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False),
        sa.Column("calories", sa.Float(), nullable=False),
        sa.Column("protein_g", sa.Float(), nullable=False),
        sa.Column("carbs_g", sa.Float(), nullable=False),
        sa.Column("fat_g", sa.Float(), nullable=False),
    )
    op.create_index("ix_food_logs_date", "food_logs", ["date"], unique=False)
    op.create_index("ix_food_logs_date_meal", "food_logs", ["date", "meal"], unique=False)

    op.create_table(
        "workout_logs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("muscle_group", sa.String(length=32), nullable=False),
        sa.Column("details_json", sa.Text(), nullable=False),
    )
    op.create_index("ix_workout_logs_date", "workout_logs", ["date"], unique=False)

    op.create_table(
        "weight_logs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("weight_kg", sa.Float(), nullable=False),
    )
    op.create_index("ix_weight_logs_date", "weight_logs", ["date"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_weight_logs_date", table_name="weight_logs")
    op.drop_table("weight_logs")

    op.drop_index("ix_workout_logs_date", table_name="workout_logs")
    op.drop_table("workout_logs")

    op.drop_index("ix_food_logs_date_meal", table_name="food_logs")
    op.drop_index("ix_food_logs_date", table_name="food_logs")
    op.drop_table("food_logs")

    op.drop_index("ix_foods_category", table_name="foods")
    op.drop_table("foods")

    op.drop_table("profiles")
