from __future__ import annotations

import datetime as dt

from sqlalchemy import Date, DateTime, Float, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow_naive() -> dt.datetime:
    # stored as naive UTC for SQLite
    return dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    pass


class Profile(Base):
    """
    The single user's body metrics and preferences, plus the last applied
    targets and the baseline snapshot taken the first time targets were applied.
    """

    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=utcnow_naive)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, default=utcnow_naive, onupdate=utcnow_naive)

    display_name: Mapped[str] = mapped_column(String(64), default="John Doe")

    weight_kg: Mapped[float] = mapped_column(Float, default=80.0)
    height_cm: Mapped[float] = mapped_column(Float, default=180.0)
    age: Mapped[int] = mapped_column(Integer, default=30)
    gender: Mapped[str] = mapped_column(String(16), default="male")  # male/female
    activity_level: Mapped[str] = mapped_column(String(16), default="moderate")  # sedentary/light/moderate/very/extra
    goal: Mapped[str] = mapped_column(String(16), default="maintain")  # cut/maintain/bulk

    protein_factor: Mapped[float] = mapped_column(Float, default=1.8)
    fat_percentage: Mapped[float] = mapped_column(Float, default=0.25)

    # targets (snapshot of the last apply)
    bmr_kcal: Mapped[float | None] = mapped_column(Float, nullable=True)
    tdee_kcal: Mapped[int | None] = mapped_column(Integer, nullable=True)
    calorie_target: Mapped[int | None] = mapped_column(Integer, nullable=True)
    protein_g_target: Mapped[int | None] = mapped_column(Integer, nullable=True)
    fat_g_target: Mapped[int | None] = mapped_column(Integer, nullable=True)
    carb_g_target: Mapped[int | None] = mapped_column(Integer, nullable=True)

    baseline_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    baseline_calorie_target: Mapped[int | None] = mapped_column(Integer, nullable=True)
    baseline_weight_kg: Mapped[float | None] = mapped_column(Float, nullable=True)
    # macros at baseline {protein_g, fat_g, carb_g}
    baseline_json: Mapped[str | None] = mapped_column(Text, nullable=True)


class Food(Base):
    """
    Editable food database. Nutrients are per serving (serving_size + serving_unit).
    """

    __tablename__ = "foods"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=utcnow_naive)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, default=utcnow_naive, onupdate=utcnow_naive)

    name: Mapped[str] = mapped_column(String(256))
    serving_size: Mapped[float] = mapped_column(Float, default=100.0)
    serving_unit: Mapped[str] = mapped_column(String(16), default="g")

    calories: Mapped[float] = mapped_column(Float, default=0.0)
    protein_g: Mapped[float] = mapped_column(Float, default=0.0)
    carbs_g: Mapped[float] = mapped_column(Float, default=0.0)
    fat_g: Mapped[float] = mapped_column(Float, default=0.0)
    fiber_g: Mapped[float] = mapped_column(Float, default=0.0)

    category: Mapped[str] = mapped_column(String(64), default="")
    tags_json: Mapped[str | None] = mapped_column(Text, nullable=True)


class FoodLog(Base):
    __tablename__ = "food_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=utcnow_naive)

    date: Mapped[dt.date] = mapped_column(Date, index=True)
    meal: Mapped[str] = mapped_column(String(16))  # breakfast/lunch/dinner/snacks

    # no FK: deleting a food must not wipe history, the name is kept as a snapshot
    food_id: Mapped[int] = mapped_column(Integer)
    food_name: Mapped[str] = mapped_column(String(256))
    quantity: Mapped[float] = mapped_column(Float)

    calories: Mapped[float] = mapped_column(Float, default=0.0)
    protein_g: Mapped[float] = mapped_column(Float, default=0.0)
    carbs_g: Mapped[float] = mapped_column(Float, default=0.0)
    fat_g: Mapped[float] = mapped_column(Float, default=0.0)


class WorkoutLog(Base):
    __tablename__ = "workout_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=utcnow_naive)

    date: Mapped[dt.date] = mapped_column(Date, index=True)
    name: Mapped[str] = mapped_column(String(128))
    type: Mapped[str] = mapped_column(String(16), default="strength")  # strength/cardio
    muscle_group: Mapped[str] = mapped_column(String(32))

    # strength: {sets, reps, weight}; cardio: {duration, distance}
    details_json: Mapped[str] = mapped_column(Text)


class WeightLog(Base):
    __tablename__ = "weight_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=utcnow_naive)

    date: Mapped[dt.date] = mapped_column(Date, unique=True, index=True)
    weight_kg: Mapped[float] = mapped_column(Float)


Index("ix_food_logs_date_meal", FoodLog.date, FoodLog.meal)
Index("ix_foods_category", Food.category)
