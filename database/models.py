"""SQLAlchemy ORM models for the nutrition onboarding service.

This module defines the database schema: User, Biometrics, HealthProfile and
Preferences. Each profile section holds at most one row per user. Models are
plain declarative classes with no business logic; list-valued fields are
stored as JSON-encoded strings.
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Text, Boolean
from sqlalchemy.orm import declarative_base
from datetime import datetime

Base = declarative_base()


class User(Base):
    """ORM model representing an application user."""

    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, nullable=False, unique=True)
    name = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    location = Column(String, nullable=True)
    onboarding_completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Biometrics(Base):
    """Raw measurements together with the BMI/BMR computed from them."""

    __tablename__ = "biometrics"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, unique=True)
    age = Column(Integer, nullable=False)
    gender = Column(String, nullable=False)
    height = Column(Float, nullable=False)
    weight = Column(Float, nullable=False)
    target_weight = Column(Float, nullable=False)
    activity_level = Column(String, nullable=False)
    bmi = Column(Float, nullable=False)
    bmr = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class HealthProfile(Base):
    """Health condition flags for a user."""

    __tablename__ = "health_profiles"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, unique=True)
    has_diabetes = Column(Boolean, nullable=False, default=False)
    has_hypertension = Column(Boolean, nullable=False, default=False)
    has_high_cholesterol = Column(Boolean, nullable=False, default=False)
    has_gastritis = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Preferences(Base):
    """Dietary preferences for a user."""

    __tablename__ = "preferences"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, unique=True)
    diet_type = Column(String, nullable=False)
    allergens = Column(Text, nullable=True)
    spice_level = Column(Integer, nullable=False)
    daily_budget = Column(Integer, nullable=False)
    food_preferences = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
