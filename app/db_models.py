"""SQLAlchemy tables for plans and profiles."""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import Column, String, Integer, Float, DateTime, JSON, Text

from app.database import Base


class TravelPlan(Base):
    __tablename__ = "travel_plans"

    id = Column(String, primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String, nullable=False, index=True)
    destination = Column(Text, nullable=False)
    duration = Column(Integer, nullable=False)
    people_count = Column(Integer, nullable=False)
    travel_style = Column(String, nullable=False)  # budget, standard, premium
    ai_recommendation = Column(JSON, nullable=True)
    total_cost = Column(Float, nullable=False, default=0)
    cost_breakdown = Column(JSON, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)


class Profile(Base):
    __tablename__ = "profiles"

    # Same value as the auth user id (one profile per account)
    id = Column(String, primary_key=True)
    full_name = Column(String, nullable=True)
    favorite_style = Column(String, nullable=True)
    avatar_url = Column(String, nullable=True)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
