"""
Recipe Service Recipe Models
Database model for recipes
"""

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from core.database import Base

# ids are 32-bit signed integers on every supported backend
RECIPE_ID_RANGE = (1, 2**31 - 1)


class Recipe(Base):
    """Recipe model for storing recipe information"""
    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(String(1000))
    ingredients = Column(Text, nullable=False)
    instructions = Column(Text, nullable=False)
    cooking_time_minutes = Column(Integer)
    servings = Column(Integer)
    difficulty = Column(String(20))  # Easy, Medium, Hard
    cuisine = Column(String(50))

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True))

    def __repr__(self):
        return f"<Recipe(id={self.id}, title={self.title!r})>"
