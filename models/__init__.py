"""
Recipe Service Database Models
Central import module for all database models
"""

from .recipe_models import RECIPE_ID_RANGE, Recipe

__all__ = [
    "Recipe",
    "RECIPE_ID_RANGE",
]
