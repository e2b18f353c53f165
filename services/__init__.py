"""
Recipe Service Services Module
Core business logic
"""

from .recipe_service import RecipeService

__all__ = [
    "RecipeService",
]
