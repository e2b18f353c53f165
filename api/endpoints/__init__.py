"""
Recipe Service API Endpoints
All API endpoint modules
"""

from . import health, recipes

__all__ = [
    "health",
    "recipes",
]
