from .recipe_schemas import (
    Difficulty,
    RecipeCreate,
    RecipeUpdate,
    RecipeResponse,
    validation_error_details,
)

__all__ = [
    "Difficulty",
    "RecipeCreate",
    "RecipeUpdate",
    "RecipeResponse",
    "validation_error_details",
]
