"""
Recipe Service Exceptions
Domain errors raised by the service layer and mapped to HTTP responses in main.py
"""

from typing import Any, Dict, List, Optional


class RecipeServiceError(Exception):
    """Base class for recipe service errors"""

    status_code = 500
    error = "Internal server error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.error, "message": self.message}


class RecipeValidationError(RecipeServiceError):
    """Payload failed one or more field constraints"""

    status_code = 400
    error = "Validation failed"

    def __init__(self, details: List[Dict[str, str]]):
        self.details = details
        if details:
            first = details[0]
            message = f"{first['field']}: {first['message']}" if first.get("field") else first["message"]
        else:
            message = "Invalid recipe payload"
        super().__init__(message)

    @property
    def fields(self) -> List[str]:
        return [d["field"] for d in self.details]

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["details"] = self.details
        return data


class RecipeNotFoundError(RecipeServiceError):
    """No recipe exists with the requested id"""

    status_code = 404
    error = "Not found"

    def __init__(self, recipe_id: int):
        self.recipe_id = recipe_id
        super().__init__(f"Recipe with ID {recipe_id} not found")


class StorageUnavailableError(RecipeServiceError):
    """Database unreachable or the statement failed"""

    status_code = 503
    error = "Service unavailable"

    def __init__(self, operation: Optional[str] = None):
        self.operation = operation
        super().__init__("The recipe store is temporarily unavailable. Please try again later.")


__all__ = [
    "RecipeServiceError",
    "RecipeValidationError",
    "RecipeNotFoundError",
    "StorageUnavailableError",
]
