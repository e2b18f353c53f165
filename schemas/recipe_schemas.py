"""
Recipe Service Recipe Schemas
Pydantic models for recipe API requests and responses
"""

from typing import Annotated, Any, Dict, Iterable, List, Optional
from datetime import datetime, timezone
from enum import Enum
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000
CUISINE_MAX_LENGTH = 50
COOKING_TIME_RANGE = (1, 1440)  # minutes
SERVINGS_RANGE = (1, 100)


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class RecipeSchema(BaseModel):
    """Shared config: camelCase on the wire, snake_case in Python"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


def _reject_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty")
    return value


NonBlankStr = Annotated[str, AfterValidator(_reject_blank)]
TitleStr = Annotated[str, Field(max_length=TITLE_MAX_LENGTH), AfterValidator(_reject_blank)]


class RecipeCreate(RecipeSchema):
    title: TitleStr = Field(
        ...,
        json_schema_extra={"example": "Authentic Street Tacos"},
    )
    description: Optional[str] = Field(
        None,
        max_length=DESCRIPTION_MAX_LENGTH,
        json_schema_extra={"example": "Classic Mexican street tacos with marinated carne asada"},
    )
    ingredients: NonBlankStr = Field(
        ...,
        json_schema_extra={"example": "1 lb flank steak, 1/4 cup olive oil, 2 limes, 3 cloves garlic"},
    )
    instructions: NonBlankStr = Field(
        ...,
        json_schema_extra={"example": "1. Mix marinade\n2. Marinate steak for 2-4 hours\n3. Grill steak"},
    )
    cooking_time_minutes: Optional[int] = Field(
        None, strict=True, ge=COOKING_TIME_RANGE[0], le=COOKING_TIME_RANGE[1], json_schema_extra={"example": 30}
    )
    servings: Optional[int] = Field(
        None, strict=True, ge=SERVINGS_RANGE[0], le=SERVINGS_RANGE[1], json_schema_extra={"example": 4}
    )
    difficulty: Optional[Difficulty] = Field(None, json_schema_extra={"example": "Medium"})
    cuisine: Optional[str] = Field(
        None, max_length=CUISINE_MAX_LENGTH, json_schema_extra={"example": "Mexican"}
    )


class RecipeUpdate(RecipeSchema):
    """
    Partial update payload
    Every field is optional; null or missing fields keep their stored value
    """

    title: Optional[TitleStr] = None
    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    ingredients: Optional[NonBlankStr] = None
    instructions: Optional[NonBlankStr] = None
    cooking_time_minutes: Optional[int] = Field(
        None, strict=True, ge=COOKING_TIME_RANGE[0], le=COOKING_TIME_RANGE[1]
    )
    servings: Optional[int] = Field(None, strict=True, ge=SERVINGS_RANGE[0], le=SERVINGS_RANGE[1])
    difficulty: Optional[Difficulty] = None
    cuisine: Optional[str] = Field(None, max_length=CUISINE_MAX_LENGTH)

    def changes(self) -> Dict[str, Any]:
        """Column values supplied by the caller, keyed by attribute name"""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class RecipeResponse(RecipeSchema):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    ingredients: str
    instructions: str
    cooking_time_minutes: Optional[int] = None
    servings: Optional[int] = None
    difficulty: Optional[str] = None
    cuisine: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        # sqlite hands back naive datetimes; stored values are always UTC
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


def validation_error_details(errors: Iterable[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Flatten pydantic error dicts into field/message pairs"""
    details = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = ".".join(loc) if loc and error.get("type") != "json_invalid" else "body"
        message = error.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        details.append({"field": field, "message": message})
    return details
