"""
Recipe Service Record Access
Maps validated recipe payloads onto single-statement storage operations
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, List, Mapping, Type, TypeVar, Union

import structlog
from pydantic import BaseModel, ValidationError
from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import RecipeNotFoundError, RecipeValidationError, StorageUnavailableError
from middleware.logging import log_business_event
from models.recipe_models import RECIPE_ID_RANGE, Recipe
from schemas.recipe_schemas import RecipeCreate, RecipeUpdate, validation_error_details

logger = structlog.get_logger()

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecipeService:
    """
    Record-access component for recipes

    One instance per request, bound to that request's session. Payloads may be
    schema instances or plain mappings; mappings are validated before any
    statement is issued.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_recipes(self) -> List[Recipe]:
        """Return every stored recipe ordered by id"""
        async with self._storage_operation("list"):
            result = await self.db.execute(select(Recipe).order_by(Recipe.id))
            return list(result.scalars().all())

    async def get_recipe(self, recipe_id: int) -> Recipe:
        """Return one recipe or raise RecipeNotFoundError"""
        self._check_id(recipe_id)
        async with self._storage_operation("get", recipe_id=recipe_id):
            recipe = await self.db.get(Recipe, recipe_id)

        if recipe is None:
            raise RecipeNotFoundError(recipe_id)
        return recipe

    async def create_recipe(self, data: Union[RecipeCreate, Mapping[str, Any]]) -> Recipe:
        """
        Insert a new recipe

        The id comes from the database, created_at is stamped with the current
        UTC time and updated_at stays null. Returns the row as stored.
        """
        payload = self._validate(RecipeCreate, data)
        recipe = Recipe(**payload.model_dump(), created_at=utcnow())

        async with self._storage_operation("create"):
            self.db.add(recipe)
            await self.db.commit()
            await self.db.refresh(recipe)

        log_business_event("recipe_created", {"recipe_id": recipe.id})
        return recipe

    async def update_recipe(self, recipe_id: int, data: Union[RecipeUpdate, Mapping[str, Any]]) -> None:
        """
        Apply a partial update

        Only non-null supplied fields are written. updated_at is refreshed on
        every successful call, even when the payload is empty.
        """
        payload = self._validate(RecipeUpdate, data)
        values = payload.changes()
        values["updated_at"] = utcnow()
        self._check_id(recipe_id)

        async with self._storage_operation("update", recipe_id=recipe_id):
            result = await self.db.execute(
                update(Recipe).where(Recipe.id == recipe_id).values(**values)
            )
            if result.rowcount == 0:
                await self.db.rollback()
                raise RecipeNotFoundError(recipe_id)
            await self.db.commit()

        log_business_event(
            "recipe_updated",
            {"recipe_id": recipe_id, "fields": sorted(k for k in values if k != "updated_at")},
        )

    async def delete_recipe(self, recipe_id: int) -> None:
        """Remove a recipe permanently"""
        self._check_id(recipe_id)
        async with self._storage_operation("delete", recipe_id=recipe_id):
            result = await self.db.execute(delete(Recipe).where(Recipe.id == recipe_id))
            if result.rowcount == 0:
                await self.db.rollback()
                raise RecipeNotFoundError(recipe_id)
            await self.db.commit()

        log_business_event("recipe_deleted", {"recipe_id": recipe_id})

    @staticmethod
    def _check_id(recipe_id: int) -> None:
        # ids outside the column range can never be stored
        low, high = RECIPE_ID_RANGE
        if not low <= recipe_id <= high:
            raise RecipeNotFoundError(recipe_id)

    @staticmethod
    def _validate(schema: Type[SchemaT], data: Union[SchemaT, Mapping[str, Any]]) -> SchemaT:
        if isinstance(data, schema):
            return data
        try:
            return schema.model_validate(data)
        except ValidationError as e:
            raise RecipeValidationError(validation_error_details(e.errors())) from e

    @asynccontextmanager
    async def _storage_operation(self, operation: str, **context: Any) -> AsyncIterator[None]:
        """Translate driver and connection failures into StorageUnavailableError"""
        try:
            yield
        except (SQLAlchemyError, OSError) as e:
            logger.error(
                "Recipe storage operation failed",
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
                **context
            )
            try:
                await self.db.rollback()
            except (SQLAlchemyError, OSError) as rollback_error:
                logger.warning("Rollback after storage failure failed", error=str(rollback_error))
            raise StorageUnavailableError(operation) from e
