"""
Recipe Service Core Dependencies
FastAPI dependencies shared by the endpoint modules
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Annotated

from core.database import get_db
from services.recipe_service import RecipeService


async def get_recipe_service(db: AsyncSession = Depends(get_db)) -> RecipeService:
    """Recipe service bound to the request's database session"""
    return RecipeService(db)


# Type aliases for common dependencies
RecipeServiceDep = Annotated[RecipeService, Depends(get_recipe_service)]
