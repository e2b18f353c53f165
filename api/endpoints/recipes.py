"""
Recipe Service Recipe Management Endpoints
Recipe CRUD operations
"""

from fastapi import APIRouter, Request, Response, status
from typing import List

from core.dependencies import RecipeServiceDep
from schemas.recipe_schemas import RecipeCreate, RecipeResponse, RecipeUpdate

router = APIRouter()

NOT_FOUND = {404: {"description": "Recipe not found"}}
BAD_REQUEST = {400: {"description": "Payload failed validation"}}


@router.get("", response_model=List[RecipeResponse])
async def list_recipes(service: RecipeServiceDep):
    """Get all recipes"""
    recipes = await service.list_recipes()
    return [RecipeResponse.model_validate(recipe) for recipe in recipes]


@router.get("/{recipe_id}", response_model=RecipeResponse, responses=NOT_FOUND)
async def get_recipe(recipe_id: int, service: RecipeServiceDep):
    """Get specific recipe"""
    recipe = await service.get_recipe(recipe_id)
    return RecipeResponse.model_validate(recipe)


@router.post(
    "",
    response_model=RecipeResponse,
    status_code=status.HTTP_201_CREATED,
    responses=BAD_REQUEST,
)
async def create_recipe(
    recipe_data: RecipeCreate,
    request: Request,
    response: Response,
    service: RecipeServiceDep
):
    """
    Create new recipe

    Returns the stored recipe with its generated id and creation timestamp.
    The Location header points at the new resource.
    """
    recipe = await service.create_recipe(recipe_data)
    response.headers["Location"] = str(request.url_for("get_recipe", recipe_id=recipe.id))
    return RecipeResponse.model_validate(recipe)


@router.put(
    "/{recipe_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**NOT_FOUND, **BAD_REQUEST},
)
async def update_recipe(recipe_id: int, recipe_data: RecipeUpdate, service: RecipeServiceDep):
    """
    Update existing recipe

    Partial update: only fields present and non-null in the body are changed.
    """
    await service.update_recipe(recipe_id, recipe_data)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{recipe_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=NOT_FOUND,
)
async def delete_recipe(recipe_id: int, service: RecipeServiceDep):
    """Delete recipe"""
    await service.delete_recipe(recipe_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
