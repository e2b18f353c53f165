import os

# Point the app at an in-memory database before any project module reads settings
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.exc import OperationalError  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from core.database import Base  # noqa: E402
from main import app  # noqa: E402
import models  # noqa: E402,F401
from services.recipe_service import RecipeService  # noqa: E402


@pytest.fixture
def tacos():
    return {
        "title": "Tacos",
        "ingredients": "beef, lime",
        "instructions": "grill",
    }


@pytest.fixture
def street_tacos():
    return {
        "title": "Authentic Street Tacos",
        "description": "Classic Mexican street tacos with marinated carne asada",
        "ingredients": "1 lb flank steak, 1/4 cup olive oil, 2 limes, 3 cloves garlic",
        "instructions": "1. Mix marinade ingredients\n2. Marinate steak for 2-4 hours\n3. Grill steak",
        "cookingTimeMinutes": 30,
        "servings": 4,
        "difficulty": "Medium",
        "cuisine": "Mexican",
    }


@pytest.fixture
def client():
    # entering the client runs the lifespan, which builds a fresh in-memory database
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def db_session():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def service(db_session):
    return RecipeService(db_session)


@pytest.fixture
def failing_session():
    """Session whose every statement fails as if the database went away"""
    session = MagicMock(spec=AsyncSession)
    error = OperationalError("SELECT 1", {}, Exception("connection refused by db-host:5432"))
    session.execute = AsyncMock(side_effect=error)
    session.get = AsyncMock(side_effect=error)
    session.commit = AsyncMock(side_effect=error)
    session.rollback = AsyncMock()
    session.refresh = AsyncMock()
    return session
