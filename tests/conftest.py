import os
import time

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi import HTTPException, status
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.dependencies.llm import get_recipe_generator
from app.dependencies.permissions import get_current_user
from app.main import app
from app.models import User
from app.schemas.recipe import RecipeContent
from app.utils.constants import ErrorMessages


class FakeRecipeGenerator:
    """Stands in for OpenRouterService; returns a fixed recipe or raises `error`"""

    def __init__(self):
        self.calls = []
        self.error = None
        self.delay = 0
        self.recipe = RecipeContent(
            title="Tomato Pasta",
            ingredients=[
                {"name": "Pasta", "quantity": 200, "unit": "g"},
                {"name": "Tomato", "quantity": 3},
            ],
            instructions="Boil the pasta. Simmer chopped tomatoes, then toss together.",
            meal_type="dinner",
            prep_time=10,
            cook_time=20,
        )

    def generate_recipe(self, system_prompt, user_prompt):
        self.calls.append((system_prompt, user_prompt))
        if self.delay:
            time.sleep(self.delay)
        if self.error:
            raise self.error
        return self.recipe


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def auth_state():
    return {"user": None}


@pytest.fixture
def recipe_generator():
    return FakeRecipeGenerator()


@pytest.fixture
def client(db_session, auth_state, recipe_generator):
    def override_get_db():
        yield db_session

    def override_get_current_user():
        if auth_state["user"] is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=ErrorMessages.AUTH_REQUIRED,
                headers={"WWW-Authenticate": "Bearer"},
            )
        return auth_state["user"]

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = override_get_current_user
    app.dependency_overrides[get_recipe_generator] = lambda: recipe_generator
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    def _make_user(email: str) -> User:
        user = User(supabase_id=f"supabase-{email}", email=email)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def login(auth_state):
    def _login(user):
        auth_state["user"] = user

    return _login


@pytest.fixture
def owner(make_user):
    return make_user("owner@example.com")


@pytest.fixture
def household(client, login, owner):
    """A household owned by `owner`, who is logged in"""
    login(owner)
    response = client.post("/api/households", json={"name": "Test Kitchen"})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def join_household(client, login):
    """Invite `user` into the household as its owner, then accept as `user`"""

    def _join(household_owner, household_id, user):
        login(household_owner)
        response = client.post(
            f"/api/households/{household_id}/invitations", json={"email": user.email}
        )
        assert response.status_code == 201
        token = response.json()["invitation"]["token"]

        login(user)
        response = client.patch(f"/api/invitations/{token}/accept")
        assert response.status_code == 200
        return response.json()["membership"]

    return _join


@pytest.fixture
def shopping_list(client, household):
    response = client.get(f"/api/households/{household['id']}/shopping-list")
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def pantry(client, household):
    response = client.get(f"/api/households/{household['id']}/pantry")
    assert response.status_code == 200
    return response.json()
