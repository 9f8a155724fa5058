import asyncio
import time
import uuid

import httpx
import pytest

from app.main import app
from app.services.openrouter_service import OpenRouterParseError, OpenRouterRateLimitError

RECIPE = {
    "title": "Pancakes",
    "ingredients": [
        {"name": "Flour", "quantity": 200, "unit": "g"},
        {"name": "Egg", "quantity": 2},
    ],
    "instructions": "Whisk everything together and fry in a hot pan.",
    "mealType": "breakfast",
    "prepTime": 5,
    "cookTime": 15,
}


def create_recipe(client, **overrides):
    return client.post("/api/recipes", json={**RECIPE, **overrides})


def test_create_and_get_recipe(client, household):
    response = create_recipe(client)

    assert response.status_code == 201
    recipe = response.json()
    assert recipe["creationMethod"] == "manual"
    assert recipe["householdId"] == household["id"]
    assert response.headers["Location"] == f"/api/recipes/{recipe['id']}"

    fetched = client.get(f"/api/recipes/{recipe['id']}").json()
    assert fetched["ingredients"][0] == {"name": "Flour", "quantity": 200, "unit": "g"}
    assert fetched["ingredients"][1]["unit"] is None


def test_recipe_requires_ingredients(client, household):
    response = create_recipe(client, ingredients=[])

    assert response.status_code == 400


def test_user_without_household_is_forbidden(client, login, make_user):
    login(make_user("lonely@example.com"))

    response = client.get("/api/recipes")

    assert response.status_code == 403


def test_list_recipes_search_sort_and_paginate(client, household):
    for title in ("Banana Bread", "Apple Pie", "Apple Crumble"):
        create_recipe(client, title=title)

    response = client.get(
        "/api/recipes", params={"search": "apple", "sort": "title", "pageSize": 1}
    )

    assert response.status_code == 200
    body = response.json()
    assert [r["title"] for r in body["data"]] == ["Apple Crumble"]
    assert body["pagination"] == {"page": 1, "pageSize": 1, "total": 2}

    second_page = client.get(
        "/api/recipes",
        params={"search": "apple", "sort": "title", "pageSize": 1, "page": 2},
    )
    assert [r["title"] for r in second_page.json()["data"]] == ["Apple Pie"]


def test_list_recipes_filters(client, household):
    create_recipe(client, title="Soup", mealType="dinner")
    create_recipe(client, title="Porridge")

    by_meal = client.get("/api/recipes", params={"mealType": "Dinner"}).json()
    by_method = client.get("/api/recipes", params={"creationMethod": "ai_generated"}).json()

    assert [r["title"] for r in by_meal["data"]] == ["Soup"]
    assert by_method["data"] == []


def test_list_recipes_rejects_unknown_sort(client, household):
    response = client.get("/api/recipes", params={"sort": "calories"})

    assert response.status_code == 400


def test_update_recipe(client, household):
    recipe = create_recipe(client).json()

    response = client.put(
        f"/api/recipes/{recipe['id']}", json={**RECIPE, "title": "Fluffy Pancakes"}
    )

    assert response.status_code == 200
    assert response.json()["title"] == "Fluffy Pancakes"
    assert response.json()["creationMethod"] == "manual"


def test_editing_generated_recipe_marks_it_modified(client, household):
    generated = client.post(
        "/api/recipes/generate", json={"hint": "pasta", "usePantryItems": False}
    ).json()["recipe"]

    response = client.put(
        f"/api/recipes/{generated['id']}", json={**RECIPE, "title": "My Pasta"}
    )

    assert response.json()["creationMethod"] == "ai_generated_modified"


def test_recipe_of_other_household_is_not_found(client, household, login, make_user):
    recipe = create_recipe(client).json()
    other = make_user("other@example.com")
    login(other)
    client.post("/api/households", json={"name": "Other Home"})

    assert client.get(f"/api/recipes/{recipe['id']}").status_code == 404
    assert client.delete(f"/api/recipes/{recipe['id']}").status_code == 404


def test_delete_recipe(client, household):
    recipe = create_recipe(client).json()

    assert client.delete(f"/api/recipes/{recipe['id']}").status_code == 204
    assert client.get(f"/api/recipes/{recipe['id']}").status_code == 404


def test_bulk_delete_recipes(client, household):
    recipe = create_recipe(client).json()
    missing_id = str(uuid.uuid4())

    response = client.request(
        "DELETE", "/api/recipes", json={"ids": [recipe["id"], missing_id]}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["deleted"] == [recipe["id"]]
    assert body["failed"] == [{"id": missing_id, "reason": "Recipe not found"}]
    assert body["summary"] == {"total": 2, "successful": 1, "failed": 1}


def test_generate_recipe_is_saved(client, household, recipe_generator):
    response = client.post(
        "/api/recipes/generate", json={"hint": "quick pasta", "usePantryItems": False}
    )

    assert response.status_code == 202
    body = response.json()
    assert body["warnings"] == []
    assert body["recipe"]["title"] == "Tomato Pasta"
    assert body["recipe"]["creationMethod"] == "ai_generated"
    assert client.get(f"/api/recipes/{body['recipe']['id']}").status_code == 200

    [(system_prompt, user_prompt)] = recipe_generator.calls
    assert "quick pasta" in user_prompt


def test_generate_with_empty_pantry_warns(client, household):
    response = client.post(
        "/api/recipes/generate", json={"hint": "pasta", "usePantryItems": True}
    )

    assert response.status_code == 202
    assert len(response.json()["warnings"]) == 1
    assert "pantry is empty" in response.json()["warnings"][0]


def test_generate_with_pantry_items(client, household, recipe_generator):
    client.post(
        f"/api/households/{household['id']}/pantry/items",
        json={"items": [{"name": "pasta", "quantity": 500, "unit": "g"}]},
    )

    response = client.post(
        "/api/recipes/generate", json={"hint": "dinner", "usePantryItems": True}
    )

    [(_, user_prompt)] = recipe_generator.calls
    assert "- 500 g of pasta" in user_prompt
    assert response.json()["warnings"] == ["Ingredients not in your pantry: Tomato"]


def test_generate_rejects_markup_in_hint(client, household, recipe_generator):
    response = client.post(
        "/api/recipes/generate",
        json={"hint": "<script>alert(1)</script>", "usePantryItems": False},
    )

    assert response.status_code == 400
    assert recipe_generator.calls == []


def test_generate_rate_limited(client, household, recipe_generator):
    recipe_generator.error = OpenRouterRateLimitError("Rate limit exceeded", 429)

    response = client.post(
        "/api/recipes/generate", json={"hint": "pasta", "usePantryItems": False}
    )

    assert response.status_code == 429


def test_generate_bad_llm_output_is_bad_gateway(client, household, recipe_generator):
    recipe_generator.error = OpenRouterParseError("Model returned invalid JSON")

    response = client.post(
        "/api/recipes/generate", json={"hint": "pasta", "usePantryItems": False}
    )

    assert response.status_code == 502
    assert client.get("/api/recipes").json()["pagination"]["total"] == 0


@pytest.mark.anyio
async def test_generation_does_not_block_other_requests(client, household, recipe_generator):
    recipe_generator.delay = 1.0
    transport = httpx.ASGITransport(app=app)

    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as async_client:

        async def timed_root():
            await asyncio.sleep(0.2)
            started = time.perf_counter()
            response = await async_client.get("/")
            return response, time.perf_counter() - started

        generated, (root, elapsed) = await asyncio.gather(
            async_client.post(
                "/api/recipes/generate", json={"hint": "slow stew", "usePantryItems": False}
            ),
            timed_root(),
        )

    assert generated.status_code == 202
    assert root.status_code == 200
    assert elapsed < 0.5
