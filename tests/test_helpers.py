from types import SimpleNamespace

from app.utils.prompts import build_recipe_generation_prompt
from app.utils.validation import ValidationHelpers


def test_find_duplicate_names_ignores_case_and_whitespace():
    duplicates = ValidationHelpers.find_duplicate_names(
        ["Bread", " milk ", "Eggs", "eggs"], ["Milk"]
    )

    assert duplicates == [" milk ", "eggs"]


def test_find_duplicate_names_none():
    assert ValidationHelpers.find_duplicate_names(["Tea"], ["Coffee"]) == []


def test_sanitize_prompt_text():
    assert ValidationHelpers.sanitize_prompt_text("<p>Soup</p>") == "Soup"
    assert ValidationHelpers.sanitize_prompt_text("JavaScript:go") == "go"
    assert ValidationHelpers.sanitize_prompt_text(None) is None


def test_prompt_without_pantry_items():
    prompt = build_recipe_generation_prompt("a light lunch")

    assert prompt.startswith("Generate a recipe based on the following: a light lunch")
    assert "pantry" not in prompt


def test_prompt_lists_pantry_items():
    items = [
        SimpleNamespace(name="Rice", quantity=2, unit="cups"),
        SimpleNamespace(name="Onion", quantity=1.5, unit=None),
    ]

    prompt = build_recipe_generation_prompt("curry", items)

    assert "- 2 cups of Rice" in prompt
    assert "- 1.5 Onion" in prompt


def test_health_endpoint(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["database"]["sqlalchemy"] is True
