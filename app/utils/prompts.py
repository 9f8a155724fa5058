from typing import Iterable, Optional

RECIPE_GENERATION_SYSTEM_PROMPT = """You are an expert culinary assistant who writes practical, delicious recipes for home cooks.

Every recipe you produce must be:
- Actionable: step-by-step instructions that are easy to follow
- Accurate: realistic ingredient quantities with appropriate units (e.g. "2 cups", "500 g", "1 tablespoon")
- Achievable: built from common, accessible ingredients

Include prep time and cook time in minutes when relevant, and a meal type (breakfast, lunch, dinner, snack or dessert) when one fits.

Respond only with valid JSON matching the required schema."""


def _format_pantry_line(name: str, quantity: Optional[float], unit: Optional[str]) -> str:
    amount = f"{quantity:g} " if quantity and quantity > 0 else ""
    measure = f"{unit} of " if unit else ""
    return f"- {amount}{measure}{name}"


def build_recipe_generation_prompt(hint: str, pantry_items: Iterable = ()) -> str:
    """
    Build the user prompt for recipe generation.

    pantry_items are objects with name, quantity and unit attributes; when any
    are given the model is asked to favour them.
    """
    prompt = f"Generate a recipe based on the following: {hint}"

    lines = [_format_pantry_line(i.name, i.quantity, i.unit) for i in pantry_items]
    if lines:
        prompt += (
            "\n\nPlease prioritize using these available pantry items:\n"
            + "\n".join(lines)
            + "\n\nYou may add other commonly available ingredients, but use as many "
            "of the listed pantry items as you can."
        )

    prompt += (
        "\n\nReturn the recipe as a JSON object with these fields:\n"
        "- title: a descriptive recipe name\n"
        "- ingredients: array of objects with name, quantity (number) and unit (or null)\n"
        "- instructions: step-by-step cooking instructions as one string\n"
        "- mealType: breakfast, lunch, dinner, snack, dessert or null\n"
        "- prepTime: preparation time in minutes, or null\n"
        "- cookTime: cooking time in minutes, or null"
    )
    return prompt
