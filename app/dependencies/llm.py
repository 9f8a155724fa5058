from ..services.openrouter_service import OpenRouterService


def get_recipe_generator() -> OpenRouterService:
    """Recipe generator used by POST /api/recipes/generate"""
    return OpenRouterService()
