# app/dependencies/__init__.py

from .permissions import (
    require_household_member,
    get_current_user,
)
from .llm import get_recipe_generator

__all__ = [
    "require_household_member",
    "get_current_user",
    "get_recipe_generator",
]
