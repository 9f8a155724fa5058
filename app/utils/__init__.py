from .email import EmailService
from .constants import AppConstants, LLMDefaults, ErrorMessages
from .validation import ValidationHelpers
from .prompts import RECIPE_GENERATION_SYSTEM_PROMPT, build_recipe_generation_prompt

__all__ = [
    "EmailService",
    "AppConstants", "LLMDefaults", "ErrorMessages",
    "ValidationHelpers",
    "RECIPE_GENERATION_SYSTEM_PROMPT", "build_recipe_generation_prompt",
]
