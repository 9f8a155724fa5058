class AppConstants:
    # Pagination
    DEFAULT_PAGE = 1
    DEFAULT_PAGE_SIZE = 20
    MAX_PAGE_SIZE = 100

    # Households
    HOUSEHOLD_NAME_MIN_LENGTH = 3
    HOUSEHOLD_NAME_MAX_LENGTH = 50
    INVITATION_EXPIRY_DAYS = 7
    MAX_EMAIL_LENGTH = 255

    # Pantry / shopping list
    MAX_ITEMS_PER_BATCH = 50
    MAX_BULK_DELETE_ITEMS = 100
    MAX_ITEM_NAME_LENGTH = 100
    MAX_UNIT_LENGTH = 20

    # Recipes
    MAX_RECIPE_TITLE_LENGTH = 200
    MIN_INSTRUCTIONS_LENGTH = 10
    MAX_INSTRUCTIONS_LENGTH = 5000
    MAX_MEAL_TYPE_LENGTH = 50
    MAX_RECIPE_MINUTES = 1440
    MAX_BULK_RECIPE_IDS = 50
    MAX_HINT_LENGTH = 200
    DEFAULT_RECIPE_SORT = "-createdAt"


class LLMDefaults:
    BASE_URL = "https://openrouter.ai/api/v1"
    MODEL = "openai/gpt-4o"
    TEMPERATURE = 0.7
    MAX_TOKENS = 1024
    TIMEOUT_SECONDS = 30.0


class ErrorMessages:
    """Messages shared between services and bulk result payloads"""

    ITEM_NOT_FOUND = "Item not found"
    ITEM_ALREADY_PURCHASED = "Item already purchased"
    DELETE_FROM_LIST_FAILED = "Failed to delete from shopping list"
    RECIPE_NOT_FOUND = "Recipe not found"
    UNEXPECTED = "An unexpected error occurred"
    AUTH_REQUIRED = "Authentication required. Please log in."
    VALIDATION_FAILED = "Validation failed"
