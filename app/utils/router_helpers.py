# app/utils/router_helpers.py

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from http import HTTPStatus
from typing import Callable
from functools import wraps
import logging

# Import all service exceptions
from ..services.household_service import (
    HouseholdServiceError,
    HouseholdNotFoundError,
    NotOwnerError,
    AlreadyOwnerError,
    HasOtherMembersError,
)
from ..services.invitation_service import (
    InvitationServiceError,
    InvitationNotFoundError,
    InvitationExpiredError,
    InvitationAlreadyUsedError,
    InvitationEmailMismatchError,
    InvitationAlreadyExistsError,
    AlreadyMemberError,
)
from ..services.pantry_service import (
    PantryServiceError,
    PantryNotFoundError,
    PantryItemNotFoundError,
    DuplicatePantryItemError,
)
from ..services.shopping_list_service import (
    ShoppingListServiceError,
    ShoppingListNotFoundError,
    ShoppingListItemNotFoundError,
    DuplicateShoppingListItemError,
)
from ..services.recipe_service import RecipeServiceError, RecipeNotFoundError
from ..services.openrouter_service import OpenRouterError, OpenRouterRateLimitError
from ..schemas.common import ErrorDetail, ErrorResponse
from .constants import ErrorMessages

logger = logging.getLogger(__name__)

NOT_FOUND_ERRORS = (
    HouseholdNotFoundError,
    InvitationNotFoundError,
    PantryNotFoundError,
    PantryItemNotFoundError,
    ShoppingListNotFoundError,
    ShoppingListItemNotFoundError,
    RecipeNotFoundError,
)

FORBIDDEN_ERRORS = (NotOwnerError, InvitationEmailMismatchError)

CONFLICT_ERRORS = (
    AlreadyOwnerError,
    HasOtherMembersError,
    AlreadyMemberError,
    InvitationAlreadyExistsError,
    DuplicatePantryItemError,
    DuplicateShoppingListItemError,
)

BAD_REQUEST_ERRORS = (InvitationExpiredError, InvitationAlreadyUsedError, ValueError)

# Anything else raised by a service is a server-side failure
SERVICE_ERRORS = (
    HouseholdServiceError,
    InvitationServiceError,
    PantryServiceError,
    ShoppingListServiceError,
    RecipeServiceError,
)


def handle_service_errors(func: Callable) -> Callable:
    """Decorator to standardize service error handling in routers"""

    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        # Not found, or not visible to this user -> 404 Not Found
        except NOT_FOUND_ERRORS as e:
            logger.warning(f"Resource not found: {str(e)}")
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

        # Permission/Access Errors -> 403 Forbidden
        except FORBIDDEN_ERRORS as e:
            logger.warning(f"Permission denied: {str(e)}")
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))

        # Duplicates and state conflicts -> 409 Conflict
        except CONFLICT_ERRORS as e:
            logger.warning(f"Conflict: {str(e)}")
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

        # Business rule / validation errors -> 400 Bad Request
        except BAD_REQUEST_ERRORS as e:
            logger.warning(f"Bad request: {str(e)}")
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        # LLM provider errors -> 429 / 502
        except OpenRouterRateLimitError as e:
            logger.warning(f"LLM rate limited: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=str(e)
            )

        except OpenRouterError as e:
            logger.error(f"LLM request failed in {func.__name__}: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Recipe generation failed. Please try again later.",
            )

        # Service failures and unexpected errors -> 500 Internal Server Error
        except SERVICE_ERRORS as e:
            logger.error(f"Service error in {func.__name__}: {str(e)}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=ErrorMessages.UNEXPECTED,
            )

        except Exception as e:
            logger.error(
                f"Unexpected error in {func.__name__}: {str(e)}", exc_info=True
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=ErrorMessages.UNEXPECTED,
            )

    return wrapper


def _reason_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as {"error": <reason>, "message": <detail>}"""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=_reason_phrase(exc.status_code), message=str(exc.detail)
        ).model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed path, query or body input -> 400 with field-level details"""
    details = []
    for error in exc.errors():
        # Drop the location prefix (path/query/body) from the field name
        location = [str(part) for part in error.get("loc", ())[1:]]
        details.append(
            ErrorDetail(field=".".join(location) or "body", message=error.get("msg", ""))
        )

    logger.warning(f"Validation failed on {request.url.path}: {details}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(
            error="Bad Request",
            message=ErrorMessages.VALIDATION_FAILED,
            details=details,
        ).model_dump(),
    )
