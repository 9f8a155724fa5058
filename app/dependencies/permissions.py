from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID
from ..database import get_db, get_supabase
from ..models.user import User
from ..services.household_service import HouseholdService
from ..utils.constants import ErrorMessages
from supabase import Client
import logging
import os

security = HTTPBearer(auto_error=False)
logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "sb-access-token")


def _extract_token(
    request: Request, credentials: Optional[HTTPAuthorizationCredentials]
) -> Optional[str]:
    """Bearer header first, then the session cookie"""
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(SESSION_COOKIE_NAME)


# Auth Helper Functions
async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
    supabase: Client = Depends(get_supabase),
) -> User:
    """Get current authenticated user from the Supabase session token"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=ErrorMessages.AUTH_REQUIRED,
        headers={"WWW-Authenticate": "Bearer"},
    )

    token = _extract_token(request, credentials)
    if not token:
        raise credentials_exception

    try:
        auth_response = supabase.auth.get_user(token)
    except Exception as e:
        logger.warning(f"Authentication error: {e}")
        raise credentials_exception

    if not auth_response or not auth_response.user:
        raise credentials_exception

    return User.get_or_create_from_supabase(auth_response.user, db)


async def require_household_member(
    current_user: User = Depends(get_current_user), db: Session = Depends(get_db)
) -> tuple[User, UUID]:
    """Ensure user is a household member and return user + household_id"""
    household_id = HouseholdService(db).get_user_household_id(current_user.id)

    if not household_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User must belong to a household",
        )

    return current_user, household_id
