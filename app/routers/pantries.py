from fastapi import APIRouter, Depends, Response, status
from pydantic import UUID4
from sqlalchemy.orm import Session
from ..database import get_db
from ..services.pantry_service import PantryService
from ..schemas.pantry import (
    AddPantryItemsRequest,
    PantryItemUpdate,
    PantryItemResponse,
    PantryResponse,
    PantryItemsCreatedResponse,
    PantryItemListResponse,
)
from ..dependencies.permissions import get_current_user
from ..utils.router_helpers import handle_service_errors
from ..models.user import User

router = APIRouter(tags=["pantry"])


@router.get("/households/{household_id}/pantry", response_model=PantryResponse)
@handle_service_errors
async def get_household_pantry(
    household_id: UUID4,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get the household pantry with items sorted by name"""
    pantry_service = PantryService(db)

    return pantry_service.get_pantry_by_household(household_id, current_user)


@router.post(
    "/households/{household_id}/pantry/items",
    response_model=PantryItemsCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
@handle_service_errors
async def add_pantry_items(
    household_id: UUID4,
    items_data: AddPantryItemsRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Add a batch of items; rejected as a whole if any name already exists"""
    pantry_service = PantryService(db)

    items = pantry_service.add_items(household_id, items_data.items, current_user)
    return {"items": items}


@router.get("/pantries/{pantry_id}/items", response_model=PantryItemListResponse)
@handle_service_errors
async def list_pantry_items(
    pantry_id: UUID4,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    pantry_service = PantryService(db)

    return {"data": pantry_service.list_items(pantry_id, current_user)}


@router.patch(
    "/pantries/{pantry_id}/items/{item_id}", response_model=PantryItemResponse
)
@handle_service_errors
async def update_pantry_item(
    pantry_id: UUID4,
    item_id: UUID4,
    item_update: PantryItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    pantry_service = PantryService(db)

    return pantry_service.update_item(pantry_id, item_id, item_update, current_user)


@router.delete(
    "/pantries/{pantry_id}/items/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
@handle_service_errors
async def delete_pantry_item(
    pantry_id: UUID4,
    item_id: UUID4,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    pantry_service = PantryService(db)

    pantry_service.delete_item(pantry_id, item_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
