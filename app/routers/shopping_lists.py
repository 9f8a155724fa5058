from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import UUID4
from sqlalchemy.orm import Session
from typing import Optional
from ..database import get_db
from ..services.shopping_list_service import ShoppingListService
from ..schemas.shopping_list import (
    AddShoppingListItemsRequest,
    ShoppingListItemUpdate,
    ShoppingListItemSort,
    ShoppingListResponse,
    ShoppingListItemsCreatedResponse,
    ShoppingListItemListResponse,
    ShoppingListItemUpdateResponse,
    BulkPurchaseRequest,
    BulkPurchaseResponse,
    BulkDeleteRequest,
    BulkDeleteResponse,
)
from ..dependencies.permissions import get_current_user
from ..utils.router_helpers import handle_service_errors
from ..models.user import User

router = APIRouter(tags=["shopping-lists"])


@router.get(
    "/households/{household_id}/shopping-list", response_model=ShoppingListResponse
)
@handle_service_errors
async def get_household_shopping_list(
    household_id: UUID4,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get the household shopping list, creating it if it does not exist yet"""
    shopping_service = ShoppingListService(db)

    return shopping_service.get_or_create_shopping_list(household_id, current_user)


@router.get(
    "/shopping-lists/{list_id}/items", response_model=ShoppingListItemListResponse
)
@handle_service_errors
async def list_shopping_list_items(
    list_id: UUID4,
    is_purchased: Optional[bool] = Query(None, alias="isPurchased"),
    sort: ShoppingListItemSort = Query(ShoppingListItemSort.NAME),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    shopping_service = ShoppingListService(db)

    items = shopping_service.list_items(
        list_id, current_user, is_purchased=is_purchased, sort=sort
    )
    return {"data": items}


@router.post(
    "/shopping-lists/{list_id}/items",
    response_model=ShoppingListItemsCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
@handle_service_errors
async def add_shopping_list_items(
    list_id: UUID4,
    items_data: AddShoppingListItemsRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Add a batch of items; rejected as a whole if any name already exists"""
    shopping_service = ShoppingListService(db)

    items = shopping_service.add_items(list_id, items_data.items, current_user)
    return {"items": items}


# Bulk routes are registered before /items/{item_id} so the literal path wins


@router.delete(
    "/shopping-lists/{list_id}/items/bulk-delete", response_model=BulkDeleteResponse
)
@handle_service_errors
async def bulk_delete_shopping_list_items(
    list_id: UUID4,
    bulk_data: BulkDeleteRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete several items; per-item failures are reported in the body"""
    shopping_service = ShoppingListService(db)

    return shopping_service.bulk_delete(list_id, bulk_data.item_ids, current_user)


@router.post(
    "/shopping-lists/{list_id}/items/bulk-purchase",
    response_model=BulkPurchaseResponse,
)
@handle_service_errors
async def bulk_purchase_shopping_list_items(
    list_id: UUID4,
    bulk_data: BulkPurchaseRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Move several items into the pantry; per-item failures are reported in the body"""
    shopping_service = ShoppingListService(db)

    return shopping_service.bulk_purchase(list_id, bulk_data.item_ids, current_user)


@router.patch(
    "/shopping-lists/{list_id}/items/{item_id}",
    response_model=ShoppingListItemUpdateResponse,
)
@handle_service_errors
async def update_shopping_list_item(
    list_id: UUID4,
    item_id: UUID4,
    item_update: ShoppingListItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update an item; isPurchased=true moves it into the pantry"""
    shopping_service = ShoppingListService(db)

    return shopping_service.update_item(list_id, item_id, item_update, current_user)


@router.delete(
    "/shopping-lists/{list_id}/items/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
@handle_service_errors
async def delete_shopping_list_item(
    list_id: UUID4,
    item_id: UUID4,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    shopping_service = ShoppingListService(db)

    shopping_service.delete_item(list_id, item_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
