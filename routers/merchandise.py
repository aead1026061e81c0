# routers/merchandise.py
"""
Merchandise API routes. Inactive items are hidden from everyone but their artist.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import (
     current_user_id,
     get_owned_or_404,
     get_visible_or_404,
     optional_token,
     verify_token,
)
from models import MerchItem
from models.merch_item import MerchStatus
from schemas.merch import (
     MerchItemCreate,
     MerchItemListResponse,
     MerchItemResponse,
     MerchItemUpdate,
)
from services.catalog_service import apply_updates

router = APIRouter(prefix="/api/merch", tags=["merchandise"])

PUBLIC_STATUSES = (MerchStatus.ACTIVE,)


@router.post(
     "",
     response_model=MerchItemResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a merchandise item"
)
def create_merch_item(
     item_data: MerchItemCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     item = MerchItem(artist_id=current_user_id(token), **item_data.model_dump())
     db.add(item)
     db.commit()
     db.refresh(item)
     return item


@router.get("", response_model=MerchItemListResponse, summary="List merchandise")
def list_merch_items(
     artist_id: Optional[str] = Query(None, description="Filter by artist"),
     category: Optional[str] = Query(None),
     in_stock: bool = Query(False, description="Only items with inventory left"),
     db: Session = Depends(get_session),
     token: Optional[dict] = Depends(optional_token)
):
     query = db.query(MerchItem)
     if artist_id:
          query = query.filter(MerchItem.artist_id == artist_id)
     if not artist_id or artist_id != current_user_id(token):
          query = query.filter(MerchItem.status.in_(PUBLIC_STATUSES))
     if category:
          query = query.filter(MerchItem.category == category)
     if in_stock:
          query = query.filter(MerchItem.inventory_count > 0)

     items = query.order_by(MerchItem.created_at.desc(), MerchItem.id.desc()).all()
     return MerchItemListResponse(
          items=[MerchItemResponse.model_validate(i) for i in items],
          total=len(items),
     )


@router.get("/{item_id}", response_model=MerchItemResponse, summary="Get merchandise item")
def get_merch_item(
     item_id: int,
     db: Session = Depends(get_session),
     token: Optional[dict] = Depends(optional_token)
):
     return get_visible_or_404(db, MerchItem, item_id, token, "Merch item", PUBLIC_STATUSES)


@router.put("/{item_id}", response_model=MerchItemResponse, summary="Update a merchandise item")
def update_merch_item(
     item_id: int,
     item_data: MerchItemUpdate,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     item = get_owned_or_404(db, MerchItem, item_id, token, "Merch item")
     apply_updates(item, item_data)
     db.commit()
     db.refresh(item)
     return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a merchandise item")
def delete_merch_item(
     item_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     item = get_owned_or_404(db, MerchItem, item_id, token, "Merch item")
     db.delete(item)
     db.commit()
     return None
