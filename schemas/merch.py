"""
Pydantic schemas for merchandise.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from models.merch_item import MerchStatus


class MerchItemCreate(BaseModel):
     name: str = Field(..., min_length=1, max_length=200)
     description: Optional[str] = Field(None, max_length=2000)
     category: str = Field(..., min_length=1, max_length=50)
     price: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
     currency: str = Field("USD", min_length=3, max_length=10)
     inventory_count: int = Field(0, ge=0)
     images: Optional[List[str]] = Field(None, max_length=10)


class MerchItemUpdate(BaseModel):
     name: Optional[str] = Field(None, min_length=1, max_length=200)
     description: Optional[str] = Field(None, max_length=2000)
     category: Optional[str] = Field(None, min_length=1, max_length=50)
     price: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
     currency: Optional[str] = Field(None, min_length=3, max_length=10)
     inventory_count: Optional[int] = Field(None, ge=0)
     images: Optional[List[str]] = Field(None, max_length=10)
     status: Optional[MerchStatus] = None


class MerchItemResponse(BaseModel):
     id: int
     artist_id: str
     name: str
     description: Optional[str] = None
     category: str
     price: Decimal
     currency: str
     inventory_count: int
     images: Optional[List[str]] = None
     status: MerchStatus
     created_at: datetime
     updated_at: datetime

     model_config = ConfigDict(from_attributes=True)


class MerchItemListResponse(BaseModel):
     items: List[MerchItemResponse]
     total: int
