"""
Pydantic schemas for artist tipping.
"""
import re
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from models.artist_tip import TipCurrency, TipStatus, EVM_CURRENCIES

MAX_TIP_AMOUNT = Decimal("1000000")

_EVM_ADDRESS = re.compile(r"^0x[a-fA-F0-9]{40}$")
_EVM_TX_HASH = re.compile(r"^0x[a-fA-F0-9]{64}$")


class TipCreate(BaseModel):
     """Request body for POST /api/tips."""

     artist_id: str = Field(..., min_length=1, max_length=64, description="Artist receiving the tip")
     artist_name: str = Field(..., min_length=1, max_length=100)
     amount: Decimal = Field(
          ...,
          gt=0,
          le=MAX_TIP_AMOUNT,
          decimal_places=6,
          description="Tip amount in the chosen currency (max 6 decimal places)",
     )
     currency: TipCurrency
     message: Optional[str] = Field(None, max_length=280)
     wallet_address: str = Field(..., min_length=1, max_length=64, description="Sender wallet")
     artist_wallet_address: Optional[str] = Field(None, max_length=64)
     network: Optional[str] = Field(None, max_length=32)

     @field_validator("artist_id", "artist_name", "message", mode="before")
     @classmethod
     def strip_text(cls, value):
          if isinstance(value, str):
               return value.strip()
          return value

     @model_validator(mode="after")
     def check_evm_addresses(self):
          if self.currency in EVM_CURRENCIES:
               if not _EVM_ADDRESS.match(self.wallet_address):
                    raise ValueError("wallet_address must be a 0x-prefixed 40 hex character address")
               if self.artist_wallet_address and not _EVM_ADDRESS.match(self.artist_wallet_address):
                    raise ValueError("artist_wallet_address must be a 0x-prefixed 40 hex character address")
          return self

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "artist_id": "51",
                    "artist_name": "Deadmau5",
                    "amount": "0.01",
                    "currency": "ETH",
                    "message": "Great set!",
                    "wallet_address": "0x742d35Cc6634C0532925a3b8D373d3E2B2dA4e9D",
               }
          }
     )


class TipConfirmRequest(BaseModel):
     """Request body for POST /api/tips/{tip_id}/confirm."""
     transaction_hash: str = Field(..., min_length=1, max_length=128)

     def is_evm_hash(self) -> bool:
          """0x followed by 32 bytes of hex, the shape of an EVM transaction hash."""
          return bool(_EVM_TX_HASH.match(self.transaction_hash))


class TipResponse(BaseModel):
     id: int
     user_id: str
     artist_id: str
     artist_name: str
     amount: Decimal
     currency: TipCurrency
     status: TipStatus
     transaction_hash: Optional[str] = None
     message: Optional[str] = None
     wallet_address: str
     artist_wallet_address: Optional[str] = None
     network: Optional[str] = None
     created_at: datetime
     confirmed_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class TipListResponse(BaseModel):
     tips: List[TipResponse]
     total: int


class ArtistEarningsResponse(BaseModel):
     """Confirmed tip totals for an artist."""
     artist_id: str
     tip_count: int
     totals: Dict[str, Decimal] = Field(default_factory=dict, description="Confirmed totals per currency")
     this_week: Dict[str, Decimal] = Field(default_factory=dict, description="Confirmed totals of the last 7 days")
     recent_tips: List[TipResponse] = Field(default_factory=list)
