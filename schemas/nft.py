"""
Pydantic schemas for NFT collections and tokens.
"""
import re
from datetime import datetime
from decimal import Decimal
from typing import Annotated, List, Optional
from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from models.nft_collection import CollectionStatus

_EVM_ADDRESS = re.compile(r"^0x[a-fA-F0-9]{40}$")


def _check_address(value: str) -> str:
     if not _EVM_ADDRESS.match(value):
          raise ValueError("Invalid Ethereum address format")
     return value


EvmAddress = Annotated[str, AfterValidator(_check_address)]


class NFTCollectionCreate(BaseModel):
     name: str = Field(..., min_length=1, max_length=100)
     symbol: str = Field(..., min_length=1, max_length=20)
     description: Optional[str] = Field(None, max_length=2000)
     contract_address: Optional[EvmAddress] = None
     network: str = Field("base", max_length=32)
     max_supply: Optional[int] = Field(None, gt=0)
     royalty_percentage: Optional[Decimal] = Field(None, ge=0, le=50, decimal_places=2)


class NFTCollectionUpdate(BaseModel):
     description: Optional[str] = Field(None, max_length=2000)
     contract_address: Optional[EvmAddress] = None
     royalty_percentage: Optional[Decimal] = Field(None, ge=0, le=50, decimal_places=2)
     status: Optional[CollectionStatus] = None


class NFTCollectionResponse(BaseModel):
     id: int
     artist_id: str
     name: str
     symbol: str
     description: Optional[str] = None
     contract_address: Optional[str] = None
     network: str
     max_supply: Optional[int] = None
     current_supply: int
     royalty_percentage: Optional[Decimal] = None
     status: CollectionStatus
     created_at: datetime
     updated_at: datetime

     model_config = ConfigDict(from_attributes=True)


class NFTTokenCreate(BaseModel):
     """Record a token minted in a collection."""
     token_id: str = Field(..., min_length=1, max_length=78, pattern=r"^\d+$")
     name: str = Field(..., min_length=1, max_length=200)
     description: Optional[str] = Field(None, max_length=2000)
     image_url: Optional[str] = Field(None, max_length=500)
     metadata_uri: Optional[str] = Field(None, max_length=500)
     creator_address: EvmAddress
     owner_address: Optional[EvmAddress] = None
     track_id: Optional[str] = Field(None, max_length=64)
     price: Optional[Decimal] = Field(None, gt=0, decimal_places=6)
     is_for_sale: bool = False


class NFTTokenListing(BaseModel):
     """Put a token on sale or take it off the marketplace."""
     is_for_sale: bool
     price: Optional[Decimal] = Field(None, gt=0, decimal_places=6)


class NFTTokenResponse(BaseModel):
     id: int
     collection_id: int
     token_id: str
     name: str
     description: Optional[str] = None
     image_url: Optional[str] = None
     metadata_uri: Optional[str] = None
     creator_address: str
     owner_address: str
     track_id: Optional[str] = None
     price: Optional[Decimal] = None
     is_for_sale: bool
     royalty_percentage: Optional[Decimal] = None
     created_at: datetime
     updated_at: datetime

     model_config = ConfigDict(from_attributes=True)


class NFTTokenListResponse(BaseModel):
     tokens: List[NFTTokenResponse]
     total: int
