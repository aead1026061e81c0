# routers/nft.py
"""
NFT collection and token API routes.

Collections belong to an artist. Tokens are recorded against a collection after
they are minted on chain, and the collection's artist controls their
marketplace listing.
"""
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import (
     current_user_id,
     get_owned_or_404,
     get_visible_or_404,
     optional_token,
     verify_token,
)
from models import NFTCollection, NFTToken
from models.nft_collection import CollectionStatus
from schemas.nft import (
     NFTCollectionCreate,
     NFTCollectionResponse,
     NFTCollectionUpdate,
     NFTTokenCreate,
     NFTTokenListing,
     NFTTokenListResponse,
     NFTTokenResponse,
)
from services.catalog_service import CatalogService, apply_updates

router = APIRouter(prefix="/api/nft", tags=["nft"])

PUBLIC_STATUSES = (CollectionStatus.ACTIVE,)


def _get_token_or_404(db: Session, token_record_id: int) -> NFTToken:
     nft = db.query(NFTToken).filter(NFTToken.id == token_record_id).first()
     if not nft:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail=f"Token with ID {token_record_id} not found"
          )
     return nft


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------

@router.post(
     "/collections",
     response_model=NFTCollectionResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create an NFT collection"
)
def create_collection(
     collection_data: NFTCollectionCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     """
     - **name** / **symbol**: ERC-721 name and symbol
     - **max_supply**: optional cap on minted tokens
     - **royalty_percentage**: 0 to 50
     """
     collection = NFTCollection(artist_id=current_user_id(token), **collection_data.model_dump())
     db.add(collection)
     db.commit()
     db.refresh(collection)
     return collection


@router.get("/collections", response_model=list[NFTCollectionResponse], summary="List NFT collections")
def list_collections(
     artist_id: Optional[str] = Query(None, description="Filter by artist"),
     db: Session = Depends(get_session),
     token: Optional[dict] = Depends(optional_token)
):
     query = db.query(NFTCollection)
     if artist_id:
          query = query.filter(NFTCollection.artist_id == artist_id)
     if not artist_id or artist_id != current_user_id(token):
          query = query.filter(NFTCollection.status.in_(PUBLIC_STATUSES))
     return query.order_by(NFTCollection.created_at.desc(), NFTCollection.id.desc()).all()


@router.get("/collections/{collection_id}", response_model=NFTCollectionResponse, summary="Get NFT collection")
def get_collection(
     collection_id: int,
     db: Session = Depends(get_session),
     token: Optional[dict] = Depends(optional_token)
):
     return get_visible_or_404(db, NFTCollection, collection_id, token, "Collection", PUBLIC_STATUSES)


@router.put("/collections/{collection_id}", response_model=NFTCollectionResponse, summary="Update NFT collection")
def update_collection(
     collection_id: int,
     collection_data: NFTCollectionUpdate,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     collection = get_owned_or_404(db, NFTCollection, collection_id, token, "Collection")
     apply_updates(collection, collection_data)
     db.commit()
     db.refresh(collection)
     return collection


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------

@router.post(
     "/collections/{collection_id}/tokens",
     response_model=NFTTokenResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Record a minted token"
)
def mint_token(
     collection_id: int,
     token_data: NFTTokenCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     """Fails with 409 when the collection is inactive, minted out, or the token ID is taken."""
     collection = get_owned_or_404(db, NFTCollection, collection_id, token, "Collection")
     try:
          nft = CatalogService.mint_token(db, collection, token_data)
     except ValueError as e:
          raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

     db.commit()
     db.refresh(nft)
     return nft


@router.get(
     "/collections/{collection_id}/tokens",
     response_model=NFTTokenListResponse,
     summary="List tokens of a collection"
)
def list_collection_tokens(
     collection_id: int,
     db: Session = Depends(get_session),
     token: Optional[dict] = Depends(optional_token)
):
     get_visible_or_404(db, NFTCollection, collection_id, token, "Collection", PUBLIC_STATUSES)
     tokens = (
          db.query(NFTToken)
          .filter(NFTToken.collection_id == collection_id)
          .order_by(NFTToken.id.asc())
          .all()
     )
     return NFTTokenListResponse(
          tokens=[NFTTokenResponse.model_validate(t) for t in tokens],
          total=len(tokens),
     )


@router.get("/marketplace", response_model=NFTTokenListResponse, summary="Tokens listed for sale")
def list_marketplace(
     owner_address: Optional[str] = Query(None, description="Filter by owner wallet"),
     skip: int = Query(0, ge=0),
     limit: int = Query(50, ge=1, le=100),
     db: Session = Depends(get_session)
):
     query = (
          db.query(NFTToken)
          .join(NFTCollection, NFTToken.collection_id == NFTCollection.id)
          .filter(NFTToken.is_for_sale.is_(True), NFTCollection.status == CollectionStatus.ACTIVE)
     )
     if owner_address:
          query = query.filter(NFTToken.owner_address == owner_address)

     total = query.count()
     tokens = query.order_by(NFTToken.created_at.desc(), NFTToken.id.desc()).offset(skip).limit(limit).all()
     return NFTTokenListResponse(
          tokens=[NFTTokenResponse.model_validate(t) for t in tokens],
          total=total,
     )


@router.get("/tokens/{token_record_id}", response_model=NFTTokenResponse, summary="Get token")
def get_token(
     token_record_id: int,
     db: Session = Depends(get_session),
     token: Optional[dict] = Depends(optional_token)
):
     nft = _get_token_or_404(db, token_record_id)
     get_visible_or_404(db, NFTCollection, nft.collection_id, token, "Collection", PUBLIC_STATUSES)
     return nft


@router.put("/tokens/{token_record_id}/listing", response_model=NFTTokenResponse, summary="List or delist a token")
def update_token_listing(
     token_record_id: int,
     listing: NFTTokenListing,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     nft = _get_token_or_404(db, token_record_id)
     get_owned_or_404(db, NFTCollection, nft.collection_id, token, "Collection")
     try:
          CatalogService.set_token_listing(nft, listing.is_for_sale, listing.price)
     except ValueError as e:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

     db.commit()
     db.refresh(nft)
     return nft
