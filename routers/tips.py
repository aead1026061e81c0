# routers/tips.py
"""
Artist tipping API.

POST /api/tips: record a pending tip before the wallet transfer.
POST /api/tips/{tip_id}/confirm: settle a tip from its transaction hash.
POST /api/tips/{tip_id}/fail: mark a pending tip failed.
GET /api/tips: the caller's tips.
GET /api/artists/{artist_id}/earnings: confirmed tip totals for an artist.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from chain import TransactionVerifier
from database import get_session
from dependencies import verify_token, current_user_id, get_transaction_verifier
from models import ArtistTip
from schemas.tip import (
     ArtistEarningsResponse,
     TipConfirmRequest,
     TipCreate,
     TipListResponse,
     TipResponse,
)
from services.tip_service import TipService

router = APIRouter(tags=["tips"])


def _get_own_tip(db: Session, tip_id: int, token: dict) -> ArtistTip:
     tip = TipService.get_tip(db, tip_id)
     if not tip:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail=f"Tip with ID {tip_id} not found"
          )
     if tip.user_id != current_user_id(token):
          raise HTTPException(
               status_code=status.HTTP_403_FORBIDDEN,
               detail="You do not have permission to modify this tip"
          )
     return tip


@router.post(
     "/api/tips",
     response_model=TipResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Record a pending tip"
)
def create_tip(
     tip_data: TipCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token),
):
     """
     Record a tip as **pending** before the wallet transfer is sent.

     - **amount**: positive, at most 1,000,000, at most 6 decimal places
     - **currency**: ETH, BASE, SOL, USDC or DAI
     - **message**: optional, up to 280 characters
     """
     tip = TipService.create_tip(db, current_user_id(token), tip_data)
     db.commit()
     db.refresh(tip)
     return tip


@router.post(
     "/api/tips/{tip_id}/confirm",
     response_model=TipResponse,
     summary="Settle a tip from its transaction hash"
)
def confirm_tip(
     tip_id: int,
     body: TipConfirmRequest,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token),
     verifier: TransactionVerifier = Depends(get_transaction_verifier),
):
     """
     EVM tips are checked against the chain: a successful receipt confirms the
     tip, a reverted one fails it, and an unmined transaction leaves it
     pending with the hash stored. SOL tips are confirmed as reported.
     """
     tip = _get_own_tip(db, tip_id, token)
     if tip.is_evm and not body.is_evm_hash():
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail=f"Invalid transaction hash format for {tip.currency.value}"
          )
     try:
          TipService.confirm_tip(db, tip, body.transaction_hash, verifier=verifier)
     except ValueError as e:
          raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

     db.commit()
     db.refresh(tip)
     return tip


@router.post(
     "/api/tips/{tip_id}/fail",
     response_model=TipResponse,
     summary="Mark a pending tip as failed"
)
def fail_tip(
     tip_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token),
):
     tip = _get_own_tip(db, tip_id, token)
     try:
          TipService.fail_tip(db, tip)
     except ValueError as e:
          raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

     db.commit()
     db.refresh(tip)
     return tip


@router.get("/api/tips", response_model=TipListResponse, summary="List my tips")
def list_my_tips(
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token),
):
     tips = TipService.list_user_tips(db, current_user_id(token))
     return TipListResponse(
          tips=[TipResponse.model_validate(t) for t in tips],
          total=len(tips),
     )


@router.get(
     "/api/artists/{artist_id}/earnings",
     response_model=ArtistEarningsResponse,
     summary="Artist tip earnings"
)
def get_artist_earnings(
     artist_id: str,
     db: Session = Depends(get_session),
):
     """Confirmed tip totals per currency, overall and for the last 7 days."""
     earnings = TipService.calculate_artist_earnings(db, artist_id)
     earnings["recent_tips"] = [TipResponse.model_validate(t) for t in earnings["recent_tips"]]
     return ArtistEarningsResponse(**earnings)
