# services/tip_service.py
"""
Tip Service - business logic for artist tips.

A tip is written as PENDING before any funds move and settled exactly once:
- EVM tips are settled from the transaction receipt (status 1 -> CONFIRMED,
  status 0 -> FAILED, no receipt yet -> stays PENDING with the hash stored)
- SOL tips have no chain reader here and are confirmed as reported
"""
from collections import defaultdict
from datetime import timedelta
from decimal import Decimal
from typing import Dict, List, Optional, Union

from loguru import logger
from sqlalchemy import desc
from sqlalchemy.orm import Session

from chain import TransactionVerifier
from models import ArtistTip, utc_now
from models.artist_tip import TipCurrency, TipStatus
from schemas.tip import TipCreate


class TipService:
     """Service class for tip-related business logic."""

     @staticmethod
     def create_tip(db: Session, user_id: str, tip_data: TipCreate) -> ArtistTip:
          """
          Record a new pending tip.

          Args:
               db: SQLAlchemy database session
               user_id: ID of the tipping user
               tip_data: Validated tip request

          Returns:
               Created ArtistTip in PENDING state
          """
          tip = ArtistTip(
               user_id=str(user_id),
               artist_id=tip_data.artist_id,
               artist_name=tip_data.artist_name,
               amount=tip_data.amount,
               currency=tip_data.currency,
               message=tip_data.message,
               wallet_address=tip_data.wallet_address,
               artist_wallet_address=tip_data.artist_wallet_address,
               network=tip_data.network,
               status=TipStatus.PENDING,
          )
          db.add(tip)
          db.flush()
          logger.info(f"Tip {tip.id} created: {tip.amount} {tip.currency.value} to artist {tip.artist_id}")
          return tip

     @staticmethod
     def get_tip(db: Session, tip_id: int) -> Optional[ArtistTip]:
          return db.query(ArtistTip).filter(ArtistTip.id == tip_id).first()

     @staticmethod
     def confirm_tip(
          db: Session,
          tip: ArtistTip,
          transaction_hash: str,
          verifier: Optional[TransactionVerifier] = None,
     ) -> ArtistTip:
          """
          Settle a pending tip from its transaction hash.

          Raises:
               ValueError: If the tip is already confirmed or failed
          """
          if tip.is_settled:
               raise ValueError(f"Tip {tip.id} is already {tip.status.value}")

          if tip.is_evm and verifier is not None:
               chain_status = verifier.get_status(transaction_hash)
               if chain_status == TransactionVerifier.CONFIRMED:
                    tip.mark_confirmed(transaction_hash, utc_now())
               elif chain_status == TransactionVerifier.FAILED:
                    tip.mark_failed(transaction_hash)
                    logger.warning(f"Tip {tip.id} transaction {transaction_hash} reverted")
               else:
                    # Not mined yet; keep the hash so the tip can be confirmed again later
                    tip.transaction_hash = transaction_hash
                    logger.info(f"Tip {tip.id} transaction {transaction_hash} not yet mined")
          else:
               logger.warning(f"Tip {tip.id} ({tip.currency.value}) confirmed without on-chain verification")
               tip.mark_confirmed(transaction_hash, utc_now())

          db.flush()
          return tip

     @staticmethod
     def fail_tip(db: Session, tip: ArtistTip) -> ArtistTip:
          """
          Mark a pending tip as failed (e.g. the wallet rejected the transfer).

          Raises:
               ValueError: If the tip is already confirmed or failed
          """
          if tip.is_settled:
               raise ValueError(f"Tip {tip.id} is already {tip.status.value}")
          tip.mark_failed()
          db.flush()
          return tip

     @staticmethod
     def list_user_tips(db: Session, user_id: str) -> List[ArtistTip]:
          return (
               db.query(ArtistTip)
               .filter(ArtistTip.user_id == str(user_id))
               .order_by(desc(ArtistTip.created_at), desc(ArtistTip.id))
               .all()
          )

     @staticmethod
     def calculate_artist_earnings(db: Session, artist_id: str, recent_limit: int = 5) -> dict:
          """
          Aggregate confirmed tips for an artist.

          Returns:
               Dictionary with tip_count, totals and this_week (per currency)
               and the most recent tips of any status
          """
          tips = (
               db.query(ArtistTip)
               .filter(ArtistTip.artist_id == artist_id)
               .order_by(desc(ArtistTip.created_at), desc(ArtistTip.id))
               .all()
          )
          confirmed = [tip for tip in tips if tip.status == TipStatus.CONFIRMED]
          week_ago = utc_now() - timedelta(days=7)

          totals: Dict[str, Decimal] = defaultdict(Decimal)
          this_week: Dict[str, Decimal] = defaultdict(Decimal)
          for tip in confirmed:
               totals[tip.currency.value] += Decimal(tip.amount)
               if tip.created_at >= week_ago:
                    this_week[tip.currency.value] += Decimal(tip.amount)

          return {
               "artist_id": artist_id,
               "tip_count": len(confirmed),
               "totals": dict(totals),
               "this_week": dict(this_week),
               "recent_tips": tips[:recent_limit],
          }


NATIVE_CURRENCIES = {TipCurrency.ETH, TipCurrency.BASE}


def tip_artist(
     db: Session,
     user_id: str,
     tip_request: Union[TipCreate, dict],
     sender,
     verifier: Optional[TransactionVerifier] = None,
) -> ArtistTip:
     """
     Tip an artist from a server-held wallet.

     1. Validates the request (raises pydantic.ValidationError before any
        wallet call)
     2. Records the tip as PENDING
     3. Sends the transfer through sender.send(to_address, amount)
     4. Settles the tip from the transaction hash

     A transfer that raises marks the tip FAILED and re-raises.
     """
     if isinstance(tip_request, dict):
          tip_request = TipCreate.model_validate(tip_request)

     if tip_request.currency not in NATIVE_CURRENCIES:
          raise ValueError(f"Server wallet can only send {', '.join(sorted(c.value for c in NATIVE_CURRENCIES))}")
     if not tip_request.artist_wallet_address:
          raise ValueError("artist_wallet_address is required to send a tip")

     tip = TipService.create_tip(db, user_id, tip_request)
     db.commit()

     try:
          tx_hash = sender.send(tip_request.artist_wallet_address, tip_request.amount)
     except Exception as e:
          logger.error(f"Tip {tip.id} transfer failed: {e}")
          TipService.fail_tip(db, tip)
          db.commit()
          raise

     TipService.confirm_tip(db, tip, tx_hash, verifier=verifier)
     db.commit()
     return tip
