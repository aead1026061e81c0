# models/artist_tip.py
import enum
from sqlalchemy import Column, Integer, Numeric, String, DateTime, Enum, func
from .base import Base


class TipStatus(str, enum.Enum):
     """Lifecycle of a tip: created pending, settled once."""
     PENDING = "pending"
     CONFIRMED = "confirmed"
     FAILED = "failed"


class TipCurrency(str, enum.Enum):
     ETH = "ETH"
     BASE = "BASE"
     SOL = "SOL"
     USDC = "USDC"
     DAI = "DAI"


# Currencies settled on an EVM chain; their receipts can be checked with web3.
EVM_CURRENCIES = {TipCurrency.ETH, TipCurrency.BASE, TipCurrency.USDC, TipCurrency.DAI}


class ArtistTip(Base):
     """
     ArtistTip model - a fan's tip to an artist.

     The row is written as PENDING before the wallet transfer and moved to
     CONFIRMED or FAILED exactly once.
     """
     __tablename__ = "artist_tips"

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(String(64), nullable=False, index=True)
     artist_id = Column(String(64), nullable=False, index=True)
     artist_name = Column(String(100), nullable=False)

     amount = Column(Numeric(20, 6), nullable=False)
     currency = Column(
          Enum(TipCurrency, name="tip_currency", create_constraint=True, values_callable=lambda e: [m.value for m in e]),
          nullable=False,
     )
     status = Column(
          Enum(TipStatus, name="tip_status", create_constraint=True, values_callable=lambda e: [m.value for m in e]),
          default=TipStatus.PENDING,
          nullable=False,
          index=True
     )

     transaction_hash = Column(String(128), nullable=True, index=True)
     message = Column(String(280), nullable=True)
     wallet_address = Column(String(64), nullable=False)
     artist_wallet_address = Column(String(64), nullable=True)
     network = Column(String(32), nullable=True)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     confirmed_at = Column(DateTime, nullable=True)

     def __repr__(self):
          return f"<ArtistTip(id={self.id}, amount={self.amount} {self.currency.value}, status='{self.status.value}')>"

     @property
     def is_settled(self) -> bool:
          return self.status != TipStatus.PENDING

     @property
     def is_evm(self) -> bool:
          return self.currency in EVM_CURRENCIES

     def mark_confirmed(self, transaction_hash: str, confirmed_at) -> None:
          """Mark the tip as confirmed on chain."""
          self.transaction_hash = transaction_hash
          self.status = TipStatus.CONFIRMED
          self.confirmed_at = confirmed_at

     def mark_failed(self, transaction_hash: str = None) -> None:
          """Mark the tip as failed."""
          if transaction_hash:
               self.transaction_hash = transaction_hash
          self.status = TipStatus.FAILED
