# models/nft_collection.py
import enum
from sqlalchemy import Column, Integer, Numeric, String, Text, Enum
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class CollectionStatus(str, enum.Enum):
     ACTIVE = "active"
     INACTIVE = "inactive"


class NFTCollection(TimestampMixin, Base):
     """
     NFTCollection model - a music NFT collection created by an artist.
     """
     __tablename__ = "nft_collections"

     id = Column(Integer, primary_key=True, autoincrement=True)
     artist_id = Column(String(64), nullable=False, index=True)

     name = Column(String(100), nullable=False)
     symbol = Column(String(20), nullable=False)
     description = Column(Text, nullable=True)
     contract_address = Column(String(42), nullable=True)
     network = Column(String(32), nullable=False, default="base")
     max_supply = Column(Integer, nullable=True)
     current_supply = Column(Integer, default=0, nullable=False)
     royalty_percentage = Column(Numeric(5, 2), nullable=True)
     status = Column(
          Enum(CollectionStatus, name="collection_status", create_constraint=True, values_callable=lambda e: [m.value for m in e]),
          default=CollectionStatus.ACTIVE,
          nullable=False,
          index=True
     )

     # Relationships
     tokens = relationship(
          "NFTToken",
          back_populates="collection",
          cascade="all, delete-orphan"
     )

     def __repr__(self):
          return f"<NFTCollection(id={self.id}, name='{self.name}', supply={self.current_supply}/{self.max_supply})>"

     @property
     def is_minted_out(self) -> bool:
          return self.max_supply is not None and self.current_supply >= self.max_supply
