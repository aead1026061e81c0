# models/nft_token.py
from sqlalchemy import Column, Integer, Numeric, String, Text, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class NFTToken(TimestampMixin, Base):
     """
     NFTToken model - a single minted token of a collection.
     """
     __tablename__ = "nft_tokens"

     id = Column(Integer, primary_key=True, autoincrement=True)
     collection_id = Column(
          Integer,
          ForeignKey("nft_collections.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     token_id = Column(String(78), nullable=False)  # uint256 as decimal string

     name = Column(String(200), nullable=False)
     description = Column(Text, nullable=True)
     image_url = Column(String(500), nullable=True)
     metadata_uri = Column(String(500), nullable=True)
     creator_address = Column(String(42), nullable=False)
     owner_address = Column(String(42), nullable=False, index=True)
     track_id = Column(String(64), nullable=True)
     price = Column(Numeric(20, 6), nullable=True)
     is_for_sale = Column(Boolean, default=False, nullable=False, index=True)
     royalty_percentage = Column(Numeric(5, 2), nullable=True)

     __table_args__ = (
          UniqueConstraint("collection_id", "token_id", name="uq_nft_tokens_collection_token"),
     )

     # Relationships
     collection = relationship("NFTCollection", back_populates="tokens")

     def __repr__(self):
          return f"<NFTToken(id={self.id}, collection_id={self.collection_id}, token_id='{self.token_id}')>"
