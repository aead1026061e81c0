# models/merch_item.py
import enum
from sqlalchemy import Column, Integer, Numeric, String, Text, JSON, Enum
from .base import Base, TimestampMixin


class MerchStatus(str, enum.Enum):
     ACTIVE = "active"
     INACTIVE = "inactive"


class MerchItem(TimestampMixin, Base):
     """
     MerchItem model - merchandise sold on an artist's page.
     """
     __tablename__ = "merch_items"

     id = Column(Integer, primary_key=True, autoincrement=True)
     artist_id = Column(String(64), nullable=False, index=True)

     name = Column(String(200), nullable=False)
     description = Column(Text, nullable=True)
     category = Column(String(50), nullable=False)
     price = Column(Numeric(12, 2), nullable=False)
     currency = Column(String(10), nullable=False, default="USD")
     inventory_count = Column(Integer, default=0, nullable=False)
     images = Column(JSON, nullable=True)
     status = Column(
          Enum(MerchStatus, name="merch_status", create_constraint=True, values_callable=lambda e: [m.value for m in e]),
          default=MerchStatus.ACTIVE,
          nullable=False,
          index=True
     )

     def __repr__(self):
          return f"<MerchItem(id={self.id}, name='{self.name}', price={self.price})>"
