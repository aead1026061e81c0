# models/event.py
import enum
from sqlalchemy import Column, Integer, Numeric, String, Text, Boolean, DateTime, Enum
from .base import Base, TimestampMixin


class EventStatus(str, enum.Enum):
     DRAFT = "draft"
     PUBLISHED = "published"
     CANCELLED = "cancelled"
     COMPLETED = "completed"


class AgeRestriction(str, enum.Enum):
     ALL_AGES = "all_ages"
     EIGHTEEN_PLUS = "18+"
     TWENTY_ONE_PLUS = "21+"


class Event(TimestampMixin, Base):
     """
     Event model - a live or virtual show listed by an artist.
     """
     __tablename__ = "events"

     id = Column(Integer, primary_key=True, autoincrement=True)
     artist_id = Column(String(64), nullable=False, index=True)

     title = Column(String(200), nullable=False)
     description = Column(Text, nullable=True)
     event_type = Column(String(50), nullable=False, default="concert")
     event_date = Column(DateTime, nullable=False, index=True)
     genre = Column(String(50), nullable=True)
     ticket_price = Column(Numeric(12, 2), nullable=True)
     max_capacity = Column(Integer, nullable=True)
     current_attendance = Column(Integer, default=0, nullable=False)
     is_virtual = Column(Boolean, default=False, nullable=False)
     stream_url = Column(String(500), nullable=True)
     age_restriction = Column(
          Enum(AgeRestriction, name="age_restriction", create_constraint=True, values_callable=lambda e: [m.value for m in e]),
          nullable=True
     )
     status = Column(
          Enum(EventStatus, name="event_status", create_constraint=True, values_callable=lambda e: [m.value for m in e]),
          default=EventStatus.DRAFT,
          nullable=False,
          index=True
     )

     def __repr__(self):
          return f"<Event(id={self.id}, title='{self.title}', event_date={self.event_date})>"

     @property
     def is_sold_out(self) -> bool:
          return self.max_capacity is not None and self.current_attendance >= self.max_capacity
