"""
Pydantic schemas for Event API request/response validation.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from models import utc_now
from models.event import AgeRestriction, EventStatus

EDITABLE_STATUSES = (EventStatus.DRAFT, EventStatus.PUBLISHED)


def _require_future(value: datetime) -> datetime:
     now = datetime.now(value.tzinfo) if value.tzinfo else utc_now()
     if value <= now:
          raise ValueError("Event date must be in the future")
     return value


class EventCreate(BaseModel):
     """Schema for creating a new event."""
     title: str = Field(..., min_length=1, max_length=200)
     description: Optional[str] = Field(None, max_length=2000)
     event_type: str = Field("concert", min_length=1, max_length=50)
     event_date: datetime = Field(..., description="Must be in the future")
     genre: Optional[str] = Field(None, max_length=50)
     ticket_price: Optional[Decimal] = Field(None, ge=0, le=10000, decimal_places=2)
     max_capacity: Optional[int] = Field(None, gt=0, le=1000000)
     is_virtual: bool = False
     stream_url: Optional[str] = Field(None, max_length=500)
     age_restriction: Optional[AgeRestriction] = None

     @field_validator("event_date")
     @classmethod
     def event_in_future(cls, value: datetime) -> datetime:
          return _require_future(value)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "title": "Base Summer Fest",
                    "event_date": "2027-06-21T20:00:00",
                    "ticket_price": 25.00,
                    "max_capacity": 500,
                    "age_restriction": "18+"
               }
          }
     )


class EventUpdate(BaseModel):
     """Schema for updating an existing event."""
     title: Optional[str] = Field(None, min_length=1, max_length=200)
     description: Optional[str] = Field(None, max_length=2000)
     event_type: Optional[str] = Field(None, min_length=1, max_length=50)
     event_date: Optional[datetime] = None
     genre: Optional[str] = Field(None, max_length=50)
     ticket_price: Optional[Decimal] = Field(None, ge=0, le=10000, decimal_places=2)
     max_capacity: Optional[int] = Field(None, gt=0, le=1000000)
     is_virtual: Optional[bool] = None
     stream_url: Optional[str] = Field(None, max_length=500)
     age_restriction: Optional[AgeRestriction] = None
     status: Optional[EventStatus] = Field(None, description="draft or published; use /cancel to cancel")

     @field_validator("event_date")
     @classmethod
     def event_in_future(cls, value: Optional[datetime]) -> Optional[datetime]:
          if value is None:
               return value
          return _require_future(value)

     @field_validator("status")
     @classmethod
     def status_is_editable(cls, value: Optional[EventStatus]) -> Optional[EventStatus]:
          if value is not None and value not in EDITABLE_STATUSES:
               raise ValueError("Status can only be set to draft or published")
          return value


class EventResponse(BaseModel):
     id: int
     artist_id: str
     title: str
     description: Optional[str] = None
     event_type: str
     event_date: datetime
     genre: Optional[str] = None
     ticket_price: Optional[Decimal] = None
     max_capacity: Optional[int] = None
     current_attendance: int
     is_virtual: bool
     stream_url: Optional[str] = None
     age_restriction: Optional[AgeRestriction] = None
     status: EventStatus
     created_at: datetime
     updated_at: datetime

     model_config = ConfigDict(from_attributes=True)


class EventListResponse(BaseModel):
     events: List[EventResponse]
     total: int
     page: int = 1
     page_size: int = 50
