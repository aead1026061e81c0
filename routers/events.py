# routers/events.py
"""
Event API routes.

Artists list live and virtual shows. Published, cancelled and completed events
are public; drafts are visible to their artist only.
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
from models import Event, utc_now
from models.event import EventStatus
from schemas.event import EventCreate, EventListResponse, EventResponse, EventUpdate
from services.catalog_service import apply_updates

router = APIRouter(prefix="/api/events", tags=["events"])

PUBLIC_STATUSES = (EventStatus.PUBLISHED, EventStatus.CANCELLED, EventStatus.COMPLETED)
CLOSED_STATUSES = (EventStatus.CANCELLED, EventStatus.COMPLETED)


@router.post(
     "",
     response_model=EventResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a new event"
)
def create_event(
     event_data: EventCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     """
     Create a draft event owned by the caller.

     - **event_date**: must be in the future
     - **ticket_price**: optional, 0 to 10,000
     - **max_capacity**: optional attendance cap
     """
     event = Event(artist_id=current_user_id(token), **event_data.model_dump())
     db.add(event)
     db.commit()
     db.refresh(event)
     return event


@router.get("", response_model=EventListResponse, summary="List events")
def list_events(
     artist_id: Optional[str] = Query(None, description="Filter by artist"),
     status_filter: Optional[EventStatus] = Query(None, alias="status", description="Filter by status"),
     upcoming: bool = Query(False, description="Only events that have not started yet"),
     is_virtual: Optional[bool] = Query(None),
     page: int = Query(1, ge=1),
     page_size: int = Query(50, ge=1, le=100),
     db: Session = Depends(get_session),
     token: Optional[dict] = Depends(optional_token)
):
     query = db.query(Event)
     if artist_id:
          query = query.filter(Event.artist_id == artist_id)
     if not artist_id or artist_id != current_user_id(token):
          query = query.filter(Event.status.in_(PUBLIC_STATUSES))
     if status_filter:
          query = query.filter(Event.status == status_filter)
     if upcoming:
          query = query.filter(Event.event_date > utc_now())
     if is_virtual is not None:
          query = query.filter(Event.is_virtual == is_virtual)

     total = query.count()
     events = (
          query.order_by(Event.event_date.asc(), Event.id.asc())
          .offset((page - 1) * page_size)
          .limit(page_size)
          .all()
     )
     return EventListResponse(
          events=[EventResponse.model_validate(e) for e in events],
          total=total,
          page=page,
          page_size=page_size,
     )


@router.get("/{event_id}", response_model=EventResponse, summary="Get event by ID")
def get_event(
     event_id: int,
     db: Session = Depends(get_session),
     token: Optional[dict] = Depends(optional_token)
):
     return get_visible_or_404(db, Event, event_id, token, "Event", PUBLIC_STATUSES)


@router.put("/{event_id}", response_model=EventResponse, summary="Update an event")
def update_event(
     event_id: int,
     event_data: EventUpdate,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     event = get_owned_or_404(db, Event, event_id, token, "Event")
     if event.status in CLOSED_STATUSES:
          raise HTTPException(
               status_code=status.HTTP_409_CONFLICT,
               detail=f"Cannot update a {event.status.value} event"
          )
     if (
          event_data.max_capacity is not None
          and event_data.max_capacity < event.current_attendance
     ):
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail="max_capacity cannot be lower than current attendance"
          )

     apply_updates(event, event_data)
     db.commit()
     db.refresh(event)
     return event


@router.post("/{event_id}/cancel", response_model=EventResponse, summary="Cancel an event")
def cancel_event(
     event_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     event = get_owned_or_404(db, Event, event_id, token, "Event")
     if event.status in CLOSED_STATUSES:
          raise HTTPException(
               status_code=status.HTTP_409_CONFLICT,
               detail=f"Event is already {event.status.value}"
          )
     event.status = EventStatus.CANCELLED
     db.commit()
     db.refresh(event)
     return event


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an event")
def delete_event(
     event_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     event = get_owned_or_404(db, Event, event_id, token, "Event")
     db.delete(event)
     db.commit()
     return None
