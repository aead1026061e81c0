# routers/albums.py
"""
Album API routes.

Artists manage their own albums and the uploaded tracks on them. Anonymous
callers and other artists only see published albums.
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
from models import Album
from models.album import AlbumStatus
from schemas.album import (
     AlbumCreate,
     AlbumListResponse,
     AlbumResponse,
     AlbumTrackAssign,
     AlbumUpdate,
)
from services.catalog_service import CatalogService, apply_updates

router = APIRouter(prefix="/api/albums", tags=["albums"])

PUBLIC_STATUSES = (AlbumStatus.PUBLISHED,)


def _to_response(album: Album) -> AlbumResponse:
     response = AlbumResponse.model_validate(album)
     response.track_count = len(album.tracks)
     return response


@router.post(
     "",
     response_model=AlbumResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a new album"
)
def create_album(
     album_data: AlbumCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     """
     Create a draft album owned by the caller.

     - **title**: Album title
     - **genre**: Primary genre
     - **album_type**: album, ep, single or compilation
     """
     album = Album(
          artist_id=current_user_id(token),
          **album_data.model_dump(),
     )
     db.add(album)
     db.commit()
     db.refresh(album)
     return _to_response(album)


@router.get("", response_model=AlbumListResponse, summary="List albums")
def list_albums(
     artist_id: Optional[str] = Query(None, description="Filter by artist"),
     status_filter: Optional[AlbumStatus] = Query(None, alias="status", description="Filter by status"),
     skip: int = Query(0, ge=0),
     limit: int = Query(50, ge=1, le=100),
     db: Session = Depends(get_session),
     token: Optional[dict] = Depends(optional_token)
):
     query = db.query(Album)
     if artist_id:
          query = query.filter(Album.artist_id == artist_id)

     # Drafts are only listed for their owner
     if not artist_id or artist_id != current_user_id(token):
          query = query.filter(Album.status.in_(PUBLIC_STATUSES))
     if status_filter:
          query = query.filter(Album.status == status_filter)

     total = query.count()
     albums = query.order_by(Album.created_at.desc(), Album.id.desc()).offset(skip).limit(limit).all()
     return AlbumListResponse(albums=[_to_response(a) for a in albums], total=total)


@router.get("/{album_id}", response_model=AlbumResponse, summary="Get album by ID")
def get_album(
     album_id: int,
     db: Session = Depends(get_session),
     token: Optional[dict] = Depends(optional_token)
):
     album = get_visible_or_404(db, Album, album_id, token, "Album", PUBLIC_STATUSES)
     return _to_response(album)


@router.put("/{album_id}", response_model=AlbumResponse, summary="Update an album")
def update_album(
     album_id: int,
     album_data: AlbumUpdate,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     album = get_owned_or_404(db, Album, album_id, token, "Album")
     apply_updates(album, album_data)
     db.commit()
     db.refresh(album)
     return _to_response(album)


@router.delete("/{album_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an album")
def delete_album(
     album_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     """Delete the album. Its tracks are kept and become singles."""
     album = get_owned_or_404(db, Album, album_id, token, "Album")
     for track in album.tracks:
          track.track_number = None
     db.delete(album)
     db.commit()
     return None


@router.post("/{album_id}/tracks", response_model=AlbumResponse, summary="Add a track to an album")
def add_album_track(
     album_id: int,
     body: AlbumTrackAssign,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     album = get_owned_or_404(db, Album, album_id, token, "Album")
     try:
          CatalogService.add_track_to_album(db, album, body.upload_id, body.track_number)
     except ValueError as e:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

     db.commit()
     db.refresh(album)
     return _to_response(album)


@router.delete(
     "/{album_id}/tracks/{upload_id}",
     response_model=AlbumResponse,
     summary="Remove a track from an album"
)
def remove_album_track(
     album_id: int,
     upload_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     album = get_owned_or_404(db, Album, album_id, token, "Album")
     try:
          CatalogService.remove_track_from_album(db, album, upload_id)
     except ValueError as e:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

     db.commit()
     db.refresh(album)
     return _to_response(album)
