# routers/discovery.py
"""
Read-only proxy to the Audius discovery API.

Tracks and users are returned in the AudioBASE shape; playlists and favorites
are passed through. Node failures surface as empty results, not errors.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status

from audius import AudiusClient, get_audius_client, transform_track, transform_user

router = APIRouter(prefix="/api/discovery", tags=["discovery"])


@router.get("/trending", summary="Trending tracks")
def trending_tracks(
     limit: int = Query(10, ge=1, le=100),
     offset: int = Query(0, ge=0),
     time: str = Query("week", pattern="^(week|month|year|allTime)$"),
     client: AudiusClient = Depends(get_audius_client)
):
     tracks = client.get_trending_tracks(limit=limit, offset=offset, time=time)
     return {"data": [transform_track(t) for t in tracks]}


@router.get("/search/tracks", summary="Search tracks")
def search_tracks(
     query: str = Query(..., min_length=1),
     limit: int = Query(10, ge=1, le=100),
     offset: int = Query(0, ge=0),
     client: AudiusClient = Depends(get_audius_client)
):
     tracks = client.search_tracks(query, limit=limit, offset=offset)
     return {"data": [transform_track(t) for t in tracks]}


@router.get("/search/users", summary="Search artists")
def search_users(
     query: str = Query(..., min_length=1),
     limit: int = Query(10, ge=1, le=100),
     offset: int = Query(0, ge=0),
     client: AudiusClient = Depends(get_audius_client)
):
     users = client.search_users(query, limit=limit, offset=offset)
     return {"data": [transform_user(u) for u in users]}


@router.get("/tracks/{track_id}", summary="Get track")
def get_track(track_id: str, client: AudiusClient = Depends(get_audius_client)):
     track = client.get_track(track_id)
     if not track:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Track {track_id} not found")
     result = transform_track(track)
     result["stream_url"] = client.get_stream_url(track_id)
     return {"data": result}


@router.get("/tracks/{track_id}/stream", summary="Stream URL for a track")
def get_stream_url(track_id: str, client: AudiusClient = Depends(get_audius_client)):
     return {"stream_url": client.get_stream_url(track_id)}


@router.get("/users/{user_id}", summary="Get artist")
def get_user(user_id: str, client: AudiusClient = Depends(get_audius_client)):
     user = client.get_user(user_id)
     if not user:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"User {user_id} not found")
     return {"data": transform_user(user)}


@router.get("/users/{user_id}/tracks", summary="Artist tracks")
def get_user_tracks(
     user_id: str,
     limit: int = Query(10, ge=1, le=100),
     offset: int = Query(0, ge=0),
     client: AudiusClient = Depends(get_audius_client)
):
     tracks = client.get_user_tracks(user_id, limit=limit, offset=offset)
     return {"data": [transform_track(t) for t in tracks]}


@router.get("/users/{user_id}/playlists", summary="Artist playlists")
def get_user_playlists(
     user_id: str,
     limit: int = Query(10, ge=1, le=100),
     offset: int = Query(0, ge=0),
     client: AudiusClient = Depends(get_audius_client)
):
     return {"data": client.get_user_playlists(user_id, limit=limit, offset=offset)}


@router.get("/users/{user_id}/favorites", summary="Artist favorites")
def get_user_favorites(
     user_id: str,
     limit: int = Query(10, ge=1, le=100),
     offset: int = Query(0, ge=0),
     client: AudiusClient = Depends(get_audius_client)
):
     return {"data": client.get_user_favorites(user_id, limit=limit, offset=offset)}
