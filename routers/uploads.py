# routers/uploads.py
"""
Artist upload API routes.

Audio (and optional artwork) is stored in Azure Blob Storage; the row keeps the
blob URLs and track metadata. New uploads start as drafts and become visible to
listeners once published.
"""
import os
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from loguru import logger
from sqlalchemy.orm import Session

from azure_blob import ARTWORK_CONTAINER, UPLOADS_CONTAINER, BlobStorage, get_blob_storage
from database import get_session
from dependencies import (
     current_user_id,
     get_owned_or_404,
     get_visible_or_404,
     optional_token,
     verify_token,
)
from models import ArtistUpload
from models.artist_upload import LicenseType, UploadStatus
from schemas.upload import (
     UploadListResponse,
     UploadResponse,
     UploadStatsResponse,
     UploadUpdate,
)
from services.catalog_service import CatalogService, apply_updates

router = APIRouter(prefix="/api/uploads", tags=["uploads"])

PUBLIC_STATUSES = (UploadStatus.PUBLISHED,)
MAX_AUDIO_SIZE = int(os.getenv("MAX_AUDIO_SIZE", str(100 * 1024 * 1024)))  # 100 MB


def _parse_tags(tags: Optional[str]) -> Optional[List[str]]:
     if not tags:
          return None
     return [t.strip() for t in tags.split(",") if t.strip()][:20]


@router.post(
     "",
     response_model=UploadResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Upload a track"
)
def create_upload(
     title: str = Form(..., min_length=1, max_length=200),
     genre: str = Form(..., min_length=1, max_length=50),
     description: Optional[str] = Form(None),
     tags: Optional[str] = Form(None, description="Comma separated"),
     license_type: LicenseType = Form(LicenseType.ALL_RIGHTS_RESERVED),
     is_explicit: bool = Form(False),
     duration: Optional[int] = Form(None, ge=0),
     audio_file: UploadFile = File(...),
     artwork: Optional[UploadFile] = File(None),
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token),
     storage: BlobStorage = Depends(get_blob_storage),
):
     """
     Upload an audio file with its metadata. The track is saved as a **draft**.
     """
     if not (audio_file.content_type or "").startswith("audio/"):
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail="Audio file must have an audio/* content type"
          )
     if audio_file.size is not None and audio_file.size > MAX_AUDIO_SIZE:
          raise HTTPException(
               status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
               detail=f"Audio file exceeds {MAX_AUDIO_SIZE} bytes"
          )

     artist_id = current_user_id(token)
     try:
          audio_url = storage.upload(audio_file, UPLOADS_CONTAINER, artist_id)
          artwork_url = storage.upload(artwork, ARTWORK_CONTAINER, artist_id) if artwork else None
     except Exception as e:
          logger.error(f"Blob upload failed for artist {artist_id}: {e}")
          raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to store uploaded file")

     upload = ArtistUpload(
          artist_id=artist_id,
          title=title,
          description=description,
          genre=genre,
          tags=_parse_tags(tags),
          audio_file_url=audio_url,
          artwork_url=artwork_url,
          duration=duration,
          file_size=audio_file.size,
          file_format=os.path.splitext(audio_file.filename or "")[1].lstrip(".").lower() or None,
          license_type=license_type,
          is_explicit=is_explicit,
          status=UploadStatus.DRAFT,
     )
     db.add(upload)
     db.commit()
     db.refresh(upload)
     logger.info(f"Upload {upload.id} created for artist {artist_id}")
     return upload


@router.get("", response_model=UploadListResponse, summary="List my uploads")
def list_my_uploads(
     status_filter: Optional[UploadStatus] = Query(None, alias="status", description="Filter by status"),
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     query = db.query(ArtistUpload).filter(ArtistUpload.artist_id == current_user_id(token))
     if status_filter:
          query = query.filter(ArtistUpload.status == status_filter)
     uploads = query.order_by(ArtistUpload.created_at.desc(), ArtistUpload.id.desc()).all()
     return UploadListResponse(
          uploads=[UploadResponse.model_validate(u) for u in uploads],
          total=len(uploads),
     )


@router.get("/stats", response_model=UploadStatsResponse, summary="Upload statistics")
def get_upload_stats(
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     return UploadStatsResponse(**CatalogService.upload_stats(db, current_user_id(token)))


@router.get("/artist/{artist_id}", response_model=UploadListResponse, summary="Published tracks of an artist")
def list_artist_uploads(
     artist_id: str,
     db: Session = Depends(get_session)
):
     uploads = (
          db.query(ArtistUpload)
          .filter(ArtistUpload.artist_id == artist_id, ArtistUpload.status == UploadStatus.PUBLISHED)
          .order_by(ArtistUpload.published_at.desc(), ArtistUpload.id.desc())
          .all()
     )
     return UploadListResponse(
          uploads=[UploadResponse.model_validate(u) for u in uploads],
          total=len(uploads),
     )


@router.get("/{upload_id}", response_model=UploadResponse, summary="Get upload by ID")
def get_upload(
     upload_id: int,
     db: Session = Depends(get_session),
     token: Optional[dict] = Depends(optional_token)
):
     return get_visible_or_404(db, ArtistUpload, upload_id, token, "Upload", PUBLIC_STATUSES)


def _change_status(upload: ArtistUpload, new_status: UploadStatus) -> None:
     try:
          CatalogService.set_upload_status(upload, new_status)
     except ValueError as e:
          raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.put("/{upload_id}", response_model=UploadResponse, summary="Update upload metadata")
def update_upload(
     upload_id: int,
     upload_data: UploadUpdate,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     """
     Update metadata. A status in the body follows the same rules as
     /publish and /unpublish; processing and failed cannot be set.
     """
     upload = get_owned_or_404(db, ArtistUpload, upload_id, token, "Upload")
     if upload_data.status:
          _change_status(upload, upload_data.status)
     apply_updates(upload, upload_data, exclude={"status"})
     db.commit()
     db.refresh(upload)
     return upload


@router.post("/{upload_id}/publish", response_model=UploadResponse, summary="Publish an upload")
def publish_upload(
     upload_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     upload = get_owned_or_404(db, ArtistUpload, upload_id, token, "Upload")
     _change_status(upload, UploadStatus.PUBLISHED)
     db.commit()
     db.refresh(upload)
     return upload


@router.post("/{upload_id}/unpublish", response_model=UploadResponse, summary="Unpublish an upload")
def unpublish_upload(
     upload_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     upload = get_owned_or_404(db, ArtistUpload, upload_id, token, "Upload")
     if upload.status != UploadStatus.PUBLISHED:
          raise HTTPException(
               status_code=status.HTTP_409_CONFLICT,
               detail="Only published uploads can be unpublished"
          )
     _change_status(upload, UploadStatus.DRAFT)
     db.commit()
     db.refresh(upload)
     return upload


@router.post("/{upload_id}/play", response_model=UploadResponse, summary="Count a play")
def record_play(
     upload_id: int,
     db: Session = Depends(get_session)
):
     upload = get_visible_or_404(db, ArtistUpload, upload_id, None, "Upload", PUBLIC_STATUSES)
     upload.play_count = (upload.play_count or 0) + 1
     db.commit()
     db.refresh(upload)
     return upload


@router.delete("/{upload_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an upload")
def delete_upload(
     upload_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token),
     storage: BlobStorage = Depends(get_blob_storage),
):
     upload = get_owned_or_404(db, ArtistUpload, upload_id, token, "Upload")
     for url in (upload.audio_file_url, upload.artwork_url):
          if not url:
               continue
          try:
               storage.delete(url)
          except Exception as e:
               logger.warning(f"Could not delete blob {url}: {e}")

     db.delete(upload)
     db.commit()
     return None
