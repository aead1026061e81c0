"""
Pydantic schemas for artist track uploads.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from models.artist_upload import LicenseType, UploadStatus


class UploadUpdate(BaseModel):
     """Editable metadata of an uploaded track."""
     title: Optional[str] = Field(None, min_length=1, max_length=200)
     description: Optional[str] = Field(None, max_length=2000)
     genre: Optional[str] = Field(None, min_length=1, max_length=50)
     tags: Optional[List[str]] = Field(None, max_length=20)
     artwork_url: Optional[str] = Field(None, max_length=500)
     license_type: Optional[LicenseType] = None
     is_explicit: Optional[bool] = None
     duration: Optional[int] = Field(None, ge=0)
     status: Optional[UploadStatus] = None


class UploadResponse(BaseModel):
     id: int
     artist_id: str
     album_id: Optional[int] = None
     title: str
     description: Optional[str] = None
     genre: str
     tags: Optional[List[str]] = None
     audio_file_url: str
     artwork_url: Optional[str] = None
     duration: Optional[int] = None
     file_size: Optional[int] = None
     file_format: Optional[str] = None
     license_type: LicenseType
     is_explicit: bool
     track_number: Optional[int] = None
     play_count: int
     status: UploadStatus
     created_at: datetime
     updated_at: datetime
     published_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class UploadListResponse(BaseModel):
     uploads: List[UploadResponse]
     total: int


class UploadStatsResponse(BaseModel):
     """Upload counts per status for the artist dashboard."""
     total: int
     published: int
     draft: int
     processing: int
     failed: int
     total_plays: int
