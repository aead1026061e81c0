"""
Pydantic schemas for Album API request/response validation.
"""
from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from models.album import AlbumStatus, AlbumType


class AlbumCreate(BaseModel):
     """Schema for creating a new album."""
     title: str = Field(..., min_length=1, max_length=200)
     description: Optional[str] = Field(None, max_length=2000)
     genre: str = Field(..., min_length=1, max_length=50)
     album_type: AlbumType = AlbumType.ALBUM
     cover_art_url: Optional[str] = Field(None, max_length=500)
     release_date: Optional[date] = None
     tags: Optional[List[str]] = Field(None, max_length=20)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "title": "Night Drive",
                    "genre": "Electronic",
                    "album_type": "ep",
                    "release_date": "2026-11-01",
                    "tags": ["synthwave"]
               }
          }
     )


class AlbumUpdate(BaseModel):
     """Schema for updating an existing album."""
     title: Optional[str] = Field(None, min_length=1, max_length=200)
     description: Optional[str] = Field(None, max_length=2000)
     genre: Optional[str] = Field(None, min_length=1, max_length=50)
     album_type: Optional[AlbumType] = None
     cover_art_url: Optional[str] = Field(None, max_length=500)
     release_date: Optional[date] = None
     tags: Optional[List[str]] = Field(None, max_length=20)
     status: Optional[AlbumStatus] = None


class AlbumResponse(BaseModel):
     id: int
     artist_id: str
     title: str
     description: Optional[str] = None
     genre: str
     album_type: AlbumType
     cover_art_url: Optional[str] = None
     release_date: Optional[date] = None
     tags: Optional[List[str]] = None
     status: AlbumStatus
     track_count: int = 0
     created_at: datetime
     updated_at: datetime

     model_config = ConfigDict(from_attributes=True)


class AlbumListResponse(BaseModel):
     albums: List[AlbumResponse]
     total: int


class AlbumTrackAssign(BaseModel):
     """Schema for adding an uploaded track to an album."""
     upload_id: int = Field(..., gt=0)
     track_number: Optional[int] = Field(None, ge=1)
