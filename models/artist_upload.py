# models/artist_upload.py
import enum
from sqlalchemy import Column, Integer, BigInteger, String, Text, Boolean, DateTime, JSON, Enum, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class UploadStatus(str, enum.Enum):
     """Processing state of an uploaded track."""
     PROCESSING = "processing"
     DRAFT = "draft"
     PUBLISHED = "published"
     FAILED = "failed"


class LicenseType(str, enum.Enum):
     ALL_RIGHTS_RESERVED = "all_rights_reserved"
     CREATIVE_COMMONS = "creative_commons"
     PUBLIC_DOMAIN = "public_domain"


class ArtistUpload(TimestampMixin, Base):
     """
     ArtistUpload model - an audio track uploaded by an artist.

     The audio file lives in blob storage; this row keeps its URL and metadata.
     """
     __tablename__ = "artist_uploads"

     id = Column(Integer, primary_key=True, autoincrement=True)
     artist_id = Column(String(64), nullable=False, index=True)
     album_id = Column(
          Integer,
          ForeignKey("albums.id", ondelete="SET NULL"),
          nullable=True,
          index=True
     )

     title = Column(String(200), nullable=False)
     description = Column(Text, nullable=True)
     genre = Column(String(50), nullable=False)
     tags = Column(JSON, nullable=True)
     audio_file_url = Column(String(500), nullable=False)
     artwork_url = Column(String(500), nullable=True)
     duration = Column(Integer, nullable=True)  # seconds
     file_size = Column(BigInteger, nullable=True)  # bytes
     file_format = Column(String(20), nullable=True)
     license_type = Column(
          Enum(LicenseType, name="license_type", create_constraint=True, values_callable=lambda e: [m.value for m in e]),
          default=LicenseType.ALL_RIGHTS_RESERVED,
          nullable=False
     )
     is_explicit = Column(Boolean, default=False, nullable=False)
     track_number = Column(Integer, nullable=True)
     play_count = Column(Integer, default=0, nullable=False)
     status = Column(
          Enum(UploadStatus, name="upload_status", create_constraint=True, values_callable=lambda e: [m.value for m in e]),
          default=UploadStatus.PROCESSING,
          nullable=False,
          index=True
     )
     published_at = Column(DateTime, nullable=True)

     # Relationships
     album = relationship("Album", back_populates="tracks")

     def __repr__(self):
          return f"<ArtistUpload(id={self.id}, title='{self.title}', status='{self.status.value}')>"
