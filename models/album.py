# models/album.py
import enum
from sqlalchemy import Column, Integer, String, Text, Date, JSON, Enum
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class AlbumStatus(str, enum.Enum):
     DRAFT = "draft"
     PUBLISHED = "published"


class AlbumType(str, enum.Enum):
     ALBUM = "album"
     EP = "ep"
     SINGLE = "single"
     COMPILATION = "compilation"


class Album(TimestampMixin, Base):
     """
     Album model - an artist's release grouping uploaded tracks.
     """
     __tablename__ = "albums"

     id = Column(Integer, primary_key=True, autoincrement=True)
     artist_id = Column(String(64), nullable=False, index=True)

     title = Column(String(200), nullable=False)
     description = Column(Text, nullable=True)
     genre = Column(String(50), nullable=False)
     album_type = Column(
          Enum(AlbumType, name="album_type", create_constraint=True, values_callable=lambda e: [m.value for m in e]),
          default=AlbumType.ALBUM,
          nullable=False
     )
     cover_art_url = Column(String(500), nullable=True)
     release_date = Column(Date, nullable=True)
     tags = Column(JSON, nullable=True)
     status = Column(
          Enum(AlbumStatus, name="album_status", create_constraint=True, values_callable=lambda e: [m.value for m in e]),
          default=AlbumStatus.DRAFT,
          nullable=False,
          index=True
     )

     # Relationships
     tracks = relationship("ArtistUpload", back_populates="album")

     def __repr__(self):
          return f"<Album(id={self.id}, title='{self.title}', status='{self.status.value}')>"
