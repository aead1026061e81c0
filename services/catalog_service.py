# services/catalog_service.py
"""
Catalog Service - business rules for the artist-owned records
(albums, uploads, events, merchandise, NFT collections and tokens).

Plain CRUD stays in the routers; the rules that touch more than one field or
more than one row live here.
"""
from typing import Optional

from pydantic import BaseModel
from sqlalchemy.orm import Session

from models import Album, ArtistUpload, NFTCollection, NFTToken, utc_now
from models.artist_upload import UploadStatus
from models.nft_collection import CollectionStatus


def apply_updates(record, update_data: BaseModel, exclude: Optional[set] = None) -> None:
     """Copy the fields the client actually sent onto record."""
     for field, value in update_data.model_dump(exclude_unset=True, exclude=exclude).items():
          setattr(record, field, value)


class CatalogService:
     """Service class for catalog business rules."""

     @staticmethod
     def set_upload_status(upload: ArtistUpload, new_status: UploadStatus) -> ArtistUpload:
          """
          Move an upload to new_status. Publishing stamps published_at the
          first time; unpublishing keeps it.

          Only draft -> published and published -> draft are client
          transitions; processing and failed belong to the audio pipeline.

          Raises:
               ValueError: if the transition is not allowed
          """
          if new_status == upload.status:
               return upload
          if new_status == UploadStatus.PUBLISHED:
               if upload.status in (UploadStatus.PROCESSING, UploadStatus.FAILED):
                    raise ValueError(f"Cannot publish an upload in status '{upload.status.value}'")
          elif new_status == UploadStatus.DRAFT:
               if upload.status != UploadStatus.PUBLISHED:
                    raise ValueError("Only published uploads can be unpublished")
          else:
               raise ValueError(f"Upload status '{new_status.value}' cannot be set directly")

          upload.status = new_status
          if new_status == UploadStatus.PUBLISHED and upload.published_at is None:
               upload.published_at = utc_now()
          return upload

     @staticmethod
     def upload_stats(db: Session, artist_id: str) -> dict:
          uploads = db.query(ArtistUpload).filter(ArtistUpload.artist_id == artist_id).all()
          return {
               "total": len(uploads),
               "published": len([u for u in uploads if u.status == UploadStatus.PUBLISHED]),
               "draft": len([u for u in uploads if u.status == UploadStatus.DRAFT]),
               "processing": len([u for u in uploads if u.status == UploadStatus.PROCESSING]),
               "failed": len([u for u in uploads if u.status == UploadStatus.FAILED]),
               "total_plays": sum(u.play_count or 0 for u in uploads),
          }

     @staticmethod
     def add_track_to_album(
          db: Session,
          album: Album,
          upload_id: int,
          track_number: Optional[int] = None
     ) -> ArtistUpload:
          """
          Attach one of the album owner's uploads to the album.

          Raises:
               ValueError: If the upload doesn't exist or belongs to another artist
          """
          upload = db.query(ArtistUpload).filter(ArtistUpload.id == upload_id).first()
          if not upload:
               raise ValueError(f"Upload with ID {upload_id} not found")
          if upload.artist_id != album.artist_id:
               raise ValueError("Upload belongs to a different artist")

          if track_number is None:
               track_number = len([t for t in album.tracks if t.id != upload.id]) + 1

          upload.album_id = album.id
          upload.track_number = track_number
          db.flush()
          return upload

     @staticmethod
     def remove_track_from_album(db: Session, album: Album, upload_id: int) -> None:
          """
          Detach an upload from the album and renumber the remaining tracks.

          Raises:
               ValueError: If the upload is not on this album
          """
          upload = (
               db.query(ArtistUpload)
               .filter(ArtistUpload.id == upload_id, ArtistUpload.album_id == album.id)
               .first()
          )
          if not upload:
               raise ValueError(f"Upload {upload_id} is not on album {album.id}")

          upload.album_id = None
          upload.track_number = None
          db.flush()

          remaining = (
               db.query(ArtistUpload)
               .filter(ArtistUpload.album_id == album.id)
               .order_by(ArtistUpload.track_number)
               .all()
          )
          for number, track in enumerate(remaining, start=1):
               track.track_number = number
          db.flush()

     @staticmethod
     def mint_token(db: Session, collection: NFTCollection, token_data) -> NFTToken:
          """
          Record a token minted in collection and bump its supply.

          Raises:
               ValueError: If the collection is inactive, minted out, or the
                    token_id is already used in this collection
          """
          if collection.status != CollectionStatus.ACTIVE:
               raise ValueError("Collection is not active")
          if collection.is_minted_out:
               raise ValueError(f"Collection has reached its max supply of {collection.max_supply}")

          existing = (
               db.query(NFTToken)
               .filter(NFTToken.collection_id == collection.id, NFTToken.token_id == token_data.token_id)
               .first()
          )
          if existing:
               raise ValueError(f"Token {token_data.token_id} already exists in this collection")

          token = NFTToken(
               collection_id=collection.id,
               token_id=token_data.token_id,
               name=token_data.name,
               description=token_data.description,
               image_url=token_data.image_url,
               metadata_uri=token_data.metadata_uri,
               creator_address=token_data.creator_address,
               owner_address=token_data.owner_address or token_data.creator_address,
               track_id=token_data.track_id,
               price=token_data.price,
               is_for_sale=token_data.is_for_sale,
               royalty_percentage=collection.royalty_percentage,
          )
          db.add(token)
          collection.current_supply = (collection.current_supply or 0) + 1
          db.flush()
          return token

     @staticmethod
     def set_token_listing(token: NFTToken, is_for_sale: bool, price=None) -> NFTToken:
          """
          List or delist a token.

          Raises:
               ValueError: If listing without a price
          """
          if is_for_sale:
               price = price if price is not None else token.price
               if price is None:
                    raise ValueError("A price is required to list a token for sale")
               token.price = price
          token.is_for_sale = is_for_sale
          return token
