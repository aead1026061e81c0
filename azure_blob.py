# azure_blob.py
"""
Azure Blob Storage for uploaded audio and artwork.

The BlobServiceClient is created on first use so the API can start (and be
tested) without storage credentials.
"""
import os
import uuid
from typing import Optional
from urllib.parse import urlparse

from azure.storage.blob import BlobServiceClient, ContentSettings
from dotenv import load_dotenv
from loguru import logger

load_dotenv()

account = os.getenv("AZURE_STORAGE_ACCOUNT")
key = os.getenv("AZURE_STORAGE_KEY")
UPLOADS_CONTAINER = os.getenv("UPLOADS_CONTAINER", "audio-uploads")
ARTWORK_CONTAINER = os.getenv("ARTWORK_CONTAINER", "artwork")


class BlobStorage:
     """Thin wrapper over one storage account."""

     def __init__(self, account_name: Optional[str] = None, account_key: Optional[str] = None):
          self.account = account_name or account
          self.key = account_key or key
          self._service: Optional[BlobServiceClient] = None

     @property
     def service(self) -> BlobServiceClient:
          if self._service is None:
               if not self.account or not self.key:
                    raise RuntimeError("AZURE_STORAGE_ACCOUNT and AZURE_STORAGE_KEY must be set")
               self._service = BlobServiceClient.from_connection_string(
                    f"DefaultEndpointsProtocol=https;"
                    f"AccountName={self.account};"
                    f"AccountKey={self.key};"
                    f"EndpointSuffix=core.windows.net"
               )
          return self._service

     def upload(self, file, container: str, user_id: str | int) -> str:
          """Store an UploadFile under {user_id}/{uuid}{ext} and return its URL."""
          ext = os.path.splitext(file.filename or "")[1]
          filename = f"{user_id}/{uuid.uuid4()}{ext}"
          blob_client = self.service.get_blob_client(container=container, blob=filename)
          blob_client.upload_blob(
               file.file,
               overwrite=True,
               content_settings=ContentSettings(content_type=file.content_type),
          )
          logger.info(f"Uploaded blob {container}/{filename}")
          return f"https://{self.account}.blob.core.windows.net/{container}/{filename}"

     def delete(self, blob_url: str) -> None:
          """
          Deletes a file from Azure Blob Storage using its full URL
          """
          container, _, blob_name = urlparse(blob_url).path.lstrip("/").partition("/")
          blob_client = self.service.get_blob_client(
               container=container,
               blob=blob_name
          )
          blob_client.delete_blob()
          logger.info(f"Deleted blob {container}/{blob_name}")


_storage: Optional[BlobStorage] = None


def get_blob_storage() -> BlobStorage:
     """FastAPI dependency returning the process-wide storage client."""
     global _storage
     if _storage is None:
          _storage = BlobStorage()
     return _storage
