# audius.py
"""
Audius discovery API client.

Read-only GET calls against a rotating list of public discovery nodes. A failed
request advances the round-robin node index and re-raises; the service methods
log the failure and return an empty result instead.
"""
import os
import threading
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests
from dotenv import load_dotenv
from loguru import logger

load_dotenv()

APP_NAME = "AudioBASE"

DEFAULT_DISCOVERY_NODES = [
     "https://discoveryprovider.audius.co",
     "https://discoveryprovider2.audius.co",
     "https://discoveryprovider3.audius.co",
]

AUDIUS_DISCOVERY_NODES = [
     node.strip().rstrip("/")
     for node in os.getenv("AUDIUS_DISCOVERY_NODES", ",".join(DEFAULT_DISCOVERY_NODES)).split(",")
     if node.strip()
]
AUDIUS_TIMEOUT = float(os.getenv("AUDIUS_TIMEOUT", "10"))


class AudiusClient:
     """Audius discovery API wrapper with node failover."""

     def __init__(
          self,
          nodes: Optional[List[str]] = None,
          timeout: float = AUDIUS_TIMEOUT,
          session: Optional[requests.Session] = None,
     ):
          self.nodes = list(nodes or AUDIUS_DISCOVERY_NODES)
          if not self.nodes:
               raise ValueError("At least one discovery node is required")
          self.timeout = timeout
          self.session = session or requests.Session()
          self.current_node_index = 0
          self._lock = threading.Lock()

     def get_discovery_node(self) -> str:
          return self.nodes[self.current_node_index]

     def _advance_node(self) -> None:
          with self._lock:
               self.current_node_index = (self.current_node_index + 1) % len(self.nodes)

     def make_request(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict:
          """
          GET endpoint on the current discovery node.

          app_name is added to every call; None-valued params are dropped.

          Raises:
               requests.RequestException: on transport errors or non-2xx responses
               (the node index is advanced first)
          """
          query = {"app_name": APP_NAME}
          for key, value in (params or {}).items():
               if value is not None:
                    query[key] = str(value)

          url = f"{self.get_discovery_node()}{endpoint}"
          try:
               response = self.session.get(url, params=query, timeout=self.timeout)
               response.raise_for_status()
               return response.json()
          except requests.RequestException:
               # Try next discovery node on the following request
               self._advance_node()
               raise

     def get_trending_tracks(self, limit: int = 10, offset: int = 0, time: str = "week") -> List[Dict]:
          try:
               response = self.make_request("/v1/tracks/trending", {"limit": limit, "offset": offset, "time": time})
               return response.get("data") or []
          except requests.RequestException as e:
               logger.error(f"Failed to fetch trending tracks: {e}")
               return []

     def search_tracks(self, query: str, limit: int = 10, offset: int = 0) -> List[Dict]:
          try:
               response = self.make_request("/v1/tracks/search", {"query": query, "limit": limit, "offset": offset})
               return response.get("data") or []
          except requests.RequestException as e:
               logger.error(f"Failed to search tracks: {e}")
               return []

     def search_users(self, query: str, limit: int = 10, offset: int = 0) -> List[Dict]:
          try:
               response = self.make_request("/v1/users/search", {"query": query, "limit": limit, "offset": offset})
               return response.get("data") or []
          except requests.RequestException as e:
               logger.error(f"Failed to search users: {e}")
               return []

     def get_track(self, track_id: str) -> Optional[Dict]:
          try:
               response = self.make_request(f"/v1/tracks/{track_id}")
               return response.get("data") or None
          except requests.RequestException as e:
               logger.error(f"Failed to fetch track {track_id}: {e}")
               return None

     def get_user(self, user_id: str) -> Optional[Dict]:
          try:
               response = self.make_request(f"/v1/users/{user_id}")
               logger.debug(f"Audius getUser response: {response}")
               return response.get("data") or None
          except requests.RequestException as e:
               logger.error(f"Failed to fetch user {user_id}: {e}")
               return None

     def get_user_tracks(self, user_id: str, limit: int = 10, offset: int = 0) -> List[Dict]:
          try:
               response = self.make_request(
                    f"/v1/users/{user_id}/tracks",
                    {"limit": limit, "offset": offset, "sort": "date"},
               )
               return response.get("data") or []
          except requests.RequestException as e:
               logger.error(f"Failed to fetch tracks for user {user_id}: {e}")
               return []

     def get_user_playlists(self, user_id: str, limit: int = 10, offset: int = 0) -> List[Dict]:
          try:
               response = self.make_request(f"/v1/users/{user_id}/playlists", {"limit": limit, "offset": offset})
               return response.get("data") or []
          except requests.RequestException as e:
               logger.error(f"Failed to fetch playlists for user {user_id}: {e}")
               return []

     def get_user_favorites(self, user_id: str, limit: int = 10, offset: int = 0) -> List[Dict]:
          try:
               response = self.make_request(f"/v1/users/{user_id}/favorites", {"limit": limit, "offset": offset})
               return response.get("data") or []
          except requests.RequestException as e:
               logger.error(f"Failed to fetch favorites for user {user_id}: {e}")
               return []

     def get_stream_url(self, track_id: str) -> str:
          """Stream URL on the current node; no request is made."""
          return f"{self.get_discovery_node()}/v1/tracks/{track_id}/stream?app_name={APP_NAME}"


def _artwork(images: Optional[Dict]) -> Optional[str]:
     if not images:
          return None
     return images.get("480x480") or images.get("150x150")


def transform_track(audius_track: Dict) -> Dict:
     """Audius track -> AudioBASE track shape."""
     user = audius_track.get("user") or {}
     now = datetime.now(timezone.utc).isoformat()
     return {
          "id": audius_track.get("id"),
          "title": audius_track.get("title"),
          "artist_name": user.get("name"),
          "artist_id": user.get("id"),
          "duration": audius_track.get("duration"),
          "play_count": audius_track.get("play_count"),
          "artwork_url": _artwork(audius_track.get("artwork")),
          "genre": audius_track.get("genre"),
          "stream_url": None,  # filled in on demand
          "cached_at": now,
          "updated_at": now,
     }


def transform_user(audius_user: Dict) -> Dict:
     """Audius user -> AudioBASE artist shape."""
     return {
          "id": audius_user.get("id"),
          "name": audius_user.get("name"),
          "handle": audius_user.get("handle"),
          "followers": audius_user.get("follower_count"),
          "avatar": _artwork(audius_user.get("profile_picture")),
          "is_verified": bool(audius_user.get("is_verified")),
          "genre": "Various",  # Audius has no artist genre
          "wallets": audius_user.get("associated_wallets") or {},
          "topTrack": None,
     }


_client: Optional[AudiusClient] = None


def get_audius_client() -> AudiusClient:
     """FastAPI dependency returning the process-wide client."""
     global _client
     if _client is None:
          _client = AudiusClient()
     return _client
