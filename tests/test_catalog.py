"""
Catalog Tests
Tests artist-owned albums, uploads, events, merchandise and NFT records
"""

from datetime import timedelta

import pytest

from conftest import auth_headers
from models import ArtistUpload, utc_now
from models.artist_upload import UploadStatus

ARTIST = "artist-1"
OTHER = "artist-2"
WALLET = "0x" + "12" * 20


def _future(days=30):
    return (utc_now() + timedelta(days=days)).replace(microsecond=0).isoformat()


def _upload(client, title="Strobe", user_id=ARTIST, content_type="audio/mpeg"):
    return client.post(
        "/api/uploads",
        data={"title": title, "genre": "Electronic", "tags": "progressive, house"},
        files={"audio_file": ("strobe.mp3", b"ID3fake-audio", content_type)},
        headers=auth_headers(user_id),
    )


class TestUploads:
    """Track uploads and publishing"""

    def test_upload_stores_file_and_creates_draft(self, client, storage):
        response = _upload(client)

        assert response.status_code == 201, response.text
        body = response.json()
        assert body["status"] == "draft"
        assert body["artist_id"] == ARTIST
        assert body["file_format"] == "mp3"
        assert body["tags"] == ["progressive", "house"]
        assert body["audio_file_url"] == storage.uploaded[0]

    def test_rejects_non_audio(self, client, storage):
        response = _upload(client, content_type="image/png")

        assert response.status_code == 400
        assert storage.uploaded == []

    def test_storage_failure_is_502(self, client, storage):
        def broken(*args, **kwargs):
            raise RuntimeError("storage unavailable")

        storage.upload = broken

        response = _upload(client)

        assert response.status_code == 502

    def test_draft_hidden_until_published(self, client):
        upload = _upload(client).json()
        url = f"/api/uploads/{upload['id']}"

        assert client.get(url).status_code == 404
        assert client.get(url, headers=auth_headers(ARTIST)).status_code == 200

        published = client.post(f"{url}/publish", headers=auth_headers(ARTIST)).json()
        assert published["status"] == "published"
        assert published["published_at"] is not None

        assert client.get(url).status_code == 200
        listed = client.get(f"/api/uploads/artist/{ARTIST}").json()
        assert listed["total"] == 1

    def test_unpublish_requires_published(self, client):
        upload = _upload(client).json()

        response = client.post(f"/api/uploads/{upload['id']}/unpublish", headers=auth_headers(ARTIST))

        assert response.status_code == 409

    def test_update_cannot_publish_failed_upload(self, client, db):
        upload = _upload(client).json()
        record = db.get(ArtistUpload, upload["id"])
        record.status = UploadStatus.FAILED
        db.commit()
        url = f"/api/uploads/{upload['id']}"

        assert client.post(f"{url}/publish", headers=auth_headers(ARTIST)).status_code == 409

        response = client.put(url, json={"status": "published"}, headers=auth_headers(ARTIST))

        assert response.status_code == 409
        body = client.get(url, headers=auth_headers(ARTIST)).json()
        assert body["status"] == "failed"
        assert body["published_at"] is None

    def test_update_cannot_set_pipeline_status(self, client):
        upload = _upload(client).json()

        response = client.put(
            f"/api/uploads/{upload['id']}",
            json={"status": "processing", "title": "Renamed"},
            headers=auth_headers(ARTIST),
        )

        assert response.status_code == 409
        body = client.get(f"/api/uploads/{upload['id']}", headers=auth_headers(ARTIST)).json()
        assert body["status"] == "draft"
        assert body["title"] == "Strobe"

    def test_update_publishes_draft(self, client):
        upload = _upload(client).json()

        response = client.put(
            f"/api/uploads/{upload['id']}",
            json={"status": "published", "title": "Strobe (Radio Edit)"},
            headers=auth_headers(ARTIST),
        )

        assert response.status_code == 200
        assert response.json()["status"] == "published"
        assert response.json()["published_at"] is not None
        assert response.json()["title"] == "Strobe (Radio Edit)"

    def test_other_artist_cannot_modify(self, client):
        upload = _upload(client).json()

        response = client.put(
            f"/api/uploads/{upload['id']}",
            json={"title": "Stolen"},
            headers=auth_headers(OTHER),
        )

        assert response.status_code == 403
        assert response.json()["detail"] == "You do not have permission to modify this upload"

    def test_stats_and_plays(self, client):
        first = _upload(client, title="One").json()
        _upload(client, title="Two")
        client.post(f"/api/uploads/{first['id']}/publish", headers=auth_headers(ARTIST))
        client.post(f"/api/uploads/{first['id']}/play")
        client.post(f"/api/uploads/{first['id']}/play")

        stats = client.get("/api/uploads/stats", headers=auth_headers(ARTIST)).json()

        assert stats == {
            "total": 2,
            "published": 1,
            "draft": 1,
            "processing": 0,
            "failed": 0,
            "total_plays": 2,
        }

    def test_delete_removes_blob(self, client, storage):
        upload = _upload(client).json()

        response = client.delete(f"/api/uploads/{upload['id']}", headers=auth_headers(ARTIST))

        assert response.status_code == 204
        assert storage.deleted == [upload["audio_file_url"]]
        assert client.get(f"/api/uploads/{upload['id']}", headers=auth_headers(ARTIST)).status_code == 404


class TestAlbums:
    """Albums and their tracks"""

    def _album(self, client, user_id=ARTIST):
        response = client.post(
            "/api/albums",
            json={"title": "Night Drive", "genre": "Electronic", "album_type": "ep"},
            headers=auth_headers(user_id),
        )
        assert response.status_code == 201, response.text
        return response.json()

    def test_create_and_publish(self, client):
        album = self._album(client)
        assert album["status"] == "draft"
        assert album["track_count"] == 0

        assert client.get("/api/albums").json()["total"] == 0
        assert client.get("/api/albums", params={"artist_id": ARTIST}, headers=auth_headers(ARTIST)).json()["total"] == 1

        updated = client.put(
            f"/api/albums/{album['id']}",
            json={"status": "published"},
            headers=auth_headers(ARTIST),
        ).json()
        assert updated["status"] == "published"
        assert client.get("/api/albums").json()["total"] == 1

    def test_add_and_remove_tracks(self, client):
        album = self._album(client)
        first = _upload(client, title="One").json()
        second = _upload(client, title="Two").json()
        url = f"/api/albums/{album['id']}/tracks"

        client.post(url, json={"upload_id": first["id"]}, headers=auth_headers(ARTIST))
        body = client.post(url, json={"upload_id": second["id"]}, headers=auth_headers(ARTIST)).json()
        assert body["track_count"] == 2

        second_track = client.get(f"/api/uploads/{second['id']}", headers=auth_headers(ARTIST)).json()
        assert second_track["album_id"] == album["id"]
        assert second_track["track_number"] == 2

        body = client.delete(f"{url}/{first['id']}", headers=auth_headers(ARTIST)).json()
        assert body["track_count"] == 1
        renumbered = client.get(f"/api/uploads/{second['id']}", headers=auth_headers(ARTIST)).json()
        assert renumbered["track_number"] == 1

    def test_cannot_add_another_artists_upload(self, client):
        album = self._album(client)
        foreign = _upload(client, user_id=OTHER).json()

        response = client.post(
            f"/api/albums/{album['id']}/tracks",
            json={"upload_id": foreign["id"]},
            headers=auth_headers(ARTIST),
        )

        assert response.status_code == 400

    def test_delete_keeps_tracks(self, client):
        album = self._album(client)
        upload = _upload(client).json()
        client.post(
            f"/api/albums/{album['id']}/tracks",
            json={"upload_id": upload["id"]},
            headers=auth_headers(ARTIST),
        )

        assert client.delete(f"/api/albums/{album['id']}", headers=auth_headers(ARTIST)).status_code == 204

        track = client.get(f"/api/uploads/{upload['id']}", headers=auth_headers(ARTIST)).json()
        assert track["album_id"] is None


class TestEvents:
    """Event listings"""

    def _event(self, client, **overrides):
        body = {"title": "Base Summer Fest", "event_date": _future(), "max_capacity": 500}
        body.update(overrides)
        return client.post("/api/events", json=body, headers=auth_headers(ARTIST))

    def test_past_date_rejected(self, client):
        response = self._event(client, event_date=(utc_now() - timedelta(days=1)).isoformat())
        assert response.status_code == 422

    def test_publish_and_list(self, client):
        event = self._event(client).json()
        assert event["status"] == "draft"
        assert client.get("/api/events").json()["total"] == 0

        client.put(f"/api/events/{event['id']}", json={"status": "published"}, headers=auth_headers(ARTIST))

        listed = client.get("/api/events", params={"upcoming": True}).json()
        assert listed["total"] == 1
        assert listed["page"] == 1

    def test_cancel_is_final(self, client):
        event = self._event(client).json()
        url = f"/api/events/{event['id']}"

        cancelled = client.post(f"{url}/cancel", headers=auth_headers(ARTIST))
        assert cancelled.json()["status"] == "cancelled"

        assert client.post(f"{url}/cancel", headers=auth_headers(ARTIST)).status_code == 409
        assert client.put(url, json={"title": "Back on"}, headers=auth_headers(ARTIST)).status_code == 409

    def test_update_cannot_move_event_into_past(self, client):
        event = self._event(client).json()

        response = client.put(
            f"/api/events/{event['id']}",
            json={"event_date": (utc_now() - timedelta(days=1)).isoformat()},
            headers=auth_headers(ARTIST),
        )

        assert response.status_code == 422

    def test_update_cannot_cancel_or_complete(self, client):
        event = self._event(client).json()
        url = f"/api/events/{event['id']}"

        for closed in ("cancelled", "completed"):
            response = client.put(url, json={"status": closed}, headers=auth_headers(ARTIST))
            assert response.status_code == 422

        assert client.get(url, headers=auth_headers(ARTIST)).json()["status"] == "draft"

    def test_other_artist_cannot_cancel(self, client):
        event = self._event(client).json()

        response = client.post(f"/api/events/{event['id']}/cancel", headers=auth_headers(OTHER))

        assert response.status_code == 403


class TestMerch:
    """Merchandise"""

    def test_crud(self, client):
        created = client.post(
            "/api/merch",
            json={"name": "Tour Tee", "category": "apparel", "price": "25.00", "inventory_count": 10},
            headers=auth_headers(ARTIST),
        )
        assert created.status_code == 201
        item = created.json()

        assert client.get("/api/merch", params={"in_stock": True}).json()["total"] == 1

        client.put(f"/api/merch/{item['id']}", json={"status": "inactive"}, headers=auth_headers(ARTIST))
        assert client.get("/api/merch").json()["total"] == 0
        assert client.get(f"/api/merch/{item['id']}").status_code == 404

        assert client.delete(f"/api/merch/{item['id']}", headers=auth_headers(OTHER)).status_code == 403
        assert client.delete(f"/api/merch/{item['id']}", headers=auth_headers(ARTIST)).status_code == 204

    @pytest.mark.parametrize("price", ["0", "-5", "1.234"])
    def test_invalid_price(self, client, price):
        response = client.post(
            "/api/merch",
            json={"name": "Tee", "category": "apparel", "price": price},
            headers=auth_headers(ARTIST),
        )
        assert response.status_code == 422


class TestNFT:
    """NFT collections, minting and marketplace listing"""

    def _collection(self, client, max_supply=2):
        response = client.post(
            "/api/nft/collections",
            json={"name": "Strobe Editions", "symbol": "STRB", "max_supply": max_supply, "royalty_percentage": "5"},
            headers=auth_headers(ARTIST),
        )
        assert response.status_code == 201, response.text
        return response.json()

    def _mint(self, client, collection_id, token_id, user_id=ARTIST, **extra):
        body = {"token_id": token_id, "name": f"Strobe #{token_id}", "creator_address": WALLET}
        body.update(extra)
        return client.post(
            f"/api/nft/collections/{collection_id}/tokens",
            json=body,
            headers=auth_headers(user_id),
        )

    def test_mint_until_supply_exhausted(self, client):
        collection = self._collection(client, max_supply=2)

        first = self._mint(client, collection["id"], "1")
        assert first.status_code == 201
        assert first.json()["owner_address"] == WALLET
        assert self._mint(client, collection["id"], "2").status_code == 201

        third = self._mint(client, collection["id"], "3")
        assert third.status_code == 409
        assert "max supply" in third.json()["detail"]

        refreshed = client.get(f"/api/nft/collections/{collection['id']}").json()
        assert refreshed["current_supply"] == 2

    def test_duplicate_token_id(self, client):
        collection = self._collection(client, max_supply=None)
        self._mint(client, collection["id"], "7")

        assert self._mint(client, collection["id"], "7").status_code == 409

    def test_only_collection_artist_can_mint(self, client):
        collection = self._collection(client)

        assert self._mint(client, collection["id"], "1", user_id=OTHER).status_code == 403

    def test_bad_creator_address(self, client):
        collection = self._collection(client)

        assert self._mint(client, collection["id"], "1", creator_address="0x123").status_code == 422

    def test_marketplace_listing(self, client):
        collection = self._collection(client)
        token = self._mint(client, collection["id"], "1").json()
        url = f"/api/nft/tokens/{token['id']}/listing"

        missing_price = client.put(url, json={"is_for_sale": True}, headers=auth_headers(ARTIST))
        assert missing_price.status_code == 400

        listed = client.put(url, json={"is_for_sale": True, "price": "0.05"}, headers=auth_headers(ARTIST))
        assert listed.json()["is_for_sale"] is True

        market = client.get("/api/nft/marketplace").json()
        assert market["total"] == 1
        assert market["tokens"][0]["id"] == token["id"]

        client.put(url, json={"is_for_sale": False}, headers=auth_headers(ARTIST))
        assert client.get("/api/nft/marketplace").json()["total"] == 0

    def test_inactive_collection_hidden(self, client):
        collection = self._collection(client)
        client.put(
            f"/api/nft/collections/{collection['id']}",
            json={"status": "inactive"},
            headers=auth_headers(ARTIST),
        )

        assert client.get(f"/api/nft/collections/{collection['id']}").status_code == 404
        assert client.get("/api/nft/collections").json() == []
        assert self._mint(client, collection["id"], "1").status_code == 409


class TestRouting:
    """Unknown routes and auth"""

    def test_unknown_route(self, client):
        response = client.get("/api/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"error": "Route not found"}

    def test_handler_404_keeps_detail(self, client):
        response = client.get("/api/events/12345")

        assert response.status_code == 404
        assert response.json()["detail"] == "Event with ID 12345 not found"
