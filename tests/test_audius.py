"""
Discovery Client Tests
Tests AudiusClient failover, parameters and result shaping
"""

from unittest.mock import Mock

import pytest
import requests

from audius import APP_NAME, AudiusClient, get_audius_client, transform_track, transform_user
from main import app

NODES = ["https://node-a.example", "https://node-b.example", "https://node-c.example"]

TRACK = {
    "id": "D7KyD",
    "title": "Strobe",
    "duration": 634,
    "play_count": 1200,
    "genre": "Electronic",
    "artwork": {"150x150": "https://img/150.jpg", "480x480": "https://img/480.jpg"},
    "user": {"id": "nlGNe", "name": "deadmau5"},
}

USER = {
    "id": "nlGNe",
    "name": "deadmau5",
    "handle": "deadmau5",
    "follower_count": 5000,
    "is_verified": True,
    "profile_picture": {"150x150": "https://img/avatar.jpg"},
    "associated_wallets": None,
}


def _response(payload=None, status_code=200):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload if payload is not None else {"data": []}
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error")
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def session():
    return Mock()


@pytest.fixture
def audius(session):
    return AudiusClient(nodes=NODES, timeout=5, session=session)


class TestMakeRequest:
    """Node selection and request parameters"""

    def test_app_name_added_and_none_dropped(self, audius, session):
        session.get.return_value = _response({"data": [TRACK]})

        audius.make_request("/v1/tracks/search", {"query": "strobe", "limit": 5, "offset": None})

        session.get.assert_called_once_with(
            "https://node-a.example/v1/tracks/search",
            params={"app_name": APP_NAME, "query": "strobe", "limit": "5"},
            timeout=5,
        )

    def test_failure_advances_node_and_reraises(self, audius, session):
        session.get.side_effect = requests.ConnectionError("down")

        with pytest.raises(requests.ConnectionError):
            audius.make_request("/v1/tracks/trending")

        assert audius.get_discovery_node() == "https://node-b.example"

    def test_http_error_advances_node(self, audius, session):
        session.get.return_value = _response(status_code=503)

        with pytest.raises(requests.HTTPError):
            audius.make_request("/v1/tracks/trending")

        assert audius.current_node_index == 1

    def test_round_robin_wraps(self, audius, session):
        session.get.side_effect = requests.Timeout("slow")

        for _ in range(len(NODES)):
            with pytest.raises(requests.Timeout):
                audius.make_request("/v1/tracks/trending")

        assert audius.get_discovery_node() == NODES[0]

    def test_success_keeps_node(self, audius, session):
        session.get.return_value = _response()

        audius.make_request("/v1/tracks/trending")

        assert audius.current_node_index == 0

    def test_requires_nodes(self):
        with pytest.raises(ValueError):
            AudiusClient(nodes=[], session=Mock())


class TestServiceMethods:
    """Failures surface as empty results"""

    def test_trending_returns_data(self, audius, session):
        session.get.return_value = _response({"data": [TRACK]})

        assert audius.get_trending_tracks(limit=1) == [TRACK]
        assert session.get.call_args.kwargs["params"]["time"] == "week"

    def test_trending_failure_returns_empty_list(self, audius, session):
        session.get.side_effect = requests.ConnectionError("down")

        assert audius.get_trending_tracks() == []

    def test_search_users_failure_returns_empty_list(self, audius, session):
        session.get.side_effect = requests.ConnectionError("down")

        assert audius.search_users("deadmau5") == []

    def test_get_track_failure_returns_none(self, audius, session):
        session.get.return_value = _response(status_code=404)

        assert audius.get_track("missing") is None

    def test_user_tracks_sorted_by_date(self, audius, session):
        session.get.return_value = _response({"data": [TRACK]})

        audius.get_user_tracks("nlGNe")

        assert session.get.call_args.kwargs["params"]["sort"] == "date"

    def test_stream_url_makes_no_request(self, audius, session):
        url = audius.get_stream_url("D7KyD")

        assert url == f"https://node-a.example/v1/tracks/D7KyD/stream?app_name={APP_NAME}"
        session.get.assert_not_called()


class TestTransforms:
    """Audius shapes -> AudioBASE shapes"""

    def test_transform_track(self):
        track = transform_track(TRACK)

        assert track["id"] == "D7KyD"
        assert track["artist_name"] == "deadmau5"
        assert track["artist_id"] == "nlGNe"
        assert track["artwork_url"] == "https://img/480.jpg"
        assert track["stream_url"] is None

    def test_transform_user(self):
        user = transform_user(USER)

        assert user["followers"] == 5000
        assert user["avatar"] == "https://img/avatar.jpg"
        assert user["is_verified"] is True
        assert user["wallets"] == {}
        assert user["genre"] == "Various"


class TestDiscoveryRoutes:
    """/api/discovery proxy"""

    @pytest.fixture
    def fake_client(self, client):
        fake = Mock(spec=AudiusClient)
        app.dependency_overrides[get_audius_client] = lambda: fake
        return fake

    def test_trending_route_transforms(self, client, fake_client):
        fake_client.get_trending_tracks.return_value = [TRACK]

        response = client.get("/api/discovery/trending", params={"limit": 1})

        assert response.status_code == 200
        assert response.json()["data"][0]["title"] == "Strobe"
        fake_client.get_trending_tracks.assert_called_once_with(limit=1, offset=0, time="week")

    def test_missing_track_is_404(self, client, fake_client):
        fake_client.get_track.return_value = None

        response = client.get("/api/discovery/tracks/nope")

        assert response.status_code == 404

    def test_track_includes_stream_url(self, client, fake_client):
        fake_client.get_track.return_value = TRACK
        fake_client.get_stream_url.return_value = "https://node/stream"

        body = client.get("/api/discovery/tracks/D7KyD").json()

        assert body["data"]["stream_url"] == "https://node/stream"

    def test_node_failure_is_empty_result(self, client, fake_client):
        fake_client.search_users.return_value = []

        response = client.get("/api/discovery/search/users", params={"query": "x"})

        assert response.status_code == 200
        assert response.json() == {"data": []}
