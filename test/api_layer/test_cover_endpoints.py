# ============================================================================
# FILE: test/api_layer/test_cover_endpoints.py
# Test: GET /api/cover
# ============================================================================

import pytest
import requests
from unittest.mock import MagicMock, patch


def _response(body):
    response = MagicMock()
    response.json.return_value = body
    return response


class TestCoverEndpoint:

    def test_match(self, client, cover_resolver):
        with patch.object(cover_resolver._http, "get",
                          return_value=_response({"items": [{"id": 620, "name": "Portal 2"}]})):
            response = client.get("/api/cover", params={"title": "portal 2"})

        assert response.status_code == 200
        assert response.json() == {
            "appId": 620,
            "matchedTitle": "Portal 2",
            "headerImageUrl": "https://cdn.akamai.steamstatic.com/steam/apps/620/header.jpg",
        }

    def test_legacy_path(self, client, cover_resolver):
        with patch.object(cover_resolver._http, "get",
                          return_value=_response({"items": [{"id": 1, "name": "X"}]})):
            assert client.get("/api/steam/cover", params={"title": "x"}).status_code == 200

    def test_missing_title(self, client):
        response = client.get("/api/cover")
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_input"

    def test_no_match(self, client, cover_resolver):
        with patch.object(cover_resolver._http, "get", return_value=_response({"items": []})):
            response = client.get("/api/cover", params={"title": "zzz"})
        assert response.status_code == 404

    def test_upstream_failure_hides_detail(self, client, cover_resolver):
        with patch.object(cover_resolver._http, "get",
                          side_effect=requests.ConnectionError("dns failure for internal-host")):
            response = client.get("/api/cover", params={"title": "portal"})

        assert response.status_code == 502
        assert response.json()["error"] == "upstream_error"
        assert "internal-host" not in response.text

    def test_cover_failure_leaves_claims_working(self, client, cover_resolver, make_key):
        key = make_key()
        with patch.object(cover_resolver._http, "get", side_effect=requests.Timeout("slow")):
            assert client.get("/api/cover", params={"title": "x"}).status_code == 502

        assert client.post(f"/api/claim/{key.id}", json={"website": ""}).status_code == 200
