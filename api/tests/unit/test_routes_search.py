"""Tests for the search and platform endpoints."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch
from uuid import UUID

import asyncpg

from conftest import BASE_TIME, TEST_USER_ID, make_post
from socialhub.config import get_settings
from socialhub.listings import build_listings
from socialhub.models.platforms import PlatformStatus
from socialhub.platforms import Platform


class TestSearchEndpoint:
    """Test GET /v1/search/posts."""

    def test_search(self, test_client, auth_headers, post_source):
        post_source.add(
            make_post(BASE_TIME, content="Conference talk slides"),
            make_post(BASE_TIME - timedelta(minutes=1), content="Coffee")
        )

        response = test_client.get("/v1/search/posts?q=slides", headers=auth_headers)

        assert response.status_code == 200
        items = response.json()["items"]
        assert [item["content"] for item in items] == ["Conference talk slides"]

    def test_search_pagination(self, test_client, auth_headers, post_source):
        post_source.add(*(
            make_post(BASE_TIME - timedelta(minutes=i), content=f"weekly digest {i}")
            for i in range(3)
        ))

        first = test_client.get("/v1/search/posts?q=digest&limit=2", headers=auth_headers)
        second = test_client.get(
            "/v1/search/posts",
            params={"q": "digest", "limit": 2, "cursor": first.json()["nextCursor"]},
            headers=auth_headers
        )

        assert "q=digest" in first.headers["Link"]
        assert [i["content"] for i in second.json()["items"]] == ["weekly digest 2"]
        assert second.json()["nextCursor"] is None

    def test_missing_query(self, test_client, auth_headers):
        response = test_client.get("/v1/search/posts", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["type"] == "/problems/invalid-argument"

    def test_query_with_nul_byte(self, test_client, auth_headers, post_source):
        response = test_client.get("/v1/search/posts?q=abc%00def", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["type"] == "/problems/invalid-argument"
        assert post_source.calls == []

    def test_value_rejected_by_postgres(
        self, app, test_client, auth_headers, registry, mock_pool
    ):
        pool, conn = mock_pool
        conn.fetch.side_effect = asyncpg.exceptions.CharacterNotInRepertoireError(
            'invalid byte sequence for encoding "UTF8": 0x00'
        )
        app.state.listings = build_listings(registry, 2.0)

        with patch("socialhub.db.sources.get_db_pool", new=AsyncMock(return_value=pool)):
            response = test_client.get("/v1/search/posts?q=abc", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["type"] == "/problems/invalid-argument"

    def test_cursor_for_other_query(self, test_client, auth_headers, post_source):
        post_source.add(*(
            make_post(BASE_TIME - timedelta(minutes=i), content="red blue") for i in range(3)
        ))
        cursor = test_client.get(
            "/v1/search/posts?q=red&limit=1", headers=auth_headers
        ).json()["nextCursor"]

        response = test_client.get(
            "/v1/search/posts",
            params={"q": "blue", "limit": 1, "cursor": cursor},
            headers=auth_headers
        )

        assert response.status_code == 400


class TestPlatformsEndpoint:
    """Test GET /v1/platforms."""

    def test_list_platforms(self, test_client, auth_headers):
        statuses = [
            PlatformStatus(
                platform=Platform.TWITTER,
                display_name="X (Twitter)",
                connected=True,
                connection_id=UUID("550e8400-e29b-41d4-a716-446655440000"),
                platform_username="ada",
                connected_at=datetime(2024, 2, 1, tzinfo=timezone.utc)
            ),
            PlatformStatus(platform=Platform.BLUESKY, display_name="Bluesky", connected=False)
        ]

        with patch(
            "socialhub.routes.platforms.list_platform_statuses",
            new=AsyncMock(return_value=statuses)
        ):
            response = test_client.get("/v1/platforms", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data[0]["displayName"] == "X (Twitter)"
        assert data[0]["platformUsername"] == "ada"
        assert data[0]["connectionId"] == "550e8400-e29b-41d4-a716-446655440000"
        assert data[1]["connected"] is False
        assert data[1]["connectedAt"] is None

    def test_disconnect(self, test_client, auth_headers):
        connection_id = UUID("550e8400-e29b-41d4-a716-446655440000")

        with patch(
            "socialhub.routes.platforms.disconnect_platform",
            new=AsyncMock(return_value=True)
        ) as mock_disconnect:
            response = test_client.delete(f"/v1/platforms/{connection_id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"id": str(connection_id), "disconnected": True}
        mock_disconnect.assert_awaited_once_with(
            TEST_USER_ID, connection_id, get_settings().db_command_timeout
        )

    def test_disconnect_unknown_or_foreign_connection(self, test_client, auth_headers):
        with patch(
            "socialhub.routes.platforms.disconnect_platform",
            new=AsyncMock(return_value=False)
        ):
            response = test_client.delete(
                "/v1/platforms/550e8400-e29b-41d4-a716-446655440000", headers=auth_headers
            )

        assert response.status_code == 404
        assert response.headers["content-type"] == "application/problem+json"
        assert response.json()["title"] == "Not Found"

    def test_disconnect_requires_uuid(self, test_client, auth_headers):
        response = test_client.delete("/v1/platforms/twitter", headers=auth_headers)

        assert response.status_code == 422
