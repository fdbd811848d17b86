"""Tests for the feed endpoint."""

from datetime import timedelta
from urllib.parse import parse_qs, urlparse
from uuid import UUID

from conftest import BASE_TIME, OTHER_USER_ID, make_post


def _next_link_params(response):
    link = response.headers["Link"]
    url = link[link.index("<") + 1:link.index(">")]
    return parse_qs(urlparse(url).query)


class TestFeedEndpoint:
    """Test GET /v1/feed."""

    def test_wire_shape(self, test_client, auth_headers, post_source):
        post_source.add(make_post(BASE_TIME, platform="bluesky"))

        response = test_client.get("/v1/feed", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"items", "nextCursor"}
        assert data["nextCursor"] is None
        item = data["items"][0]
        assert item["platform"] == "bluesky"
        assert item["authorHandle"] == "@ada"
        assert "publishedAt" in item
        assert "published_at" not in item
        assert "Link" not in response.headers

    def test_pages_through_feed(self, test_client, auth_headers, post_source):
        post_source.add(*(make_post(BASE_TIME - timedelta(minutes=i)) for i in range(5)))

        first = test_client.get("/v1/feed?limit=2", headers=auth_headers).json()
        second = test_client.get(
            "/v1/feed", params={"limit": 2, "cursor": first["nextCursor"]}, headers=auth_headers
        ).json()
        third = test_client.get(
            "/v1/feed", params={"limit": 2, "cursor": second["nextCursor"]}, headers=auth_headers
        ).json()

        ids = [item["id"] for page in (first, second, third) for item in page["items"]]
        assert len(ids) == 5
        assert len(set(ids)) == 5
        assert third["nextCursor"] is None

    def test_link_header(self, test_client, auth_headers, post_source):
        post_source.add(*(make_post(BASE_TIME - timedelta(minutes=i)) for i in range(3)))

        response = test_client.get("/v1/feed?limit=2&platform=twitter", headers=auth_headers)

        assert response.headers["Link"].endswith('; rel="next"')
        params = _next_link_params(response)
        assert params["limit"] == ["2"]
        assert params["platform"] == ["twitter"]
        assert params["cursor"] == [response.json()["nextCursor"]]

    def test_only_callers_posts(self, test_client, auth_headers, post_source):
        post_source.add(make_post(BASE_TIME, owner_id=OTHER_USER_ID))

        response = test_client.get("/v1/feed", headers=auth_headers)

        assert response.json()["items"] == []

    def test_tied_timestamps_ordered_by_id(self, test_client, auth_headers, post_source):
        post_source.add(
            make_post(BASE_TIME, post_id=UUID(int=2)),
            make_post(BASE_TIME, post_id=UUID(int=1))
        )

        items = test_client.get("/v1/feed", headers=auth_headers).json()["items"]

        assert [item["id"] for item in items] == [str(UUID(int=1)), str(UUID(int=2))]

    def test_bad_limit(self, test_client, auth_headers, post_source):
        for limit in (0, 101):
            response = test_client.get(f"/v1/feed?limit={limit}", headers=auth_headers)

            assert response.status_code == 400
            assert response.headers["content-type"] == "application/problem+json"
            assert response.json()["type"] == "/problems/invalid-argument"

        assert post_source.calls == []

    def test_non_integer_limit(self, test_client, auth_headers):
        response = test_client.get("/v1/feed?limit=ten", headers=auth_headers)

        assert response.status_code == 422

    def test_bad_cursor(self, test_client, auth_headers):
        response = test_client.get("/v1/feed?cursor=garbage!", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["type"] == "/problems/invalid-cursor"

    def test_unknown_platform(self, test_client, auth_headers):
        response = test_client.get("/v1/feed?platform=myspace", headers=auth_headers)

        assert response.status_code == 400
        data = response.json()
        assert "myspace" in data["detail"]
        assert data["allowed"] == ["twitter", "instagram", "linkedin", "bluesky"]

    def test_storage_unavailable(self, test_client, auth_headers, post_source):
        post_source.fail = True

        response = test_client.get("/v1/feed", headers=auth_headers)

        assert response.status_code == 503
        assert response.json()["detail"] == "Storage is temporarily unavailable"

    def test_requires_auth(self, test_client):
        response = test_client.get("/v1/feed")

        assert response.status_code == 401
