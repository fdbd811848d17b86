"""Tests for the notification endpoints."""

from datetime import timedelta
from unittest.mock import AsyncMock, patch
from uuid import uuid4

from conftest import BASE_TIME, TEST_USER_ID, make_notification
from socialhub.errors.problem_details import StorageUnavailableError


class TestListNotifications:
    """Test GET /v1/notifications."""

    def test_wire_shape(self, test_client, auth_headers, notification_source):
        notification_source.add(make_notification(BASE_TIME, type="like"))

        response = test_client.get("/v1/notifications", headers=auth_headers)

        assert response.status_code == 200
        item = response.json()["items"][0]
        assert item["type"] == "like"
        assert item["isRead"] is False
        assert "platformNotificationId" in item
        assert "createdAt" in item

    def test_filters(self, test_client, auth_headers, notification_source):
        notification_source.add(
            make_notification(BASE_TIME, type="like", platform="instagram"),
            make_notification(BASE_TIME - timedelta(minutes=1), type="like", is_read=True,
                              platform="instagram"),
            make_notification(BASE_TIME - timedelta(minutes=2), type="follow",
                              platform="instagram"),
            make_notification(BASE_TIME - timedelta(minutes=3), type="like")
        )

        response = test_client.get(
            "/v1/notifications",
            params={"platform": "instagram", "type": "like", "unreadOnly": "true"},
            headers=auth_headers
        )

        items = response.json()["items"]
        assert len(items) == 1
        assert items[0]["platform"] == "instagram"
        assert items[0]["createdAt"].startswith("2024-01-01T12:00:00")

    def test_link_header_keeps_filters(self, test_client, auth_headers, notification_source):
        notification_source.add(*(
            make_notification(BASE_TIME - timedelta(minutes=i)) for i in range(3)
        ))

        response = test_client.get(
            "/v1/notifications?limit=1&unreadOnly=true&type=mention", headers=auth_headers
        )

        link = response.headers["Link"]
        assert "unreadOnly=true" in link
        assert "type=mention" in link
        assert "limit=1" in link

    def test_cursor_reused_with_other_filter(self, test_client, auth_headers, notification_source):
        notification_source.add(*(
            make_notification(BASE_TIME - timedelta(minutes=i)) for i in range(3)
        ))
        cursor = test_client.get(
            "/v1/notifications?limit=1", headers=auth_headers
        ).json()["nextCursor"]

        response = test_client.get(
            "/v1/notifications",
            params={"limit": 1, "cursor": cursor, "unreadOnly": "true"},
            headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["type"] == "/problems/invalid-cursor"

    def test_unknown_type(self, test_client, auth_headers):
        response = test_client.get("/v1/notifications?type=poke", headers=auth_headers)

        assert response.status_code == 400
        assert "mention" in response.json()["allowed"]

    def test_storage_unavailable(self, test_client, auth_headers, notification_source):
        notification_source.fail = True

        response = test_client.get("/v1/notifications", headers=auth_headers)

        assert response.status_code == 503


class TestMarkRead:
    """Test POST /v1/notifications/read and /v1/notifications/read-all."""

    def test_mark_read(self, test_client, auth_headers):
        ids = [uuid4(), uuid4()]

        with patch(
            "socialhub.routes.notifications.mark_notifications_read",
            new=AsyncMock(return_value=1)
        ) as mock_mark:
            response = test_client.post(
                "/v1/notifications/read",
                json={"ids": [str(i) for i in ids]},
                headers=auth_headers
            )

        assert response.status_code == 200
        assert response.json() == {"updated": 1}
        args = mock_mark.call_args[0]
        assert args[0] == TEST_USER_ID
        assert args[1] == ids

    def test_mark_read_rejects_bad_ids(self, test_client, auth_headers):
        response = test_client.post(
            "/v1/notifications/read", json={"ids": ["not-a-uuid"]}, headers=auth_headers
        )

        assert response.status_code == 422

    def test_mark_all_read(self, test_client, auth_headers):
        with patch(
            "socialhub.routes.notifications.mark_all_notifications_read",
            new=AsyncMock(return_value=4)
        ):
            response = test_client.post("/v1/notifications/read-all", headers=auth_headers)

        assert response.json() == {"updated": 4}

    def test_mark_all_read_storage_unavailable(self, test_client, auth_headers):
        with patch(
            "socialhub.routes.notifications.mark_all_notifications_read",
            new=AsyncMock(side_effect=StorageUnavailableError())
        ):
            response = test_client.post("/v1/notifications/read-all", headers=auth_headers)

        assert response.status_code == 503
