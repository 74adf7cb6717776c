"""
Public API tests: only published content is visible, and misses never
reveal whether an unpublished post exists.
"""

from __future__ import annotations

from uuid import uuid4

import pytest

from editorial.api.deps import get_rules
from editorial.api.main import app
from editorial.rules.models import CommentRules, Rules

NOT_AVAILABLE = {"detail": "Content not available"}


@pytest.fixture
def publish(client, editor_headers):
    def _publish(title: str = "Derby Day Recap", status: str = "published") -> dict:
        response = client.post(
            "/api/admin/posts",
            json={"title": title, "content": "Rain at Flemington.", "status": status},
            headers=editor_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _publish


def comment(client, slug: str, **fields):
    body = {"author_name": "Jo", "author_email": "jo@example.com", "content": "Nice"}
    body.update(fields)
    return client.post(f"/api/public/posts/{slug}/comments", json=body)


def approve(client, headers, comment_id: str) -> None:
    response = client.patch(
        f"/api/admin/comments/{comment_id}", json={"status": "approved"}, headers=headers
    )
    assert response.status_code == 200


class TestPostVisibility:
    def test_published_post(self, client, publish) -> None:
        post = publish()
        response = client.get(f"/api/public/posts/{post['slug']}")
        assert response.status_code == 200
        body = response.json()
        assert body["post"]["title"] == "Derby Day Recap"
        assert body["comments"] == []
        assert "status" not in body["post"]

    def test_draft_looks_like_missing(self, client, publish) -> None:
        draft = publish("Secret", status="draft")
        hidden = client.get(f"/api/public/posts/{draft['slug']}")
        missing = client.get("/api/public/posts/no-such-post")

        assert hidden.status_code == missing.status_code == 404
        assert hidden.json() == missing.json() == NOT_AVAILABLE

    def test_archived_is_hidden(self, client, publish, editor_headers) -> None:
        post = publish()
        client.post(
            f"/api/admin/posts/{post['id']}/status",
            json={"status": "archived"},
            headers=editor_headers,
        )
        assert client.get(f"/api/public/posts/{post['slug']}").status_code == 404

    def test_each_fetch_counts_a_view(self, client, publish, editor_headers) -> None:
        post = publish()
        counts = [
            client.get(f"/api/public/posts/{post['slug']}").json()["post"]["view_count"]
            for _ in range(3)
        ]
        assert counts == [1, 2, 3]

        admin = client.get(f"/api/admin/posts/{post['id']}", headers=editor_headers).json()
        assert admin["post"]["view_count"] == 3

    def test_list_only_published(self, client, publish) -> None:
        publish("Live One")
        publish("Hidden One", status="draft")
        publish("Later One", status="draft")

        body = client.get("/api/public/posts").json()
        assert body["total"] == 1
        assert [p["title"] for p in body["items"]] == ["Live One"]

    @pytest.mark.parametrize("params", [{"offset": -1}, {"limit": 0}])
    def test_bad_paging_is_generic_404(self, client, publish, params) -> None:
        publish()
        response = client.get("/api/public/posts", params=params)
        assert response.status_code == 404
        assert response.json() == NOT_AVAILABLE

    def test_list_search(self, client, publish) -> None:
        publish("Derby Day Recap")
        publish("Oaks Day Preview")

        body = client.get("/api/public/posts", params={"search": "oaks"}).json()
        assert [p["title"] for p in body["items"]] == ["Oaks Day Preview"]

    def test_byline_and_category_without_email(self, client, editor_headers) -> None:
        client.post(
            "/api/admin/profiles",
            json={
                "id": editor_headers["X-Principal-Id"],
                "email": "jo@example.com",
                "display_name": "Jo",
            },
            headers=editor_headers,
        )
        category = client.post(
            "/api/admin/categories", json={"name": "Racing"}, headers=editor_headers
        ).json()
        post = client.post(
            "/api/admin/posts",
            json={
                "title": "Derby Day Recap",
                "content": "Rain at Flemington.",
                "status": "published",
                "category_id": category["id"],
            },
            headers=editor_headers,
        ).json()

        item = client.get("/api/public/posts").json()["items"][0]
        assert item["category"]["slug"] == "racing"
        assert item["author"] == {
            "id": editor_headers["X-Principal-Id"],
            "display_name": "Jo",
            "avatar_url": None,
        }

        detail = client.get(f"/api/public/posts/{post['slug']}").json()
        assert detail["author"]["display_name"] == "Jo"
        assert "email" not in detail["author"]
        assert detail["category"]["slug"] == "racing"

    def test_author_without_profile_is_null(self, client, publish) -> None:
        post = publish()
        assert client.get("/api/public/posts").json()["items"][0]["author"] is None
        assert client.get(f"/api/public/posts/{post['slug']}").json()["author"] is None


class TestComments:
    def test_submit_enters_moderation(self, client, publish) -> None:
        post = publish()
        response = comment(client, post["slug"])

        assert response.status_code == 202
        assert response.json()["status"] == "pending"
        assert client.get(f"/api/public/posts/{post['slug']}").json()["comments"] == []

    def test_approved_comment_is_visible_without_private_fields(
        self, client, publish, editor_headers
    ) -> None:
        post = publish()
        submitted = comment(client, post["slug"]).json()
        approve(client, editor_headers, submitted["id"])

        threads = client.get(f"/api/public/posts/{post['slug']}").json()["comments"]
        assert len(threads) == 1
        visible = threads[0]["comment"]
        assert visible["id"] == submitted["id"]
        assert visible["author_name"] == "Jo"
        assert "author_email" not in visible
        assert "ip_address" not in visible

    def test_pending_replies_hidden_by_default(self, client, publish, editor_headers) -> None:
        post = publish()
        root = comment(client, post["slug"]).json()
        approve(client, editor_headers, root["id"])
        comment(client, post["slug"], parent_id=root["id"], content="Agreed")

        threads = client.get(f"/api/public/posts/{post['slug']}").json()["comments"]
        assert threads[0]["replies"] == []

    def test_pending_replies_shown_when_rules_allow(self, client, publish, editor_headers) -> None:
        app.dependency_overrides[get_rules] = lambda: Rules(
            comments=CommentRules(public_replies_require_approval=False)
        )
        post = publish()
        root = comment(client, post["slug"]).json()
        approve(client, editor_headers, root["id"])
        reply = comment(client, post["slug"], parent_id=root["id"], content="Agreed").json()

        threads = client.get(f"/api/public/posts/{post['slug']}").json()["comments"]
        assert [r["id"] for r in threads[0]["replies"]] == [reply["id"]]

    def test_comment_on_draft_is_404(self, client, publish) -> None:
        draft = publish("Secret", status="draft")
        response = comment(client, draft["slug"])
        assert response.status_code == 404
        assert response.json() == NOT_AVAILABLE

    def test_unknown_parent_is_404(self, client, publish) -> None:
        post = publish()
        response = comment(client, post["slug"], parent_id=str(uuid4()))
        assert response.status_code == 404
        assert response.json() == NOT_AVAILABLE

    def test_reply_to_reply_is_rejected(self, client, publish) -> None:
        post = publish()
        root = comment(client, post["slug"]).json()
        reply = comment(client, post["slug"], parent_id=root["id"]).json()
        assert comment(client, post["slug"], parent_id=reply["id"]).status_code == 404

    def test_bad_email_is_422(self, client, publish) -> None:
        post = publish()
        response = comment(client, post["slug"], author_email="not-an-email")
        assert response.status_code == 422
        assert response.json()["field"] == "author_email"

    def test_blank_content_is_422(self, client, publish) -> None:
        post = publish()
        response = comment(client, post["slug"], content="   ")
        assert response.status_code == 422
        assert response.json()["field"] == "content"


def test_public_taxonomy(client, editor_headers) -> None:
    client.post("/api/admin/categories", json={"name": "Racing"}, headers=editor_headers)
    client.post("/api/admin/tags", json={"name": "Flemington"}, headers=editor_headers)

    categories = client.get("/api/public/categories").json()
    assert [c["category"]["slug"] for c in categories] == ["racing"]
    assert [t["slug"] for t in client.get("/api/public/tags").json()] == ["flemington"]
