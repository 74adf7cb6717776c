"""
Admin API tests: principal headers, status codes and error bodies.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path
from uuid import uuid4

from fastapi import Depends

from editorial.adapters.sqlite import SQLiteUnitOfWork
from editorial.api.deps import get_clock, get_relations, get_uow
from editorial.api.main import app
from editorial.components.relations import RelationSyncComponent
from editorial.domain.entities import Post
from editorial.domain.errors import DependencyFailureError

POSTS = "/api/admin/posts"


def create_post(client, headers, **fields) -> dict:
    body = {"title": "Derby Day Recap", "content": "Rain at Flemington."}
    body.update(fields)
    response = client.post(POSTS, json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def create_own_profile(client, headers) -> None:
    body = {"id": headers["X-Principal-Id"], "email": "jo@example.com", "display_name": "Jo"}
    response = client.post("/api/admin/profiles", json=body, headers=headers)
    assert response.status_code == 201, response.text


class TestPrincipal:
    def test_missing_headers(self, client) -> None:
        assert client.get(POSTS).status_code == 401

    def test_unknown_role(self, client) -> None:
        headers = {"X-Principal-Id": str(uuid4()), "X-Principal-Role": "reader"}
        assert client.get(POSTS, headers=headers).status_code == 401

    def test_malformed_id(self, client) -> None:
        headers = {"X-Principal-Id": "not-a-uuid", "X-Principal-Role": "editor"}
        assert client.get(POSTS, headers=headers).status_code == 401

    def test_author_is_stamped_from_principal(self, client, editor_headers) -> None:
        post = create_post(client, editor_headers)
        assert post["author_id"] == editor_headers["X-Principal-Id"]


class TestPosts:
    def test_create_and_fetch(self, client, editor_headers) -> None:
        post = create_post(client, editor_headers)
        assert post["slug"] == "derby-day-recap"
        assert post["status"] == "draft"

        response = client.get(f"{POSTS}/{post['id']}", headers=editor_headers)
        assert response.status_code == 200
        detail = response.json()
        assert detail["post"]["id"] == post["id"]
        assert detail["tags"] == []
        assert detail["category"] is None
        assert detail["seo_settings"] is None

    def test_duplicate_title_gets_distinct_slug(self, client, editor_headers) -> None:
        first = create_post(client, editor_headers)
        second = create_post(client, editor_headers)
        assert second["slug"] != first["slug"]
        assert second["slug"].startswith("derby-day-recap-")

    def test_missing_post_is_404(self, client, editor_headers) -> None:
        response = client.get(f"{POSTS}/{uuid4()}", headers=editor_headers)
        assert response.status_code == 404
        assert response.json()["code"] == "not_found"

    def test_unknown_category_is_422(self, client, editor_headers) -> None:
        response = client.post(
            POSTS,
            json={"title": "T", "content": "C", "category_id": str(uuid4())},
            headers=editor_headers,
        )
        assert response.status_code == 422
        body = response.json()
        assert body["code"] == "invalid_input"
        assert body["field"] == "category_id"

    def test_blank_title_is_422(self, client, editor_headers) -> None:
        response = client.post(POSTS, json={"title": "  ", "content": "C"}, headers=editor_headers)
        assert response.status_code == 422
        assert response.json()["field"] == "title"

    def test_invalid_transition_is_409(self, client, editor_headers) -> None:
        post = create_post(client, editor_headers)
        response = client.post(
            f"{POSTS}/{post['id']}/status", json={"status": "archived"}, headers=editor_headers
        )
        assert response.status_code == 409
        assert response.json()["code"] == "invalid_transition"

    def test_schedule_in_past_is_422(self, client, editor_headers) -> None:
        post = create_post(client, editor_headers)
        past = (datetime.now(UTC) - timedelta(hours=1)).isoformat()
        response = client.post(
            f"{POSTS}/{post['id']}/status",
            json={"status": "scheduled", "scheduled_for": past},
            headers=editor_headers,
        )
        assert response.status_code == 422
        assert response.json()["field"] == "scheduled_for"

    def test_publish_sets_published_at(self, client, editor_headers) -> None:
        post = create_post(client, editor_headers)
        response = client.post(
            f"{POSTS}/{post['id']}/status", json={"status": "published"}, headers=editor_headers
        )
        assert response.status_code == 200
        assert response.json()["published_at"] is not None

    def test_patch_applies_only_sent_fields(self, client, editor_headers) -> None:
        post = create_post(client, editor_headers, excerpt="Short")
        response = client.patch(
            f"{POSTS}/{post['id']}", json={"title": "Oaks Day Recap"}, headers=editor_headers
        )
        assert response.status_code == 200
        updated = response.json()
        assert updated["slug"] == "oaks-day-recap"
        assert updated["excerpt"] == "Short"
        assert updated["content"] == post["content"]

    def test_patch_explicit_null_clears(self, client, editor_headers) -> None:
        post = create_post(client, editor_headers, excerpt="Short")
        response = client.patch(
            f"{POSTS}/{post['id']}", json={"excerpt": None}, headers=editor_headers
        )
        assert response.json()["excerpt"] is None

    def test_patch_relations(self, client, editor_headers) -> None:
        tag = client.post(
            "/api/admin/tags", json={"name": "Flemington"}, headers=editor_headers
        ).json()
        category = client.post(
            "/api/admin/categories", json={"name": "Racing"}, headers=editor_headers
        ).json()
        post = create_post(client, editor_headers)

        response = client.patch(
            f"{POSTS}/{post['id']}",
            json={
                "category_id": category["id"],
                "tags": [tag["id"]],
                "seo_settings": {"meta_title": "Derby Day"},
            },
            headers=editor_headers,
        )
        assert response.status_code == 200

        detail = client.get(f"{POSTS}/{post['id']}", headers=editor_headers).json()
        assert detail["category"]["slug"] == "racing"
        assert [t["slug"] for t in detail["tags"]] == ["flemington"]
        assert detail["seo_settings"]["meta_title"] == "Derby Day"

    def test_unknown_seo_field_is_422(self, client, editor_headers) -> None:
        post = create_post(client, editor_headers)
        response = client.patch(
            f"{POSTS}/{post['id']}",
            json={"seo_settings": {"favicon": "x.ico"}},
            headers=editor_headers,
        )
        assert response.status_code == 422

    def test_list_filters_by_status(self, client, editor_headers) -> None:
        create_post(client, editor_headers)
        create_post(client, editor_headers, title="Live", status="published")

        body = client.get(POSTS, params={"status": "published"}, headers=editor_headers).json()
        assert body["total"] == 1
        assert body["items"][0]["title"] == "Live"
        assert body["has_more"] is False

    def test_delete(self, client, editor_headers) -> None:
        post = create_post(client, editor_headers)
        assert client.delete(f"{POSTS}/{post['id']}", headers=editor_headers).status_code == 204
        assert client.get(f"{POSTS}/{post['id']}", headers=editor_headers).status_code == 404
        assert client.delete(f"{POSTS}/{post['id']}", headers=editor_headers).status_code == 404

    def test_publish_due(self, client, editor_headers, api_settings) -> None:
        past = datetime.now(UTC) - timedelta(minutes=5)
        overdue = Post(
            title="Overdue",
            slug="overdue",
            content="c",
            status="scheduled",
            scheduled_for=past,
            author_id=uuid4(),
        )
        uow = SQLiteUnitOfWork(api_settings.db_path)
        with uow:
            uow.posts.insert(overdue)
            uow.commit()

        response = client.post(f"{POSTS}/publish-due", headers=editor_headers)
        assert response.status_code == 200
        assert response.json() == {"published": [str(overdue.id)], "errors": []}

        again = client.post(f"{POSTS}/publish-due", headers=editor_headers).json()
        assert again["published"] == []

    def test_list_items_carry_category_and_author(self, client, editor_headers) -> None:
        create_own_profile(client, editor_headers)
        category = client.post(
            "/api/admin/categories", json={"name": "Racing"}, headers=editor_headers
        ).json()
        create_post(client, editor_headers, category_id=category["id"])

        item = client.get(POSTS, headers=editor_headers).json()["items"][0]
        assert item["title"] == "Derby Day Recap"
        assert item["category"]["slug"] == "racing"
        assert item["author"]["display_name"] == "Jo"

    def test_detail_carries_author(self, client, editor_headers) -> None:
        create_own_profile(client, editor_headers)
        post = create_post(client, editor_headers)

        detail = client.get(f"{POSTS}/{post['id']}", headers=editor_headers).json()
        assert detail["author"]["id"] == editor_headers["X-Principal-Id"]
        assert detail["author"]["email"] == "jo@example.com"

    def test_author_without_profile_is_null(self, client, editor_headers) -> None:
        post = create_post(client, editor_headers)

        item = client.get(POSTS, headers=editor_headers).json()["items"][0]
        assert item["author"] is None
        assert item["category"] is None
        detail = client.get(f"{POSTS}/{post['id']}", headers=editor_headers).json()
        assert detail["author"] is None


class BrokenTagSync(RelationSyncComponent):
    def sync_tags(self, post_id, desired_tag_ids):
        raise DependencyFailureError("post_tags: database is locked")


def broken_relations(uow=Depends(get_uow), clock=Depends(get_clock)) -> RelationSyncComponent:
    return BrokenTagSync(uow, clock)


def test_partial_write_reports_saved_post(client, editor_headers) -> None:
    tag = client.post("/api/admin/tags", json={"name": "Cup"}, headers=editor_headers).json()
    app.dependency_overrides[get_relations] = broken_relations

    response = client.post(
        POSTS,
        json={
            "title": "Cup Day",
            "content": "c",
            "tags": [tag["id"]],
            "seo_settings": {"meta_title": "Cup"},
        },
        headers=editor_headers,
    )

    assert response.status_code == 503
    body = response.json()
    assert body["code"] == "partial_write"
    assert body["step"] == "tags"
    assert body["steps"] == ["tags"]
    saved = client.get(f"{POSTS}/{body['post_id']}", headers=editor_headers)
    assert saved.status_code == 200
    assert saved.json()["post"]["slug"] == "cup-day"
    assert saved.json()["seo_settings"]["meta_title"] == "Cup"
    assert saved.json()["tags"] == []


class TestComments:
    def test_moderation_queue_and_status(self, client, editor_headers) -> None:
        post = create_post(client, editor_headers, status="published")
        submitted = client.post(
            f"/api/public/posts/{post['slug']}/comments",
            json={"author_name": "Jo", "author_email": "jo@example.com", "content": "Nice"},
        ).json()

        queue = client.get(
            "/api/admin/comments", params={"status": "pending"}, headers=editor_headers
        ).json()
        assert [c["id"] for c in queue["items"]] == [submitted["id"]]
        assert queue["items"][0]["author_email"] == "jo@example.com"

        response = client.patch(
            f"/api/admin/comments/{submitted['id']}",
            json={"status": "approved"},
            headers=editor_headers,
        )
        assert response.status_code == 200
        assert response.json()["status"] == "approved"

        threads = client.get(
            f"/api/admin/posts/{post['id']}/comments", headers=editor_headers
        ).json()
        assert threads[0]["comment"]["id"] == submitted["id"]

    def test_unknown_status_is_rejected(self, client, editor_headers) -> None:
        response = client.patch(
            f"/api/admin/comments/{uuid4()}", json={"status": "deleted"}, headers=editor_headers
        )
        assert response.status_code == 422

    def test_delete_missing_comment(self, client, editor_headers) -> None:
        response = client.delete(f"/api/admin/comments/{uuid4()}", headers=editor_headers)
        assert response.status_code == 404


class TestTaxonomy:
    def test_category_crud(self, client, editor_headers) -> None:
        response = client.post(
            "/api/admin/categories", json={"name": "Racing News"}, headers=editor_headers
        )
        assert response.status_code == 201
        category = response.json()
        assert category["slug"] == "racing-news"
        assert category["color"] == "#3B82F6"

        duplicate = client.post(
            "/api/admin/categories", json={"name": "Racing  news"}, headers=editor_headers
        )
        assert duplicate.status_code == 409

        renamed = client.patch(
            f"/api/admin/categories/{category['id']}",
            json={"color": "#00ff00"},
            headers=editor_headers,
        ).json()
        assert renamed["color"] == "#00ff00"
        assert renamed["name"] == "Racing News"

        listing = client.get("/api/admin/categories", headers=editor_headers).json()
        assert listing == [{"category": renamed, "post_count": 0}]

        deleted = client.delete(f"/api/admin/categories/{category['id']}", headers=editor_headers)
        assert deleted.status_code == 204

    def test_bad_color_is_422(self, client, editor_headers) -> None:
        response = client.post(
            "/api/admin/categories", json={"name": "Racing", "color": "green"}, headers=editor_headers
        )
        assert response.status_code == 422
        assert response.json()["field"] == "color"

    def test_tags(self, client, editor_headers) -> None:
        tag = client.post("/api/admin/tags", json={"name": "Spring Carnival"}, headers=editor_headers)
        assert tag.status_code == 201
        tag_id = tag.json()["id"]

        renamed = client.patch(
            f"/api/admin/tags/{tag_id}", json={"name": "Autumn Carnival"}, headers=editor_headers
        ).json()
        assert renamed["slug"] == "autumn-carnival"

        assert client.delete(f"/api/admin/tags/{tag_id}", headers=editor_headers).status_code == 204
        assert client.get("/api/admin/tags", headers=editor_headers).json() == []


class TestMedia:
    def test_upload_list_delete(self, client, editor_headers, api_settings) -> None:
        response = client.post(
            "/api/admin/media",
            files={"file": ("cover.png", b"\x89PNG fake image bytes", "image/png")},
            data={"alt_text": "Cover"},
            headers=editor_headers,
        )
        assert response.status_code == 201, response.text
        media = response.json()
        assert media["original_name"] == "cover.png"
        assert media["file_type"] == "image/png"
        assert media["alt_text"] == "Cover"
        assert media["uploaded_by"] == editor_headers["X-Principal-Id"]
        assert media["file_url"] == f"/media/{media['file_name']}"
        stored = Path(api_settings.media_dir) / media["file_name"]
        assert stored.read_bytes() == b"\x89PNG fake image bytes"

        listing = client.get(
            "/api/admin/media", params={"file_type": "image/"}, headers=editor_headers
        ).json()
        assert listing["total"] == 1

        assert client.delete(f"/api/admin/media/{media['id']}", headers=editor_headers).status_code == 204
        assert not stored.exists()
        assert client.get(f"/api/admin/media/{media['id']}", headers=editor_headers).status_code == 404

    def test_uploaded_file_is_served_at_its_url(self, client, editor_headers) -> None:
        media = client.post(
            "/api/admin/media",
            files={"file": ("cover.png", b"\x89PNG fake image bytes", "image/png")},
            headers=editor_headers,
        ).json()

        response = client.get(media["file_url"])
        assert response.status_code == 200
        assert response.content == b"\x89PNG fake image bytes"
        assert response.headers["content-type"] == "image/png"
        assert "immutable" in response.headers["cache-control"]

        client.delete(f"/api/admin/media/{media['id']}", headers=editor_headers)
        gone = client.get(media["file_url"])
        assert gone.status_code == 404
        assert gone.json() == {"detail": "Content not available"}

    def test_unknown_media_file_is_404(self, client) -> None:
        assert client.get("/media/media/nothing-here.png").status_code == 404

    def test_disallowed_type(self, client, editor_headers) -> None:
        response = client.post(
            "/api/admin/media",
            files={"file": ("notes.txt", b"hello", "text/plain")},
            headers=editor_headers,
        )
        assert response.status_code == 422
        assert response.json()["field"] == "file_type"

    def test_empty_upload(self, client, editor_headers) -> None:
        response = client.post(
            "/api/admin/media",
            files={"file": ("empty.png", b"", "image/png")},
            headers=editor_headers,
        )
        assert response.status_code == 422
        assert response.json()["field"] == "file"


class TestProfiles:
    def test_create_and_me(self, client, editor_headers) -> None:
        response = client.post(
            "/api/admin/profiles",
            json={
                "id": editor_headers["X-Principal-Id"],
                "email": " Jo@Example.com ",
                "display_name": "Jo",
                "role": "editor",
            },
            headers=editor_headers,
        )
        assert response.status_code == 201
        assert response.json()["email"] == "jo@example.com"

        me = client.get("/api/admin/profiles/me", headers=editor_headers).json()
        assert me["display_name"] == "Jo"

        duplicate = client.post(
            "/api/admin/profiles", json={"email": "jo@example.com"}, headers=editor_headers
        )
        assert duplicate.status_code == 409

    def test_update(self, client, editor_headers) -> None:
        profile = client.post(
            "/api/admin/profiles", json={"email": "sam@example.com"}, headers=editor_headers
        ).json()
        response = client.patch(
            f"/api/admin/profiles/{profile['id']}",
            json={"display_name": "Sam"},
            headers=editor_headers,
        )
        assert response.json()["display_name"] == "Sam"
        assert response.json()["role"] == "author"

    def test_me_without_profile(self, client, editor_headers) -> None:
        assert client.get("/api/admin/profiles/me", headers=editor_headers).status_code == 404


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok", "service": "editorial"}
