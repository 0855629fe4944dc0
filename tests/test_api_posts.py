"""HTTP surface for reading and editing posts."""

import pytest


@pytest.fixture
def seeded(storage, make_post):
    reflection = storage.create_category({"name": "Reflection"})
    story = storage.create_category({"name": "Story"})
    older = make_post(
        title="Finding Stillness",
        content="<p>Listen to the quiet garden.</p>",
        published_at="2023-01-01",
        category_id=reflection.id,
        featured=True,
    )
    newer = make_post(
        title="5 Simple Morning Rituals",
        published_at="2023-06-01",
        category_id=story.id,
    )
    return {"older": older, "newer": newer, "reflection": reflection, "story": story}


def test_list_posts_newest_first(client, seeded):
    response = client.get("/api/posts")
    assert response.status_code == 200
    assert [p["slug"] for p in response.json()] == ["5-simple-morning-rituals", "finding-stillness"]


def test_featured_post(client, seeded):
    response = client.get("/api/posts/featured")
    assert response.status_code == 200
    body = response.json()
    assert body["slug"] == "finding-stillness"
    assert body["category_name"] == "Reflection"
    assert body["author_name"] == "Mai Chi"
    assert body["reading_time"] == "1 min read"


def test_featured_post_not_found_without_posts(client):
    response = client.get("/api/posts/featured")
    assert response.status_code == 404
    assert response.json() == {"message": "No featured post found"}


def test_get_post_by_id_returns_plain_post(client, seeded):
    response = client.get(f"/api/posts/{seeded['older'].id}")
    assert response.status_code == 200
    body = response.json()
    assert body["slug"] == "finding-stillness"
    assert "author_name" not in body


def test_get_post_by_slug_returns_details(client, seeded):
    response = client.get("/api/posts/5-simple-morning-rituals")
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == seeded["newer"].id
    assert body["category_slug"] == "story"
    assert body["author_name"] == "Mai Chi"


def test_only_plain_digits_are_read_as_ids(client, seeded, make_post):
    make_post(title="A thousand breaths", slug="1_000")

    response = client.get("/api/posts/1_000")
    assert response.status_code == 200
    assert response.json()["slug"] == "1_000"
    assert response.json()["author_name"] == "Mai Chi"

    padded = client.get(f"/api/posts/%20{seeded['older'].id}%20")
    assert padded.status_code == 404


def test_get_unknown_post(client, seeded):
    assert client.get("/api/posts/9999").status_code == 404
    response = client.get("/api/posts/no-such-post")
    assert response.status_code == 404
    assert response.json()["message"] == "Post not found"


def test_posts_by_category_routes(client, seeded):
    for path in ["/api/posts/category/reflection", "/api/category/reflection"]:
        response = client.get(path)
        assert response.status_code == 200
        assert [p["slug"] for p in response.json()] == ["finding-stillness"]

    assert len(client.get("/api/category/all").json()) == 2
    assert client.get("/api/category/nonexistent-slug").json() == []


def test_categories(client, seeded):
    response = client.get("/api/categories")
    assert [c["slug"] for c in response.json()] == ["reflection", "story"]


def test_search_requires_query_on_api_search(client, seeded):
    response = client.get("/api/search")
    assert response.status_code == 400
    assert response.json() == {"message": "Search query is required"}

    response = client.get("/api/search", params={"q": "GARDEN"})
    assert [p["slug"] for p in response.json()] == ["finding-stillness"]


def test_posts_search_is_permissive(client, seeded):
    assert len(client.get("/api/posts/search").json()) == 2
    response = client.get("/api/posts/search", params={"q": "rituals"})
    assert [p["slug"] for p in response.json()] == ["5-simple-morning-rituals"]


def test_create_post_as_admin(client, admin, admin_headers, seeded):
    payload = {
        "title": "Letters & Ink",
        "content": "<p>Pen to paper.</p>",
        "excerpt": "Why letters matter.",
        "published_at": "2023-07-01T09:00:00.000Z",
        "category_id": seeded["story"].id,
        "featured": "false",
    }
    response = client.post("/api/posts", json=payload, headers=admin_headers)
    assert response.status_code == 201, response.text
    body = response.json()
    assert body["slug"] == "letters-and-ink"
    assert body["featured"] is False
    assert body["author_id"] == admin.id
    assert body["published_at"].startswith("2023-07-01T09:00:00")

    assert client.get("/api/posts").json()[0]["slug"] == "letters-and-ink"


def test_create_post_validation_errors(client, admin_headers):
    response = client.post("/api/posts", json={"content": "<p>No title</p>"}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request data"

    response = client.post(
        "/api/posts",
        json={"title": "Bad date", "content": "<p>x</p>", "published_at": "someday"},
        headers=admin_headers,
    )
    assert response.status_code == 400


def test_create_post_with_duplicate_slug_conflicts(client, admin_headers, seeded):
    response = client.post(
        "/api/posts",
        json={"title": "Finding Stillness", "content": "<p>Again</p>"},
        headers=admin_headers,
    )
    assert response.status_code == 409
    assert "finding-stillness" in response.json()["message"]


def test_writes_require_login(client, seeded):
    post_id = seeded["older"].id
    assert client.post("/api/posts", json={"title": "x", "content": "y"}).status_code == 401
    assert client.put(f"/api/posts/{post_id}", json={"title": "x"}).status_code == 401
    assert client.delete(f"/api/posts/{post_id}").status_code == 401


def test_writes_require_admin(client, reader_headers, seeded):
    post_id = seeded["older"].id
    response = client.put(f"/api/posts/{post_id}", json={"title": "x"}, headers=reader_headers)
    assert response.status_code == 403
    assert response.json() == {"message": "Admin access required"}
    assert client.delete(f"/api/posts/{post_id}", headers=reader_headers).status_code == 403
    assert client.get(f"/api/posts/{post_id}").json()["title"] == "Finding Stillness"


def test_update_post(client, admin_headers, seeded):
    post_id = seeded["older"].id
    response = client.put(
        f"/api/posts/{post_id}", json={"title": "Finding Calm", "featured": "false"}, headers=admin_headers
    )
    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Finding Calm"
    assert body["featured"] is False
    assert body["slug"] == "finding-stillness"
    assert body["content"] == "<p>Listen to the quiet garden.</p>"


def test_update_post_errors(client, admin_headers, seeded):
    assert client.put("/api/posts/9999", json={"title": "x"}, headers=admin_headers).status_code == 404
    assert client.put("/api/posts/abc", json={"title": "x"}, headers=admin_headers).status_code == 400


def test_delete_post(client, admin_headers, seeded):
    post_id = seeded["older"].id
    response = client.delete(f"/api/posts/{post_id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Post deleted successfully"}
    assert client.get(f"/api/posts/{post_id}").status_code == 404
    assert client.delete(f"/api/posts/{post_id}", headers=admin_headers).status_code == 404
