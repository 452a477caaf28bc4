"""Tests for creating, reading, updating and soft deleting posts."""
import base64
import uuid

from app.modules.posts.models.post import Post
from app.modules.user_management.models.user import User
from tests.utils import make_post

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def test_create_then_get_returns_same_post(client, alice):
    created = make_post(client, alice, tags=["Pasta Night", "family"], cuisine="Italian")

    response = client.get(f"/api/posts/{created['id']}")
    assert response.status_code == 200
    post = response.json()["post"]

    assert post["id"] == created["id"]
    assert post["title"] == "Grandma's Lasagna"
    assert post["tags"] == ["Pasta Night", "family"]
    assert post["category"] == "recipe"
    assert post["type"] == "recipe"
    assert post["cuisine"] == "Italian"
    assert post["author"] == "Alice"
    assert post["authorId"] == "user-alice"
    assert post["authorProfile"] == {"id": "user-alice", "name": "Alice", "avatar": None}
    assert post["likes"] == []
    assert post["likeCount"] == 0
    assert post["comments"] == []
    assert post["commentCount"] == 0
    assert post["isPublished"] is True


def test_create_response_message(client, alice):
    response = client.post(
        "/api/posts",
        json={"title": "Knife skills", "content": "Keep the tip on the board and rock.", "category": "technique"},
        headers=alice,
    )
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Post created successfully"
    assert body["post"]["tags"] == []
    assert body["post"]["type"] == "recipe"


def test_story_categories_default_to_story_type(client, alice):
    post = make_post(client, alice, category="food-story")
    assert post["type"] == "story"


def test_create_requires_auth(client):
    response = client.post(
        "/api/posts",
        json={"title": "No auth", "content": "This should never be stored.", "category": "recipe"},
    )
    assert response.status_code == 401
    assert response.json() == {"error": "Authentication required"}


def test_invalid_token_is_rejected(client):
    response = client.post(
        "/api/posts",
        json={"title": "Bad token", "content": "This should never be stored.", "category": "recipe"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert response.status_code == 401


def test_short_title_is_rejected_citing_title(client, alice):
    response = client.post(
        "/api/posts",
        json={"title": "Hi", "content": "Long enough content here.", "category": "recipe"},
        headers=alice,
    )
    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "Validation failed"
    assert [detail["field"] for detail in body["details"]] == ["title"]


def test_unknown_category_and_too_many_tags_are_rejected(client, alice):
    response = client.post(
        "/api/posts",
        json={
            "title": "Too much",
            "content": "Far too many tags on this one.",
            "category": "dessert",
            "tags": [f"tag{i}" for i in range(11)],
        },
        headers=alice,
    )
    assert response.status_code == 422
    fields = {detail["field"] for detail in response.json()["details"]}
    assert "category" in fields
    assert "tags" in fields


def test_malformed_id_is_bad_request_not_not_found(client, alice):
    response = client.get("/api/posts/not-a-uuid")
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid post ID format"

    response = client.get(f"/api/posts/{uuid.uuid4()}")
    assert response.status_code == 404
    assert response.json()["error"] == "Post not found"

    for method, path in (
        ("put", "/api/posts/xyz"),
        ("delete", "/api/posts/xyz"),
        ("post", "/api/posts/xyz/like"),
        ("get", "/api/posts/xyz/comments"),
    ):
        kwargs = {"headers": alice}
        if method == "put":
            kwargs["json"] = {"title": "Valid title", "content": "Valid content here", "category": "recipe"}
        response = getattr(client, method)(path, **kwargs)
        assert response.status_code == 400, (method, path)


def test_update_replaces_fields_and_keeps_image(client, alice):
    post = make_post(client, alice, image="https://cdn.example.com/lasagna.jpg", cuisine="Italian")

    response = client.put(
        f"/api/posts/{post['id']}",
        json={
            "title": "Grandma's Lasagna v2",
            "content": "Now with a spinach layer as well.",
            "category": "recipe",
            "tags": ["spinach"],
        },
        headers=alice,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Post updated successfully"
    updated = body["post"]
    assert updated["title"] == "Grandma's Lasagna v2"
    assert updated["tags"] == ["spinach"]
    assert updated["image"] == "https://cdn.example.com/lasagna.jpg"
    assert updated["cuisine"] == "Italian"


def test_only_author_may_update_or_delete(client, alice, bob):
    post = make_post(client, alice)

    response = client.put(
        f"/api/posts/{post['id']}",
        json={"title": "Hijacked", "content": "Bob rewrote this post.", "category": "recipe"},
        headers=bob,
    )
    assert response.status_code == 403

    response = client.delete(f"/api/posts/{post['id']}", headers=bob)
    assert response.status_code == 403

    assert client.get(f"/api/posts/{post['id']}").json()["post"]["title"] == "Grandma's Lasagna"


def test_soft_delete_hides_post_but_keeps_row(client, alice, db):
    post = make_post(client, alice)

    response = client.delete(f"/api/posts/{post['id']}", headers=alice)
    assert response.status_code == 200
    assert response.json() == {"message": "Post deleted successfully", "postId": post["id"]}

    assert client.get(f"/api/posts/{post['id']}").status_code == 404
    assert client.delete(f"/api/posts/{post['id']}", headers=alice).status_code == 404
    assert client.post(f"/api/posts/{post['id']}/like", headers=alice).status_code == 404
    assert client.post(
        f"/api/posts/{post['id']}/comments", json={"content": "Too late"}, headers=alice
    ).status_code == 404

    row = db.query(Post).filter(Post.id == post["id"]).one()
    assert row.is_deleted is True


def test_inline_image_is_uploaded(client, alice, upload_dir):
    data_url = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode()
    post = make_post(client, alice, image=data_url)

    assert post["image"].startswith("http://localhost:3001/api/media/posts/")
    key = post["image"].split("/api/media/", 1)[1]
    assert (upload_dir / key).read_bytes() == PNG_BYTES


def test_failed_inline_image_does_not_block_post(client, alice):
    post = make_post(client, alice, image="data:image/png;base64,@@not-base64@@")
    assert post["image"] is None

    updated = client.put(
        f"/api/posts/{post['id']}",
        json={
            "title": "Still here",
            "content": "The post survives a bad image.",
            "category": "recipe",
            "image": "data:image/png;base64,@@@",
        },
        headers=alice,
    ).json()["post"]
    assert updated["image"] is None


def test_post_whose_author_was_removed_renders_without_profile(client, db, alice):
    created = make_post(client, alice)
    db.query(User).filter(User.id == "user-alice").delete()
    db.commit()

    response = client.get(f"/api/posts/{created['id']}")
    assert response.status_code == 200
    post = response.json()["post"]
    assert post["author"] == "Alice"
    assert post["authorProfile"] is None


def test_failed_inline_image_on_update_keeps_previous_image(client, alice):
    post = make_post(client, alice, image="https://cdn.example.com/lasagna.jpg")

    response = client.put(
        f"/api/posts/{post['id']}",
        json={
            "title": "New photo",
            "content": "Swapping the photo failed.",
            "category": "recipe",
            "image": "data:image/png;base64,@@@",
        },
        headers=alice,
    )
    assert response.status_code == 200
    updated = response.json()["post"]
    assert updated["title"] == "New photo"
    assert updated["image"] == "https://cdn.example.com/lasagna.jpg"
