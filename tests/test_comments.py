"""Tests for adding, listing and removing comments."""
from app.modules.user_management.models.user import User
from tests.utils import make_post


def add_comment(client, post_id, headers, content="Looks delicious!"):
    response = client.post(f"/api/posts/{post_id}/comments", json={"content": content}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["comment"]


def test_add_comment_returns_comment(client, alice, bob):
    post = make_post(client, alice)

    response = client.post(f"/api/posts/{post['id']}/comments", json={"content": "  Yum  "}, headers=bob)
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Comment added successfully"
    comment = body["comment"]
    assert comment["content"] == "Yum"
    assert comment["author"] == "Bob"
    assert comment["authorId"] == "user-bob"
    assert comment["id"]
    assert comment["createdAt"]

    fetched = client.get(f"/api/posts/{post['id']}").json()["post"]
    assert fetched["commentCount"] == 1
    assert fetched["comments"][0]["id"] == comment["id"]


def test_comments_are_listed_in_order(client, alice, bob):
    post = make_post(client, alice)
    first = add_comment(client, post["id"], bob, "First!")
    second = add_comment(client, post["id"], alice, "Thanks Bob")

    comments = client.get(f"/api/posts/{post['id']}/comments").json()["comments"]
    assert [c["id"] for c in comments] == [first["id"], second["id"]]
    assert comments[0]["authorProfile"]["name"] == "Bob"


def test_comment_length_is_validated(client, alice):
    post = make_post(client, alice)
    url = f"/api/posts/{post['id']}/comments"

    empty = client.post(url, json={"content": "   "}, headers=alice)
    assert empty.status_code == 422
    assert empty.json()["details"][0]["field"] == "content"

    too_long = client.post(url, json={"content": "x" * 1001}, headers=alice)
    assert too_long.status_code == 422


def test_comment_author_can_delete(client, alice, bob):
    post = make_post(client, alice)
    comment = add_comment(client, post["id"], bob)

    response = client.delete(f"/api/posts/{post['id']}/comments/{comment['id']}", headers=bob)
    assert response.status_code == 200
    assert response.json() == {"message": "Comment deleted successfully", "commentCount": 0}


def test_post_author_can_delete_others_comments(client, alice, bob):
    post = make_post(client, alice)
    comment = add_comment(client, post["id"], bob)
    add_comment(client, post["id"], bob, "Second thought")

    response = client.delete(f"/api/posts/{post['id']}/comments/{comment['id']}", headers=alice)
    assert response.status_code == 200
    assert response.json()["commentCount"] == 1


def test_third_party_cannot_delete_comment(client, alice, bob, carol):
    post = make_post(client, alice)
    comment = add_comment(client, post["id"], bob)

    response = client.delete(f"/api/posts/{post['id']}/comments/{comment['id']}", headers=carol)
    assert response.status_code == 403
    assert client.get(f"/api/posts/{post['id']}").json()["post"]["commentCount"] == 1


def test_comment_must_belong_to_post(client, alice, bob):
    post = make_post(client, alice)
    other = make_post(client, alice, title="Another post")
    comment = add_comment(client, post["id"], bob)

    response = client.delete(f"/api/posts/{other['id']}/comments/{comment['id']}", headers=alice)
    assert response.status_code == 404
    assert response.json()["error"] == "Comment not found"

    response = client.delete(f"/api/posts/{post['id']}/comments/not-a-comment", headers=alice)
    assert response.status_code == 404


def test_comment_whose_author_was_removed_renders_without_profile(client, db, alice, bob):
    post = make_post(client, alice)
    add_comment(client, post["id"], bob)
    db.query(User).filter(User.id == "user-bob").delete()
    db.commit()

    response = client.get(f"/api/posts/{post['id']}/comments")
    assert response.status_code == 200
    comments = response.json()["comments"]
    assert comments[0]["author"] == "Bob"
    assert comments[0]["authorProfile"] is None

    fetched = client.get(f"/api/posts/{post['id']}").json()["post"]
    assert fetched["comments"][0]["authorProfile"] is None
    assert fetched["authorProfile"]["name"] == "Alice"
