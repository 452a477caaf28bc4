"""Tests for the like toggle and its behaviour under a racing insert."""
from app.modules.posts.likes.models.like import PostLike
from app.modules.posts.likes.services import like as like_service
from tests.utils import make_post


def test_toggle_twice_restores_state(client, alice, bob):
    post = make_post(client, alice)
    url = f"/api/posts/{post['id']}/like"

    first = client.post(url, headers=bob)
    assert first.status_code == 200
    assert first.json() == {"message": "Post liked", "liked": True, "likeCount": 1}
    assert client.get(f"/api/posts/{post['id']}").json()["post"]["likes"] == ["user-bob"]

    second = client.post(url, headers=bob)
    assert second.json() == {"message": "Post unliked", "liked": False, "likeCount": 0}
    assert client.get(f"/api/posts/{post['id']}").json()["post"]["likes"] == []


def test_likes_are_a_set_in_insertion_order(client, alice, bob, carol):
    post = make_post(client, alice)
    url = f"/api/posts/{post['id']}/like"

    client.post(url, headers=carol)
    client.post(url, headers=alice)
    client.post(url, headers=bob)

    fetched = client.get(f"/api/posts/{post['id']}").json()["post"]
    assert fetched["likes"] == ["user-carol", "user-alice", "user-bob"]
    assert fetched["likeCount"] == 3


def test_unlike_is_idempotent(client, alice, bob):
    post = make_post(client, alice)
    url = f"/api/posts/{post['id']}/like"

    client.post(url, headers=bob)
    assert client.delete(url, headers=bob).json() == {"message": "Post unliked", "liked": False, "likeCount": 0}
    assert client.delete(url, headers=bob).json()["likeCount"] == 0


def test_like_requires_auth_and_existing_post(client, alice):
    post = make_post(client, alice)
    assert client.post(f"/api/posts/{post['id']}/like").status_code == 401
    assert client.post("/api/posts/6c1f3e1e-8a5b-4a53-9d7e-1d1c2b3a4f5e/like", headers=alice).status_code == 404


def test_racing_insert_turns_toggle_into_removal(client, alice, bob, db, monkeypatch):
    post = make_post(client, alice)
    url = f"/api/posts/{post['id']}/like"
    real_remove = like_service._remove_like
    calls = []

    def remove_after_concurrent_insert(session, post_id, user_id):
        # The first delete runs before the other request's insert lands
        calls.append(post_id)
        if len(calls) == 1:
            session.execute(PostLike.__table__.insert().values(post_id=post_id, user_id=user_id))
            session.commit()
            return 0
        return real_remove(session, post_id, user_id)

    monkeypatch.setattr(like_service, "_remove_like", remove_after_concurrent_insert)

    response = client.post(url, headers=bob)
    assert response.status_code == 200
    assert response.json() == {"message": "Post unliked", "liked": False, "likeCount": 0}
    assert len(calls) == 2

    # Even number of effective toggles: membership is back to where it started
    assert db.query(PostLike).filter(PostLike.post_id == post["id"]).count() == 0


def test_even_number_of_toggles_restores_membership(client, alice, bob):
    post = make_post(client, alice)
    url = f"/api/posts/{post['id']}/like"

    client.post(url, headers=bob)
    client.post(url, headers=bob)
    client.post(url, headers=bob)
    client.post(url, headers=bob)

    assert client.get(f"/api/posts/{post['id']}").json()["post"]["likeCount"] == 0
    assert client.post(url, headers=bob).json()["liked"] is True
