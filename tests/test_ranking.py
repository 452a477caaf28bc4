"""Tests for listing, searching and trending posts."""
from datetime import datetime, timedelta

from app.modules.posts.models.post import Post
from tests.utils import make_post


def age_post(db, post_id, **delta):
    db.query(Post).filter(Post.id == post_id).update({Post.created_at: datetime.utcnow() - timedelta(**delta)})
    db.commit()


def test_list_is_newest_first_with_pagination(client, alice):
    ids = [make_post(client, alice, title=f"Post number {i}")["id"] for i in range(5)]

    response = client.get("/api/posts", params={"page": 1, "limit": 2})
    assert response.status_code == 200
    body = response.json()
    assert [p["id"] for p in body["posts"]] == [ids[4], ids[3]]
    assert body["pagination"] == {"current": 1, "total": 3, "hasMore": True, "totalPosts": 5}

    last = client.get("/api/posts", params={"page": 3, "limit": 2}).json()
    assert [p["id"] for p in last["posts"]] == [ids[0]]
    assert last["pagination"]["hasMore"] is False


def test_list_filters_by_category_and_author(client, alice, bob):
    make_post(client, alice, category="cooking-tip", title="Salt your pasta water")
    make_post(client, bob, category="recipe", title="Bob's chili")

    tips = client.get("/api/posts", params={"category": "cooking-tip"}).json()["posts"]
    assert [p["title"] for p in tips] == ["Salt your pasta water"]

    by_bob = client.get("/api/posts", params={"author": "bo"}).json()["posts"]
    assert [p["title"] for p in by_bob] == ["Bob's chili"]


def test_bad_paging_is_rejected(client):
    assert client.get("/api/posts", params={"page": 0}).status_code == 422
    assert client.get("/api/posts", params={"limit": "many"}).status_code == 422


def test_search_matches_tags_case_insensitively(client, alice):
    tagged = make_post(client, alice, title="Friday dinner", content="Whatever is in the fridge.", tags=["Pasta Night"])
    make_post(client, alice, title="Sushi rolls", content="Rice, nori and fish.", tags=["japanese"])

    posts = client.get("/api/posts/search", params={"q": "pasta"}).json()["posts"]
    assert [p["id"] for p in posts] == [tagged["id"]]


def test_search_matches_wildcards_literally(client, alice):
    literal = make_post(client, alice, title="100% rye bread", content="Dense and sour, as it should be.", tags=[])
    make_post(client, alice, title="Plain loaf", content="A simple white bread for sandwiches.", tags=[])

    posts = client.get("/api/posts/search", params={"q": "%"}).json()["posts"]
    assert [p["id"] for p in posts] == [literal["id"]]

    assert client.get("/api/posts/search", params={"q": "_"}).json()["posts"] == []


def test_search_requires_query(client):
    assert client.get("/api/posts/search").status_code == 400
    response = client.get("/api/posts/search", params={"q": "   "})
    assert response.status_code == 400
    assert response.json() == {"error": "Search query is required"}


def test_list_search_parameter_uses_same_predicate(client, alice):
    tagged = make_post(client, alice, title="Friday dinner", content="Whatever is in the fridge.", tags=["Pasta Night"])
    make_post(client, alice, title="Soup", content="A warming broth for winter.", tags=[])

    posts = client.get("/api/posts", params={"search": "PASTA"}).json()["posts"]
    assert [p["id"] for p in posts] == [tagged["id"]]


def test_trending_scores_likes_and_comments(client, alice, bob, carol):
    liked = make_post(client, alice, title="Two likes")
    commented = make_post(client, alice, title="One comment, one like")
    quiet = make_post(client, alice, title="Nothing yet")

    client.post(f"/api/posts/{liked['id']}/like", headers=bob)
    client.post(f"/api/posts/{liked['id']}/like", headers=carol)
    client.post(f"/api/posts/{commented['id']}/comments", json={"content": "Nice"}, headers=bob)
    client.post(f"/api/posts/{commented['id']}/like", headers=bob)

    posts = client.get("/api/posts/trending", params={"timeframe": "week"}).json()["posts"]
    assert [(p["id"], p["score"]) for p in posts] == [
        (commented["id"], 3),
        (liked["id"], 2),
        (quiet["id"], 0),
    ]


def test_trending_ties_break_on_recency(client, alice):
    older = make_post(client, alice, title="Older post")
    newer = make_post(client, alice, title="Newer post")

    posts = client.get("/api/posts/trending").json()["posts"]
    assert [p["id"] for p in posts] == [newer["id"], older["id"]]


def test_trending_window_is_a_hard_cutoff(client, alice, bob, carol, db):
    popular_old = make_post(client, alice, title="Yesterday's hit")
    fresh = make_post(client, alice, title="Fresh but quiet")
    for headers in (alice, bob, carol):
        client.post(f"/api/posts/{popular_old['id']}/like", headers=headers)
    age_post(db, popular_old["id"], hours=25)

    day = client.get("/api/posts/trending", params={"timeframe": "day"}).json()["posts"]
    assert [p["id"] for p in day] == [fresh["id"]]

    week = client.get("/api/posts/trending", params={"timeframe": "week"}).json()["posts"]
    assert [p["id"] for p in week] == [popular_old["id"], fresh["id"]]


def test_unknown_timeframe_uses_week(client, alice, db):
    recent = make_post(client, alice, title="Ten days old")
    age_post(db, recent["id"], days=10)
    current = make_post(client, alice, title="This week")

    month = client.get("/api/posts/trending", params={"timeframe": "month"}).json()["posts"]
    assert len(month) == 2

    fallback = client.get("/api/posts/trending", params={"timeframe": "decade"}).json()["posts"]
    assert [p["id"] for p in fallback] == [current["id"]]


def test_deleted_posts_are_absent_everywhere(client, alice, bob):
    kept = make_post(client, alice, title="Pasta kept", tags=["pasta"])
    gone = make_post(client, alice, title="Pasta gone", tags=["pasta"])
    client.post(f"/api/posts/{gone['id']}/like", headers=bob)
    client.delete(f"/api/posts/{gone['id']}", headers=alice)

    listed = client.get("/api/posts").json()
    assert [p["id"] for p in listed["posts"]] == [kept["id"]]
    assert listed["pagination"]["totalPosts"] == 1
    assert [p["id"] for p in client.get("/api/posts/search", params={"q": "pasta"}).json()["posts"]] == [kept["id"]]
    assert [p["id"] for p in client.get("/api/posts/trending").json()["posts"]] == [kept["id"]]
    assert [p["id"] for p in client.get("/api/posts/user/user-alice").json()["posts"]] == [kept["id"]]
    assert [p["id"] for p in client.get("/api/community/feed").json()["posts"]] == [kept["id"]]
    assert client.get("/api/community/stats").json()["totalLikes"] == 0


def test_user_posts_are_paginated(client, alice, bob):
    make_post(client, alice, title="Alice one")
    make_post(client, alice, title="Alice two")
    make_post(client, bob, title="Bob one")

    body = client.get("/api/posts/user/user-alice", params={"limit": 1}).json()
    assert [p["title"] for p in body["posts"]] == ["Alice two"]
    assert body["pagination"] == {"current": 1, "total": 2, "hasMore": True, "totalPosts": 2}
