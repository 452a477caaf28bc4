from app.core.security import create_access_token


def auth_headers(user_id: str, name: str, email: str = None) -> dict:
    token = create_access_token(user_id, name=name, email=email)
    return {"Authorization": f"Bearer {token}"}


def make_post(client, headers, **overrides) -> dict:
    body = {
        "title": "Grandma's Lasagna",
        "content": "Layers of pasta, ragu and bechamel baked until bubbling.",
        "category": "recipe",
        "tags": ["italian", "comfort"],
    }
    body.update(overrides)
    response = client.post("/api/posts", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["post"]
