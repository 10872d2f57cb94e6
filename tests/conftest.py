from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from main import app
from transformer import Context, Transformer


@pytest.fixture()
def client(monkeypatch):
    monkeypatch.setenv("RESPONSE_WRAPPER", "data")
    # No `with`: the lifespan (DB pool) is not started in tests.
    return TestClient(app)


@pytest.fixture()
def context():
    return Context()


class AuthorTransformer(Transformer):
    available_includes = ("profile", "profile.avatar", "posts")

    def transform(self, context, author):
        return {
            "id": author["id"],
            "name": author["name"],
            "email": self.when_not_none(author.get("email")),
            "meta": self.merge({"role": author.get("role", "reader")}),
        }

    def include_profile(self, context, author):
        return {"bio": author.get("bio", ""), "links": author.get("links", [])}

    def include_profile_avatar(self, context, author):
        return f"https://cdn.example.test/{author['id']}.png"

    def include_posts(self, context, author):
        return [{"id": post_id, "title": f"Post {post_id}"} for post_id in author.get("post_ids", [])]


@pytest.fixture()
def author_transformer():
    return AuthorTransformer()


@pytest.fixture()
def author():
    return {
        "id": 7,
        "name": "Ann",
        "email": None,
        "role": "editor",
        "bio": "Writes things.",
        "links": ["https://ann.example.test"],
        "post_ids": [1, 2],
    }
