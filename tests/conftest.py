"""
pytest configuration and fixtures.

The HTTP tests run the real FastAPI app with two substitutions:
- `db.get_pool` is overridden with a sentinel, so no Postgres is needed
- every repository function is replaced by `InMemoryStore`, which mimics the
  SQL semantics (unique username, unique like per user/post, conditional
  deletes) closely enough to exercise the services
"""

from __future__ import annotations

import itertools
from datetime import datetime, timedelta, timezone
from typing import Generator

import bcrypt
import pytest
from fastapi.testclient import TestClient

import main
from comments import repository as comment_repository
from core import db
from core.errors import ForeignKeyViolation, UniqueViolation
from likes import repository as like_repository
from posts import repository as post_repository
from users import repository as user_repository

FAKE_POOL = object()


def _fake_pool() -> object:
    return FAKE_POOL


class InMemoryStore:
    """Dict-backed stand-in for the repository layer."""

    def __init__(self) -> None:
        self.users: list[dict] = []
        self.followers: list[dict] = []
        self.posts: list[dict] = []
        self.comments: list[dict] = []
        self.likes: list[dict] = []
        self._ids = {name: itertools.count(1) for name in ("users", "posts", "comments")}
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _now(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def _require_post(self, post_id: int, table: str) -> None:
        if not any(p["post_id"] == post_id for p in self.posts):
            raise ForeignKeyViolation(
                f'insert or update on table "{table}" violates foreign key constraint "{table}_post_id_fkey"'
            )

    @staticmethod
    def _public_user(row: dict) -> dict:
        return {k: row[k] for k in ("id", "username", "name", "created_at")}

    # users / followers

    async def create_user(self, pool, *, username, password_hash, name):
        if any(u["username"] == username for u in self.users):
            raise UniqueViolation('duplicate key value violates unique constraint "users_username_key"')
        row = {
            "id": next(self._ids["users"]),
            "username": username,
            "password": password_hash,
            "name": name,
            "created_at": self._now(),
        }
        self.users.append(row)
        return self._public_user(row)

    async def get_user_by_username(self, pool, username):
        for row in self.users:
            if row["username"] == username:
                return dict(row)
        return None

    async def get_user_by_id(self, pool, user_id):
        for row in self.users:
            if row["id"] == user_id:
                return self._public_user(row)
        return None

    async def list_users(self, pool):
        return [self._public_user(row) for row in self.users]

    async def search_users_by_name(self, pool, name):
        needle = name.lower()
        return [
            {"name": row["name"], "username": row["username"]}
            for row in self.users
            if needle in row["name"].lower()
        ]

    async def insert_follow(self, pool, *, follower_id, following_id):
        row = {"follower_id": follower_id, "following_id": following_id, "created_at": self._now()}
        self.followers.append(row)
        return dict(row)

    async def list_following_ids(self, pool, follower_id):
        ids: list[int] = []
        for row in self.followers:
            if row["follower_id"] == follower_id and row["following_id"] not in ids:
                ids.append(row["following_id"])
        return ids

    # posts

    async def insert_post(self, pool, *, user_id, content):
        row = {
            "post_id": next(self._ids["posts"]),
            "user_id": user_id,
            "content": content,
            "created_at": self._now(),
        }
        self.posts.append(row)
        return dict(row)

    async def get_post(self, pool, post_id):
        for row in self.posts:
            if row["post_id"] == post_id:
                return dict(row)
        return None

    async def list_posts_by_author(self, pool, user_id):
        return await self.list_posts_by_authors(pool, [user_id])

    async def list_posts_by_authors(self, pool, user_ids):
        rows = [dict(row) for row in self.posts if row["user_id"] in user_ids]
        return sorted(rows, key=lambda r: (r["created_at"], r["post_id"]), reverse=True)

    async def delete_post_owned_by(self, pool, post_id, *, user_id):
        for row in self.posts:
            if row["post_id"] == post_id and row["user_id"] == user_id:
                self.posts.remove(row)
                self.comments = [c for c in self.comments if c["post_id"] != post_id]
                self.likes = [like for like in self.likes if like["post_id"] != post_id]
                return {"post_id": post_id}
        return None

    # comments

    async def list_comments_for_post(self, pool, post_id):
        return [dict(row) for row in self.comments if row["post_id"] == post_id]

    async def insert_comment(self, pool, *, post_id, user_id, content):
        self._require_post(post_id, "comments")
        row = {
            "comment_id": next(self._ids["comments"]),
            "post_id": post_id,
            "user_id": user_id,
            "content": content,
            "created_at": self._now(),
        }
        self.comments.append(row)
        return dict(row)

    async def delete_comment_owned_by(self, pool, comment_id, *, user_id):
        for row in self.comments:
            if row["comment_id"] == comment_id and row["user_id"] == user_id:
                self.comments.remove(row)
                return {"comment_id": comment_id}
        return None

    # likes

    async def insert_like(self, pool, *, post_id, user_id):
        self._require_post(post_id, "likes")
        if any(r["post_id"] == post_id and r["user_id"] == user_id for r in self.likes):
            return None
        row = {"post_id": post_id, "user_id": user_id, "created_at": self._now()}
        self.likes.append(row)
        return dict(row)

    async def delete_like(self, pool, *, post_id, user_id):
        before = len(self.likes)
        self.likes = [r for r in self.likes if not (r["post_id"] == post_id and r["user_id"] == user_id)]
        return before - len(self.likes)


_PATCHES = {
    user_repository: (
        "create_user",
        "get_user_by_username",
        "get_user_by_id",
        "list_users",
        "search_users_by_name",
        "insert_follow",
        "list_following_ids",
    ),
    post_repository: (
        "insert_post",
        "get_post",
        "list_posts_by_author",
        "list_posts_by_authors",
        "delete_post_owned_by",
    ),
    comment_repository: (
        "list_comments_for_post",
        "insert_comment",
        "delete_comment_owned_by",
    ),
    like_repository: (
        "insert_like",
        "delete_like",
    ),
}


@pytest.fixture(autouse=True)
def auth_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin the signing settings so tokens are reproducible across tests."""
    monkeypatch.setenv("JWT_SECRET", "test-secret")
    monkeypatch.setenv("JWT_ALG", "HS256")
    monkeypatch.delenv("ACCESS_TOKEN_EXPIRE_MIN", raising=False)


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch: pytest.MonkeyPatch) -> None:
    """Cheapest bcrypt cost factor; hashing behaviour is otherwise unchanged."""
    real_gensalt = bcrypt.gensalt
    monkeypatch.setattr(bcrypt, "gensalt", lambda rounds=4, prefix=b"2b": real_gensalt(4, prefix))


@pytest.fixture
def store(monkeypatch: pytest.MonkeyPatch) -> InMemoryStore:
    memory = InMemoryStore()
    for module, names in _PATCHES.items():
        for name in names:
            monkeypatch.setattr(module, name, getattr(memory, name))
    return memory


@pytest.fixture
def client(store: InMemoryStore) -> Generator[TestClient, None, None]:
    """App client without lifespan, so no real pool is opened."""
    main.app.dependency_overrides[db.get_pool] = _fake_pool
    try:
        yield TestClient(main.app)
    finally:
        main.app.dependency_overrides.clear()


def signup(client: TestClient, username: str, *, name: str | None = None, password: str = "secret-pass") -> int:
    resp = client.post(
        "/users",
        json={"username": username, "password": password, "name": name or username.title()},
    )
    assert resp.status_code == 201, resp.text
    return int(resp.json()["id"])


def login_headers(client: TestClient, username: str, password: str = "secret-pass") -> dict[str, str]:
    resp = client.post("/users/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
def make_user(client: TestClient):
    """Create an account and return (user_id, auth headers)."""

    def _make(username: str, name: str | None = None) -> tuple[int, dict[str, str]]:
        user_id = signup(client, username, name=name)
        return user_id, login_headers(client, username)

    return _make


@pytest.fixture
def make_post(client: TestClient):
    """Publish a post as the given user and return its id."""

    def _make(headers: dict[str, str], content: str = "hello") -> int:
        resp = client.post("/posts", json={"content": content}, headers=headers)
        assert resp.status_code == 201, resp.text
        return int(resp.json()["post_id"])

    return _make
