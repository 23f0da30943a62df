"""
Tests for registration, login and the root banner.
"""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from stopwatch.core.security import hash_credentials
from stopwatch.models import User
from stopwatch.services import users as user_service


async def test_root_lists_endpoints(client):
    response = await client.get("/")
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Welcome to the Stopwatch Game API!"
    assert body["endpoints"]["login"] == "POST /users/login"


class TestRegister:
    async def test_creates_user(self, register):
        response = await register("alice", "pw1")
        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "alice"
        assert isinstance(body["id"], int)
        assert body["message"] == "User created successfully."
        assert "password" not in body and "salt" not in body

    async def test_stores_salted_peppered_hash(self, register, session_factory, settings):
        await register("alice", "pw1")
        async with session_factory() as session:
            user = (await session.execute(select(User).where(User.name == "alice"))).scalar_one()
        assert len(user.salt) == 32
        assert user.password_hash == hash_credentials("pw1", user.salt, settings.pepper.get_secret_value())

    async def test_same_password_different_salt(self, register, session_factory):
        await register("alice", "same")
        await register("bob", "same")
        async with session_factory() as session:
            users = (await session.execute(select(User))).scalars().all()
        assert users[0].salt != users[1].salt
        assert users[0].password_hash != users[1].password_hash

    async def test_duplicate_name_conflicts(self, register):
        assert (await register("alice", "pw1")).status_code == 201
        response = await register("alice", "something-else")
        assert response.status_code == 409
        assert response.json() == {"message": "User already exists."}

    @pytest.mark.parametrize(
        "body",
        [{}, {"name": "alice"}, {"password": "pw1"}, {"name": "", "password": "pw1"}, {"name": "alice", "password": ""}],
    )
    async def test_missing_fields(self, client, body):
        response = await client.post("/users/new", json=body)
        assert response.status_code == 400
        assert response.json() == {"message": "Username and password are required."}

    async def test_non_string_fields_rejected(self, client):
        response = await client.post("/users/new", json={"name": 12, "password": "pw1"})
        assert response.status_code == 400
        assert "message" in response.json()

    async def test_store_failure_is_500(self, client, monkeypatch):
        async def broken(*args, **kwargs):
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))

        monkeypatch.setattr("stopwatch.api.routes.users.create_user", broken)
        response = await client.post("/users/new", json={"name": "alice", "password": "pw1"})
        assert response.status_code == 500
        assert response.json() == {"message": "User registration failed due to a server error."}


class TestLogin:
    async def test_success_returns_verifiable_token(self, client, register, token_service):
        created = (await register("alice", "pw1")).json()
        response = await client.post("/users/login", json={"name": "alice", "password": "pw1"})
        assert response.status_code == 200
        body = response.json()
        assert body["login_status"] == "success"
        claims = token_service.verify(body["token"])
        assert (claims.id, claims.name) == (created["id"], "alice")

    async def test_wrong_password_and_unknown_user_look_the_same(self, client, register):
        await register("alice", "pw1")
        wrong_password = await client.post("/users/login", json={"name": "alice", "password": "nope"})
        unknown_user = await client.post("/users/login", json={"name": "mallory", "password": "pw1"})
        assert wrong_password.status_code == unknown_user.status_code == 401
        assert wrong_password.json() == unknown_user.json() == {"message": "Invalid credentials."}

    async def test_missing_fields(self, client):
        response = await client.post("/users/login", json={"name": "alice"})
        assert response.status_code == 400
        assert response.json() == {"message": "Username and password are required."}

    async def test_store_failure_is_500(self, client, monkeypatch):
        async def broken(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        monkeypatch.setattr("stopwatch.api.routes.users.authenticate_user", broken)
        response = await client.post("/users/login", json={"name": "alice", "password": "pw1"})
        assert response.status_code == 500
        assert response.json() == {"message": "Login failed due to a server error."}


class TestUserService:
    async def test_create_user_rejects_existing_name(self, session_factory, hasher):
        async with session_factory() as session:
            await user_service.create_user(session, "alice", "pw1", hasher)
            await session.commit()
            with pytest.raises(user_service.UserExistsError):
                await user_service.create_user(session, "alice", "pw2", hasher)

    async def test_authenticate_user(self, session_factory, hasher):
        async with session_factory() as session:
            user = await user_service.create_user(session, "alice", "pw1", hasher)
            await session.commit()
            assert await user_service.authenticate_user(session, "alice", "pw1", hasher) is user
            assert await user_service.authenticate_user(session, "alice", "pw2", hasher) is None
            assert await user_service.authenticate_user(session, "bob", "pw1", hasher) is None
