"""User Routes: register, login, top-up.

Invariants:
    - Register returns 201 with the public view (no password material)
    - Login returns a token that authenticates subsequent requests
    - Unknown email -> 404, wrong password -> 400
"""

import asyncio

import pytest
from sqlalchemy import select

from bookpost.config import get_settings
from bookpost.core.credentials import decode_access_token
from bookpost.models.user import User
from bookpost.services.account_service import AccountService
from tests.services.fakes import signup


async def test_register_returns_public_view(client):
    res = await client.post("/users/register", json={
        "email": "Reader@Example.com",
        "username": "reader",
        "password": "secret123",
        "full_name": "Avid Reader",
        "age": 30,
        "address": "Jl. Buku 1",
        "birth_date": "1994-05-01",
        "contact_no": "0812000111",
    })

    assert res.status_code == 201
    data = res.json()
    assert data["user_id"] > 0
    assert data["email"] == "reader@example.com"
    assert data["username"] == "reader"
    assert data["full_name"] == "Avid Reader"
    assert data["deposit"] == 0
    assert "password" not in data
    assert "password_hash" not in data


async def test_register_stores_bcrypt_hash(client, fresh_db):
    await client.post("/users/register", json={
        "email": "reader@example.com", "username": "reader", "password": "secret123",
    })

    async with fresh_db() as db:
        user = (await db.execute(select(User))).scalar_one()
    assert user.password_hash != "secret123"
    assert user.password_hash.startswith("$2")


async def test_duplicate_email_rejected(client):
    await signup(client, "reader@example.com", "reader")
    res = await client.post("/users/register", json={
        "email": "READER@example.com", "username": "someone", "password": "secret123",
    })
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Email already registered"


async def test_duplicate_username_rejected(client):
    await signup(client, "reader@example.com", "reader")
    res = await client.post("/users/register", json={
        "email": "other@example.com", "username": "reader", "password": "secret123",
    })
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Username already taken"


async def test_register_validation_error_is_400(client):
    res = await client.post("/users/register", json={
        "email": "not-an-email", "username": "reader", "password": "secret123",
    })
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert any(d["field"].endswith("email") for d in error["details"])


async def test_login_returns_valid_token(client, fresh_db):
    user_id, _ = await signup(client, "reader@example.com", "reader")

    res = await client.post("/users/login", json={
        "email": "reader@example.com", "password": "secret123",
    })

    assert res.status_code == 200
    token = res.json()["token"]
    settings = get_settings()
    claims = decode_access_token(token, settings.jwt_secret, settings.jwt_algorithm)
    assert claims["user_id"] == user_id
    assert claims["email"] == "reader@example.com"
    async with fresh_db() as db:
        user = await db.get(User, user_id)
    assert user.jwt_token == token


async def test_login_unknown_email_is_404(client):
    res = await client.post("/users/login", json={
        "email": "ghost@example.com", "password": "secret123",
    })
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "Email not found"


async def test_login_wrong_password_is_400(client):
    await signup(client, "reader@example.com", "reader")
    res = await client.post("/users/login", json={
        "email": "reader@example.com", "password": "wrong-password",
    })
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Incorrect password"


async def test_topup_adds_to_deposit(client, alice):
    _, headers = alice

    first = await client.post("/users/topup", json={"amount": 50_000}, headers=headers)
    second = await client.post("/users/topup", json={"amount": 25_000}, headers=headers)

    assert first.status_code == 200
    assert first.json()["deposit"] == 50_000
    assert second.json() == {
        "message": "Deposit added. Current deposit amount: 75000",
        "deposit": 75_000,
    }


async def test_topup_rejects_non_positive_amount(client, alice):
    _, headers = alice
    res = await client.post("/users/topup", json={"amount": 0}, headers=headers)
    assert res.status_code == 400


async def test_topup_requires_token(client):
    res = await client.post("/users/topup", json={"amount": 1000})
    assert res.status_code == 401


async def test_concurrent_topups_both_land(alice, fresh_db):
    user_id, _ = alice
    settings = get_settings()

    async def topup(amount: int) -> int:
        async with fresh_db() as db:
            return await AccountService(db, settings).topup(user_id, amount)

    await asyncio.gather(topup(100), topup(50))

    async with fresh_db() as db:
        assert (await db.get(User, user_id)).deposit == 150


async def test_topup_ignores_stale_loaded_balance(alice, fresh_db):
    """A session holding an old User row still adds to the stored balance."""
    user_id, _ = alice
    settings = get_settings()
    async with fresh_db() as stale:
        assert (await stale.get(User, user_id)).deposit == 0
        async with fresh_db() as other:
            await AccountService(other, settings).topup(user_id, 100)

        deposit = await AccountService(stale, settings).topup(user_id, 50)

    assert deposit == 150
    async with fresh_db() as db:
        assert (await db.get(User, user_id)).deposit == 150


@pytest.mark.parametrize("email,username,message", [
    ("reader@example.com", "someone", "Email already registered"),
    ("other@example.com", "reader", "Username already taken"),
])
async def test_unique_constraint_race_is_400(client, monkeypatch, email, username, message):
    """The pre-insert check misses a row committed in between; commit still maps to 400."""
    await signup(client, "reader@example.com", "reader")
    real_check = AccountService._find_conflict
    calls = []

    async def check_misses_first_time(self, *args):
        calls.append(args)
        if len(calls) == 1:
            return None
        return await real_check(self, *args)

    monkeypatch.setattr(AccountService, "_find_conflict", check_misses_first_time)

    res = await client.post("/users/register", json={
        "email": email, "username": username, "password": "secret123",
    })

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "BAD_REQUEST"
    assert res.json()["error"]["message"] == message
    assert len(calls) == 2
