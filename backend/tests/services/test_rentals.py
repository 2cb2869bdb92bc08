"""Rentals: checkout, payment, and rent history.

Invariants:
    - Checkout totals the cart, creates one rental with one detail per cart row, empties the cart
    - Payment debits the deposit once; only the owner may pay
    - Invoice requested only when the gateway is enabled; a gateway failure commits nothing
    - History lists each rental with only its own books, newest first
"""

import pytest
from sqlalchemy import select

from bookpost.config import get_settings
from bookpost.core.errors import BadRequestError
from bookpost.models.payment import Payment
from bookpost.models.rental import Rental
from bookpost.models.user import User
from bookpost.services.account_service import AccountService
from bookpost.services.rental_service import RentalService


async def _fill_cart(client, headers, books):
    for book in books:
        res = await client.post("/users/carts", json={"book_id": book.id}, headers=headers)
        assert res.status_code == 201


async def _checkout(client, headers) -> dict:
    res = await client.post("/users/checkout", headers=headers)
    assert res.status_code == 200, res.text
    return res.json()


async def test_checkout_creates_rental_and_clears_cart(client, alice, seed_books, fresh_db):
    user_id, headers = alice
    await _fill_cart(client, headers, seed_books[:2])

    data = await _checkout(client, headers)

    assert data["message"] == "Order created successfully"
    assert data["total_price"] == 35_000
    assert (await client.get("/users/carts", headers=headers)).json() == []
    async with fresh_db() as db:
        rental = await db.get(Rental, data["order_id"])
        assert rental.user_id == user_id
        assert rental.rental_status == "created"
        assert rental.rental_date is not None
        assert sorted(d.book_id for d in rental.details) == sorted(b.id for b in seed_books[:2])
        assert all(not d.returned for d in rental.details)


async def test_checkout_counts_duplicate_books(client, alice, seed_books):
    _, headers = alice
    await _fill_cart(client, headers, [seed_books[0], seed_books[0]])

    data = await _checkout(client, headers)

    assert data["total_price"] == 30_000


async def test_checkout_empty_cart_is_400(client, alice):
    _, headers = alice
    res = await client.post("/users/checkout", headers=headers)
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Cart is empty, cannot create order"


async def test_pay_debits_deposit(client, alice, seed_books, fresh_db):
    user_id, headers = alice
    await client.post("/users/topup", json={"amount": 50_000}, headers=headers)
    await _fill_cart(client, headers, seed_books[:2])
    order = await _checkout(client, headers)

    res = await client.post(f"/users/rentals/{order['order_id']}/pay", headers=headers)

    assert res.status_code == 200
    assert res.json() == {
        "message": "Payment successful",
        "order_id": order["order_id"],
        "status": "paid",
        "deposit": 15_000,
        "invoice": None,
    }
    async with fresh_db() as db:
        user = await db.get(User, user_id)
        assert user.deposit == 15_000
        payment = (await db.execute(select(Payment))).scalar_one()
        assert payment.amount == 35_000
        assert payment.invoice_id is None


async def test_pay_twice_is_400(client, alice, seed_books):
    _, headers = alice
    await client.post("/users/topup", json={"amount": 100_000}, headers=headers)
    await _fill_cart(client, headers, seed_books[:1])
    order = await _checkout(client, headers)
    await client.post(f"/users/rentals/{order['order_id']}/pay", headers=headers)

    res = await client.post(f"/users/rentals/{order['order_id']}/pay", headers=headers)

    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Order is already paid"


async def test_pay_with_insufficient_deposit_is_400(client, alice, seed_books, fresh_db):
    user_id, headers = alice
    await client.post("/users/topup", json={"amount": 10_000}, headers=headers)
    await _fill_cart(client, headers, seed_books[:1])
    order = await _checkout(client, headers)

    res = await client.post(f"/users/rentals/{order['order_id']}/pay", headers=headers)

    assert res.status_code == 400
    async with fresh_db() as db:
        assert (await db.get(User, user_id)).deposit == 10_000
        assert (await db.get(Rental, order["order_id"])).rental_status == "created"


async def test_pay_someone_elses_rental_is_401(client, alice, bob, seed_books):
    _, alice_headers = alice
    _, bob_headers = bob
    await _fill_cart(client, alice_headers, seed_books[:1])
    order = await _checkout(client, alice_headers)

    res = await client.post(f"/users/rentals/{order['order_id']}/pay", headers=bob_headers)

    assert res.status_code == 401
    assert res.json()["error"]["message"] == "You are not authorized to pay for this order"


async def test_pay_missing_rental_is_404(client, alice):
    _, headers = alice
    res = await client.post("/users/rentals/999/pay", headers=headers)
    assert res.status_code == 404


async def test_pay_with_gateway_attaches_invoice(client, alice, seed_books, fake_invoice, fresh_db):
    _, headers = alice
    fake_invoice.enabled = True
    await client.post("/users/topup", json={"amount": 50_000}, headers=headers)
    await _fill_cart(client, headers, seed_books[:2])
    order = await _checkout(client, headers)

    res = await client.post(f"/users/rentals/{order['order_id']}/pay", headers=headers)

    assert res.status_code == 200
    rental_ref = f"rental-{order['order_id']}"
    assert res.json()["invoice"] == {
        "id": f"inv-{rental_ref}",
        "invoice_url": f"https://checkout.example/{rental_ref}",
    }
    call = fake_invoice.calls[0]
    assert call["amount"] == 35_000
    assert call["customer_email"] == "alice@example.com"
    assert [item["name"] for item in call["items"]] == ["The Hobbit", "1984"]
    async with fresh_db() as db:
        payment = (await db.execute(select(Payment))).scalar_one()
        assert payment.invoice_id == f"inv-{rental_ref}"


async def test_gateway_failure_commits_nothing(client, alice, seed_books, fake_invoice, fresh_db):
    user_id, headers = alice
    fake_invoice.enabled = True
    fake_invoice.fail = True
    await client.post("/users/topup", json={"amount": 50_000}, headers=headers)
    await _fill_cart(client, headers, seed_books[:1])
    order = await _checkout(client, headers)

    res = await client.post(f"/users/rentals/{order['order_id']}/pay", headers=headers)

    assert res.status_code == 500
    assert res.json()["error"]["code"] == "EXTERNAL_SERVICE_ERROR"
    async with fresh_db() as db:
        assert (await db.get(User, user_id)).deposit == 50_000
        assert (await db.get(Rental, order["order_id"])).rental_status == "created"
        assert (await db.execute(select(Payment))).scalar_one_or_none() is None


async def test_history_groups_books_per_rental(client, alice, seed_books):
    _, headers = alice
    hobbit, nineteen, farm = seed_books
    await _fill_cart(client, headers, [hobbit, nineteen])
    first = await _checkout(client, headers)
    await _fill_cart(client, headers, [farm])
    second = await _checkout(client, headers)

    res = await client.get("/users/rent-history", headers=headers)

    assert res.status_code == 200
    history = res.json()
    assert [h["rental_id"] for h in history] == [second["order_id"], first["order_id"]]
    assert [b["title"] for b in history[0]["books"]] == ["Animal Farm"]
    assert [b["title"] for b in history[1]["books"]] == ["The Hobbit", "1984"]
    assert history[1]["total_price"] == 35_000
    assert history[1]["status"] == "created"


async def test_history_is_per_user(client, alice, bob, seed_books):
    _, alice_headers = alice
    _, bob_headers = bob
    await _fill_cart(client, alice_headers, seed_books[:1])
    await _checkout(client, alice_headers)

    res = await client.get("/users/rent-history", headers=bob_headers)

    assert res.json() == []


async def test_pay_race_on_paid_rental_is_400(client, alice, seed_books, fresh_db):
    """A session still seeing status=created cannot pay a rental paid meanwhile."""
    user_id, headers = alice
    await client.post("/users/topup", json={"amount": 100_000}, headers=headers)
    await _fill_cart(client, headers, seed_books[:1])
    order = await _checkout(client, headers)

    async with fresh_db() as stale:
        rental = await stale.get(Rental, order["order_id"])
        assert rental.rental_status == "created"
        async with fresh_db() as other:
            await RentalService(other).pay(user_id, order["order_id"])

        with pytest.raises(BadRequestError, match="Order is already paid"):
            await RentalService(stale).pay(user_id, order["order_id"])
        await stale.rollback()

    async with fresh_db() as db:
        assert (await db.get(User, user_id)).deposit == 85_000
        assert len((await db.execute(select(Payment))).scalars().all()) == 1


async def test_pay_keeps_concurrent_topup(client, alice, seed_books, fresh_db):
    user_id, headers = alice
    await client.post("/users/topup", json={"amount": 20_000}, headers=headers)
    await _fill_cart(client, headers, seed_books[:1])
    order = await _checkout(client, headers)

    async with fresh_db() as stale:
        assert (await stale.get(User, user_id)).deposit == 20_000
        async with fresh_db() as other:
            await AccountService(other, get_settings()).topup(user_id, 30_000)

        _, deposit, _ = await RentalService(stale).pay(user_id, order["order_id"])

    assert deposit == 35_000
    async with fresh_db() as db:
        assert (await db.get(User, user_id)).deposit == 35_000


async def test_insufficient_deposit_message_uses_stored_balance(client, alice, seed_books):
    _, headers = alice
    await client.post("/users/topup", json={"amount": 10_000}, headers=headers)
    await _fill_cart(client, headers, seed_books[:1])
    order = await _checkout(client, headers)

    res = await client.post(f"/users/rentals/{order['order_id']}/pay", headers=headers)

    assert res.json()["error"]["message"] == (
        "Insufficient deposit: 10000 available, 15000 required"
    )
