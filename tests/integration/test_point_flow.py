"""Integration tests for pt_point endpoints (memory backend, in-process ASGI).

The app's stores live for the whole session, so every test works on a fresh
random user id.
"""

import asyncio
import random

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio(loop_scope="session")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _unique_user_id() -> int:
    return random.randint(1, 2**62)


async def _charge(client: AsyncClient, user_id: int, amount: int):
    return await client.patch(f"/api/v1/point/{user_id}/charge", json={"amount": amount})


async def _use(client: AsyncClient, user_id: int, amount: int):
    return await client.patch(f"/api/v1/point/{user_id}/use", json={"amount": amount})


async def _point(client: AsyncClient, user_id: int) -> int:
    resp = await client.get(f"/api/v1/point/{user_id}")
    return int(resp.json()["data"]["point"])


async def _histories(client: AsyncClient, user_id: int) -> list[dict]:
    resp = await client.get(f"/api/v1/point/{user_id}/histories")
    return list(resp.json()["data"]["items"])


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestHealth:
    async def test_health(self, client: AsyncClient) -> None:
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


class TestGetPoint:
    async def test_new_user_has_zero_balance(self, client: AsyncClient) -> None:
        user_id = _unique_user_id()

        resp = await client.get(f"/api/v1/point/{user_id}")

        assert resp.status_code == 200
        body = resp.json()
        assert body["code"] == 0
        assert body["data"]["user_id"] == user_id
        assert body["data"]["point"] == 0

    async def test_request_id_echoed(self, client: AsyncClient) -> None:
        resp = await client.get(
            f"/api/v1/point/{_unique_user_id()}", headers={"X-Request-ID": "req_test123"}
        )
        assert resp.headers["X-Request-ID"] == "req_test123"
        assert resp.json()["request_id"] == "req_test123"

    async def test_non_integer_user_id_returns_422(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/point/abc")
        assert resp.status_code == 422

    async def test_non_positive_user_id_is_an_ordinary_user(
        self, client: AsyncClient
    ) -> None:
        user_id = -_unique_user_id()

        resp = await _charge(client, user_id, 40)

        assert resp.status_code == 200
        assert await _point(client, user_id) == 40
        assert len(await _histories(client, user_id)) == 1


class TestCharge:
    async def test_charge_increases_balance(self, client: AsyncClient) -> None:
        user_id = _unique_user_id()

        resp = await _charge(client, user_id, 1000)

        assert resp.status_code == 200
        assert resp.json()["data"]["point"] == 1000
        assert await _point(client, user_id) == 1000

    async def test_charge_zero_rejected(self, client: AsyncClient) -> None:
        resp = await _charge(client, _unique_user_id(), 0)
        assert resp.status_code == 422

    async def test_charge_over_limit_returns_2002(self, client: AsyncClient) -> None:
        user_id = _unique_user_id()
        await _charge(client, user_id, 100)

        resp = await _charge(client, user_id, 3_000_000)

        assert resp.status_code == 422
        assert resp.json()["code"] == 2002
        assert resp.json()["data"] is None
        assert await _point(client, user_id) == 100
        assert len(await _histories(client, user_id)) == 1


class TestUse:
    async def test_use_decreases_balance(self, client: AsyncClient) -> None:
        user_id = _unique_user_id()
        await _charge(client, user_id, 500)

        resp = await _use(client, user_id, 200)

        assert resp.status_code == 200
        assert resp.json()["data"]["point"] == 300

    async def test_use_insufficient_returns_2001(self, client: AsyncClient) -> None:
        user_id = _unique_user_id()
        await _charge(client, user_id, 50)

        resp = await _use(client, user_id, 100)

        assert resp.status_code == 422
        assert resp.json()["code"] == 2001
        assert await _point(client, user_id) == 50


class TestHistories:
    async def test_histories_in_order(self, client: AsyncClient) -> None:
        user_id = _unique_user_id()
        await _charge(client, user_id, 100)
        await _use(client, user_id, 30)
        await _use(client, user_id, 500)  # rejected, not recorded
        await _charge(client, user_id, 7)

        items = await _histories(client, user_id)

        assert [(i["type"], i["amount"]) for i in items] == [
            ("CHARGE", 100),
            ("USE", 30),
            ("CHARGE", 7),
        ]
        ids = [i["id"] for i in items]
        assert ids == sorted(ids)

    async def test_new_user_has_empty_histories(self, client: AsyncClient) -> None:
        resp = await client.get(f"/api/v1/point/{_unique_user_id()}/histories")
        assert resp.status_code == 200
        assert resp.json()["data"] == {"items": [], "count": 0}


class TestConcurrentRequests:
    async def test_concurrent_charges_no_lost_updates(self, client: AsyncClient) -> None:
        user_id = _unique_user_id()

        responses = await asyncio.gather(*(_charge(client, user_id, 1000) for _ in range(10)))

        assert all(r.status_code == 200 for r in responses)
        assert await _point(client, user_id) == 10_000
        assert len(await _histories(client, user_id)) == 10

    async def test_concurrent_charges_stop_at_limit(self, client: AsyncClient) -> None:
        user_id = _unique_user_id()

        responses = await asyncio.gather(
            *(_charge(client, user_id, 100_000) for _ in range(11))
        )

        codes = sorted(r.status_code for r in responses)
        assert codes == [200] * 10 + [422]
        assert await _point(client, user_id) == 1_000_000
        assert len(await _histories(client, user_id)) == 10
