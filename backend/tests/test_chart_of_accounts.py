"""Chart of accounts: cached listing, search, pagination and invalidation."""

import json

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from carobar.models.chart_of_account import ChartOfAccount
from carobar.routers.chart_of_accounts import accounts_cache_key
from carobar.utils import cache

ACCOUNTS = [
    {"account_code": "1000", "account_name": "Cash at Bank", "account_type": "ASSET"},
    {"account_code": "4000", "account_name": "Vehicle Sales", "account_type": "INCOME"},
    {
        "account_code": "2000",
        "account_name": "Shipping Payables",
        "account_type": "LIABILITY",
        "is_active": False,
    },
]


async def create_accounts(client, headers, accounts=ACCOUNTS):
    for account in accounts:
        resp = await client.post("/api/chart-of-accounts", json=account, headers=headers)
        assert resp.status_code == 201


@pytest.mark.cache
@pytest.mark.asyncio
class TestAccountListing:

    async def test_active_accounts_first_then_by_code(self, client, staff_headers):
        await create_accounts(client, staff_headers)

        resp = await client.get("/api/chart-of-accounts?pageSize=0", headers=staff_headers)

        assert resp.status_code == 200
        assert [a["account_code"] for a in resp.json()["coa"]] == ["1000", "4000", "2000"]

    async def test_pagination(self, client, staff_headers):
        await create_accounts(client, staff_headers)

        resp = await client.get(
            "/api/chart-of-accounts?page=2&pageSize=2", headers=staff_headers
        )

        body = resp.json()
        assert [a["account_code"] for a in body["coa"]] == ["2000"]
        assert body["pagination"] == {"total": 3, "page": 2, "pageSize": 2, "totalPages": 2}

    async def test_page_size_zero_returns_everything(self, client, staff_headers):
        await create_accounts(client, staff_headers)

        resp = await client.get("/api/chart-of-accounts?pageSize=0", headers=staff_headers)

        assert len(resp.json()["coa"]) == 3
        assert resp.json()["pagination"]["totalPages"] == 1

    async def test_search_is_case_insensitive(self, client, staff_headers):
        await create_accounts(client, staff_headers)

        resp = await client.get("/api/chart-of-accounts?search=payable", headers=staff_headers)

        assert [a["account_code"] for a in resp.json()["coa"]] == ["2000"]

    async def test_invalid_page_is_rejected(self, client, staff_headers):
        resp = await client.get("/api/chart-of-accounts?page=0", headers=staff_headers)

        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.cache
@pytest.mark.asyncio
class TestAccountCache:

    async def test_list_is_cached_per_company(self, client, staff_headers, fake_redis):
        await create_accounts(client, staff_headers)

        await client.get("/api/chart-of-accounts", headers=staff_headers)

        key = accounts_cache_key("company-a")
        assert key in fake_redis.store
        assert fake_redis.ttls[key] == 30 * 60
        assert len(json.loads(fake_redis.store[key])) == 3

    async def test_cache_hit_skips_the_database(
        self, client, session_factory, staff_headers, fake_redis
    ):
        await client.get("/api/chart-of-accounts", headers=staff_headers)

        # Written behind the API's back: invisible until the cache is dropped
        async with session_factory() as session:
            session.add(ChartOfAccount(
                company_id="company-a",
                account_code="9000",
                account_name="Suspense",
                account_type="ASSET",
            ))
            await session.commit()

        resp = await client.get("/api/chart-of-accounts", headers=staff_headers)
        assert resp.json()["coa"] == []

    async def test_writes_invalidate_the_cache(self, client, staff_headers, fake_redis):
        key = accounts_cache_key("company-a")
        await create_accounts(client, staff_headers, ACCOUNTS[:1])
        await client.get("/api/chart-of-accounts", headers=staff_headers)
        assert key in fake_redis.store

        await create_accounts(client, staff_headers, ACCOUNTS[1:2])
        assert key not in fake_redis.store

        await client.get("/api/chart-of-accounts", headers=staff_headers)
        resp = await client.put(
            "/api/chart-of-accounts",
            json={
                "oldAccount": {"account_code": "4000"},
                "newAccount": {**ACCOUNTS[1], "account_code": "4100"},
            },
            headers=staff_headers,
        )
        assert resp.status_code == 200
        assert resp.json()["account"]["account_code"] == "4100"
        assert key not in fake_redis.store

        await client.get("/api/chart-of-accounts", headers=staff_headers)
        resp = await client.delete("/api/chart-of-accounts?code=4100", headers=staff_headers)
        assert resp.status_code == 200
        assert key not in fake_redis.store

        listing = await client.get("/api/chart-of-accounts", headers=staff_headers)
        assert [a["account_code"] for a in listing.json()["coa"]] == ["1000"]

    async def test_failed_write_keeps_the_cache(self, client, staff_headers, fake_redis):
        key = accounts_cache_key("company-a")
        await create_accounts(client, staff_headers, ACCOUNTS[:1])
        await client.get("/api/chart-of-accounts", headers=staff_headers)

        resp = await client.post(
            "/api/chart-of-accounts", json=ACCOUNTS[0], headers=staff_headers
        )

        assert resp.status_code == 409
        assert key in fake_redis.store

    async def test_search_bypasses_the_cache(self, client, staff_headers, fake_redis):
        await create_accounts(client, staff_headers)

        await client.get("/api/chart-of-accounts?search=cash", headers=staff_headers)

        assert fake_redis.store == {}

    async def test_companies_do_not_share_cache_entries(
        self, client, staff_headers, other_company_headers
    ):
        await create_accounts(client, staff_headers)
        await client.get("/api/chart-of-accounts", headers=staff_headers)

        resp = await client.get("/api/chart-of-accounts", headers=other_company_headers)

        assert resp.json()["coa"] == []

    async def test_redis_outage_falls_back_to_database(
        self, client, staff_headers, monkeypatch
    ):
        class BrokenRedis:
            async def get(self, key):
                raise RedisConnectionError("redis down")

            async def delete(self, *keys):
                raise RedisConnectionError("redis down")

        monkeypatch.setattr(cache, "_redis_client", BrokenRedis())

        await create_accounts(client, staff_headers, ACCOUNTS[:1])
        resp = await client.get("/api/chart-of-accounts", headers=staff_headers)

        assert resp.status_code == 200
        assert [a["account_code"] for a in resp.json()["coa"]] == ["1000"]
