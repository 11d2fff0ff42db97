"""Health and readiness endpoints."""

import pytest

from carobar.routers import health


@pytest.mark.asyncio
class TestHealth:

    async def test_health(self, client):
        resp = await client.get("/health")

        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"
        assert resp.json()["service"] == "Carobar"

    async def test_ready_when_dependencies_answer(self, client, test_engine, monkeypatch):
        monkeypatch.setattr(health, "engine", test_engine)

        resp = await client.get("/health/ready")

        assert resp.status_code == 200
        assert resp.json()["checks"] == {"service": "ok", "database": "ok", "redis": "ok"}

    async def test_not_ready_when_redis_is_down(self, client, test_engine, monkeypatch):
        class DownRedis:
            async def ping(self):
                raise ConnectionError("connection refused")

        async def get_down_redis():
            return DownRedis()

        monkeypatch.setattr(health, "engine", test_engine)
        monkeypatch.setattr(health, "get_redis", get_down_redis)

        resp = await client.get("/health/ready")

        assert resp.status_code == 503
        assert resp.json()["status"] == "unhealthy"
        assert resp.json()["checks"]["redis"].startswith("error:")
