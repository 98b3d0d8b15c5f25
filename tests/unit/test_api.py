"""API tests through ASGITransport with a local-cache-only container."""

import pytest


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client) -> None:
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


class TestPricingApi:
    @pytest.mark.asyncio
    async def test_list_sizes(self, client) -> None:
        resp = await client.get("/api/v1/pricing/sizes")
        body = resp.json()
        assert resp.status_code == 200
        assert body["code"] == 0
        assert body["data"][0] == "5x13"
        assert body["request_id"].startswith("req_")

    @pytest.mark.asyncio
    async def test_add_size_then_resolve(self, client) -> None:
        resp = await client.post(
            "/api/v1/pricing/sizes", json={"size": "7x15", "reference_price": 1000}
        )
        data = resp.json()["data"]
        assert resp.status_code == 200
        # No remote tier configured: saved to the local cache only.
        assert data["success"] is False
        assert data["source"] == "local"
        assert data["warning_code"] == 9102

        resp = await client.get(
            "/api/v1/pricing/resolve",
            params={"size": "7x15", "zone": "مصراتة", "tier": "B", "duration": 1},
        )
        assert resp.json()["data"]["price"] == 1200

    @pytest.mark.asyncio
    async def test_duplicate_size_is_conflict(self, client) -> None:
        resp = await client.post(
            "/api/v1/pricing/sizes", json={"size": "4x12", "reference_price": 1000}
        )
        assert resp.status_code == 409
        assert resp.json()["code"] == 6002
        assert resp.json()["data"] is None

    @pytest.mark.asyncio
    async def test_unknown_zone_is_not_found(self, client) -> None:
        resp = await client.get("/api/v1/pricing/zones/سرت")
        assert resp.status_code == 404
        assert resp.json()["code"] == 6006

    @pytest.mark.asyncio
    async def test_resolve_with_city(self, client) -> None:
        resp = await client.get(
            "/api/v1/pricing/resolve",
            params={"size": "3x6", "zone": "مصراتة", "duration": 1, "city": "طرابلس"},
        )
        data = resp.json()["data"]
        assert data["price"] == 1000
        assert data["city_price"] == 1200

    @pytest.mark.asyncio
    async def test_quote(self, client) -> None:
        resp = await client.post("/api/v1/pricing/quotes", json={
            "customer": {"name": "Ali", "phone": "0910000000"},
            "billboards": [
                {"id": "BB-1", "name": "Coastal", "size": "5x13", "municipality": "مصراتة"},
            ],
            "package_months": 3,
        })
        data = resp.json()["data"]
        assert resp.status_code == 200
        assert data["total"] == 9975
        assert data["package"]["discount"] == 5
        assert data["items"][0]["tier"] == "A"

    @pytest.mark.asyncio
    async def test_blank_zone_resolves_default_without_creating_zone(self, client) -> None:
        before = (await client.get("/api/v1/pricing/zones")).json()["data"]
        resp = await client.get(
            "/api/v1/pricing/resolve", params={"size": "4x12", "zone": "   ", "duration": 1}
        )
        assert resp.status_code == 200
        assert resp.json()["data"]["price"] == 2800
        assert (await client.get("/api/v1/pricing/zones")).json()["data"] == before

    @pytest.mark.asyncio
    async def test_storage_status_without_remotes(self, client) -> None:
        resp = await client.get("/api/v1/pricing/storage/status")
        assert resp.json()["data"] == {
            "tiers": ["local"], "relational": None, "key_value": None, "local": True,
        }


class TestMultiplierApi:
    @pytest.mark.asyncio
    async def test_zero_multiplier_rejected(self, client) -> None:
        resp = await client.put("/api/v1/multipliers/طرابلس", json={"multiplier": 0})
        assert resp.status_code == 422
        assert resp.json()["code"] == 6005

    @pytest.mark.asyncio
    async def test_set_and_get(self, client) -> None:
        await client.put("/api/v1/multipliers/غات", json={"multiplier": 0.7})
        resp = await client.get("/api/v1/multipliers/غات")
        data = resp.json()["data"]
        assert data["multiplier"] == 0.7
        assert data["impact"] == "high_decrease"

    @pytest.mark.asyncio
    async def test_summary(self, client) -> None:
        resp = await client.get("/api/v1/multipliers/summary")
        assert resp.json()["data"]["highest_city"] == "طرابلس"

    @pytest.mark.asyncio
    async def test_matrix_fallback(self, client) -> None:
        resp = await client.get("/api/v1/multipliers/matrix")
        data = resp.json()["data"]
        assert data["from_database"] is False
        assert data["rows"][0]["prices"]["1"] == {"A": 3500, "B": 4200}

    @pytest.mark.asyncio
    async def test_matrix_add_size_without_database(self, client) -> None:
        resp = await client.post(
            "/api/v1/multipliers/matrix/sizes", json={"size": "7x15", "price_a": 1000}
        )
        body = resp.json()
        assert resp.status_code == 200
        assert body["data"]["success"] is False
        assert body["message"] == "Pricing matrix has no database"

    @pytest.mark.asyncio
    async def test_sync_from_remote_without_remotes(self, client) -> None:
        resp = await client.post("/api/v1/multipliers/storage/sync-from-remote")
        data = resp.json()["data"]
        assert resp.status_code == 200
        assert data["success"] is False
        assert data["message"].startswith("No remote copy")

    @pytest.mark.asyncio
    async def test_sync_to_remote_stays_local(self, client) -> None:
        resp = await client.post("/api/v1/multipliers/storage/sync-to-remote")
        assert resp.status_code == 200
        assert resp.json()["data"]["success"] is False


class TestInstallationApi:
    @pytest.mark.asyncio
    async def test_statistics(self, client) -> None:
        resp = await client.get("/api/v1/installation/statistics")
        assert resp.json()["data"]["max_price"] == 1500

    @pytest.mark.asyncio
    async def test_quote(self, client) -> None:
        resp = await client.post("/api/v1/installation/quotes", json={
            "customer": "Ali",
            "items": [{"size": "3x4", "zone": "مصراتة", "quantity": 2}],
            "discount_percent": 10,
        })
        data = resp.json()["data"]
        assert data["subtotal"] == 1000
        assert data["total"] == 900

    @pytest.mark.asyncio
    async def test_unknown_base_price_size_is_not_found(self, client) -> None:
        resp = await client.put("/api/v1/installation/base-prices/9x9", json={"price": 700})
        assert resp.status_code == 404
        assert resp.json()["code"] == 6009

        data = (await client.get("/api/v1/installation")).json()["data"]
        assert "9x9" not in data["sizes"]

    @pytest.mark.asyncio
    async def test_edit_reports_last_updated(self, client) -> None:
        before = (await client.get("/api/v1/installation")).json()["data"]
        assert before["last_updated"] is None

        await client.put("/api/v1/installation/base-prices/3x4", json={"price": 650})

        after = (await client.get("/api/v1/installation")).json()["data"]
        assert after["last_updated"] is not None

    @pytest.mark.asyncio
    async def test_sync_from_remote_without_remotes(self, client) -> None:
        resp = await client.post("/api/v1/installation/storage/sync-from-remote")
        data = resp.json()["data"]
        assert data["success"] is False
        assert data["message"].startswith("No remote copy")

    @pytest.mark.asyncio
    async def test_sync_to_remote_stays_local(self, client) -> None:
        resp = await client.post("/api/v1/installation/storage/sync-to-remote")
        assert resp.status_code == 200
        assert resp.json()["data"]["success"] is False
