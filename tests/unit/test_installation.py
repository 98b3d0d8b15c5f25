"""Tests for installation pricing rules, service and row mapping."""

import copy
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from src.bb_common.errors import (
    DuplicateSizeError,
    DuplicateZoneError,
    InvalidFormatError,
    InvalidMultiplierError,
    InvalidPriceError,
    InvalidZoneNameError,
    LastSizeViolationError,
    LastZoneViolationError,
    SizeNotFoundError,
    ZoneNotFoundError,
)
from src.bb_installation.application.service import InstallationApplicationService
from src.bb_installation.domain import rules
from src.bb_installation.domain.models import (
    InstallationPricingCodec,
    default_installation_pricing,
)
from src.bb_installation.infrastructure.row_mappers import InstallationRowMapper
from tests.conftest import make_coordinator

ZONES = ["مصراتة", "طرابلس"]


@pytest.fixture
def pricing():
    return default_installation_pricing(ZONES)


@pytest.fixture
def service() -> InstallationApplicationService:
    coord, *_ = make_coordinator("installation_pricing")
    return InstallationApplicationService(coord, fallback=lambda: default_installation_pricing(ZONES))


class TestRules:
    def test_final_price_applies_zone_multiplier(self, pricing) -> None:
        rules.update_zone_multiplier(pricing, "طرابلس", 1.2)
        assert rules.final_price(pricing, "مصراتة", "5x13") == 1500
        assert rules.final_price(pricing, "طرابلس", "5x13") == 1800

    def test_final_price_unknown_zone(self, pricing) -> None:
        with pytest.raises(ZoneNotFoundError):
            rules.final_price(pricing, "سرت", "5x13")

    def test_set_base_price_updates_every_zone(self, pricing) -> None:
        rules.set_base_price(pricing, "3x4", 650)
        assert pricing.base_prices["3x4"] == 650
        assert all(z.prices["3x4"] == 650 for z in pricing.zones.values())

    def test_set_base_price_rejects_negative(self, pricing) -> None:
        with pytest.raises(InvalidPriceError):
            rules.set_base_price(pricing, "3x4", -1)

    def test_set_base_price_requires_known_size(self, pricing) -> None:
        before = copy.deepcopy(pricing)
        with pytest.raises(InvalidFormatError):
            rules.set_base_price(pricing, "not-a-size", 700)
        with pytest.raises(SizeNotFoundError):
            rules.set_base_price(pricing, "9x9", 700)
        assert pricing == before

    def test_add_zone_rejects_blank_name(self, pricing) -> None:
        with pytest.raises(InvalidZoneNameError):
            rules.add_zone(pricing, "  ")

    def test_add_and_remove_size(self, pricing) -> None:
        rules.add_size(pricing, "7x15", 2000)
        assert pricing.sizes[-1] == "7x15"
        assert pricing.zones["طرابلس"].prices["7x15"] == 2000

        rules.remove_size(pricing, "7x15")
        assert "7x15" not in pricing.sizes
        assert "7x15" not in pricing.base_prices
        assert all("7x15" not in z.prices for z in pricing.zones.values())

    def test_add_size_validation(self, pricing) -> None:
        with pytest.raises(InvalidFormatError):
            rules.add_size(pricing, "seven", 1)
        with pytest.raises(DuplicateSizeError):
            rules.add_size(pricing, "3x4", 1)

    def test_last_size_guard(self, pricing) -> None:
        for size in pricing.sizes[1:]:
            rules.remove_size(pricing, size)
        with pytest.raises(LastSizeViolationError):
            rules.remove_size(pricing, pricing.sizes[0])
        assert len(pricing.sizes) == 1

    def test_add_zone_copies_base_prices(self, pricing) -> None:
        rules.add_zone(pricing, "سبها", 0.8, "جنوب")
        zone = pricing.zones["سبها"]
        assert zone.prices == pricing.base_prices
        assert rules.final_price(pricing, "سبها", "5x13") == 1200

    def test_add_zone_validation(self, pricing) -> None:
        with pytest.raises(DuplicateZoneError):
            rules.add_zone(pricing, "طرابلس")
        with pytest.raises(InvalidMultiplierError):
            rules.add_zone(pricing, "سبها", 0)

    def test_remove_zone_guards(self, pricing) -> None:
        with pytest.raises(ZoneNotFoundError):
            rules.remove_zone(pricing, "سرت")
        rules.remove_zone(pricing, "طرابلس")
        with pytest.raises(LastZoneViolationError):
            rules.remove_zone(pricing, "مصراتة")

    def test_update_multiplier_rejects_zero(self, pricing) -> None:
        with pytest.raises(InvalidMultiplierError):
            rules.update_zone_multiplier(pricing, "مصراتة", 0)

    def test_statistics(self, pricing) -> None:
        stats = rules.statistics(pricing)
        assert stats.zone_count == 2
        assert stats.size_count == 6
        assert stats.min_price == 500
        assert stats.max_price == 1500
        assert stats.average_price == 933


class TestInstallationService:
    @pytest.mark.asyncio
    async def test_load_falls_back_to_defaults(self, service) -> None:
        assert await service.load() is None
        assert list(service.pricing.zones) == ZONES

    @pytest.mark.asyncio
    async def test_edit_is_persisted(self, service) -> None:
        result = await service.update_zone_multiplier("طرابلس", 1.2)
        assert result.success is True
        assert service.final_price("طرابلس", "5x13") == 1800

    @pytest.mark.asyncio
    async def test_failed_edit_leaves_state(self, service) -> None:
        with pytest.raises(LastSizeViolationError):
            for size in list(service.pricing.sizes):
                await service.remove_size(size)
        assert service.pricing.sizes == ["3x4"]

    @pytest.mark.asyncio
    async def test_generate_quote(self, service) -> None:
        await service.update_zone_multiplier("طرابلس", 1.2)

        quote = service.generate_quote(
            [("5x13", "طرابلس", 2, None), ("3x4", "مصراتة", 1, "front")],
            customer="Ali",
            discount_percent=10,
        )

        assert [i.total for i in quote.items] == [3600, 500]
        assert quote.subtotal == 4100
        assert quote.discount == 410
        assert quote.total == 3690
        assert quote.id.startswith("IQ-")

    @pytest.mark.asyncio
    async def test_edit_stamps_last_updated(self, service) -> None:
        await service.load()
        assert service.pricing.last_updated is None

        await service.set_base_price("3x4", 650)

        assert service.pricing.last_updated is not None
        assert service.pricing.last_updated.tzinfo is not None

    def test_statistics(self, service) -> None:
        assert service.statistics().max_price == 1500


class TestInstallationPersistenceMapping:
    def test_codec_round_trip(self, pricing) -> None:
        codec = InstallationPricingCodec()
        assert codec.from_document(codec.to_document(pricing)) == pricing

    def test_rows_round_trip(self, pricing) -> None:
        rules.update_zone_multiplier(pricing, "طرابلس", 1.2)
        mapper = InstallationRowMapper()

        rows = mapper.to_rows(pricing)
        restored = mapper.from_rows([SimpleNamespace(**r) for r in rows])

        assert len(rows) == 12
        assert restored.sizes == pricing.sizes
        assert restored.zones["طرابلس"].multiplier == 1.2
        assert restored.base_prices == pricing.base_prices

    def test_codec_keeps_last_updated(self, pricing) -> None:
        pricing.last_updated = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)
        codec = InstallationPricingCodec()

        document = codec.to_document(pricing)

        assert document["lastUpdated"] == "2026-03-01T09:30:00+00:00"
        assert codec.from_document(document).last_updated == pricing.last_updated

    def test_rows_carry_last_updated(self, pricing) -> None:
        stamp = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)
        pricing.last_updated = stamp
        mapper = InstallationRowMapper()

        rows = mapper.to_rows(pricing)
        restored = mapper.from_rows([SimpleNamespace(**r) for r in rows])

        assert {r["last_updated"] for r in rows} == {stamp}
        assert restored.last_updated == stamp
