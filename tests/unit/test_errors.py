"""Tests for bb_common.errors, bb_common.enums and bb_common.response."""

from src.bb_common.enums import CustomerType, KVBackendKind, PriceTier, StorageTier
from src.bb_common.errors import (
    AppError,
    DuplicateSizeError,
    DuplicateZoneError,
    InvalidFormatError,
    InvalidMultiplierError,
    InvalidPriceError,
    InvalidZoneNameError,
    LastSizeViolationError,
    LastZoneViolationError,
    LocalCacheError,
    PersistencePartialFailure,
    RemoteUnavailableError,
    SizeNotFoundError,
    ZoneNotFoundError,
)
from src.bb_common.response import ApiResponse, error_response, success_response


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError(code=9002, message="Internal error")
        assert err.code == 9002
        assert err.http_status == 500
        assert isinstance(err, Exception)


class TestCatalogErrors:
    def test_codes_and_statuses(self) -> None:
        cases = [
            (InvalidFormatError("x"), 6001, 422),
            (DuplicateSizeError("4x12"), 6002, 409),
            (LastSizeViolationError("4x12"), 6003, 422),
            (LastZoneViolationError("مصراتة"), 6004, 422),
            (InvalidMultiplierError(0), 6005, 422),
            (ZoneNotFoundError("X"), 6006, 404),
            (DuplicateZoneError("X"), 6007, 409),
            (InvalidPriceError(-1), 6008, 422),
            (SizeNotFoundError("9x9"), 6009, 404),
            (InvalidZoneNameError(" "), 6010, 422),
        ]
        for err, code, status in cases:
            assert err.code == code
            assert err.http_status == status

    def test_message_carries_value(self) -> None:
        assert "4x12" in DuplicateSizeError("4x12").message
        assert "-1" in InvalidMultiplierError(-1).message


class TestPersistenceErrors:
    def test_remote_unavailable_keeps_tier(self) -> None:
        err = RemoteUnavailableError("relational", "connection refused")
        assert err.code == 9101
        assert err.tier == "relational"
        assert "connection refused" in err.message

    def test_partial_failure(self) -> None:
        err = PersistencePartialFailure("rental_pricing")
        assert err.code == 9102
        assert "rental_pricing" in err.message

    def test_local_cache_error(self) -> None:
        err = LocalCacheError("pricing_sizes", "disk full")
        assert err.code == 9103
        assert err.slot == "pricing_sizes"


class TestEnums:
    def test_values_are_storage_keys(self) -> None:
        assert CustomerType.INDIVIDUALS.value == "individuals"
        assert PriceTier("B") is PriceTier.B
        assert [t.value for t in StorageTier] == ["relational", "key_value", "local"]
        assert KVBackendKind("none") is KVBackendKind.NONE


class TestApiResponse:
    def test_success_response(self) -> None:
        resp = success_response({"a": 1})
        assert isinstance(resp, ApiResponse)
        assert resp.code == 0
        assert resp.data == {"a": 1}
        assert resp.request_id.startswith("req_")

    def test_error_response(self) -> None:
        resp = error_response(6006, "Pricing zone not found: X")
        assert resp.code == 6006
        assert resp.data is None
