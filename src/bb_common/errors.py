"""Unified error codes and custom exceptions.

Error code ranges:
  6xxx: Pricing catalog (sizes, zones, prices, multipliers)
  9xxx: System / persistence
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 6xxx: Pricing catalog ---

class InvalidFormatError(AppError):
    def __init__(self, size: str) -> None:
        super().__init__(6001, f"Invalid billboard size format: {size!r} (expected e.g. '4x12')", 422)


class DuplicateSizeError(AppError):
    def __init__(self, size: str) -> None:
        super().__init__(6002, f"Billboard size already exists: {size}", 409)


class LastSizeViolationError(AppError):
    def __init__(self, size: str) -> None:
        super().__init__(6003, f"Cannot remove the last remaining size: {size}", 422)


class LastZoneViolationError(AppError):
    def __init__(self, zone_name: str) -> None:
        super().__init__(6004, f"Cannot remove the last remaining zone: {zone_name}", 422)


class InvalidMultiplierError(AppError):
    def __init__(self, value: float) -> None:
        super().__init__(6005, f"Multiplier must be greater than 0, got {value}", 422)


class ZoneNotFoundError(AppError):
    def __init__(self, zone_name: str) -> None:
        super().__init__(6006, f"Pricing zone not found: {zone_name}", 404)


class DuplicateZoneError(AppError):
    def __init__(self, zone_name: str) -> None:
        super().__init__(6007, f"Pricing zone already exists: {zone_name}", 409)


class InvalidPriceError(AppError):
    def __init__(self, price: int) -> None:
        super().__init__(6008, f"Price must be >= 0, got {price}", 422)


class SizeNotFoundError(AppError):
    def __init__(self, size: str) -> None:
        super().__init__(6009, f"Billboard size not found: {size}", 404)


class InvalidZoneNameError(AppError):
    def __init__(self, zone_name: str) -> None:
        super().__init__(6010, f"Zone name must not be blank: {zone_name!r}", 422)


# --- 9xxx: System / persistence ---

class RemoteUnavailableError(AppError):
    """A remote storage tier could not serve the call.

    Raised by remote backends and always caught by the persistence coordinator,
    which falls through to the next tier.
    """

    def __init__(self, tier: str, detail: str) -> None:
        self.tier = tier
        super().__init__(9101, f"{tier} tier unavailable: {detail}", 503)


class PersistencePartialFailure(AppError):
    """Both remote tiers failed but the local cache write succeeded.

    Carried on SaveResult as a warning; never raised to callers.
    """

    def __init__(self, aggregate: str) -> None:
        super().__init__(
            9102,
            f"{aggregate} saved locally only; remote tiers unreachable",
            200,
        )


class LocalCacheError(AppError):
    def __init__(self, slot: str, detail: str) -> None:
        self.slot = slot
        super().__init__(9103, f"Local cache failure for {slot}: {detail}", 500)

