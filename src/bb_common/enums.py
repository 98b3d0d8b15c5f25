"""Global enums — values double as DB column values and JSON document keys."""

from enum import Enum


class CustomerType(str, Enum):
    MARKETERS = "marketers"
    INDIVIDUALS = "individuals"
    COMPANIES = "companies"


class PriceTier(str, Enum):
    """Price-list quality level: A is the primary list, B a derived markup list."""
    A = "A"
    B = "B"


class StorageTier(str, Enum):
    """Persistence tiers in read/write priority order."""
    RELATIONAL = "relational"
    KEY_VALUE = "key_value"
    LOCAL = "local"


class MultiplierImpact(str, Enum):
    HIGH_INCREASE = "high_increase"
    MODERATE_INCREASE = "moderate_increase"
    BASE = "base"
    MODERATE_DECREASE = "moderate_decrease"
    HIGH_DECREASE = "high_decrease"


class KVBackendKind(str, Enum):
    HTTP = "http"
    REDIS = "redis"
    NONE = "none"
