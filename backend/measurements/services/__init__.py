from .conversion_service import (
    ConversionResult,
    ConversionService,
    get_unit_group_catalog,
    normalize_unit_group,
)
from .seeding import (
    DEFAULT_CONVERSIONS,
    DEFAULT_UNITS,
    SeedOutcome,
    SeedStatus,
    seed_default_units,
    seed_default_units_best_effort,
)

__all__ = [
    "ConversionResult",
    "ConversionService",
    "get_unit_group_catalog",
    "normalize_unit_group",
    "DEFAULT_CONVERSIONS",
    "DEFAULT_UNITS",
    "SeedOutcome",
    "SeedStatus",
    "seed_default_units",
    "seed_default_units_best_effort",
]
