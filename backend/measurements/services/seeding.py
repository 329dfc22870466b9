"""
Default unit catalog and per-business seeding.

Every new business gets 11 units in four groups and the 16 conversion edges
between them. Seeding runs after the business row is committed (see
measurements.signals) and never rolls the business back.
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from django.db import transaction

from measurements.exceptions import UnitsAlreadySeededError
from measurements.models import Unit, UnitConversion, UnitGroup

logger = logging.getLogger(__name__)


# kg, L and m allow decimals; pieces and every derived unit do not
DEFAULT_UNITS = [
    # Count units
    {"name": "Pieces", "short_name": "pcs", "unit_group": UnitGroup.COUNT, "is_base_unit": True, "allow_decimal": False},
    {"name": "Box", "short_name": "box", "unit_group": UnitGroup.COUNT, "is_base_unit": False, "allow_decimal": False},
    {"name": "Dozen", "short_name": "dz", "unit_group": UnitGroup.COUNT, "is_base_unit": False, "allow_decimal": False},

    # Mass units
    {"name": "Kilogram", "short_name": "kg", "unit_group": UnitGroup.MASS, "is_base_unit": True, "allow_decimal": True},
    {"name": "Gram", "short_name": "g", "unit_group": UnitGroup.MASS, "is_base_unit": False, "allow_decimal": False},
    {"name": "Milligram", "short_name": "mg", "unit_group": UnitGroup.MASS, "is_base_unit": False, "allow_decimal": False},

    # Volume units
    {"name": "Liter", "short_name": "L", "unit_group": UnitGroup.VOLUME, "is_base_unit": True, "allow_decimal": True},
    {"name": "Milliliter", "short_name": "mL", "unit_group": UnitGroup.VOLUME, "is_base_unit": False, "allow_decimal": False},

    # Length units
    {"name": "Meter", "short_name": "m", "unit_group": UnitGroup.LENGTH, "is_base_unit": True, "allow_decimal": True},
    {"name": "Centimeter", "short_name": "cm", "unit_group": UnitGroup.LENGTH, "is_base_unit": False, "allow_decimal": False},
    {"name": "Millimeter", "short_name": "mm", "unit_group": UnitGroup.LENGTH, "is_base_unit": False, "allow_decimal": False},
]

# Format: (from_short_name, to_short_name, factor)
# Formula: qty_in_to = qty_in_from * factor
DEFAULT_CONVERSIONS = [
    # Mass conversions
    ("kg", "g", Decimal("1000")),
    ("g", "kg", Decimal("0.001")),
    ("kg", "mg", Decimal("1000000")),
    ("mg", "kg", Decimal("0.000001")),
    ("g", "mg", Decimal("1000")),
    ("mg", "g", Decimal("0.001")),

    # Volume conversions
    ("L", "mL", Decimal("1000")),
    ("mL", "L", Decimal("0.001")),

    # Length conversions
    ("m", "cm", Decimal("100")),
    ("cm", "m", Decimal("0.01")),
    ("m", "mm", Decimal("1000")),
    ("mm", "m", Decimal("0.001")),
    ("cm", "mm", Decimal("10")),
    ("mm", "cm", Decimal("0.1")),

    # Count conversions
    ("dz", "pcs", Decimal("12")),
    ("pcs", "dz", (Decimal(1) / Decimal(12)).quantize(Decimal("0.000000000001"))),
]


class SeedStatus:
    COMPLETE = "complete"
    PARTIAL = "partial"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class SeedOutcome:
    """
    Result of a best-effort seeding run.

    ``status`` tells a full success apart from a partial one: callers must not
    read ``units_created > 0`` as "the catalog is in place".
    """
    business_id: Optional[int]
    status: str
    units: List[Unit] = field(default_factory=list)
    conversions: List[UnitConversion] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def units_created(self) -> int:
        return len(self.units)

    @property
    def conversions_created(self) -> int:
        return len(self.conversions)

    @property
    def ok(self) -> bool:
        return self.status in (SeedStatus.COMPLETE, SeedStatus.SKIPPED)

    @property
    def unit_short_names(self) -> List[str]:
        return [unit.short_name for unit in self.units]


def seed_default_units(business) -> SeedOutcome:
    """
    Seed the default units and conversions for one business.

    Units are created first and collected into a short_name → Unit map; edges
    whose endpoints are missing from the map are skipped.

    Raises:
        UnitsAlreadySeededError: the business already has at least one unit.
    """
    # TODO: the exists() check and the inserts are not atomic; two concurrent
    # seeders can both pass it. Take a row lock on the business to close this.
    if Unit.objects.for_business(business).exists():
        raise UnitsAlreadySeededError(business)

    outcome = SeedOutcome(business_id=business.pk, status=SeedStatus.COMPLETE)

    skipped = 0
    with transaction.atomic():
        unit_map = {}
        for unit_data in DEFAULT_UNITS:
            unit = Unit.objects.create(business=business, **unit_data)
            unit_map[unit.short_name] = unit
            outcome.units.append(unit)

        for from_short, to_short, factor in DEFAULT_CONVERSIONS:
            from_unit = unit_map.get(from_short)
            to_unit = unit_map.get(to_short)

            if not from_unit or not to_unit:
                skipped += 1
                continue

            outcome.conversions.append(
                UnitConversion.objects.create(
                    business=business,
                    from_unit=from_unit,
                    to_unit=to_unit,
                    factor=factor,
                )
            )

    if skipped:
        outcome.status = SeedStatus.PARTIAL
        logger.warning(f"Skipped {skipped} default conversions with unresolved units for business {business.pk}")

    logger.info(
        f"Seeded {outcome.units_created} units and {outcome.conversions_created} "
        f"conversions for business {business.pk}"
    )
    return outcome


def seed_default_units_best_effort(business) -> SeedOutcome:
    """
    Seed a business without ever raising.

    Used by the bootstrap path where a seeding failure must not undo the
    business creation. Failures are logged and reported in the outcome.
    """
    business_id = getattr(business, "pk", None)
    try:
        return seed_default_units(business)
    except UnitsAlreadySeededError:
        logger.info(f"Business {business_id} already has units, skipping default seeding")
        return SeedOutcome(business_id=business_id, status=SeedStatus.SKIPPED)
    except Exception as exc:
        logger.error(f"Default units creation failed for business {business_id}", exc_info=True)
        return SeedOutcome(business_id=business_id, status=SeedStatus.FAILED, error=str(exc))
