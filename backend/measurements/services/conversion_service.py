"""
Unit conversion service.

Handles converting quantities between the units of one business.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Optional, Tuple

from measurements.exceptions import (
    ConversionUnavailableError,
    InvalidUnitGroupError,
    UnitGroupMismatchError,
    UnitNotFoundError,
)
from measurements.models import Unit, UnitConversion, UnitGroup


# Human readable catalog of unit groups, in display order
UNIT_GROUP_EXAMPLES = {
    UnitGroup.MASS: "kg, g, mg, tonne",
    UnitGroup.LENGTH: "m, cm, mm, km",
    UnitGroup.VOLUME: "L, mL, gallon",
    UnitGroup.AREA: "m², cm², ft²",
    UnitGroup.COUNT: "pcs, dozen, box",
    UnitGroup.TIME: "hour, minute, day",
    UnitGroup.OTHER: "custom units",
}


def get_unit_group_catalog():
    """Static list of unit groups: value, label and example units."""
    return [
        {"value": group.value, "label": str(group.label), "examples": UNIT_GROUP_EXAMPLES[group]}
        for group in UnitGroup
    ]


def normalize_unit_group(group: str) -> str:
    """Validate a unit group name (case-insensitive) and return its canonical value."""
    value = (group or "").strip().upper()
    if value not in UnitGroup.values:
        raise InvalidUnitGroupError(group, valid_groups=UnitGroup.values)
    return value


@dataclass
class ConversionResult:
    original_value: Decimal
    original_unit: Unit
    converted_value: Decimal
    converted_unit: Unit
    factor: Decimal


class ConversionService:
    """
    Service for converting quantities between units of a single business.

    Lookup order for A → B:
    1. A and B are the same unit: the quantity is returned unchanged
    2. Direct edge A → B: quantity * factor
    3. Reverse edge B → A: quantity / factor

    There is no multi-hop traversal: if neither edge exists the conversion is
    unavailable, even when a path through a third unit exists.

    Usage:
        service = ConversionService(business)
        grams = service.convert(Decimal("2.5"), "kg", "g")   # Decimal("2500")
    """

    def __init__(self, business):
        self.business = business
        self._conversion_cache = {}
        self._unit_cache = {}

    # ------------------------------------------------------------------
    # Unit lookup
    # ------------------------------------------------------------------

    def units(self):
        return Unit.objects.for_business(self.business)

    def resolve_unit(self, identifier) -> Unit:
        """
        Resolve a unit inside this business.

        Accepts a Unit instance, a unit id or a short name such as "kg". A
        numeric string is tried as a short name before it is tried as an id.

        Raises:
            UnitNotFoundError: the unit does not exist in this business.
        """
        if isinstance(identifier, Unit):
            if identifier.business_id != getattr(self.business, "pk", self.business):
                raise UnitNotFoundError(identifier.short_name)
            return identifier

        if identifier is None or str(identifier).strip() == "":
            raise UnitNotFoundError(identifier, message="Unit reference is required")

        key = str(identifier).strip()
        cache_key = (isinstance(identifier, int), key)
        if cache_key in self._unit_cache:
            return self._unit_cache[cache_key]

        # Integers are ids; strings match a short name first, then an id
        if isinstance(identifier, int):
            unit = self.units().filter(pk=identifier).first()
        else:
            unit = self.units().filter(short_name=key).first()
            if unit is None and key.isdigit():
                unit = self.units().filter(pk=int(key)).first()

        if unit is None:
            raise UnitNotFoundError(key)

        self._unit_cache[cache_key] = unit
        return unit

    def get_units_by_group(self, group: str):
        return self.units().filter(unit_group=normalize_unit_group(group)).order_by("name")

    def get_groups_in_use(self):
        return list(
            self.units().order_by("unit_group").values_list("unit_group", flat=True).distinct()
        )

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def convert(
        self,
        quantity,
        from_unit,
        to_unit,
        precision: Optional[int] = None,
        strict: bool = True,
    ) -> Decimal:
        """
        Convert a quantity from one unit to another.

        Args:
            quantity: The quantity to convert (Decimal, int, float or numeric string).
            from_unit: The source unit (instance, id or short name).
            to_unit: The target unit (instance, id or short name).
            precision: Optional decimal places to round to (ROUND_HALF_UP).
            strict: Reject units of different groups before looking for edges.

        Returns:
            The converted quantity.

        Raises:
            UnitNotFoundError: a unit does not belong to this business.
            UnitGroupMismatchError: strict mode and the groups differ.
            ConversionUnavailableError: no direct or reverse edge exists.
        """
        return self.convert_with_details(quantity, from_unit, to_unit, precision, strict).converted_value

    def convert_with_details(
        self,
        quantity,
        from_unit,
        to_unit,
        precision: Optional[int] = None,
        strict: bool = True,
    ) -> ConversionResult:
        quantity = self._to_decimal(quantity)
        from_unit = self.resolve_unit(from_unit)
        to_unit = self.resolve_unit(to_unit)

        # Same unit, no conversion needed
        if from_unit.pk == to_unit.pk:
            return ConversionResult(quantity, from_unit, quantity, to_unit, Decimal("1"))

        if strict and from_unit.unit_group != to_unit.unit_group:
            raise UnitGroupMismatchError(from_unit, to_unit)

        edge = self._find_edge(from_unit, to_unit)
        if edge is None:
            raise ConversionUnavailableError(from_unit.short_name, to_unit.short_name)

        factor, inverted = edge
        if inverted:
            result = quantity / factor
            effective_factor = Decimal("1") / factor
        else:
            result = quantity * factor
            effective_factor = factor

        if precision is not None:
            with localcontext() as ctx:
                # quantize needs every integer digit plus the requested places
                ctx.prec = max(ctx.prec, result.adjusted() + precision + 1)
                result = result.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)

        return ConversionResult(quantity, from_unit, result, to_unit, effective_factor)

    def can_convert(self, from_unit, to_unit, strict: bool = True) -> bool:
        from_unit = self.resolve_unit(from_unit)
        to_unit = self.resolve_unit(to_unit)

        if from_unit.pk == to_unit.pk:
            return True
        if strict and from_unit.unit_group != to_unit.unit_group:
            return False
        return self._find_edge(from_unit, to_unit) is not None

    def _find_edge(self, from_unit: Unit, to_unit: Unit) -> Optional[Tuple[Decimal, bool]]:
        """
        Find the edge between two units.

        Returns:
            (factor, inverted) where ``inverted`` is True when the reverse edge
            to_unit → from_unit was used, or None if neither edge exists.
        """
        cache_key = (from_unit.pk, to_unit.pk)
        if cache_key in self._conversion_cache:
            return self._conversion_cache[cache_key]

        base_qs = UnitConversion.objects.for_business(self.business)

        edge = None

        conversion = base_qs.filter(from_unit=from_unit, to_unit=to_unit).first()
        if conversion and conversion.factor > 0:
            edge = (conversion.factor, False)

        if edge is None:
            inverse = base_qs.filter(from_unit=to_unit, to_unit=from_unit).first()
            if inverse and inverse.factor > 0:
                edge = (inverse.factor, True)

        self._conversion_cache[cache_key] = edge
        return edge

    @staticmethod
    def _to_decimal(quantity) -> Decimal:
        if isinstance(quantity, Decimal):
            return quantity
        if isinstance(quantity, float):
            return Decimal(str(quantity))
        return Decimal(quantity)
