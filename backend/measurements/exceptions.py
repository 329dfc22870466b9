"""
Custom exceptions for units of measure.
"""


class MeasurementsError(Exception):
    """Base exception for measurement-related errors."""
    status_code = 400
    code = "measurements_error"


class ConversionUnavailableError(MeasurementsError):
    """Raised when no conversion edge connects two units."""
    status_code = 422
    code = "conversion_unavailable"

    def __init__(self, from_unit, to_unit, message=None):
        self.from_unit = from_unit
        self.to_unit = to_unit
        if message is None:
            message = f"No conversion found between '{from_unit}' and '{to_unit}'"
        super().__init__(message)


class UnitGroupMismatchError(ConversionUnavailableError):
    """Raised when converting between units of different groups (e.g. MASS to LENGTH)."""
    code = "unit_group_mismatch"

    def __init__(self, from_unit, to_unit, message=None):
        if message is None:
            message = (
                f"Cannot convert between different unit groups: "
                f"'{from_unit}' is {from_unit.unit_group}, '{to_unit}' is {to_unit.unit_group}"
            )
        super().__init__(from_unit, to_unit, message=message)


class UnitNotFoundError(MeasurementsError):
    """Raised when a unit reference does not resolve inside the business."""
    status_code = 404
    code = "unit_not_found"

    def __init__(self, identifier, message=None):
        self.identifier = identifier
        if message is None:
            message = f"Unit '{identifier}' not found"
        super().__init__(message)


class UnitsAlreadySeededError(MeasurementsError):
    """Raised when seeding a business that already has units."""
    status_code = 409
    code = "conflict"

    def __init__(self, business, message=None):
        self.business = business
        if message is None:
            message = "Units already exist for this business. Use the Units API to manage them."
        super().__init__(message)


class InvalidUnitGroupError(MeasurementsError):
    """Raised when a unit group name is not part of the catalog."""
    status_code = 400
    code = "invalid_unit_group"

    def __init__(self, group, valid_groups=(), message=None):
        self.group = group
        if message is None:
            message = f"Invalid unit group '{group}'. Valid groups: {', '.join(valid_groups)}"
        super().__init__(message)
