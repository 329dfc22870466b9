"""
Measurements app - business-scoped units of measure.

Every business owns its own unit set and its own conversion edges. A fresh
business is seeded with the default catalog (see services/seeding.py) and can
then add, rename or remove units freely.
"""
from django.db import models
from django.utils.translation import gettext_lazy as _

from tenant.managers import BusinessScopedQuerySet


class UnitGroup(models.TextChoices):
    """Physical dimension of a unit. Conversions only make sense inside one group."""
    MASS = "MASS", _("Mass (Weight)")
    LENGTH = "LENGTH", _("Length")
    VOLUME = "VOLUME", _("Volume")
    AREA = "AREA", _("Area")
    COUNT = "COUNT", _("Count/Quantity")
    TIME = "TIME", _("Time")
    OTHER = "OTHER", _("Other")


class Unit(models.Model):
    """
    Measurement unit owned by a business.

    Examples: Kilogram (kg), Gram (g), Liter (L), Pieces (pcs), Dozen (dz)

    ``is_base_unit`` marks the reference unit of a group. One base unit per
    (business, group) is a convention, not a constraint.
    """
    business = models.ForeignKey(
        'tenant.Business',
        on_delete=models.CASCADE,
        related_name='units',
    )
    name = models.CharField(
        max_length=50,
        help_text=_("Full name of the unit, e.g., 'Kilogram'")
    )
    short_name = models.CharField(
        max_length=10,
        help_text=_("Symbol of the unit, e.g., 'kg'")
    )
    unit_group = models.CharField(
        max_length=10,
        choices=UnitGroup.choices,
        default=UnitGroup.OTHER,
    )
    is_base_unit = models.BooleanField(default=False)
    allow_decimal = models.BooleanField(
        default=False,
        help_text=_("Whether quantities in this unit may be fractional")
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BusinessScopedQuerySet.as_manager()

    class Meta:
        db_table = 'units'
        verbose_name = _("Unit")
        verbose_name_plural = _("Units")
        ordering = ['unit_group', 'name']
        constraints = [
            models.UniqueConstraint(
                fields=['business', 'name'],
                name='unique_unit_name_per_business'
            ),
            models.UniqueConstraint(
                fields=['business', 'short_name'],
                name='unique_unit_short_name_per_business'
            ),
        ]
        indexes = [
            models.Index(fields=['business', 'unit_group'], name='units_busines_3d8f0b_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.short_name})"


class UnitConversion(models.Model):
    """
    Directed conversion edge between two units of the same business.

    Formula: qty_in_to_unit = qty_in_from_unit * factor

    Example: 1 kg = 1000 g → from_unit=kg, to_unit=g, factor=1000

    The edge set is neither guaranteed symmetric nor transitively closed;
    the conversion service falls back to the reverse edge when needed.
    """
    business = models.ForeignKey(
        'tenant.Business',
        on_delete=models.CASCADE,
        related_name='unit_conversions',
    )
    from_unit = models.ForeignKey(
        Unit,
        related_name='conversions_from',
        on_delete=models.CASCADE,
        help_text=_("The source unit")
    )
    to_unit = models.ForeignKey(
        Unit,
        related_name='conversions_to',
        on_delete=models.CASCADE,
        help_text=_("The target unit")
    )
    factor = models.DecimalField(
        max_digits=24,
        decimal_places=12,
        help_text=_("Multiply the from_unit quantity by this to get to_unit quantity")
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BusinessScopedQuerySet.as_manager()

    class Meta:
        db_table = 'unit_conversions'
        verbose_name = _("Unit Conversion")
        verbose_name_plural = _("Unit Conversions")
        constraints = [
            models.UniqueConstraint(
                fields=['business', 'from_unit', 'to_unit'],
                name='unique_conversion_per_business'
            ),
        ]
        indexes = [
            models.Index(fields=['business', 'from_unit'], name='unit_conver_busines_5e7a21_idx'),
        ]

    def __str__(self):
        return f"1 {self.from_unit.short_name} = {self.factor} {self.to_unit.short_name}"
