from django.db import models
from django.utils.translation import gettext_lazy as _

from tenant.managers import BusinessScopedQuerySet


class Business(models.Model):
    """
    Root entity for multi-tenancy.

    Every business-scoped record (units, conversions, locations, profiles...)
    points back here through a ``business`` foreign key. Businesses are created
    by registration and are never deleted through the API.
    """
    business_name = models.CharField(
        max_length=100,
        help_text=_("Display name of the business")
    )
    start_date = models.DateTimeField(null=True, blank=True)
    logo_url = models.CharField(max_length=500, blank=True)
    business_contact = models.CharField(max_length=50, blank=True)

    # Address
    country = models.CharField(max_length=100)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100)
    zip_code = models.CharField(max_length=20)
    landmark = models.CharField(max_length=255)

    # Regional settings
    currency = models.CharField(max_length=10, default="USD")
    timezone = models.CharField(max_length=64, default="Asia/Kolkata")
    website = models.CharField(max_length=255, blank=True)
    alternate_contact = models.CharField(max_length=50, blank=True)

    # Tax registration
    tax1_name = models.CharField(max_length=100, blank=True)
    tax1_number = models.CharField(max_length=100, blank=True)
    tax2_name = models.CharField(max_length=100, blank=True)
    tax2_number = models.CharField(max_length=100, blank=True)

    # Accounting
    financial_year_start = models.CharField(max_length=20, default="January")
    stock_accounting_method = models.CharField(
        max_length=50,
        default="FIFO (First In First Out)"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'businesses'
        ordering = ['business_name']
        verbose_name = _("Business")
        verbose_name_plural = _("Businesses")

    def __str__(self):
        return self.business_name

    def get_default_location(self):
        return self.locations.filter(is_default=True).first()


class BusinessLocation(models.Model):
    """
    A physical store location belonging to a business.

    One default location ("Main Store") is created at registration.
    """
    business = models.ForeignKey(
        Business,
        on_delete=models.CASCADE,
        related_name='locations',
    )
    name = models.CharField(max_length=255)
    location_id = models.CharField(
        max_length=50,
        unique=True,
        help_text=_("Human readable identifier, e.g. LOC-12-001")
    )
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100, blank=True)
    zip_code = models.CharField(max_length=20, blank=True)
    country = models.CharField(max_length=100)
    landmark = models.CharField(max_length=255, blank=True)
    is_active = models.BooleanField(default=True)
    is_default = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BusinessScopedQuerySet.as_manager()

    class Meta:
        db_table = 'business_locations'
        ordering = ['-is_default', 'name']
        indexes = [
            models.Index(fields=['business', 'is_active'], name='business_lo_busines_7c1e2a_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.location_id})"

    def save(self, *args, **kwargs):
        """Ensure only one default location per business."""
        if self.is_default and self.business_id:
            BusinessLocation.objects.filter(
                business_id=self.business_id,
                is_default=True
            ).exclude(pk=self.pk).update(is_default=False)
        super().save(*args, **kwargs)
