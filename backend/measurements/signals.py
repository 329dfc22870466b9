"""
Tenant bootstrap: seed default units when a new business is created.
"""
import logging

from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from tenant.models import Business

logger = logging.getLogger(__name__)


def enqueue_default_unit_seeding(business_id):
    from measurements.tasks import seed_default_units_task

    try:
        seed_default_units_task.delay(business_id)
    except Exception:
        # The business is already committed; units can still be seeded
        # later through POST /api/units/seed-defaults/
        logger.error(f"Could not queue default unit seeding for business {business_id}", exc_info=True)


@receiver(post_save, sender=Business)
def seed_default_units_for_business(sender, instance, created, **kwargs):
    """
    Queue default unit seeding for a new business.

    Runs after the creating transaction commits, so a seeding failure can
    never undo the business creation.
    """
    if created:
        business_id = instance.pk
        transaction.on_commit(lambda: enqueue_default_unit_seeding(business_id))
