from celery import shared_task
import logging

logger = logging.getLogger(__name__)


@shared_task
def seed_default_units_task(business_id):
    """
    Seed the default unit catalog for a freshly created business.

    Queued by measurements.signals once the business row is committed. Runs
    the best-effort seeder, so it never raises for seeding failures.

    Returns:
        dict: business_id, status and created counts
    """
    from tenant.models import Business
    from measurements.services.seeding import seed_default_units_best_effort

    business = Business.objects.filter(pk=business_id).first()
    if business is None:
        logger.warning(f"Business {business_id} no longer exists, skipping default unit seeding")
        return {"business_id": business_id, "status": "skipped", "units_created": 0, "conversions_created": 0}

    outcome = seed_default_units_best_effort(business)
    return {
        "business_id": business_id,
        "status": outcome.status,
        "units_created": outcome.units_created,
        "conversions_created": outcome.conversions_created,
    }
