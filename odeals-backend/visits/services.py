# visits/services.py
import logging
from typing import Optional

from django.db import transaction
from django.utils import timezone

from analytics.services import record_actual_visit, record_scheduled_visit
from common.exceptions import BusinessRuleError
from deals.models import Deal
from loyalty.services import POINTS_FOR_VISIT, award
from notifications.services import notify
from .models import Visit, VisitStatus

logger = logging.getLogger(__name__)


def schedule_visit(user, store, visit_date, notes: str = "", deal: Optional[Deal] = None) -> Visit:
    if visit_date < timezone.localdate():
        raise BusinessRuleError("Visit date cannot be in the past")
    if deal is not None:
        if deal.store_id != store.id:
            raise BusinessRuleError("Deal does not belong to this store")
        if not Deal.objects.live().filter(pk=deal.pk).exists():
            raise BusinessRuleError("Deal is not active")

    visit = Visit.objects.create(user=user, store=store, deal=deal, visit_date=visit_date, notes=notes or "")
    record_scheduled_visit(store.id)
    logger.info("Visit %s scheduled: user=%s store=%s date=%s", visit.pk, user.pk, store.pk, visit_date)
    return visit


def complete_visit(visit: Visit) -> Visit:
    """
    scheduled -> completed. Awards POINTS_FOR_VISIT to the visiting consumer
    exactly once, whichever side marks the visit.
    """
    with transaction.atomic():
        locked = Visit.objects.select_for_update().select_related("store", "user").get(pk=visit.pk)
        if locked.status != VisitStatus.SCHEDULED:
            raise BusinessRuleError("Visit is already completed")

        locked.status = VisitStatus.COMPLETED
        locked.marked_as_visited = True
        locked.completed_at = timezone.now()
        locked.save(update_fields=["status", "marked_as_visited", "completed_at", "updated_at"])

        record_actual_visit(locked.store_id)
        award(locked.user, POINTS_FOR_VISIT, "Completed store visit", reference_id=locked.id)

    notify(
        locked.user,
        "Visit completed",
        f"Thanks for visiting {locked.store.name}! {POINTS_FOR_VISIT} points have been added to your balance.",
    )
    return locked


def upcoming_for_store(store):
    return (
        Visit.objects.filter(store=store, status=VisitStatus.SCHEDULED, visit_date__gte=timezone.localdate())
        .select_related("user", "deal")
        .order_by("visit_date", "id")
    )
