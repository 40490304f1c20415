# deals/services.py
import logging
from typing import Optional

from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from common.exceptions import BusinessRuleError
from stores.models import PartnerStore
from .models import Deal

logger = logging.getLogger(__name__)

MAX_ACTIVE_DEALS_PER_CATEGORY = 3

# Consumer-facing category -> legacy deal categories that should match it too
CATEGORY_ALIASES = {
    "Food": ["cafe", "restaurant"],
    "Men's Salon": ["salon", "spa"],
    "Women's Salon": ["salon", "spa"],
}


def ensure_category_capacity(store: PartnerStore, category: str, exclude: Optional[Deal] = None) -> None:
    qs = Deal.objects.filter(store=store, category=category, is_active=True)
    if exclude is not None and exclude.pk:
        qs = qs.exclude(pk=exclude.pk)
    if qs.count() >= MAX_ACTIVE_DEALS_PER_CATEGORY:
        raise BusinessRuleError(
            f"You already have {MAX_ACTIVE_DEALS_PER_CATEGORY} active deals in this category. "
            "Deactivate one to create a new deal."
        )


def create_deal(store: PartnerStore, **fields) -> Deal:
    with transaction.atomic():
        # serialize concurrent creates for the same store
        PartnerStore.objects.select_for_update().filter(pk=store.pk).first()
        ensure_category_capacity(store, fields["category"])
        deal = Deal.objects.create(store=store, is_active=True, **fields)
    logger.info("Deal %s created for store %s (%s)", deal.pk, store.pk, deal.category)
    return deal


def update_deal(deal: Deal, **changes) -> Deal:
    """
    Apply a partial update. Re-checks the per-category cap when the deal
    ends up active in a category it wasn't active in before.
    """
    becomes_active = changes.get("is_active", deal.is_active)
    new_category = changes.get("category", deal.category)
    needs_check = becomes_active and (not deal.is_active or new_category != deal.category)

    with transaction.atomic():
        if needs_check:
            PartnerStore.objects.select_for_update().filter(pk=deal.store_id).first()
            ensure_category_capacity(deal.store, new_category, exclude=deal)
        for name, value in changes.items():
            setattr(deal, name, value)
        deal.save()
    return deal


def deactivate_deal(deal: Deal) -> Deal:
    if deal.is_active:
        deal.is_active = False
        deal.save(update_fields=["is_active", "updated_at"])
        logger.info("Deal %s deactivated", deal.pk)
    return deal


def expire_deals(today=None) -> int:
    """Deactivate every active deal whose end date has passed."""
    day = today or timezone.localdate()
    count = Deal.objects.filter(is_active=True, end_date__lt=day).update(is_active=False, updated_at=timezone.now())
    if count:
        logger.info("Expired %s deals ending before %s", count, day)
    return count


def live_deals(query: Optional[str] = None, category: Optional[str] = None):
    qs = Deal.objects.live().select_related("store")
    if category:
        names = [category] + CATEGORY_ALIASES.get(category, [])
        qs = qs.filter(category__in=names)
    elif query:
        qs = qs.filter(Q(name__icontains=query) | Q(description__icontains=query))
    return qs.order_by("-created_at", "-id")
