# analytics/services.py
from datetime import timedelta

from django.db.models import F, Sum
from django.utils import timezone

from .models import PartnerStat

COUNTER_FIELDS = ("store_views", "deal_views", "scheduled_visits", "actual_visits")


def _bump(store_id: int, field: str) -> None:
    if field not in COUNTER_FIELDS:
        raise ValueError(f"Unknown counter: {field}")
    today = timezone.localdate()
    stat, _ = PartnerStat.objects.get_or_create(store_id=store_id, date=today)
    PartnerStat.objects.filter(pk=stat.pk).update(**{field: F(field) + 1})


def record_store_view(store_id: int) -> None:
    _bump(store_id, "store_views")


def record_deal_view(store_id: int) -> None:
    _bump(store_id, "deal_views")


def record_scheduled_visit(store_id: int) -> None:
    _bump(store_id, "scheduled_visits")


def record_actual_visit(store_id: int) -> None:
    _bump(store_id, "actual_visits")


def stats_for_range(store, days: int = 7):
    """
    Daily rows for [today - days, today] (inclusive) and their totals.
    """
    end = timezone.localdate()
    start = end - timedelta(days=days)
    qs = PartnerStat.objects.filter(store=store, date__gte=start, date__lte=end).order_by("date")
    sums = qs.aggregate(**{name: Sum(name) for name in COUNTER_FIELDS})
    totals = {name: sums[name] or 0 for name in COUNTER_FIELDS}
    return qs, totals
