# analytics/models.py
"""
Daily per-store counters behind the partner analytics screen.
"""
from django.db import models

from stores.models import PartnerStore


class PartnerStat(models.Model):
    """
    One row per store per day. Rows are created lazily by the first counter
    bump of the day.
    """
    store = models.ForeignKey(PartnerStore, on_delete=models.CASCADE, related_name="stats")
    date = models.DateField()
    store_views = models.PositiveIntegerField(default=0)
    deal_views = models.PositiveIntegerField(default=0)
    scheduled_visits = models.PositiveIntegerField(default=0)
    actual_visits = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["date", "id"]
        constraints = [
            models.UniqueConstraint(fields=["store", "date"], name="unique_partner_stat_per_day"),
        ]

    def __str__(self):
        return f"{self.store_id} @ {self.date}"
