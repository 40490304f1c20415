# deals/models.py
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from common.models import TimeStampedModel
from stores.models import PartnerStore


class DealType(models.TextChoices):
    DISCOUNT = "discount", "Discount"
    FREEBIE  = "freebie",  "Freebie"
    SPECIAL  = "special",  "Special"


class DealQuerySet(models.QuerySet):
    def live(self, on=None):
        """Active flag set and `on` (default today) inside the validity window."""
        day = on or timezone.localdate()
        return self.filter(is_active=True, start_date__lte=day, end_date__gte=day)


class Deal(TimeStampedModel):
    store = models.ForeignKey(PartnerStore, on_delete=models.CASCADE, related_name="deals")
    name = models.CharField(max_length=160)
    description = models.TextField(blank=True, default="")

    # validity window (inclusive)
    start_date = models.DateField()
    end_date = models.DateField()

    deal_type = models.CharField(max_length=16, choices=DealType.choices)
    discount_percentage = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )
    category = models.CharField(max_length=64, db_index=True)
    images = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True, db_index=True)

    objects = DealQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["store", "category", "is_active"], name="deal_store_cat_active_idx"),
            models.Index(fields=["is_active", "start_date", "end_date"], name="deal_live_window_idx"),
        ]

    def __str__(self):
        return f"{self.store_id}:{self.name}"
