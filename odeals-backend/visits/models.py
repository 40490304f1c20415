# visits/models.py
from django.conf import settings
from django.db import models

from common.models import TimeStampedModel
from deals.models import Deal
from stores.models import PartnerStore


class VisitStatus(models.TextChoices):
    SCHEDULED = "scheduled", "Scheduled"
    COMPLETED = "completed", "Completed"


class Visit(TimeStampedModel):
    """
    A consumer's planned trip to a partner store, optionally for a deal.
    Lifecycle: scheduled -> completed (one way).
    """
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="visits")
    store = models.ForeignKey(PartnerStore, on_delete=models.CASCADE, related_name="visits")
    deal = models.ForeignKey(Deal, on_delete=models.SET_NULL, null=True, blank=True, related_name="visits")

    visit_date = models.DateField(db_index=True)
    notes = models.TextField(blank=True, default="")
    status = models.CharField(
        max_length=16,
        choices=VisitStatus.choices,
        default=VisitStatus.SCHEDULED,
        db_index=True,
    )
    marked_as_visited = models.BooleanField(default=False)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-visit_date", "-id"]
        indexes = [
            models.Index(fields=["store", "status", "visit_date"], name="visit_store_status_date_idx"),
        ]

    def __str__(self):
        return f"Visit #{self.pk} ({self.status})"

    @property
    def is_completed(self) -> bool:
        return self.status == VisitStatus.COMPLETED
