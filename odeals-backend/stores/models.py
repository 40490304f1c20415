# stores/models.py
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from common.models import TimeStampedModel


class PartnerStore(TimeStampedModel):
    """
    The business profile of a partner. One store per partner user.
    """
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="partner_store",
    )
    name = models.CharField(max_length=160)
    description = models.TextField(blank=True, default="")
    contact_phone = models.CharField(max_length=15)
    location = models.CharField(max_length=255)

    # Coordinates (nullable: stores without them are skipped by nearby search)
    latitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    longitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)

    categories = models.JSONField(default=list, help_text="Business categories, e.g. [\"Food\"]")
    business_hours = models.JSONField(default=dict, blank=True)
    price_rating = models.PositiveSmallIntegerField(
        default=1,
        validators=[MinValueValidator(1), MaxValueValidator(4)],
    )
    upi_id = models.CharField(max_length=100, blank=True, default="")
    images = models.JSONField(default=list, blank=True)
    services_offered = models.JSONField(default=list, blank=True)

    class Meta:
        ordering = ["name", "id"]

    def __str__(self):
        return self.name
