# loyalty/models.py

from django.conf import settings
from django.db import models
from django.utils import timezone

from stores.models import PartnerStore


class Reward(models.Model):
    """
    Immutable ledger of point changes. A user's balance is always the sum of
    their rows; nothing stores or mutates a balance directly.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="rewards",
    )
    points = models.IntegerField(help_text="Signed: positive for earnings, negative for redemptions.")
    reason = models.CharField(max_length=120)
    reference_id = models.BigIntegerField(
        null=True,
        blank=True,
        help_text="Id of the visit/review/redemption/referral that produced this row.",
    )
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["user", "created_at"], name="reward_user_created_idx"),
        ]

    def __str__(self):
        return f"{self.user_id}: {self.points:+d} ({self.reason})"


class RedemptionStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    COMPLETED = "completed", "Completed"


class Redemption(models.Model):
    """
    Points converted into a currency amount claimable at a partner store.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="redemptions",
    )
    store = models.ForeignKey(
        PartnerStore,
        on_delete=models.CASCADE,
        related_name="redemptions",
    )
    points = models.PositiveIntegerField()
    amount = models.PositiveIntegerField(help_text="Currency units (100 points = 10).")
    proof_image_url = models.URLField(blank=True, default="")
    code = models.CharField(max_length=12, unique=True)
    status = models.CharField(
        max_length=16,
        choices=RedemptionStatus.choices,
        default=RedemptionStatus.PENDING,
        db_index=True,
    )
    created_at = models.DateTimeField(default=timezone.now)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.code} ({self.points} pts, {self.status})"


class ReferralStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    COMPLETED = "completed", "Completed"
    EXPIRED = "expired", "Expired"


class Referral(models.Model):
    """
    A phone-number invite. Completes when that phone registers as a consumer.
    """

    referrer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="referrals_sent",
    )
    referred_phone = models.CharField(max_length=15, db_index=True)
    referred_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="referred_by",
    )
    status = models.CharField(
        max_length=16,
        choices=ReferralStatus.choices,
        default=ReferralStatus.PENDING,
        db_index=True,
    )
    created_at = models.DateTimeField(default=timezone.now)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.referrer_id} -> {self.referred_phone} ({self.status})"
