# loyalty/services.py

import logging
import secrets
import string

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Sum
from django.utils import timezone

from common.exceptions import BusinessRuleError
from notifications.services import notify
from .models import Reward, Redemption, RedemptionStatus, Referral, ReferralStatus

logger = logging.getLogger(__name__)

POINTS_FOR_VISIT = getattr(settings, "POINTS_FOR_VISIT", 100)
POINTS_FOR_REVIEW = getattr(settings, "POINTS_FOR_REVIEW", 100)
POINTS_FOR_REFERRAL = getattr(settings, "POINTS_FOR_REFERRAL", 1000)

MIN_REDEMPTION_POINTS = getattr(settings, "MIN_REDEMPTION_POINTS", 500)
MAX_REDEMPTION_POINTS = getattr(settings, "MAX_REDEMPTION_POINTS", 5000)
POINTS_PER_CURRENCY_UNIT = getattr(settings, "POINTS_PER_CURRENCY_UNIT", 10)

REDEMPTION_CODE_LENGTH = 6
_CODE_ALPHABET = string.ascii_uppercase + string.digits


def award(user, points: int, reason: str, reference_id=None) -> Reward:
    """
    Append a ledger row. The only way points ever change.
    """
    return Reward.objects.create(user=user, points=points, reason=reason, reference_id=reference_id)


def balance_for(user) -> int:
    total = Reward.objects.filter(user=user).aggregate(total=Sum("points"))["total"]
    return total or 0


def history_for(user):
    return Reward.objects.filter(user=user).order_by("-created_at", "-id")


def points_to_amount(points: int) -> int:
    """100 points = 10 currency units; fractions are dropped."""
    return points // POINTS_PER_CURRENCY_UNIT


def _new_redemption_code() -> str:
    while True:
        code = "".join(secrets.choice(_CODE_ALPHABET) for _ in range(REDEMPTION_CODE_LENGTH))
        if not Redemption.objects.filter(code=code).exists():
            return code


def validate_redemption_points(points: int, balance: int) -> None:
    if points > balance:
        raise BusinessRuleError("Not enough points to redeem")
    if points < MIN_REDEMPTION_POINTS:
        raise BusinessRuleError(f"Minimum redemption is {MIN_REDEMPTION_POINTS} points")
    if points > MAX_REDEMPTION_POINTS:
        raise BusinessRuleError(f"Maximum redemption is {MAX_REDEMPTION_POINTS} points")


def redeem(user, store, points: int, proof_image_url: str = "") -> Redemption:
    """
    Convert `points` into a pending redemption at `store`.

    The balance check, the redemption row and the negative ledger row commit
    together. The user row is locked first so two concurrent redemptions for
    the same user serialize and cannot both pass the balance check.
    """
    User = get_user_model()
    with transaction.atomic():
        User.objects.select_for_update().filter(pk=user.pk).first()

        validate_redemption_points(points, balance_for(user))

        redemption = Redemption.objects.create(
            user=user,
            store=store,
            points=points,
            amount=points_to_amount(points),
            proof_image_url=proof_image_url or "",
            code=_new_redemption_code(),
        )
        award(user, -points, "Redeemed points", reference_id=redemption.id)

    logger.info("Redemption %s: user=%s store=%s points=%s", redemption.code, user.pk, store.pk, points)
    notify(
        user,
        "Redemption created",
        f"Show code {redemption.code} at {store.name} to claim {redemption.amount}.",
    )
    return redemption


def complete_redemption(redemption: Redemption) -> Redemption:
    with transaction.atomic():
        locked = Redemption.objects.select_for_update().select_related("user", "store").get(pk=redemption.pk)
        if locked.status != RedemptionStatus.PENDING:
            raise BusinessRuleError("Only pending redemptions can be completed")
        locked.status = RedemptionStatus.COMPLETED
        locked.completed_at = timezone.now()
        locked.save(update_fields=["status", "completed_at"])
    return locked


def pending_due_amount(store) -> int:
    total = (
        Redemption.objects.filter(store=store, status=RedemptionStatus.PENDING)
        .aggregate(total=Sum("amount"))["total"]
    )
    return total or 0


def create_referral(referrer, referred_phone: str) -> Referral:
    User = get_user_model()
    if User.objects.filter(phone=referred_phone).exists():
        raise BusinessRuleError("This phone number is already registered")
    if Referral.objects.filter(
        referrer=referrer, referred_phone=referred_phone, status=ReferralStatus.PENDING
    ).exists():
        raise BusinessRuleError("You have already referred this phone number")
    return Referral.objects.create(referrer=referrer, referred_phone=referred_phone)


def complete_referral_for(new_user):
    """
    Called once `new_user` has registered. The oldest pending referral for
    their phone wins: both sides get POINTS_FOR_REFERRAL. Any other pending
    referrals for the same phone can never complete and are expired.
    Returns the completed referral or None.
    """
    with transaction.atomic():
        pending = list(
            Referral.objects.select_for_update()
            .filter(referred_phone=new_user.phone, status=ReferralStatus.PENDING)
            .order_by("created_at", "id")
        )
        if not pending:
            return None

        referral, others = pending[0], pending[1:]
        now = timezone.now()
        referral.status = ReferralStatus.COMPLETED
        referral.referred_user = new_user
        referral.completed_at = now
        referral.save(update_fields=["status", "referred_user", "completed_at"])

        if others:
            Referral.objects.filter(id__in=[r.id for r in others]).update(status=ReferralStatus.EXPIRED)

        award(referral.referrer, POINTS_FOR_REFERRAL, "Successful referral", reference_id=referral.id)
        award(new_user, POINTS_FOR_REFERRAL, "Joined through referral", reference_id=referral.id)

    notify(
        referral.referrer,
        "Referral reward",
        f"Your friend joined oDeals. {POINTS_FOR_REFERRAL} points have been added to your balance.",
    )
    return referral
