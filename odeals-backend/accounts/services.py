# accounts/services.py
import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from common.exceptions import BusinessRuleError, PhoneNotVerified
from common.roles import UserType
from loyalty.services import complete_referral_for
from stores.models import PartnerStore

logger = logging.getLogger(__name__)

VERIFIED_PHONE_SESSION_KEY = "verified_phone"


def require_verified_phone(request, phone: str) -> None:
    if request.session.get(VERIFIED_PHONE_SESSION_KEY) != phone:
        raise PhoneNotVerified("Please verify your phone number first")


def _ensure_new_phone(phone: str) -> None:
    if get_user_model().objects.filter(phone=phone).exists():
        raise BusinessRuleError("User already exists")


def register_consumer(phone: str, **profile):
    User = get_user_model()
    with transaction.atomic():
        _ensure_new_phone(phone)
        user = User.objects.create_user(phone, user_type=UserType.CONSUMER, is_verified=True, **profile)
        complete_referral_for(user)
    logger.info("Consumer %s registered", user.pk)
    return user


def register_partner(phone: str, user_data: dict, store_data: dict):
    """
    Partner account and its store are created together or not at all.
    """
    User = get_user_model()
    with transaction.atomic():
        _ensure_new_phone(phone)
        user = User.objects.create_user(phone, user_type=UserType.PARTNER, is_verified=True, **user_data)
        store = PartnerStore.objects.create(user=user, **store_data)
    logger.info("Partner %s registered with store %s", user.pk, store.pk)
    return user, store
