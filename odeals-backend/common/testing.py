# common/testing.py
"""
Shared fixtures for the app test suites.
"""
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.utils import timezone

from common.roles import BusinessCategory, UserType
from deals.models import Deal, DealType
from stores.models import PartnerStore


def make_consumer(phone="9876500001", **extra):
    extra.setdefault("first_name", "Asha")
    extra.setdefault("is_verified", True)
    return get_user_model().objects.create_user(phone, user_type=UserType.CONSUMER, **extra)


def make_partner(phone="9876500100", name="Chai Point", categories=None, **store_fields):
    user = get_user_model().objects.create_user(
        phone, user_type=UserType.PARTNER, first_name="Ravi", is_verified=True
    )
    store = PartnerStore.objects.create(
        user=user,
        name=name,
        contact_phone=phone,
        location="MG Road, Bengaluru",
        categories=categories or [BusinessCategory.FOOD],
        **store_fields,
    )
    return user, store


def make_deal(store, category=BusinessCategory.FOOD, name="10% off", start_offset=0, days=7, **extra):
    today = timezone.localdate()
    extra.setdefault("deal_type", DealType.DISCOUNT)
    extra.setdefault("discount_percentage", 10)
    return Deal.objects.create(
        store=store,
        name=name,
        category=category,
        start_date=today + timedelta(days=start_offset),
        end_date=today + timedelta(days=start_offset + days),
        **extra,
    )
