"""
Registration, session and profile tests.
"""
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.test import TestCase, override_settings
from rest_framework import status
from rest_framework.test import APIClient

from accounts.services import register_consumer
from common.roles import UserType
from common.testing import make_consumer, make_partner
from loyalty.models import ReferralStatus
from loyalty.services import balance_for, create_referral
from otp.services import generate_otp
from stores.models import PartnerStore

User = get_user_model()

PHONE = "9876543210"

STORE_DATA = {
    "name": "Chai Point",
    "description": "Tea and snacks",
    "contact_phone": PHONE,
    "location": "MG Road, Bengaluru",
    "latitude": "12.971599",
    "longitude": "77.594566",
    "categories": ["Food"],
    "price_rating": 2,
}


@override_settings(SMS_BACKEND="notifications.backends.LocmemSmsBackend")
class RegistrationTests(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()

    def _verify(self, phone=PHONE):
        code = generate_otp(phone)
        response = self.client.post("/api/v1/auth/verify-otp", {"phone": phone, "otp": code}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_register_requires_verified_phone(self):
        response = self.client.post(
            "/api/v1/auth/register/consumer",
            {"phone": PHONE, "first_name": "Asha"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(User.objects.filter(phone=PHONE).exists())

    def test_register_requires_same_phone_as_verified(self):
        self._verify()
        response = self.client.post(
            "/api/v1/auth/register/consumer",
            {"phone": "9000000000", "first_name": "Asha"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_register_consumer(self):
        self._verify()
        response = self.client.post(
            "/api/v1/auth/register/consumer",
            {"phone": PHONE, "first_name": "Asha", "zip_code": "560001", "favorite_categories": ["Food"]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["user_type"], UserType.CONSUMER)
        self.assertIn("refresh", response.data["tokens"])

        user = User.objects.get(phone=PHONE)
        self.assertTrue(user.is_verified)
        self.assertEqual(user.favorite_categories, ["Food"])

        me = self.client.get("/api/v1/auth/me")
        self.assertEqual(me.status_code, status.HTTP_200_OK)
        self.assertEqual(me.data["id"], user.id)

    def test_register_existing_phone_rejected(self):
        self._verify()
        make_consumer(phone=PHONE)
        response = self.client.post(
            "/api/v1/auth/register/consumer",
            {"phone": PHONE, "first_name": "Asha"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "User already exists")

    def test_register_completes_referral(self):
        referrer = make_consumer(phone="9876500001")
        referral = create_referral(referrer, PHONE)
        self._verify()

        response = self.client.post(
            "/api/v1/auth/register/consumer",
            {"phone": PHONE, "first_name": "Asha"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        referral.refresh_from_db()
        self.assertEqual(referral.status, ReferralStatus.COMPLETED)
        self.assertEqual(balance_for(referrer), 1000)
        self.assertEqual(balance_for(User.objects.get(phone=PHONE)), 1000)

    def test_failed_referral_rolls_back_registration(self):
        referrer = make_consumer(phone="9876500001")
        create_referral(referrer, PHONE)

        with patch("accounts.services.complete_referral_for", side_effect=RuntimeError("ledger down")):
            with self.assertRaises(RuntimeError):
                register_consumer(PHONE, first_name="Asha")

        self.assertFalse(User.objects.filter(phone=PHONE).exists())
        self.assertEqual(balance_for(referrer), 0)

    def test_register_partner_creates_store(self):
        self._verify()
        response = self.client.post(
            "/api/v1/auth/register/partner",
            {"user_data": {"phone": PHONE, "first_name": "Ravi"}, "store_data": STORE_DATA},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        store = PartnerStore.objects.get(id=response.data["store_id"])
        self.assertEqual(store.user.phone, PHONE)
        self.assertEqual(store.user.user_type, UserType.PARTNER)

        me = self.client.get("/api/v1/auth/me")
        self.assertEqual(me.data["store"]["name"], "Chai Point")

    def test_register_partner_invalid_store_creates_nothing(self):
        self._verify()
        response = self.client.post(
            "/api/v1/auth/register/partner",
            {
                "user_data": {"phone": PHONE, "first_name": "Ravi"},
                "store_data": {**STORE_DATA, "categories": ["Bakery"], "price_rating": 5},
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("store_data", response.data)
        self.assertFalse(User.objects.filter(phone=PHONE).exists())

    def test_logout_ends_session(self):
        self._verify()
        self.client.post("/api/v1/auth/register/consumer", {"phone": PHONE, "first_name": "Asha"}, format="json")
        self.assertEqual(self.client.post("/api/v1/auth/logout").status_code, status.HTTP_200_OK)
        self.assertEqual(self.client.get("/api/v1/auth/me").status_code, status.HTTP_401_UNAUTHORIZED)


class SessionAndProfileTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_me_requires_auth(self):
        response = self.client.get("/api/v1/auth/me")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_bearer_token_authenticates(self):
        from common.auth_tokens import tokens_for_user

        user = make_consumer()
        tokens = tokens_for_user(user)
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
        response = self.client.get("/api/v1/auth/me")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["phone"], user.phone)

    def test_csrf_endpoint_sets_cookie(self):
        response = self.client.get("/api/v1/auth/csrf")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("csrftoken", response.cookies)

    def test_profile_update_is_whitelisted(self):
        user = make_consumer()
        self.client.force_authenticate(user)
        response = self.client.patch(
            "/api/v1/consumer/profile",
            {"first_name": "Meera", "zip_code": "560034", "phone": "9999999999", "user_type": "partner"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        user.refresh_from_db()
        self.assertEqual(user.first_name, "Meera")
        self.assertEqual(user.zip_code, "560034")
        self.assertEqual(user.phone, "9876500001")
        self.assertEqual(user.user_type, UserType.CONSUMER)

    def test_profile_rejects_unknown_category(self):
        self.client.force_authenticate(make_consumer())
        response = self.client.patch(
            "/api/v1/consumer/profile", {"favorite_categories": ["Bakery"]}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_partner_cannot_patch_consumer_profile(self):
        partner, _ = make_partner()
        self.client.force_authenticate(partner)
        response = self.client.patch("/api/v1/consumer/profile", {"first_name": "X"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
