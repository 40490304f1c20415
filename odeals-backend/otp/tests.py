"""
Tests for OTP issue/verify and the auth endpoints built on them.
"""
import re
from datetime import timedelta
from unittest.mock import patch

from django.core.cache import cache
from django.test import TestCase, override_settings
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from common.testing import make_consumer
from notifications.backends import LocmemSmsBackend
from notifications.models import SmsLog
from otp.models import OtpAudit, OtpRequest
from otp.services import generate_otp, verify_otp

PHONE = "9876543210"


@override_settings(SMS_BACKEND="notifications.backends.LocmemSmsBackend")
class OtpServiceTests(TestCase):
    def setUp(self):
        cache.clear()
        LocmemSmsBackend.reset()

    def test_generate_stores_hash_and_sends_sms(self):
        code = generate_otp(PHONE)
        self.assertEqual(len(code), 6)
        self.assertTrue(code.isdigit())

        otp = OtpRequest.objects.get(phone=PHONE)
        self.assertNotEqual(otp.code_hash, code)
        self.assertEqual(len(LocmemSmsBackend.outbox), 1)
        self.assertIn(code, LocmemSmsBackend.outbox[0]["body"])
        self.assertEqual(SmsLog.objects.get(to_phone=PHONE).status, "sent")

    def test_valid_code_verifies_once(self):
        code = generate_otp(PHONE)
        self.assertTrue(verify_otp(PHONE, code).ok)

        reused = verify_otp(PHONE, code)
        self.assertFalse(reused.ok)
        self.assertEqual(reused.reason, "Invalid OTP")

    def test_code_claimed_by_concurrent_verify_fails(self):
        code = generate_otp(PHONE)

        def other_request_wins(a, b):
            OtpRequest.objects.filter(phone=PHONE).update(is_used=True)
            return True

        with patch("otp.services.secrets.compare_digest", side_effect=other_request_wins):
            result = verify_otp(PHONE, code)
        self.assertFalse(result.ok)
        self.assertEqual(result.reason, "Invalid OTP")
        self.assertTrue(OtpAudit.objects.filter(phone=PHONE, reason="already_used").exists())

    def test_expired_code_fails(self):
        code = generate_otp(PHONE)
        OtpRequest.objects.filter(phone=PHONE).update(expires_at=timezone.now() - timedelta(seconds=1))

        result = verify_otp(PHONE, code)
        self.assertFalse(result.ok)
        self.assertEqual(result.status_code, 400)
        self.assertTrue(OtpAudit.objects.filter(phone=PHONE, reason="not_found_or_expired").exists())

    def test_wrong_code_counts_attempt(self):
        code = generate_otp(PHONE)
        wrong = "000000" if code != "000000" else "111111"
        result = verify_otp(PHONE, wrong)
        self.assertFalse(result.ok)
        self.assertEqual(OtpRequest.objects.get(phone=PHONE).attempts, 1)

    def test_new_code_supersedes_old(self):
        first = generate_otp(PHONE)
        second = generate_otp(PHONE)
        self.assertEqual(OtpRequest.objects.filter(phone=PHONE).count(), 1)
        if first != second:
            self.assertFalse(verify_otp(PHONE, first).ok)
        self.assertTrue(verify_otp(PHONE, second).ok)

    @override_settings(OTP_RATE_VERIFY_PER_PHONE=2)
    def test_verify_rate_limit(self):
        generate_otp(PHONE)
        verify_otp(PHONE, "000001")
        verify_otp(PHONE, "000002")
        result = verify_otp(PHONE, "000003")
        self.assertEqual(result.status_code, 429)


@override_settings(SMS_BACKEND="notifications.backends.LocmemSmsBackend")
class OtpEndpointTests(TestCase):
    def setUp(self):
        cache.clear()
        LocmemSmsBackend.reset()
        self.client = APIClient()

    def test_send_otp_validates_phone(self):
        response = self.client.post("/api/v1/auth/send-otp", {"phone": "123"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("phone", response.data)

    @override_settings(OTP_RATE_SEND_PER_PHONE=2)
    def test_send_otp_rate_limited_per_phone(self):
        for _ in range(2):
            response = self.client.post("/api/v1/auth/send-otp", {"phone": PHONE}, format="json")
            self.assertEqual(response.status_code, status.HTTP_200_OK)
        response = self.client.post("/api/v1/auth/send-otp", {"phone": PHONE}, format="json")
        self.assertEqual(response.status_code, status.HTTP_429_TOO_MANY_REQUESTS)

    def test_send_otp_does_not_leak_code(self):
        response = self.client.post("/api/v1/auth/send-otp", {"phone": PHONE}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        code = re.search(r"\b(\d{6})\b", LocmemSmsBackend.outbox[-1]["body"]).group(1)
        self.assertNotIn(code, str(response.data))

    def test_verify_invalid_code(self):
        generate_otp(PHONE)
        response = self.client.post("/api/v1/auth/verify-otp", {"phone": PHONE, "otp": "abcdef"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "Invalid OTP")

    def test_verify_rejects_wrong_length(self):
        response = self.client.post("/api/v1/auth/verify-otp", {"phone": PHONE, "otp": "123"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("otp", response.data)

    def test_verify_new_phone_marks_session(self):
        code = generate_otp(PHONE)
        response = self.client.post("/api/v1/auth/verify-otp", {"phone": PHONE, "otp": code}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"is_verified": True, "is_new_user": True})
        self.assertEqual(self.client.session["verified_phone"], PHONE)

    def test_verify_known_phone_signs_in(self):
        user = make_consumer(phone=PHONE, is_verified=False)
        code = generate_otp(PHONE)
        response = self.client.post("/api/v1/auth/verify-otp", {"phone": PHONE, "otp": code}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data["is_new_user"])
        self.assertEqual(response.data["user_id"], user.id)
        self.assertIn("access", response.data["tokens"])

        user.refresh_from_db()
        self.assertTrue(user.is_verified)

        me = self.client.get("/api/v1/auth/me")
        self.assertEqual(me.status_code, status.HTTP_200_OK)
        self.assertEqual(me.data["phone"], PHONE)
