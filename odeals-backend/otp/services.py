import hashlib
import logging
import secrets
from datetime import timedelta
from typing import Optional

from django.conf import settings
from django.core.cache import cache
from django.db import transaction
from django.utils import timezone

from common.exceptions import OtpRateLimited
from notifications.sms import send_sms
from .models import OtpRequest, OtpAudit

logger = logging.getLogger(__name__)

OTP_TTL_MINUTES = 10
OTP_CODE_LENGTH = 6
OTP_MAX_ATTEMPTS = 5


def _limits() -> dict:
    # read at call time so override_settings works in tests
    return {
        "send_per_phone": getattr(settings, "OTP_RATE_SEND_PER_PHONE", 3),
        "send_phone_window": getattr(settings, "OTP_RATE_SEND_PHONE_WINDOW", 300),
        "send_per_ip": getattr(settings, "OTP_RATE_SEND_PER_IP", 10),
        "send_ip_window": getattr(settings, "OTP_RATE_SEND_IP_WINDOW", 900),
        "verify_per_phone": getattr(settings, "OTP_RATE_VERIFY_PER_PHONE", 5),
        "verify_phone_window": getattr(settings, "OTP_RATE_VERIFY_PHONE_WINDOW", 300),
    }


def _hash_code(code: str, salt: str) -> str:
    return hashlib.sha256((code + salt).encode("utf-8")).hexdigest()


def _rate_limit(key: str, limit: int, window_seconds: int) -> bool:
    """Returns True if over limit."""
    current = cache.get(key)
    if current is None:
        cache.set(key, 1, timeout=window_seconds)
        return False
    current = current + 1
    cache.set(key, current, timeout=window_seconds)
    return current > limit


def generate_otp(phone: str, ip: Optional[str] = None, ua: Optional[str] = None) -> str:
    """
    Issue a fresh 6-digit code for `phone` and text it. Any earlier code for
    the phone is discarded, so only the newest one can be verified.
    Returns the plain code (callers must never echo it to the client).
    """
    cfg = _limits()
    if _rate_limit(f"otp:send:phone:{phone}", cfg["send_per_phone"], cfg["send_phone_window"]):
        raise OtpRateLimited("Too many OTP requests for this phone number. Please wait a few minutes.")
    if ip and _rate_limit(f"otp:send:ip:{ip}", cfg["send_per_ip"], cfg["send_ip_window"]):
        raise OtpRateLimited("Too many OTP requests from this IP. Please wait a few minutes.")

    code = f"{secrets.randbelow(10**OTP_CODE_LENGTH):0{OTP_CODE_LENGTH}d}"
    salt = secrets.token_hex(8)
    expires_at = timezone.now() + timedelta(minutes=OTP_TTL_MINUTES)

    with transaction.atomic():
        OtpRequest.objects.filter(phone=phone).delete()
        OtpRequest.objects.create(
            phone=phone,
            code_hash=_hash_code(code, salt),
            salt=salt,
            expires_at=expires_at,
            max_attempts=OTP_MAX_ATTEMPTS,
            ip_address=ip,
            user_agent=(ua or "")[:255],
        )

    send_sms(phone, f"Your oDeals verification code is {code}. It expires in {OTP_TTL_MINUTES} minutes.")
    logger.info("OTP issued for %s", phone)
    return code


class OtpVerificationResult:
    def __init__(self, ok: bool, reason: Optional[str] = None, status_code: int = 400):
        self.ok = ok
        self.reason = reason
        self.status_code = status_code


def _fail(phone: str, reason: str, message: str, status_code: int = 400) -> OtpVerificationResult:
    OtpAudit.objects.create(phone=phone, action="verify_failed", reason=reason)
    return OtpVerificationResult(False, message, status_code=status_code)


def verify_otp(phone: str, code: str) -> OtpVerificationResult:
    cfg = _limits()
    if _rate_limit(f"otp:verify:phone:{phone}", cfg["verify_per_phone"], cfg["verify_phone_window"]):
        return _fail(phone, "rate_limited", "Too many attempts. Please request a new code.", status_code=429)

    otp = (
        OtpRequest.objects.filter(phone=phone, is_used=False, expires_at__gte=timezone.now())
        .order_by("-created_at")
        .first()
    )
    if not otp:
        return _fail(phone, "not_found_or_expired", "Invalid OTP")

    if otp.attempts >= otp.max_attempts:
        return _fail(phone, "attempts_exceeded", "Too many attempts. Please request a new code.", status_code=429)

    if not secrets.compare_digest(otp.code_hash, _hash_code(code, otp.salt)):
        otp.attempts += 1
        otp.save(update_fields=["attempts"])
        return _fail(phone, "invalid_code", "Invalid OTP")

    # single use: only one concurrent verify can flip is_used
    claimed = OtpRequest.objects.filter(pk=otp.pk, is_used=False).update(is_used=True)
    if not claimed:
        return _fail(phone, "already_used", "Invalid OTP")
    return OtpVerificationResult(True)
