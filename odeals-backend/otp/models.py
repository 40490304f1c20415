from django.db import models
from django.utils import timezone


class OtpRequest(models.Model):
    phone = models.CharField(max_length=15)
    code_hash = models.CharField(max_length=128)
    salt = models.CharField(max_length=32)
    expires_at = models.DateTimeField()
    attempts = models.IntegerField(default=0)
    max_attempts = models.IntegerField(default=5)
    is_used = models.BooleanField(default=False)

    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.CharField(max_length=255, blank=True)

    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        indexes = [
            models.Index(fields=["phone"], name="otp_request_phone_idx"),
            models.Index(fields=["expires_at"], name="otp_request_expires_idx"),
        ]
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.phone} (expires {self.expires_at:%H:%M})"

    @property
    def is_expired(self) -> bool:
        return self.expires_at < timezone.now()


class OtpAudit(models.Model):
    ACTION_CHOICES = [
        ("verify_failed", "Verify failed"),
    ]

    phone = models.CharField(max_length=15)
    action = models.CharField(max_length=32, choices=ACTION_CHOICES)
    reason = models.CharField(max_length=120, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["phone"], name="otp_audit_phone_idx"),
            models.Index(fields=["action"], name="otp_audit_action_idx"),
        ]

    def __str__(self):
        return f"{self.phone}:{self.action}"
