from django.conf import settings
from django.db import models
from django.utils import timezone


class Notification(models.Model):
    """
    In-app message shown in the consumer's notification list.
    """
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="notifications")
    title = models.CharField(max_length=160)
    message = models.TextField()
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["user", "is_read"], name="notification_user_read_idx"),
        ]

    def __str__(self):
        return f"{self.user_id}: {self.title}"


class SmsLog(models.Model):
    """
    Stores every attempt to send a text message.
    """
    to_phone = models.CharField(max_length=15)
    body = models.TextField()
    status = models.CharField(
        max_length=20,
        choices=[
            ("queued", "Queued"),
            ("sent", "Sent"),
            ("failed", "Failed"),
        ],
        default="queued",
    )
    error_message = models.TextField(blank=True)
    provider_message_id = models.CharField(max_length=255, blank=True)

    created_at = models.DateTimeField(default=timezone.now)
    sent_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["to_phone"], name="smslog_to_phone_idx"),
            models.Index(fields=["status"], name="smslog_status_idx"),
        ]

    def __str__(self):
        return f"{self.to_phone} ({self.status})"
