import logging

from django.conf import settings
from django.utils import timezone
from django.utils.module_loading import import_string

from .models import SmsLog

logger = logging.getLogger(__name__)


def get_backend():
    return import_string(settings.SMS_BACKEND)()


def send_sms(to: str, body: str) -> SmsLog:
    """
    Send a text message through the configured backend. Always logs the attempt.
    """
    log = SmsLog.objects.create(to_phone=to, body=body, status="queued")

    try:
        message_id = get_backend().send(to, body)
        log.status = "sent"
        log.sent_at = timezone.now()
        log.provider_message_id = message_id or ""
        log.save(update_fields=["status", "sent_at", "provider_message_id"])
    except Exception as exc:
        logger.exception("Failed to send SMS to %s", to)
        log.status = "failed"
        log.error_message = str(exc)
        log.save(update_fields=["status", "error_message"])

    return log
