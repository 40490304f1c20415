# notifications/backends.py
"""
SMS delivery backends, selected by settings.SMS_BACKEND (dotted path),
in the spirit of Django's EMAIL_BACKEND.
"""
import logging

logger = logging.getLogger(__name__)


class BaseSmsBackend:
    def send(self, to: str, body: str) -> str:
        """Deliver `body` to `to`; returns a provider message id."""
        raise NotImplementedError


class ConsoleSmsBackend(BaseSmsBackend):
    """Development backend: writes the message to the log."""

    def send(self, to: str, body: str) -> str:
        logger.info("SMS to %s: %s", to, body)
        return ""


class LocmemSmsBackend(BaseSmsBackend):
    """
    Keeps messages in memory. The outbox is shared by every instance;
    tests call reset() in setUp and read LocmemSmsBackend.outbox.
    """

    outbox = []

    @classmethod
    def reset(cls) -> None:
        cls.outbox = []

    def send(self, to: str, body: str) -> str:
        type(self).outbox.append({"to": to, "body": body})
        return f"locmem-{len(type(self).outbox)}"
