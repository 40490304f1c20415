"""
In-app notifications and the SMS log.
"""
from django.test import TestCase, override_settings
from rest_framework import status
from rest_framework.test import APIRequestFactory, force_authenticate

from common.testing import make_consumer
from notifications.backends import BaseSmsBackend, LocmemSmsBackend
from notifications.models import Notification, SmsLog
from notifications.services import notify
from notifications.sms import send_sms
from notifications.views import NotificationListView, NotificationReadView


class FailingSmsBackend(BaseSmsBackend):
    def send(self, to, body):
        raise ConnectionError("gateway down")


class SmsTests(TestCase):
    def setUp(self):
        LocmemSmsBackend.reset()

    @override_settings(SMS_BACKEND="notifications.backends.LocmemSmsBackend")
    def test_sent_message_is_logged(self):
        log = send_sms("9876543210", "hello")
        self.assertEqual(log.status, "sent")
        self.assertIsNotNone(log.sent_at)
        self.assertEqual(LocmemSmsBackend.outbox, [{"to": "9876543210", "body": "hello"}])

    @override_settings(SMS_BACKEND="notifications.tests.FailingSmsBackend")
    def test_failed_message_is_logged(self):
        with self.assertLogs("notifications.sms", level="ERROR"):
            log = send_sms("9876543210", "hello")
        log.refresh_from_db()
        self.assertEqual(log.status, "failed")
        self.assertIn("gateway down", log.error_message)
        self.assertEqual(SmsLog.objects.count(), 1)


    def test_reset_empties_shared_outbox(self):
        LocmemSmsBackend().send("9876543210", "one")
        self.assertEqual(len(LocmemSmsBackend().outbox), 1)
        LocmemSmsBackend.reset()
        self.assertEqual(LocmemSmsBackend.outbox, [])


class NotificationTests(TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.user = make_consumer()

    def test_list_newest_first(self):
        notify(self.user, "First", "one")
        notify(self.user, "Second", "two")
        request = self.factory.get("/api/v1/consumer/notifications")
        force_authenticate(request, user=self.user)
        response = NotificationListView.as_view()(request)
        self.assertEqual([n["title"] for n in response.data], ["Second", "First"])

    def test_mark_read(self):
        notification = notify(self.user, "Hi", "there")
        request = self.factory.patch(f"/api/v1/consumer/notifications/{notification.id}", {}, format="json")
        force_authenticate(request, user=self.user)
        response = NotificationReadView.as_view()(request, pk=notification.id)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(Notification.objects.get(pk=notification.id).is_read)

    def test_cannot_mark_someone_elses(self):
        other = make_consumer(phone="9876500002")
        notification = notify(other, "Hi", "there")
        request = self.factory.patch(f"/api/v1/consumer/notifications/{notification.id}", {}, format="json")
        force_authenticate(request, user=self.user)
        response = NotificationReadView.as_view()(request, pk=notification.id)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(Notification.objects.get(pk=notification.id).is_read)
