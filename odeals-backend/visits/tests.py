"""
Visit scheduling and the scheduled -> completed transition.
"""
from datetime import timedelta

from django.core.cache import cache
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIRequestFactory, force_authenticate

from analytics.models import PartnerStat
from common.testing import make_consumer, make_deal, make_partner
from loyalty.models import Reward
from loyalty.services import balance_for
from notifications.models import Notification
from visits.models import Visit, VisitStatus
from visits.views import (
    ConsumerVisitCompleteView,
    ConsumerVisitListCreateView,
    PartnerVisitCompleteView,
    PartnerVisitListView,
)


class VisitTestBase(TestCase):
    def setUp(self):
        cache.clear()
        self.factory = APIRequestFactory()
        self.consumer = make_consumer()
        self.partner, self.store = make_partner()
        self.today = timezone.localdate()

    def _schedule(self, **overrides):
        data = {"partner_id": self.store.id, "visit_date": self.today.isoformat(), "notes": "Evening"}
        data.update(overrides)
        request = self.factory.post("/api/v1/consumer/visits", data, format="json")
        force_authenticate(request, user=self.consumer)
        return ConsumerVisitListCreateView.as_view()(request)

    def _visit(self, days_ahead=0, user=None):
        return Visit.objects.create(
            user=user or self.consumer,
            store=self.store,
            visit_date=self.today + timedelta(days=days_ahead),
        )

    def _consumer_complete(self, visit, user=None):
        request = self.factory.post(f"/api/v1/consumer/visits/{visit.id}/complete")
        force_authenticate(request, user=user or self.consumer)
        return ConsumerVisitCompleteView.as_view()(request, pk=visit.id)

    def _partner_complete(self, visit, user=None):
        request = self.factory.post(f"/api/v1/partner/visits/{visit.id}/complete")
        force_authenticate(request, user=user or self.partner)
        return PartnerVisitCompleteView.as_view()(request, pk=visit.id)


class ScheduleVisitTests(VisitTestBase):
    def test_schedule_visit(self):
        response = self._schedule()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["status"], VisitStatus.SCHEDULED)
        self.assertEqual(response.data["store"]["id"], self.store.id)
        self.assertEqual(PartnerStat.objects.get(store=self.store, date=self.today).scheduled_visits, 1)

    def test_past_date_rejected(self):
        response = self._schedule(visit_date=(self.today - timedelta(days=1)).isoformat())
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Visit.objects.exists())

    def test_missing_store_404(self):
        response = self._schedule(partner_id=9999)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_deal_must_belong_to_store(self):
        _, other_store = make_partner(phone="9876500200", name="Other")
        deal = make_deal(other_store)
        response = self._schedule(deal_id=deal.id)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "Deal does not belong to this store")

    def test_inactive_deal_rejected(self):
        deal = make_deal(self.store, is_active=False)
        response = self._schedule(deal_id=deal.id)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_schedule_with_deal(self):
        deal = make_deal(self.store)
        response = self._schedule(deal_id=deal.id)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["deal"]["id"], deal.id)

    def test_list_newest_visit_date_first(self):
        self._visit(days_ahead=1)
        later = self._visit(days_ahead=5)
        request = self.factory.get("/api/v1/consumer/visits")
        force_authenticate(request, user=self.consumer)
        response = ConsumerVisitListCreateView.as_view()(request)
        self.assertEqual(response.data[0]["id"], later.id)


class CompleteVisitTests(VisitTestBase):
    def test_consumer_completion_awards_points_once(self):
        visit = self._visit()
        response = self._consumer_complete(visit)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], VisitStatus.COMPLETED)
        self.assertTrue(response.data["marked_as_visited"])
        self.assertIsNotNone(response.data["completed_at"])
        self.assertEqual(balance_for(self.consumer), 100)

        again = self._consumer_complete(visit)
        self.assertEqual(again.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self._partner_complete(visit).status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(balance_for(self.consumer), 100)

        reward = Reward.objects.get(user=self.consumer)
        self.assertEqual(reward.reason, "Completed store visit")
        self.assertEqual(reward.reference_id, visit.id)

    def test_partner_completion_rewards_consumer(self):
        visit = self._visit()
        response = self._partner_complete(visit)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(balance_for(self.consumer), 100)
        self.assertEqual(balance_for(self.partner), 0)
        self.assertEqual(PartnerStat.objects.get(store=self.store, date=self.today).actual_visits, 1)
        self.assertTrue(Notification.objects.filter(user=self.consumer, title="Visit completed").exists())

    def test_consumer_cannot_complete_someone_elses_visit(self):
        visit = self._visit(user=make_consumer(phone="9876500002"))
        response = self._consumer_complete(visit)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_partner_cannot_complete_other_store_visit(self):
        other_partner, _ = make_partner(phone="9876500200", name="Other")
        visit = self._visit()
        response = self._partner_complete(visit, user=other_partner)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        visit.refresh_from_db()
        self.assertEqual(visit.status, VisitStatus.SCHEDULED)


class PartnerVisitListTests(VisitTestBase):
    def test_lists_upcoming_scheduled_only(self):
        upcoming = self._visit(days_ahead=2)
        done = self._visit(days_ahead=1)
        done.status = VisitStatus.COMPLETED
        done.save()
        self._visit(days_ahead=-1)

        request = self.factory.get("/api/v1/partner/visits")
        force_authenticate(request, user=self.partner)
        response = PartnerVisitListView.as_view()(request)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([v["id"] for v in response.data], [upcoming.id])
        self.assertEqual(response.data[0]["user"]["id"], self.consumer.id)
