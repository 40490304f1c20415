"""
Partner statistics counters, range queries and CSV export.
"""
from datetime import timedelta

from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIRequestFactory, force_authenticate

from analytics.export import export_to_csv
from analytics.models import PartnerStat
from analytics.services import record_deal_view, record_store_view, stats_for_range
from analytics.views import PartnerAnalyticsExportView, PartnerAnalyticsView
from common.testing import make_partner


class AnalyticsTests(TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.partner, self.store = make_partner()
        self.today = timezone.localdate()

    def _get(self, view, **params):
        request = self.factory.get("/api/v1/partner/analytics", params)
        force_authenticate(request, user=self.partner)
        return view.as_view()(request)

    def test_counters_share_one_row_per_day(self):
        record_store_view(self.store.id)
        record_store_view(self.store.id)
        record_deal_view(self.store.id)
        stat = PartnerStat.objects.get(store=self.store)
        self.assertEqual((stat.store_views, stat.deal_views), (2, 1))

    def test_range_and_totals(self):
        PartnerStat.objects.create(store=self.store, date=self.today - timedelta(days=3), store_views=4)
        PartnerStat.objects.create(store=self.store, date=self.today - timedelta(days=30), store_views=50)
        record_store_view(self.store.id)

        qs, totals = stats_for_range(self.store, days=7)
        self.assertEqual(qs.count(), 2)
        self.assertEqual(totals["store_views"], 5)
        self.assertEqual(totals["actual_visits"], 0)

    def test_view_defaults_to_week(self):
        record_store_view(self.store.id)
        response = self._get(PartnerAnalyticsView)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["days"], 7)
        self.assertEqual(response.data["totals"]["store_views"], 1)
        self.assertEqual(len(response.data["stats"]), 1)

    def test_days_validation(self):
        self.assertEqual(self._get(PartnerAnalyticsView, days=0).status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self._get(PartnerAnalyticsView, days=91).status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self._get(PartnerAnalyticsView, days="week").status_code, status.HTTP_400_BAD_REQUEST)

    def test_csv_export(self):
        record_store_view(self.store.id)
        response = self._get(PartnerAnalyticsExportView, days=30)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response["Content-Type"].startswith("text/csv"))
        self.assertIn("attachment;", response["Content-Disposition"])

        lines = response.content.decode().strip().splitlines()
        self.assertEqual(lines[0], "date,store_views,deal_views,scheduled_visits,actual_visits")
        self.assertEqual(lines[1], f"{self.today.isoformat()},1,0,0,0")

    def test_export_helper_header_only(self):
        self.assertEqual(export_to_csv([], fieldnames=["date"]).strip(), "date")
        self.assertEqual(export_to_csv([]), "")
