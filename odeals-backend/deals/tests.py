"""
Deal lifecycle: creation rules, the active-per-category cap, consumer
listing and expiry.
"""
from datetime import timedelta
from io import StringIO

from django.core.cache import cache
from django.core.management import call_command
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIRequestFactory, force_authenticate

from analytics.models import PartnerStat
from common.testing import make_consumer, make_deal, make_partner
from deals.models import Deal
from deals.services import expire_deals, live_deals
from deals.views import (
    ConsumerDealDetailView,
    ConsumerDealListView,
    PartnerDealDeactivateView,
    PartnerDealDetailView,
    PartnerDealListCreateView,
)

CAP_MESSAGE = "You already have 3 active deals in this category. Deactivate one to create a new deal."


class DealTestBase(TestCase):
    def setUp(self):
        cache.clear()
        self.factory = APIRequestFactory()
        self.partner, self.store = make_partner(categories=["Food", "Jewellery"])
        self.consumer = make_consumer()
        self.today = timezone.localdate()

    def _payload(self, **overrides):
        data = {
            "name": "Buy one get one",
            "description": "On all beverages",
            "start_date": self.today.isoformat(),
            "end_date": (self.today + timedelta(days=7)).isoformat(),
            "deal_type": "discount",
            "discount_percentage": 20,
            "category": "Food",
        }
        data.update(overrides)
        return data

    def _create(self, **overrides):
        request = self.factory.post("/api/v1/partner/deals", self._payload(**overrides), format="json")
        force_authenticate(request, user=self.partner)
        return PartnerDealListCreateView.as_view()(request)

    def _patch(self, deal, data, user=None):
        request = self.factory.patch(f"/api/v1/partner/deals/{deal.id}", data, format="json")
        force_authenticate(request, user=user or self.partner)
        return PartnerDealDetailView.as_view()(request, pk=deal.id)


class PartnerDealTests(DealTestBase):
    def test_create_deal(self):
        response = self._create()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data["is_active"])
        self.assertEqual(response.data["store_id"], self.store.id)

    def test_new_deal_is_active_even_if_requested_inactive(self):
        response = self._create(is_active=False)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(Deal.objects.get(pk=response.data["id"]).is_active)

    def test_fourth_active_deal_in_category_rejected(self):
        for i in range(3):
            self.assertEqual(self._create(name=f"Deal {i}").status_code, status.HTTP_201_CREATED)

        response = self._create(name="Deal 4")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], CAP_MESSAGE)
        self.assertEqual(Deal.objects.filter(store=self.store, category="Food").count(), 3)

    def test_cap_is_per_category(self):
        for i in range(3):
            self._create(name=f"Deal {i}")
        response = self._create(name="Ring sale", category="Jewellery")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_deactivating_frees_a_slot(self):
        deals = [make_deal(self.store, name=f"Deal {i}") for i in range(3)]
        request = self.factory.post(f"/api/v1/partner/deals/{deals[0].id}/deactivate")
        force_authenticate(request, user=self.partner)
        response = PartnerDealDeactivateView.as_view()(request, pk=deals[0].id)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data["is_active"])

        self.assertEqual(self._create(name="Deal 4").status_code, status.HTTP_201_CREATED)

    def test_reactivation_respects_cap(self):
        inactive = make_deal(self.store, name="Old", is_active=False)
        for i in range(3):
            make_deal(self.store, name=f"Deal {i}")

        response = self._patch(inactive, {"is_active": True})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], CAP_MESSAGE)
        inactive.refresh_from_db()
        self.assertFalse(inactive.is_active)

    def test_moving_active_deal_into_full_category_rejected(self):
        ring = make_deal(self.store, category="Jewellery", name="Ring sale")
        for i in range(3):
            make_deal(self.store, name=f"Deal {i}")
        response = self._patch(ring, {"category": "Food"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_editing_active_deal_in_full_category_allowed(self):
        deals = [make_deal(self.store, name=f"Deal {i}") for i in range(3)]
        response = self._patch(deals[0], {"name": "Renamed"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["name"], "Renamed")

    def test_discount_requires_percentage(self):
        response = self._create(discount_percentage=None)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("discount_percentage", response.data)

    def test_discount_percentage_bounds(self):
        response = self._create(discount_percentage=120)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_freebie_needs_no_percentage(self):
        response = self._create(deal_type="freebie", discount_percentage=None)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_end_before_start_rejected(self):
        response = self._create(end_date=(self.today - timedelta(days=1)).isoformat())
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("end_date", response.data)

    def test_unknown_category_rejected(self):
        response = self._create(category="Bakery")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("category", response.data)

    def test_other_store_deal_forbidden(self):
        other_partner, other_store = make_partner(phone="9876500200", name="Other")
        deal = make_deal(other_store)
        request = self.factory.get(f"/api/v1/partner/deals/{deal.id}")
        force_authenticate(request, user=self.partner)
        response = PartnerDealDetailView.as_view()(request, pk=deal.id)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_partner_lists_only_own_deals(self):
        make_deal(self.store, name="Mine")
        _, other_store = make_partner(phone="9876500200", name="Other")
        make_deal(other_store, name="Theirs")

        request = self.factory.get("/api/v1/partner/deals")
        force_authenticate(request, user=self.partner)
        response = PartnerDealListCreateView.as_view()(request)
        self.assertEqual([d["name"] for d in response.data], ["Mine"])


class ConsumerDealTests(DealTestBase):
    def test_only_live_deals_listed(self):
        live = make_deal(self.store, name="Live")
        make_deal(self.store, name="Future", start_offset=3)
        make_deal(self.store, name="Past", start_offset=-10, days=2)
        make_deal(self.store, name="Off", is_active=False)

        self.assertEqual(list(live_deals()), [live])

    def test_category_aliases(self):
        cafe = make_deal(self.store, category="cafe", name="Coffee")
        food = make_deal(self.store, category="Food", name="Thali")
        make_deal(self.store, category="Jewellery", name="Rings")

        request = self.factory.get("/api/v1/consumer/deals", {"category": "Food"})
        force_authenticate(request, user=self.consumer)
        response = ConsumerDealListView.as_view()(request)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual({d["id"] for d in response.data}, {cafe.id, food.id})
        self.assertEqual(response.data[0]["store"]["id"], self.store.id)

    def test_text_search(self):
        make_deal(self.store, name="Masala chai combo")
        make_deal(self.store, name="Samosa")
        self.assertEqual([d.name for d in live_deals(query="chai")], ["Masala chai combo"])

    def test_detail_counts_deal_view(self):
        deal = make_deal(self.store)
        request = self.factory.get(f"/api/v1/consumer/deals/{deal.id}")
        force_authenticate(request, user=self.consumer)
        response = ConsumerDealDetailView.as_view()(request, pk=deal.id)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["store"]["name"], self.store.name)
        self.assertEqual(PartnerStat.objects.get(store=self.store, date=self.today).deal_views, 1)

    def test_detail_missing_deal(self):
        request = self.factory.get("/api/v1/consumer/deals/999")
        force_authenticate(request, user=self.consumer)
        response = ConsumerDealDetailView.as_view()(request, pk=999)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_anonymous_gets_401(self):
        request = self.factory.get("/api/v1/consumer/deals")
        response = ConsumerDealListView.as_view()(request)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class ExpireDealsTests(DealTestBase):
    def test_expire_deals_deactivates_ended(self):
        ended = make_deal(self.store, name="Ended", start_offset=-10, days=5)
        current = make_deal(self.store, name="Current")

        self.assertEqual(expire_deals(), 1)
        ended.refresh_from_db()
        current.refresh_from_db()
        self.assertFalse(ended.is_active)
        self.assertTrue(current.is_active)

    def test_command_reports_count(self):
        make_deal(self.store, name="Ended", start_offset=-10, days=5)
        out = StringIO()
        call_command("expire_deals", stdout=out)
        self.assertIn("Expired 1 deal(s)", out.getvalue())
