"""
Store search (text, category, nearby), store page and partner profile.
"""
from decimal import Decimal

from django.core.cache import cache
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIRequestFactory, force_authenticate

from analytics.models import PartnerStat
from common.roles import UserType
from common.testing import make_consumer, make_deal, make_partner
from stores.services import haversine_km, nearby_stores
from stores.views import ConsumerStoreDetailView, ConsumerStoreListView, PartnerStoreView

# MG Road, Bengaluru
LAT, LNG = 12.975, 77.605


class StoreSearchTests(TestCase):
    def setUp(self):
        cache.clear()
        self.factory = APIRequestFactory()
        self.consumer = make_consumer()
        _, self.near = make_partner(
            phone="9876500100", name="Chai Point", latitude=Decimal("12.976000"), longitude=Decimal("77.606000")
        )
        _, self.far = make_partner(
            phone="9876500101",
            name="Seafood Shack",
            categories=["Jewellery"],
            latitude=Decimal("12.900000"),
            longitude=Decimal("77.650000"),
        )
        _, self.nowhere = make_partner(phone="9876500102", name="Gold Leaf", categories=["Jewellery"])

    def _list(self, **params):
        request = self.factory.get("/api/v1/consumer/stores", params)
        force_authenticate(request, user=self.consumer)
        return ConsumerStoreListView.as_view()(request)

    def test_haversine(self):
        self.assertAlmostEqual(haversine_km(LAT, LNG, LAT, LNG), 0.0)
        # Bengaluru -> Mysuru is roughly 128 km as the crow flies
        self.assertAlmostEqual(haversine_km(12.9716, 77.5946, 12.2958, 76.6394), 128, delta=3)

    def test_nearby_sorted_and_excludes_missing_coordinates(self):
        stores = nearby_stores(LAT, LNG, radius_km=20)
        self.assertEqual([s.id for s in stores], [self.near.id, self.far.id])
        self.assertLess(stores[0].distance_km, stores[1].distance_km)

    def test_nearby_radius(self):
        response = self._list(lat=LAT, lng=LNG, radius=2)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([s["id"] for s in response.data], [self.near.id])
        self.assertIn("distance_km", response.data[0])

    def test_coordinates_take_precedence_over_category(self):
        response = self._list(lat=LAT, lng=LNG, radius=2, category="Jewellery")
        self.assertEqual([s["id"] for s in response.data], [self.near.id])

    def test_invalid_coordinates(self):
        response = self._list(lat="north", lng=LNG)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_category_filter(self):
        response = self._list(category="Jewellery")
        self.assertEqual({s["id"] for s in response.data}, {self.far.id, self.nowhere.id})

    def test_category_matches_whole_name(self):
        # "Food" must not match a store named Seafood or an unrelated category
        response = self._list(category="Food")
        self.assertEqual([s["id"] for s in response.data], [self.near.id])

    def test_text_query(self):
        response = self._list(query="chai")
        self.assertEqual([s["id"] for s in response.data], [self.near.id])

    def test_all_stores_without_filters(self):
        self.assertEqual(len(self._list().data), 3)


class StoreDetailTests(TestCase):
    def setUp(self):
        cache.clear()
        self.factory = APIRequestFactory()
        self.consumer = make_consumer()
        self.partner, self.store = make_partner()

    def _detail(self, pk):
        request = self.factory.get(f"/api/v1/consumer/stores/{pk}")
        force_authenticate(request, user=self.consumer)
        return ConsumerStoreDetailView.as_view()(request, pk=pk)

    def test_detail_with_active_deals(self):
        live = make_deal(self.store, name="Live")
        make_deal(self.store, name="Off", is_active=False)
        response = self._detail(self.store.id)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["store"]["name"], "Chai Point")
        self.assertEqual([d["id"] for d in response.data["deals"]], [live.id])

    def test_detail_counts_store_views(self):
        self._detail(self.store.id)
        self._detail(self.store.id)
        stat = PartnerStat.objects.get(store=self.store, date=timezone.localdate())
        self.assertEqual(stat.store_views, 2)

    def test_missing_store(self):
        self.assertEqual(self._detail(9999).status_code, status.HTTP_404_NOT_FOUND)


class PartnerStoreTests(TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.partner, self.store = make_partner()

    def _patch(self, data, user=None):
        request = self.factory.patch("/api/v1/partner/store", data, format="json")
        force_authenticate(request, user=user or self.partner)
        return PartnerStoreView.as_view()(request)

    def test_get_own_store(self):
        request = self.factory.get("/api/v1/partner/store")
        force_authenticate(request, user=self.partner)
        response = PartnerStoreView.as_view()(request)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["id"], self.store.id)

    def test_update_store(self):
        response = self._patch({"description": "Now open late", "price_rating": 3})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.store.refresh_from_db()
        self.assertEqual(self.store.price_rating, 3)

    def test_price_rating_bounds(self):
        self.assertEqual(self._patch({"price_rating": 5}).status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_category(self):
        self.assertEqual(self._patch({"categories": ["Bakery"]}).status_code, status.HTTP_400_BAD_REQUEST)

    def test_partner_without_store(self):
        from django.contrib.auth import get_user_model

        orphan = get_user_model().objects.create_user("9876500999", user_type=UserType.PARTNER)
        request = self.factory.get("/api/v1/partner/store")
        force_authenticate(request, user=orphan)
        response = PartnerStoreView.as_view()(request)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["detail"], "Store not found")

    def test_consumer_forbidden(self):
        response = self._patch({"description": "x"}, user=make_consumer())
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
