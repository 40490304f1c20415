"""
Reviews: submission rewards, moderation and what the store page shows.
"""
from django.core.cache import cache
from django.db import IntegrityError, transaction
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIRequestFactory, force_authenticate

from common.testing import make_consumer, make_partner
from loyalty.services import balance_for
from notifications.models import Notification
from reviews.models import Review
from reviews.services import submit_review
from reviews.views import ConsumerReviewCreateView, PartnerReviewListView, PartnerReviewPublishView
from stores.views import ConsumerStoreDetailView


class ReviewTests(TestCase):
    def setUp(self):
        cache.clear()
        self.factory = APIRequestFactory()
        self.consumer = make_consumer()
        self.partner, self.store = make_partner()

    def _submit(self, rating, partner_id=None):
        request = self.factory.post(
            "/api/v1/consumer/reviews",
            {"partner_id": partner_id or self.store.id, "rating": rating, "comment": "Lovely chai"},
            format="json",
        )
        force_authenticate(request, user=self.consumer)
        return ConsumerReviewCreateView.as_view()(request)

    def _store_page(self):
        request = self.factory.get(f"/api/v1/consumer/stores/{self.store.id}")
        force_authenticate(request, user=self.consumer)
        return ConsumerStoreDetailView.as_view()(request, pk=self.store.id)

    def test_submit_review(self):
        response = self._submit(4)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertFalse(response.data["is_published"])
        self.assertEqual(balance_for(self.consumer), 100)
        self.assertTrue(Notification.objects.filter(user=self.partner, title="New review").exists())

    def test_rating_out_of_range(self):
        self.assertEqual(self._submit(6).status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self._submit(0).status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Review.objects.exists())
        self.assertEqual(balance_for(self.consumer), 0)

    def test_missing_store(self):
        self.assertEqual(self._submit(5, partner_id=9999).status_code, status.HTTP_404_NOT_FOUND)

    def test_database_rejects_bad_rating(self):
        with self.assertRaises(IntegrityError), transaction.atomic():
            Review.objects.create(user=self.consumer, store=self.store, rating=9)

    def test_unpublished_hidden_until_published(self):
        review = submit_review(self.consumer, self.store, 5, "Great")
        page = self._store_page()
        self.assertEqual(page.data["reviews"], [])
        self.assertEqual(page.data["rating"], {"average": None, "count": 0})

        request = self.factory.post(f"/api/v1/partner/reviews/{review.id}/publish")
        force_authenticate(request, user=self.partner)
        response = PartnerReviewPublishView.as_view()(request, pk=review.id)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["is_published"])

        page = self._store_page()
        self.assertEqual(len(page.data["reviews"]), 1)
        self.assertEqual(page.data["reviews"][0]["reviewer"], "Asha")
        self.assertEqual(page.data["rating"]["count"], 1)

    def test_rating_average(self):
        other = make_consumer(phone="9876500002")
        Review.objects.create(user=self.consumer, store=self.store, rating=4, is_published=True)
        Review.objects.create(user=other, store=self.store, rating=5, is_published=True)
        Review.objects.create(user=other, store=self.store, rating=1, is_published=False)
        rating = self._store_page().data["rating"]
        self.assertEqual(str(rating["average"]), "4.5")
        self.assertEqual(rating["count"], 2)

    def test_partner_sees_all_reviews(self):
        submit_review(self.consumer, self.store, 3)
        Review.objects.create(user=self.consumer, store=self.store, rating=5, is_published=True)
        request = self.factory.get("/api/v1/partner/reviews")
        force_authenticate(request, user=self.partner)
        response = PartnerReviewListView.as_view()(request)
        self.assertEqual(len(response.data), 2)
        self.assertEqual(response.data[0]["user"]["id"], self.consumer.id)

    def test_cannot_publish_other_store_review(self):
        review = submit_review(self.consumer, self.store, 3)
        other_partner, _ = make_partner(phone="9876500200", name="Other")
        request = self.factory.post(f"/api/v1/partner/reviews/{review.id}/publish")
        force_authenticate(request, user=other_partner)
        response = PartnerReviewPublishView.as_view()(request, pk=review.id)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
