# reviews/urls.py
from django.urls import path

from .views import ConsumerReviewCreateView, PartnerReviewListView, PartnerReviewPublishView

app_name = "reviews"

urlpatterns = [
    path("consumer/reviews", ConsumerReviewCreateView.as_view(), name="consumer-create"),
    path("partner/reviews", PartnerReviewListView.as_view(), name="partner-list"),
    path("partner/reviews/<int:pk>/publish", PartnerReviewPublishView.as_view(), name="partner-publish"),
]
