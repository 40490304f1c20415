# deals/urls.py
from django.urls import path

from .views import (
    ConsumerDealDetailView,
    ConsumerDealListView,
    PartnerDealDeactivateView,
    PartnerDealDetailView,
    PartnerDealListCreateView,
)

app_name = "deals"

urlpatterns = [
    path("consumer/deals", ConsumerDealListView.as_view(), name="consumer-list"),
    path("consumer/deals/<int:pk>", ConsumerDealDetailView.as_view(), name="consumer-detail"),
    path("partner/deals", PartnerDealListCreateView.as_view(), name="partner-list"),
    path("partner/deals/<int:pk>", PartnerDealDetailView.as_view(), name="partner-detail"),
    path("partner/deals/<int:pk>/deactivate", PartnerDealDeactivateView.as_view(), name="partner-deactivate"),
]
