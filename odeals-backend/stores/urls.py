# stores/urls.py
from django.urls import path

from .views import ConsumerStoreDetailView, ConsumerStoreListView, PartnerStoreView

app_name = "stores"

urlpatterns = [
    path("consumer/stores", ConsumerStoreListView.as_view(), name="consumer-list"),
    path("consumer/stores/<int:pk>", ConsumerStoreDetailView.as_view(), name="consumer-detail"),
    path("partner/store", PartnerStoreView.as_view(), name="partner-store"),
]
