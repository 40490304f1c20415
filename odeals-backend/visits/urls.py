# visits/urls.py
from django.urls import path

from .views import (
    ConsumerVisitCompleteView,
    ConsumerVisitListCreateView,
    PartnerVisitCompleteView,
    PartnerVisitListView,
)

app_name = "visits"

urlpatterns = [
    path("consumer/visits", ConsumerVisitListCreateView.as_view(), name="consumer-list"),
    path("consumer/visits/<int:pk>/complete", ConsumerVisitCompleteView.as_view(), name="consumer-complete"),
    path("partner/visits", PartnerVisitListView.as_view(), name="partner-list"),
    path("partner/visits/<int:pk>/complete", PartnerVisitCompleteView.as_view(), name="partner-complete"),
]
