# analytics/urls.py
from django.urls import path

from .views import PartnerAnalyticsExportView, PartnerAnalyticsView

app_name = "analytics"

urlpatterns = [
    path("partner/analytics", PartnerAnalyticsView.as_view(), name="partner"),
    path("partner/analytics/export", PartnerAnalyticsExportView.as_view(), name="partner-export"),
]
