# core/urls.py
"""
URL configuration for the oDeals backend. Every API route lives under /api/v1/.
"""

from django.contrib import admin
from django.urls import path, include
from django.views.generic import RedirectView
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from common.views import CategoryListView, UserTypeListView


urlpatterns = [
    path("", RedirectView.as_view(url="/admin/", permanent=False)),
    path("admin/", admin.site.urls),

    # API & docs
    path("api/v1/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/v1/docs/", SpectacularSwaggerView.as_view(url_name="schema")),

    path("api/v1/categories", CategoryListView.as_view(), name="categories"),
    path("api/v1/user-types", UserTypeListView.as_view(), name="user-types"),

    path("api/v1/", include("accounts.urls", namespace="accounts")),
    path("api/v1/", include("stores.urls", namespace="stores")),
    path("api/v1/", include("deals.urls", namespace="deals")),
    path("api/v1/", include("visits.urls", namespace="visits")),
    path("api/v1/", include("reviews.urls", namespace="reviews")),
    path("api/v1/", include("loyalty.urls", namespace="loyalty")),
    path("api/v1/", include("notifications.urls", namespace="notifications")),
    path("api/v1/", include("analytics.urls", namespace="analytics")),
]
