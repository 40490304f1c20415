# stores/views.py
from django.shortcuts import get_object_or_404
from rest_framework import generics, permissions
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from analytics.services import record_store_view
from common.permissions import IsConsumer, IsPartner, partner_store_for
from deals.models import Deal
from deals.serializers import ConsumerDealSerializer
from reviews.serializers import PublicReviewSerializer
from .models import PartnerStore
from .serializers import NearbyStoreSerializer, PartnerStoreSerializer
from .services import DEFAULT_RADIUS_KM, nearby_stores, rating_summary, search_stores, stores_in_category


def _float_param(request, name, default=None):
    raw = request.query_params.get(name)
    if raw in (None, ""):
        return default
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise ValidationError({name: "Must be a number"})


class ConsumerStoreListView(APIView):
    """
    GET /api/v1/consumer/stores?query=&category=&lat=&lng=&radius=

    lat+lng wins over category, which wins over the free-text query.
    """
    permission_classes = [IsConsumer]

    def get(self, request):
        lat = _float_param(request, "lat")
        lng = _float_param(request, "lng")
        radius = _float_param(request, "radius", DEFAULT_RADIUS_KM)
        category = request.query_params.get("category")
        query = request.query_params.get("query")

        if lat is not None and lng is not None:
            stores = nearby_stores(lat, lng, radius)
            return Response(NearbyStoreSerializer(stores, many=True).data)

        if category:
            qs = stores_in_category(category)
        else:
            qs = search_stores(query)
        return Response(PartnerStoreSerializer(qs, many=True).data)


class ConsumerStoreDetailView(APIView):
    permission_classes = [IsConsumer]

    def get(self, request, pk: int):
        store = get_object_or_404(PartnerStore, pk=pk)
        record_store_view(store.id)

        deals = Deal.objects.live().filter(store=store).select_related("store")
        reviews = store.reviews.filter(is_published=True).select_related("user").order_by("-created_at", "-id")
        return Response(
            {
                "store": PartnerStoreSerializer(store).data,
                "deals": ConsumerDealSerializer(deals, many=True).data,
                "reviews": PublicReviewSerializer(reviews, many=True).data,
                "rating": rating_summary(store),
            }
        )


class PartnerStoreView(generics.RetrieveUpdateAPIView):
    """
    GET /api/v1/partner/store
    PATCH /api/v1/partner/store
    """
    serializer_class = PartnerStoreSerializer
    permission_classes = [permissions.IsAuthenticated, IsPartner]
    http_method_names = ["get", "patch", "options"]

    def get_object(self):
        return partner_store_for(self.request)
