# deals/views.py
from django.shortcuts import get_object_or_404
from rest_framework import generics, permissions
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response
from rest_framework.views import APIView

from analytics.services import record_deal_view
from common.permissions import IsConsumer, IsPartner, partner_store_for
from stores.serializers import PartnerStoreSerializer
from .models import Deal
from .serializers import ConsumerDealSerializer, DealSerializer
from .services import deactivate_deal, live_deals


class ConsumerDealListView(generics.ListAPIView):
    """
    GET /api/v1/consumer/deals?query=&category=
    """
    serializer_class = ConsumerDealSerializer
    permission_classes = [IsConsumer]

    def get_queryset(self):
        params = self.request.query_params
        return live_deals(query=params.get("query"), category=params.get("category"))


class ConsumerDealDetailView(APIView):
    permission_classes = [IsConsumer]

    def get(self, request, pk: int):
        deal = get_object_or_404(Deal.objects.select_related("store"), pk=pk)
        record_deal_view(deal.store_id)
        return Response(
            {
                "deal": DealSerializer(deal).data,
                "store": PartnerStoreSerializer(deal.store).data,
            }
        )


class PartnerDealMixin:
    permission_classes = [permissions.IsAuthenticated, IsPartner]
    serializer_class = DealSerializer

    def get_store(self):
        if not hasattr(self, "_store"):
            self._store = partner_store_for(self.request)
        return self._store

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["store"] = self.get_store()
        return context

    def get_owned_deal(self):
        store = self.get_store()
        deal = get_object_or_404(Deal.objects.select_related("store"), pk=self.kwargs["pk"])
        if deal.store_id != store.id:
            raise PermissionDenied("This deal belongs to another store")
        return deal


class PartnerDealListCreateView(PartnerDealMixin, generics.ListCreateAPIView):
    """
    GET /api/v1/partner/deals
    POST /api/v1/partner/deals
    """

    def get_queryset(self):
        return Deal.objects.filter(store=self.get_store()).order_by("-created_at", "-id")


class PartnerDealDetailView(PartnerDealMixin, generics.RetrieveUpdateAPIView):
    """
    GET /api/v1/partner/deals/<id>
    PATCH /api/v1/partner/deals/<id>
    """
    http_method_names = ["get", "patch", "options"]

    def get_object(self):
        return self.get_owned_deal()


class PartnerDealDeactivateView(PartnerDealMixin, generics.GenericAPIView):
    def post(self, request, *args, **kwargs):
        deal = deactivate_deal(self.get_owned_deal())
        return Response(DealSerializer(deal).data)
