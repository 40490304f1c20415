# visits/views.py
from django.shortcuts import get_object_or_404
from rest_framework import generics, permissions, status
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response

from common.exceptions import BusinessRuleError
from common.permissions import IsConsumer, IsPartner, partner_store_for
from deals.models import Deal
from stores.models import PartnerStore
from .models import Visit
from .serializers import PartnerVisitSerializer, VisitCreateSerializer, VisitSerializer
from .services import complete_visit, schedule_visit, upcoming_for_store


class ConsumerVisitListCreateView(generics.GenericAPIView):
    """
    GET /api/v1/consumer/visits
    POST /api/v1/consumer/visits
    """
    permission_classes = [IsConsumer]
    serializer_class = VisitCreateSerializer

    def get(self, request, *args, **kwargs):
        qs = (
            Visit.objects.filter(user=request.user)
            .select_related("store", "deal")
            .order_by("-visit_date", "-id")
        )
        return Response(VisitSerializer(qs, many=True).data)

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        store = get_object_or_404(PartnerStore, pk=data["partner_id"])
        deal = None
        if data.get("deal_id"):
            deal = Deal.objects.filter(pk=data["deal_id"]).first()
            if deal is None:
                raise BusinessRuleError("Deal not found")

        visit = schedule_visit(request.user, store, data["visit_date"], notes=data.get("notes", ""), deal=deal)
        return Response(VisitSerializer(visit).data, status=status.HTTP_201_CREATED)


class ConsumerVisitCompleteView(generics.GenericAPIView):
    permission_classes = [IsConsumer]

    def post(self, request, pk: int, *args, **kwargs):
        visit = get_object_or_404(Visit, pk=pk)
        if visit.user_id != request.user.id:
            raise PermissionDenied("This visit belongs to another user")
        visit = complete_visit(visit)
        return Response(VisitSerializer(visit).data)


class PartnerVisitListView(generics.ListAPIView):
    """
    GET /api/v1/partner/visits: upcoming scheduled visits to the partner's store.
    """
    permission_classes = [permissions.IsAuthenticated, IsPartner]
    serializer_class = PartnerVisitSerializer

    def get_queryset(self):
        return upcoming_for_store(partner_store_for(self.request))


class PartnerVisitCompleteView(generics.GenericAPIView):
    permission_classes = [permissions.IsAuthenticated, IsPartner]

    def post(self, request, pk: int, *args, **kwargs):
        store = partner_store_for(request)
        visit = get_object_or_404(Visit, pk=pk)
        if visit.store_id != store.id:
            raise PermissionDenied("This visit is for another store")
        visit = complete_visit(visit)
        return Response(PartnerVisitSerializer(visit).data)
