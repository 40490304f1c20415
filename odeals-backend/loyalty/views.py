# loyalty/views.py
from django.shortcuts import get_object_or_404
from rest_framework import generics, permissions, status
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response

from common.permissions import IsConsumer, IsPartner, partner_store_for
from stores.models import PartnerStore
from .models import Redemption, Referral
from .serializers import (
    PartnerRedemptionSerializer,
    RedeemSerializer,
    RedemptionSerializer,
    ReferralCreateSerializer,
    ReferralSerializer,
    RewardSerializer,
)
from .services import balance_for, complete_redemption, create_referral, history_for, pending_due_amount, redeem


class ConsumerRewardsView(generics.GenericAPIView):
    """
    GET /api/v1/consumer/rewards
    """
    permission_classes = [IsConsumer]

    def get(self, request, *args, **kwargs):
        return Response(
            {
                "rewards": RewardSerializer(history_for(request.user), many=True).data,
                "total_points": balance_for(request.user),
            }
        )


class ConsumerRedeemView(generics.GenericAPIView):
    """
    POST /api/v1/consumer/redeem
    """
    permission_classes = [IsConsumer]
    serializer_class = RedeemSerializer

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        store = get_object_or_404(PartnerStore, pk=data["partner_id"])
        redemption = redeem(request.user, store, data["points"], data.get("proof_image_url", ""))
        return Response(RedemptionSerializer(redemption).data, status=status.HTTP_201_CREATED)


class ConsumerRedemptionListView(generics.ListAPIView):
    permission_classes = [IsConsumer]
    serializer_class = RedemptionSerializer

    def get_queryset(self):
        return Redemption.objects.filter(user=self.request.user).select_related("store").order_by("-created_at", "-id")


class PartnerRedemptionListView(generics.GenericAPIView):
    """
    GET /api/v1/partner/redemptions: all redemptions at the store plus what
    is still owed on the pending ones.
    """
    permission_classes = [permissions.IsAuthenticated, IsPartner]

    def get(self, request, *args, **kwargs):
        store = partner_store_for(request)
        qs = Redemption.objects.filter(store=store).select_related("user").order_by("-created_at", "-id")
        return Response(
            {
                "redemptions": PartnerRedemptionSerializer(qs, many=True).data,
                "total_due_amount": pending_due_amount(store),
            }
        )


class PartnerRedemptionCompleteView(generics.GenericAPIView):
    permission_classes = [permissions.IsAuthenticated, IsPartner]

    def post(self, request, pk: int, *args, **kwargs):
        store = partner_store_for(request)
        redemption = get_object_or_404(Redemption, pk=pk)
        if redemption.store_id != store.id:
            raise PermissionDenied("This redemption is for another store")
        redemption = complete_redemption(redemption)
        return Response(PartnerRedemptionSerializer(redemption).data)


class ConsumerReferralListCreateView(generics.GenericAPIView):
    """
    GET /api/v1/consumer/referrals
    POST /api/v1/consumer/referrals
    """
    permission_classes = [IsConsumer]
    serializer_class = ReferralCreateSerializer

    def get(self, request, *args, **kwargs):
        qs = Referral.objects.filter(referrer=request.user).order_by("-created_at", "-id")
        return Response(ReferralSerializer(qs, many=True).data)

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        referral = create_referral(request.user, serializer.validated_data["referred_phone"])
        return Response(ReferralSerializer(referral).data, status=status.HTTP_201_CREATED)
