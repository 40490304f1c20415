# loyalty/serializers.py
from rest_framework import serializers

from accounts.serializers import UserSummarySerializer, phone_field
from stores.serializers import StoreSummarySerializer
from .models import Reward, Redemption, Referral


class RewardSerializer(serializers.ModelSerializer):
    class Meta:
        model = Reward
        fields = ("id", "points", "reason", "reference_id", "created_at")


class RedeemSerializer(serializers.Serializer):
    partner_id = serializers.IntegerField()
    points = serializers.IntegerField()
    proof_image_url = serializers.URLField(required=False, allow_blank=True, default="")


class RedemptionSerializer(serializers.ModelSerializer):
    store = StoreSummarySerializer(read_only=True)

    class Meta:
        model = Redemption
        fields = ("id", "points", "amount", "code", "status", "proof_image_url", "created_at", "completed_at", "store")


class PartnerRedemptionSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = Redemption
        fields = ("id", "points", "amount", "code", "status", "proof_image_url", "created_at", "completed_at", "user")


class ReferralCreateSerializer(serializers.Serializer):
    referred_phone = phone_field()


class ReferralSerializer(serializers.ModelSerializer):
    class Meta:
        model = Referral
        fields = ("id", "referred_phone", "status", "created_at", "completed_at")
