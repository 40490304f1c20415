# visits/serializers.py
from rest_framework import serializers

from accounts.serializers import UserSummarySerializer
from deals.serializers import DealSummarySerializer
from stores.serializers import StoreSummarySerializer
from .models import Visit


class VisitCreateSerializer(serializers.Serializer):
    partner_id = serializers.IntegerField()
    visit_date = serializers.DateField()
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    deal_id = serializers.IntegerField(required=False, allow_null=True)


class VisitSerializer(serializers.ModelSerializer):
    store = StoreSummarySerializer(read_only=True)
    deal = DealSummarySerializer(read_only=True)

    class Meta:
        model = Visit
        fields = (
            "id",
            "visit_date",
            "notes",
            "status",
            "marked_as_visited",
            "completed_at",
            "created_at",
            "store",
            "deal",
        )


class PartnerVisitSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)
    deal = DealSummarySerializer(read_only=True)

    class Meta:
        model = Visit
        fields = (
            "id",
            "visit_date",
            "notes",
            "status",
            "marked_as_visited",
            "completed_at",
            "created_at",
            "user",
            "deal",
        )
