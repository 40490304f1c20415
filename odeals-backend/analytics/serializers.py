# analytics/serializers.py
from rest_framework import serializers

from .models import PartnerStat


class PartnerStatSerializer(serializers.ModelSerializer):
    class Meta:
        model = PartnerStat
        fields = ("date", "store_views", "deal_views", "scheduled_visits", "actual_visits")
