# reviews/serializers.py
from rest_framework import serializers

from accounts.serializers import UserSummarySerializer
from .models import Review


class ReviewCreateSerializer(serializers.Serializer):
    partner_id = serializers.IntegerField()
    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(required=False, allow_blank=True, default="")


class ReviewSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = Review
        fields = ("id", "store_id", "rating", "comment", "is_published", "created_at", "user")


class PublicReviewSerializer(serializers.ModelSerializer):
    """Store page variant: no phone numbers."""

    reviewer = serializers.CharField(source="user.first_name", read_only=True)

    class Meta:
        model = Review
        fields = ("id", "rating", "comment", "created_at", "reviewer")
