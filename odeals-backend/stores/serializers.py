# stores/serializers.py
from rest_framework import serializers

from common.roles import BusinessCategory
from .models import PartnerStore


def validate_business_categories(value):
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise serializers.ValidationError("Must be a list of category names")
    unknown = [v for v in value if v not in BusinessCategory.values]
    if unknown:
        raise serializers.ValidationError(f"Unknown categories: {', '.join(unknown)}")
    return value


class PartnerStoreSerializer(serializers.ModelSerializer):
    class Meta:
        model = PartnerStore
        fields = (
            "id",
            "name",
            "description",
            "contact_phone",
            "location",
            "latitude",
            "longitude",
            "categories",
            "business_hours",
            "price_rating",
            "upi_id",
            "images",
            "services_offered",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("id", "created_at", "updated_at")

    def validate_categories(self, value):
        value = validate_business_categories(value)
        if not value:
            raise serializers.ValidationError("Pick at least one category")
        return value


class NearbyStoreSerializer(PartnerStoreSerializer):
    distance_km = serializers.FloatField(read_only=True)

    class Meta(PartnerStoreSerializer.Meta):
        fields = PartnerStoreSerializer.Meta.fields + ("distance_km",)


class StoreSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = PartnerStore
        fields = ("id", "name", "location", "categories", "images", "price_rating")
