# deals/serializers.py
from rest_framework import serializers

from common.roles import BusinessCategory
from stores.serializers import StoreSummarySerializer
from .models import Deal, DealType
from .services import create_deal, update_deal


class DealSerializer(serializers.ModelSerializer):
    """
    Partner-side deal. Writes go through deals.services so the
    active-per-category cap is always enforced.
    Context must carry `store` for creates.
    """

    class Meta:
        model = Deal
        fields = (
            "id",
            "store_id",
            "name",
            "description",
            "start_date",
            "end_date",
            "deal_type",
            "discount_percentage",
            "category",
            "images",
            "is_active",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("id", "store_id", "created_at", "updated_at")

    def _store(self):
        if self.instance is not None:
            return self.instance.store
        return self.context["store"]

    def validate_category(self, value):
        allowed = set(BusinessCategory.values) | set(self._store().categories or [])
        if value not in allowed:
            raise serializers.ValidationError("Category must be one of your store's categories")
        return value

    def validate(self, attrs):
        def current(name):
            if name in attrs:
                return attrs[name]
            return getattr(self.instance, name, None)

        start, end = current("start_date"), current("end_date")
        if start and end and end < start:
            raise serializers.ValidationError({"end_date": "End date must be on or after the start date"})

        if current("deal_type") == DealType.DISCOUNT and current("discount_percentage") is None:
            raise serializers.ValidationError(
                {"discount_percentage": "Discount percentage is required for discount deals"}
            )
        return attrs

    def create(self, validated_data):
        # new deals always start active
        validated_data.pop("is_active", None)
        return create_deal(self.context["store"], **validated_data)

    def update(self, instance, validated_data):
        return update_deal(instance, **validated_data)


class DealSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Deal
        fields = ("id", "name", "deal_type", "discount_percentage", "category", "end_date")


class ConsumerDealSerializer(serializers.ModelSerializer):
    store = StoreSummarySerializer(read_only=True)

    class Meta:
        model = Deal
        fields = (
            "id",
            "name",
            "description",
            "start_date",
            "end_date",
            "deal_type",
            "discount_percentage",
            "category",
            "images",
            "store",
        )
