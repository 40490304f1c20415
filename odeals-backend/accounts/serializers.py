# accounts/serializers.py
from django.contrib.auth import get_user_model
from rest_framework import serializers

from stores.serializers import PartnerStoreSerializer, validate_business_categories

User = get_user_model()

PHONE_MIN_LENGTH = 10
PHONE_MAX_LENGTH = 15


def phone_field(**kwargs):
    return serializers.CharField(min_length=PHONE_MIN_LENGTH, max_length=PHONE_MAX_LENGTH, **kwargs)


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = (
            "id",
            "phone",
            "user_type",
            "first_name",
            "last_name",
            "email",
            "zip_code",
            "favorite_categories",
            "is_verified",
            "created_at",
        )
        read_only_fields = fields


class UserSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ("id", "first_name", "last_name", "phone")


class ConsumerProfileSerializer(serializers.ModelSerializer):
    """Only these fields are writable through PATCH consumer/profile."""

    class Meta:
        model = User
        fields = ("first_name", "last_name", "email", "zip_code", "favorite_categories")

    def validate_favorite_categories(self, value):
        return validate_business_categories(value)


class ConsumerRegisterSerializer(serializers.Serializer):
    phone = phone_field()
    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    zip_code = serializers.CharField(max_length=16, required=False, allow_blank=True)
    favorite_categories = serializers.ListField(
        child=serializers.CharField(), required=False, default=list
    )

    def validate_favorite_categories(self, value):
        return validate_business_categories(value)


class PartnerUserDataSerializer(serializers.Serializer):
    phone = phone_field()
    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)


class PartnerRegisterSerializer(serializers.Serializer):
    user_data = PartnerUserDataSerializer()
    store_data = PartnerStoreSerializer()
