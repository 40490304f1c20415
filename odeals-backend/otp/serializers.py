from rest_framework import serializers

from accounts.serializers import phone_field


class SendOtpSerializer(serializers.Serializer):
    phone = phone_field()


class VerifyOtpSerializer(serializers.Serializer):
    phone = phone_field()
    otp = serializers.CharField(min_length=6, max_length=6)
