import logging

from django.contrib.auth import get_user_model, login
from rest_framework import generics, status, permissions
from rest_framework.response import Response

from accounts.services import VERIFIED_PHONE_SESSION_KEY
from common.auth_tokens import tokens_for_user
from .serializers import SendOtpSerializer, VerifyOtpSerializer
from .services import generate_otp, verify_otp, OtpVerificationResult

logger = logging.getLogger(__name__)


def _client_ip(request):
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR")


class SendOtpView(generics.GenericAPIView):
    """
    POST /api/v1/auth/send-otp
    """
    serializer_class = SendOtpSerializer
    authentication_classes = []  # public
    permission_classes = [permissions.AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        phone = serializer.validated_data["phone"]

        generate_otp(phone, ip=_client_ip(request), ua=request.META.get("HTTP_USER_AGENT"))
        return Response({"success": True, "message": "OTP sent"})


class VerifyOtpView(generics.GenericAPIView):
    """
    POST /api/v1/auth/verify-otp

    Known phone: signs the user in. Unknown phone: remembers the verified
    phone in the session so one of the register endpoints can finish signup.
    """
    serializer_class = VerifyOtpSerializer
    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        phone = serializer.validated_data["phone"]
        code = serializer.validated_data["otp"]

        result: OtpVerificationResult = verify_otp(phone, code)
        if not result.ok:
            return Response(
                {"detail": result.reason},
                status=result.status_code or status.HTTP_400_BAD_REQUEST,
            )

        user = get_user_model().objects.filter(phone=phone).first()
        if user is None:
            request.session[VERIFIED_PHONE_SESSION_KEY] = phone
            return Response({"is_verified": True, "is_new_user": True})

        if not user.is_verified:
            user.is_verified = True
            user.save(update_fields=["is_verified"])
        login(request, user, backend="django.contrib.auth.backends.ModelBackend")
        logger.info("User %s signed in via OTP", user.pk)
        return Response(
            {
                "is_verified": True,
                "is_new_user": False,
                "user_id": user.id,
                "user_type": user.user_type,
                "tokens": tokens_for_user(user),
            }
        )
