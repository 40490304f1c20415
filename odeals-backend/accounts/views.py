# accounts/views.py
from django.contrib.auth import login, logout
from django.middleware.csrf import get_token
from django.utils.decorators import method_decorator
from django.views.decorators.csrf import ensure_csrf_cookie
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from common.auth_tokens import tokens_for_user
from common.permissions import IsConsumer
from stores.serializers import PartnerStoreSerializer
from .serializers import (
    ConsumerProfileSerializer,
    ConsumerRegisterSerializer,
    PartnerRegisterSerializer,
    UserSerializer,
)
from .services import VERIFIED_PHONE_SESSION_KEY, register_consumer, register_partner, require_verified_phone

_AUTH_BACKEND = "django.contrib.auth.backends.ModelBackend"


def _sign_in(request, user):
    login(request, user, backend=_AUTH_BACKEND)
    request.session.pop(VERIFIED_PHONE_SESSION_KEY, None)


class ConsumerRegisterView(generics.GenericAPIView):
    """
    POST /api/v1/auth/register/consumer
    """
    serializer_class = ConsumerRegisterSerializer
    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        phone = data.pop("phone")

        require_verified_phone(request, phone)
        user = register_consumer(phone, **data)
        _sign_in(request, user)
        return Response(
            {"user_id": user.id, "user_type": user.user_type, "tokens": tokens_for_user(user)},
            status=status.HTTP_201_CREATED,
        )


class PartnerRegisterView(generics.GenericAPIView):
    """
    POST /api/v1/auth/register/partner
    """
    serializer_class = PartnerRegisterSerializer
    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user_data = dict(serializer.validated_data["user_data"])
        store_data = dict(serializer.validated_data["store_data"])
        phone = user_data.pop("phone")

        require_verified_phone(request, phone)
        user, store = register_partner(phone, user_data, store_data)
        _sign_in(request, user)
        return Response(
            {
                "user_id": user.id,
                "store_id": store.id,
                "user_type": user.user_type,
                "tokens": tokens_for_user(user),
            },
            status=status.HTTP_201_CREATED,
        )


class MeView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        data = UserSerializer(request.user).data
        if request.user.is_partner:
            store = getattr(request.user, "partner_store", None)
            data["store"] = PartnerStoreSerializer(store).data if store else None
        return Response(data)


class LogoutView(APIView):
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        logout(request)
        return Response({"success": True})


@method_decorator(ensure_csrf_cookie, name="dispatch")
class CsrfView(APIView):
    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        return Response({"csrf_token": get_token(request)})


class ConsumerProfileView(generics.UpdateAPIView):
    """
    PATCH /api/v1/consumer/profile
    """
    serializer_class = ConsumerProfileSerializer
    permission_classes = [IsConsumer]
    http_method_names = ["patch", "options"]

    def get_object(self):
        return self.request.user

    def update(self, request, *args, **kwargs):
        kwargs["partial"] = True
        super().update(request, *args, **kwargs)
        return Response(UserSerializer(request.user).data)
