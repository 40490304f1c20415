# accounts/urls.py
from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from otp.views import SendOtpView, VerifyOtpView
from .views import (
    ConsumerProfileView,
    ConsumerRegisterView,
    CsrfView,
    LogoutView,
    MeView,
    PartnerRegisterView,
)

app_name = "accounts"

urlpatterns = [
    path("auth/send-otp", SendOtpView.as_view(), name="send-otp"),
    path("auth/verify-otp", VerifyOtpView.as_view(), name="verify-otp"),
    path("auth/register/consumer", ConsumerRegisterView.as_view(), name="register-consumer"),
    path("auth/register/partner", PartnerRegisterView.as_view(), name="register-partner"),
    path("auth/me", MeView.as_view(), name="me"),
    path("auth/logout", LogoutView.as_view(), name="logout"),
    path("auth/csrf", CsrfView.as_view(), name="csrf"),
    path("auth/token/refresh", TokenRefreshView.as_view(), name="token-refresh"),
    path("consumer/profile", ConsumerProfileView.as_view(), name="consumer-profile"),
]
