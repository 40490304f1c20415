# loyalty/urls.py
from django.urls import path

from .views import (
    ConsumerRedeemView,
    ConsumerRedemptionListView,
    ConsumerReferralListCreateView,
    ConsumerRewardsView,
    PartnerRedemptionCompleteView,
    PartnerRedemptionListView,
)

app_name = "loyalty"

urlpatterns = [
    path("consumer/rewards", ConsumerRewardsView.as_view(), name="rewards"),
    path("consumer/redeem", ConsumerRedeemView.as_view(), name="redeem"),
    path("consumer/redemptions", ConsumerRedemptionListView.as_view(), name="consumer-redemptions"),
    path("consumer/referrals", ConsumerReferralListCreateView.as_view(), name="referrals"),
    path("partner/redemptions", PartnerRedemptionListView.as_view(), name="partner-redemptions"),
    path(
        "partner/redemptions/<int:pk>/complete",
        PartnerRedemptionCompleteView.as_view(),
        name="partner-redemption-complete",
    ),
]
