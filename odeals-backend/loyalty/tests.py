"""
Tests for the points ledger, redemptions and referrals.
"""
from django.core.cache import cache
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIRequestFactory, force_authenticate

from common.exceptions import BusinessRuleError
from common.testing import make_consumer, make_partner
from notifications.models import Notification
from loyalty.models import Redemption, RedemptionStatus, Referral, ReferralStatus, Reward
from loyalty.services import (
    award,
    balance_for,
    complete_redemption,
    complete_referral_for,
    create_referral,
    pending_due_amount,
    points_to_amount,
    redeem,
)
from loyalty.views import (
    ConsumerRedeemView,
    ConsumerRewardsView,
    PartnerRedemptionCompleteView,
    PartnerRedemptionListView,
)


class LoyaltyTestBase(TestCase):
    def setUp(self):
        cache.clear()
        self.factory = APIRequestFactory()
        self.consumer = make_consumer()
        self.partner, self.store = make_partner()


class LedgerTests(LoyaltyTestBase):
    def test_balance_is_sum_of_ledger(self):
        award(self.consumer, 100, "Completed store visit")
        award(self.consumer, 1000, "Successful referral")
        award(self.consumer, -300, "Redeemed points")
        self.assertEqual(balance_for(self.consumer), 800)
        self.assertEqual(Reward.objects.filter(user=self.consumer).count(), 3)

    def test_balance_is_zero_without_rewards(self):
        self.assertEqual(balance_for(self.consumer), 0)

    def test_points_to_amount_drops_fractions(self):
        self.assertEqual(points_to_amount(500), 50)
        self.assertEqual(points_to_amount(505), 50)

    def test_rewards_view_lists_newest_first_with_total(self):
        award(self.consumer, 100, "Wrote a review")
        award(self.consumer, 200, "Completed store visit")
        request = self.factory.get("/api/v1/consumer/rewards")
        force_authenticate(request, user=self.consumer)
        response = ConsumerRewardsView.as_view()(request)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total_points"], 300)
        self.assertEqual(response.data["rewards"][0]["points"], 200)


class RedemptionTests(LoyaltyTestBase):
    def _redeem(self, user, points):
        request = self.factory.post(
            "/api/v1/consumer/redeem",
            {"partner_id": self.store.id, "points": points},
            format="json",
        )
        force_authenticate(request, user=user)
        return ConsumerRedeemView.as_view()(request)

    def test_below_minimum_is_rejected(self):
        award(self.consumer, 2000, "Welcome")
        response = self._redeem(self.consumer, 499)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "Minimum redemption is 500 points")
        self.assertFalse(Redemption.objects.exists())

    def test_above_maximum_is_rejected(self):
        award(self.consumer, 10000, "Welcome")
        response = self._redeem(self.consumer, 5001)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "Maximum redemption is 5000 points")

    def test_cannot_overdraw(self):
        award(self.consumer, 600, "Welcome")
        response = self._redeem(self.consumer, 700)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "Not enough points to redeem")
        self.assertEqual(balance_for(self.consumer), 600)

    def test_successful_redemption(self):
        award(self.consumer, 1200, "Welcome")
        response = self._redeem(self.consumer, 500)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["amount"], 50)
        self.assertEqual(response.data["status"], RedemptionStatus.PENDING)

        code = response.data["code"]
        self.assertEqual(len(code), 6)
        self.assertTrue(code.isalnum() and code == code.upper())

        self.assertEqual(balance_for(self.consumer), 700)
        debit = Reward.objects.get(user=self.consumer, points=-500)
        self.assertEqual(debit.reason, "Redeemed points")
        self.assertEqual(debit.reference_id, response.data["id"])
        self.assertTrue(Notification.objects.filter(user=self.consumer, title="Redemption created").exists())

    def test_low_balance_reported_before_minimum(self):
        award(self.consumer, 100, "Welcome")
        response = self._redeem(self.consumer, 499)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "Not enough points to redeem")

    def test_low_balance_reported_before_maximum(self):
        award(self.consumer, 300, "Welcome")
        response = self._redeem(self.consumer, 6000)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "Not enough points to redeem")

    def test_second_redemption_sees_first_debit(self):
        award(self.consumer, 900, "Welcome")
        redeem(self.consumer, self.store, 500)
        with self.assertRaises(BusinessRuleError):
            redeem(self.consumer, self.store, 500)
        self.assertEqual(balance_for(self.consumer), 400)

    def test_partner_sees_due_amount_and_completes(self):
        award(self.consumer, 3000, "Welcome")
        first = redeem(self.consumer, self.store, 500)
        redeem(self.consumer, self.store, 1000)
        self.assertEqual(pending_due_amount(self.store), 150)

        request = self.factory.post(f"/api/v1/partner/redemptions/{first.id}/complete")
        force_authenticate(request, user=self.partner)
        response = PartnerRedemptionCompleteView.as_view()(request, pk=first.id)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], RedemptionStatus.COMPLETED)

        request = self.factory.get("/api/v1/partner/redemptions")
        force_authenticate(request, user=self.partner)
        response = PartnerRedemptionListView.as_view()(request)
        self.assertEqual(len(response.data["redemptions"]), 2)
        self.assertEqual(response.data["total_due_amount"], 100)

    def test_completed_redemption_cannot_complete_again(self):
        award(self.consumer, 600, "Welcome")
        redemption = complete_redemption(redeem(self.consumer, self.store, 500))
        with self.assertRaises(BusinessRuleError):
            complete_redemption(redemption)

    def test_stale_pending_copy_cannot_complete_twice(self):
        award(self.consumer, 600, "Welcome")
        redemption = redeem(self.consumer, self.store, 500)
        stale = Redemption.objects.get(pk=redemption.pk)
        complete_redemption(redemption)

        self.assertEqual(stale.status, RedemptionStatus.PENDING)
        with self.assertRaises(BusinessRuleError):
            complete_redemption(stale)

    def test_other_partner_cannot_complete(self):
        award(self.consumer, 600, "Welcome")
        redemption = redeem(self.consumer, self.store, 500)
        other_partner, _ = make_partner(phone="9876500200", name="Other")

        request = self.factory.post(f"/api/v1/partner/redemptions/{redemption.id}/complete")
        force_authenticate(request, user=other_partner)
        response = PartnerRedemptionCompleteView.as_view()(request, pk=redemption.id)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_partner_cannot_redeem(self):
        response = self._redeem(self.partner, 500)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class ReferralTests(LoyaltyTestBase):
    def test_cannot_refer_registered_phone(self):
        with self.assertRaises(BusinessRuleError):
            create_referral(self.consumer, self.partner.phone)

    def test_duplicate_pending_referral_rejected(self):
        create_referral(self.consumer, "9123456780")
        with self.assertRaises(BusinessRuleError):
            create_referral(self.consumer, "9123456780")

    def test_oldest_pending_referral_completes(self):
        other = make_consumer(phone="9876500002")
        first = create_referral(self.consumer, "9123456780")
        second = create_referral(other, "9123456780")

        new_user = make_consumer(phone="9123456780")
        completed = complete_referral_for(new_user)

        self.assertEqual(completed.id, first.id)
        first.refresh_from_db()
        second.refresh_from_db()
        self.assertEqual(first.status, ReferralStatus.COMPLETED)
        self.assertEqual(first.referred_user, new_user)
        self.assertEqual(second.status, ReferralStatus.EXPIRED)

        self.assertEqual(balance_for(self.consumer), 1000)
        self.assertEqual(balance_for(new_user), 1000)
        self.assertEqual(balance_for(other), 0)

    def test_no_pending_referral_is_noop(self):
        new_user = make_consumer(phone="9123456780")
        self.assertIsNone(complete_referral_for(new_user))
        self.assertFalse(Referral.objects.exists())
        self.assertEqual(balance_for(new_user), 0)
