# loyalty/admin.py

from django.contrib import admin

from .models import Reward, Redemption, Referral


@admin.register(Reward)
class RewardAdmin(admin.ModelAdmin):
    list_display = ["user", "points", "reason", "reference_id", "created_at"]
    list_filter = ["reason", "created_at"]
    search_fields = ["user__phone", "reason"]
    readonly_fields = ["user", "points", "reason", "reference_id", "created_at"]

    def has_change_permission(self, request, obj=None):
        # ledger rows are append-only
        return False

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("user")


@admin.register(Redemption)
class RedemptionAdmin(admin.ModelAdmin):
    list_display = ["code", "user", "store", "points", "amount", "status", "created_at", "completed_at"]
    list_filter = ["status", "created_at"]
    search_fields = ["code", "user__phone", "store__name"]
    readonly_fields = ["code", "points", "amount", "created_at"]

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("user", "store")


@admin.register(Referral)
class ReferralAdmin(admin.ModelAdmin):
    list_display = ["referrer", "referred_phone", "referred_user", "status", "created_at", "completed_at"]
    list_filter = ["status"]
    search_fields = ["referrer__phone", "referred_phone"]
