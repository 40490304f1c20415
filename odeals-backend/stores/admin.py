# stores/admin.py
from django.contrib import admin

from deals.models import Deal
from .models import PartnerStore


class DealInline(admin.TabularInline):
    model = Deal
    extra = 0
    show_change_link = True
    fields = ("name", "category", "deal_type", "start_date", "end_date", "is_active")


@admin.register(PartnerStore)
class PartnerStoreAdmin(admin.ModelAdmin):
    list_display = ("name", "user", "contact_phone", "location", "price_rating", "created_at")
    search_fields = ("name", "location", "contact_phone", "user__phone")
    inlines = [DealInline]

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("user")
