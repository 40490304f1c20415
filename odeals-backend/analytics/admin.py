from django.contrib import admin

from .models import PartnerStat


@admin.register(PartnerStat)
class PartnerStatAdmin(admin.ModelAdmin):
    list_display = ("store", "date", "store_views", "deal_views", "scheduled_visits", "actual_visits")
    list_filter = ("date",)
    search_fields = ("store__name",)
    date_hierarchy = "date"
