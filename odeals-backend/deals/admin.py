from django.contrib import admin

from .models import Deal


@admin.register(Deal)
class DealAdmin(admin.ModelAdmin):
    list_display = ("name", "store", "category", "deal_type", "start_date", "end_date", "is_active")
    list_filter = ("is_active", "deal_type", "category")
    search_fields = ("name", "store__name")
    date_hierarchy = "start_date"

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("store")
