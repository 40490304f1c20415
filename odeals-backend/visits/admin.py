from django.contrib import admin

from .models import Visit


@admin.register(Visit)
class VisitAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "store", "deal", "visit_date", "status", "completed_at")
    list_filter = ("status", "visit_date")
    search_fields = ("user__phone", "store__name")

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("user", "store", "deal")
