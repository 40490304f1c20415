from django.contrib import admin

from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("id", "store", "user", "rating", "is_published", "created_at")
    list_editable = ("is_published",)
    list_filter = ("is_published", "rating")
    search_fields = ("store__name", "user__phone", "comment")
