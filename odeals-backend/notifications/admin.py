from django.contrib import admin

from .models import Notification, SmsLog


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("user", "title", "is_read", "created_at")
    list_filter = ("is_read",)
    search_fields = ("user__phone", "title")


@admin.register(SmsLog)
class SmsLogAdmin(admin.ModelAdmin):
    list_display = ("to_phone", "status", "provider_message_id", "created_at", "sent_at")
    list_filter = ("status",)
    search_fields = ("to_phone", "provider_message_id")
    readonly_fields = ("to_phone", "body", "status", "error_message", "provider_message_id", "created_at", "sent_at")
