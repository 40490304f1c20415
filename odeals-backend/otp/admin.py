from django.contrib import admin
from .models import OtpRequest, OtpAudit


@admin.register(OtpRequest)
class OtpRequestAdmin(admin.ModelAdmin):
    list_display = ("phone", "is_used", "expires_at", "attempts", "created_at")
    list_filter = ("is_used",)
    search_fields = ("phone", "ip_address", "user_agent")
    readonly_fields = ("code_hash", "salt")


@admin.register(OtpAudit)
class OtpAuditAdmin(admin.ModelAdmin):
    list_display = ("phone", "action", "reason", "created_at")
    list_filter = ("action", "reason")
    search_fields = ("phone",)
