# accounts/admin.py
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    ordering = ("-created_at",)
    list_display = ("phone", "user_type", "first_name", "last_name", "is_verified", "is_active", "created_at")
    list_filter = ("user_type", "is_verified", "is_active", "is_staff")
    search_fields = ("phone", "first_name", "last_name", "email")
    readonly_fields = ("created_at", "last_login")

    fieldsets = (
        (None, {"fields": ("phone", "password", "user_type")}),
        ("Profile", {"fields": ("first_name", "last_name", "email", "zip_code", "favorite_categories")}),
        ("Status", {"fields": ("is_verified", "is_active", "is_staff", "is_superuser", "groups", "user_permissions")}),
        ("Dates", {"fields": ("last_login", "created_at")}),
    )
    add_fieldsets = (
        (None, {"classes": ("wide",), "fields": ("phone", "user_type", "password1", "password2")}),
    )
