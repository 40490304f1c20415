# common/permissions.py
from rest_framework import permissions
from rest_framework.exceptions import NotFound

from common.roles import UserType


def _has_type(user, user_type) -> bool:
    return bool(user and user.is_authenticated and getattr(user, "user_type", None) == user_type)


class IsConsumer(permissions.BasePermission):
    """
    Authenticated consumers only.
    """
    message = "Consumer authentication required"

    def has_permission(self, request, view):
        return _has_type(request.user, UserType.CONSUMER)


class IsPartner(permissions.BasePermission):
    """
    Authenticated partners only. Store ownership is resolved by the view
    (see partner_store_for).
    """
    message = "Partner authentication required"

    def has_permission(self, request, view):
        return _has_type(request.user, UserType.PARTNER)


def partner_store_for(request):
    """
    The PartnerStore owned by request.user; 404 "Store not found" when the
    partner never finished registration.
    """
    from stores.models import PartnerStore

    store = PartnerStore.objects.filter(user=request.user).first()
    if not store:
        raise NotFound("Store not found")
    return store
