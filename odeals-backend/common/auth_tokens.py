# common/auth_tokens.py
from rest_framework_simplejwt.tokens import RefreshToken


def tokens_for_user(user) -> dict:
    """
    Build a fresh refresh/access pair for `user` with the role embedded,
    so bearer clients don't need an extra /me round-trip.
    """
    refresh = RefreshToken.for_user(user)
    refresh["user_type"] = user.user_type
    refresh["phone"] = user.phone
    return {
        "refresh": str(refresh),
        "access": str(refresh.access_token),
    }
