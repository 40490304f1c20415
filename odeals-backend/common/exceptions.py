# common/exceptions.py
import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class BusinessRuleError(APIException):
    """
    A request that is well-formed but breaks a marketplace rule
    (deal cap, redemption limits, visit already completed, ...).
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request violates a business rule."
    default_code = "business_rule"


class PhoneNotVerified(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Phone number has not been verified."
    default_code = "phone_not_verified"


class OtpRateLimited(APIException):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_detail = "Too many OTP requests. Please wait a few minutes."
    default_code = "otp_rate_limited"


def api_exception_handler(exc, context):
    """
    DRF's handler for everything it knows about; anything else is logged and
    turned into a JSON 500 instead of Django's HTML error page.
    """
    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get("view")
    logger.exception("Unhandled error in %s", view.__class__.__name__ if view else "unknown view")
    return Response(
        {"detail": "Internal server error"},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
