# analytics/views.py
from django.http import HttpResponse
from django.utils import timezone
from rest_framework import permissions
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from common.permissions import IsPartner, partner_store_for
from .export import export_to_csv
from .serializers import PartnerStatSerializer
from .services import COUNTER_FIELDS, stats_for_range

MIN_DAYS = 1
MAX_DAYS = 90
DEFAULT_DAYS = 7


def _days_param(request) -> int:
    raw = request.query_params.get("days")
    if raw in (None, ""):
        return DEFAULT_DAYS
    try:
        days = int(raw)
    except (TypeError, ValueError):
        raise ValidationError({"days": "Must be an integer"})
    if not MIN_DAYS <= days <= MAX_DAYS:
        raise ValidationError({"days": f"Must be between {MIN_DAYS} and {MAX_DAYS}"})
    return days


class PartnerAnalyticsView(APIView):
    """
    GET /api/v1/partner/analytics?days=7
    """
    permission_classes = [permissions.IsAuthenticated, IsPartner]

    def get(self, request):
        store = partner_store_for(request)
        days = _days_param(request)
        qs, totals = stats_for_range(store, days)
        return Response(
            {
                "days": days,
                "stats": PartnerStatSerializer(qs, many=True).data,
                "totals": totals,
            }
        )


class PartnerAnalyticsExportView(APIView):
    """
    GET /api/v1/partner/analytics/export?days=7 -> text/csv
    """
    permission_classes = [permissions.IsAuthenticated, IsPartner]

    def get(self, request):
        store = partner_store_for(request)
        days = _days_param(request)
        qs, _ = stats_for_range(store, days)

        fieldnames = ["date", *COUNTER_FIELDS]
        rows = list(qs.values(*fieldnames))
        content = export_to_csv(rows, fieldnames=fieldnames)

        filename = f"store-{store.id}-analytics-{timezone.localdate().isoformat()}.csv"
        response = HttpResponse(content, content_type="text/csv; charset=utf-8")
        response["Content-Disposition"] = f'attachment; filename="{filename}"'
        return response
