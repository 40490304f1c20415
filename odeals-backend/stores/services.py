# stores/services.py
import json
import math
from decimal import Decimal
from typing import List, Optional

from django.db.models import Avg, Count, Q

from .models import PartnerStore

EARTH_RADIUS_KM = 6371.0
DEFAULT_RADIUS_KM = 10


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))


def nearby_stores(lat: float, lng: float, radius_km: float = DEFAULT_RADIUS_KM) -> List[PartnerStore]:
    """
    Stores within `radius_km` of (lat, lng), closest first. Each returned
    store carries a `distance_km` attribute. Stores without coordinates are
    skipped.
    """
    results = []
    qs = PartnerStore.objects.filter(latitude__isnull=False, longitude__isnull=False)
    for store in qs:
        distance = haversine_km(lat, lng, float(store.latitude), float(store.longitude))
        if distance <= radius_km:
            store.distance_km = round(distance, 2)
            results.append(store)
    results.sort(key=lambda s: (s.distance_km, s.id))
    return results


def stores_in_category(category: str):
    # categories is a JSON list; match the quoted element so "Food" doesn't hit "Seafood"
    return PartnerStore.objects.filter(categories__icontains=json.dumps(category))


def search_stores(query: Optional[str] = None):
    qs = PartnerStore.objects.all()
    if query:
        qs = qs.filter(Q(name__icontains=query) | Q(description__icontains=query))
    return qs.order_by("name", "id")


def rating_summary(store) -> dict:
    agg = store.reviews.filter(is_published=True).aggregate(average=Avg("rating"), count=Count("id"))
    average = agg["average"]
    return {
        "average": round(Decimal(str(average)), 1) if average is not None else None,
        "count": agg["count"],
    }
