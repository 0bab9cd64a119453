# Standard Library
import logging
import re
from decimal import Decimal

# Django REST Framework
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

# Local Imports
from .defaults import AIRPORTS, MOROCCAN_CITIES
from .models import Service
from .permissions import FrontendOnlyPermission
from .site_settings import effective_categories
from .utilities import serialize_service

logger = logging.getLogger(__name__)

# Empty states, highest priority first
CATEGORY_DISABLED = "category_disabled"
NO_SERVICES = "no_services"
SERVICES_BUSY = "services_busy"
NO_MATCH = "no_match"

EMPTY_STATE_MESSAGES = {
    CATEGORY_DISABLED: "This category is currently disabled.",
    NO_SERVICES: "No services are available in this category yet.",
    SERVICES_BUSY: "All services in this category are currently busy. Please check back later.",
    NO_MATCH: "No services match your filters.",
}

PRICE_RANGES = ("all", "lt-50", "50-100", "gt-100")
SEAT_RANGES = ("all", "2-4", "5+")

LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def _get(record, key, default=None):
    if isinstance(record, dict):
        return record.get(key, default)
    return getattr(record, key, default)


def _parse_seats(value):
    """
    Leading-integer parse ("5 adults" -> 5). None when nothing parses.
    """
    if value is None:
        return None
    match = LEADING_INT_RE.match(str(value))
    return int(match.group(1)) if match else None


def _in_price_range(price, price_range):
    price = Decimal(str(price))
    if price_range == "lt-50":
        return price < 50
    if price_range == "50-100":
        return 50 <= price <= 100
    if price_range == "gt-100":
        return price > 100
    return True


def _in_seat_range(details, seats):
    if seats not in ("2-4", "5+"):
        return True
    count = _parse_seats((details or {}).get("Seats"))
    if count is None:
        return False
    if seats == "2-4":
        return 2 <= count <= 4
    return count >= 5


def is_active(record):
    # Only an explicit False hides a record
    return _get(record, "is_active") is not False


def filter_services(services, category_id, filters=None):
    """
    Active records of `services` matching every selection in `filters`.

    cars:   price_range (all | lt-50 | 50-100 | gt-100), seats (all | 2-4 | 5+)
    hotels: city (all | exact location)
    Unknown values are treated as unrestricted.
    """
    filters = filters or {}
    price_range = filters.get("price_range") or "all"
    seats = filters.get("seats") or "all"
    city = filters.get("city") or "all"

    result = []
    for record in services:
        if not is_active(record):
            continue
        if category_id == "cars":
            if not _in_price_range(_get(record, "price", 0), price_range):
                continue
            if not _in_seat_range(_get(record, "details"), seats):
                continue
        elif category_id == "hotels":
            if city != "all" and _get(record, "location") != city:
                continue
        result.append(record)
    return result


def resolve_empty_state(category, services, filtered):
    """
    Which empty-state message to show, or None when there is something to list.
    Priority: disabled/unknown category, no records, all inactive, no filter match.
    """
    if not category or not category.get("enabled", True):
        return CATEGORY_DISABLED
    if not services:
        return NO_SERVICES
    if not any(is_active(s) for s in services):
        return SERVICES_BUSY
    if not filtered:
        return NO_MATCH
    return None


def best_offers(services, categories):
    enabled = {c["id"] for c in categories if c.get("enabled", True)}
    return [
        s for s in services
        if is_active(s) and _get(s, "is_best_offer") and _get(s, "category") in enabled
    ]


ROUTE_PRICES = {
    ("Casablanca", "Rabat"): 80,
    ("Casablanca", "Marrakech"): 150,
    ("Marrakech", "Casablanca"): 150,
    ("Marrakech", "Agadir"): 180,
    ("Rabat", "Casablanca"): 80,
    ("Rabat", "Fes"): 120,
    ("Agadir", "Marrakech"): 180,
}

ORIGIN_FALLBACK_PRICES = {
    "Casablanca": 250,
    "Marrakech": 220,
    "Rabat": 200,
    "Agadir": 280,
}

SAME_CITY_PRICE = 50
DEFAULT_ROUTE_PRICE = 300


def get_transport_price(origin, destination):
    """
    Static route estimate for airport/city pickups. Origin city is the first
    word of `origin` ("Casablanca Mohammed V Airport (CMN)" -> "Casablanca").
    """
    if not origin or not destination:
        return None

    origin_city = origin.split(" ")[0]
    if origin_city == destination:
        return SAME_CITY_PRICE

    price = ROUTE_PRICES.get((origin_city, destination))
    if price is not None:
        return price

    return ORIGIN_FALLBACK_PRICES.get(origin_city, DEFAULT_ROUTE_PRICE)


def _find_category(categories, category_id):
    return next((c for c in categories if c.get("id") == category_id), None)


class ShowCategoryServicesAPIView(APIView):
    """
    GET /api/services/<category_id>?price_range=&seats=&city=
    """
    permission_classes = [FrontendOnlyPermission]

    def get(self, request, category_id):
        categories = effective_categories()
        category = _find_category(categories, category_id)

        filters = {
            "price_range": request.query_params.get("price_range", "all"),
            "seats": request.query_params.get("seats", "all"),
            "city": request.query_params.get("city", "all"),
        }

        services = list(Service.objects.filter(category=category_id))
        filtered = filter_services(services, category_id, filters)
        empty_state = resolve_empty_state(category, services, filtered)
        if empty_state == CATEGORY_DISABLED:
            filtered = []

        cities = sorted({s.location for s in services if is_active(s) and s.location})

        return Response({
            "category": category,
            "filters": filters,
            "filters_available": {
                "price_range": list(PRICE_RANGES) if category_id == "cars" else [],
                "seats": list(SEAT_RANGES) if category_id == "cars" else [],
                "city": (["all"] + cities) if category_id == "hotels" else [],
            },
            "services": [serialize_service(s) for s in filtered],
            "empty_state": empty_state,
            "empty_message": EMPTY_STATE_MESSAGES.get(empty_state, ""),
        }, status=status.HTTP_200_OK)


class ShowBestOffersAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        categories = effective_categories()
        offers = best_offers(Service.objects.filter(is_best_offer=True), categories)

        grouped = {}
        for s in offers:
            grouped.setdefault(s.category, []).append(serialize_service(s))

        return Response({
            "offers": [serialize_service(s) for s in offers],
            "by_category": grouped,
        }, status=status.HTTP_200_OK)


class TransportPriceAPIView(APIView):
    """
    GET /api/transport-price?from=<airport or city>&to=<city>
    """
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        origin = (request.query_params.get("from") or "").strip()
        destination = (request.query_params.get("to") or "").strip()
        return Response({
            "from": origin,
            "to": destination,
            "price": get_transport_price(origin, destination),
        }, status=status.HTTP_200_OK)


class TransportLocationsAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        return Response({"airports": AIRPORTS, "cities": MOROCCAN_CITIES}, status=status.HTTP_200_OK)
