import pytest

from travel_backend.catalog import (
    CATEGORY_DISABLED, NO_MATCH, NO_SERVICES, SERVICES_BUSY,
    best_offers, filter_services, get_transport_price, resolve_empty_state,
)
from travel_backend.models import SiteSettings


def car(price, seats="4", active=True, **extra):
    return {"price": price, "details": {"Seats": seats}, "is_active": active, **extra}


class TestFilterServices:
    def test_price_under_50(self):
        services = [car(30), car(75), car(150)]
        assert filter_services(services, "cars", {"price_range": "lt-50"}) == [services[0]]

    def test_price_50_to_100_is_inclusive(self):
        services = [car(49), car(50), car(100), car(101)]
        assert filter_services(services, "cars", {"price_range": "50-100"}) == services[1:3]

    def test_price_over_100(self):
        services = [car(100), car(100.5)]
        assert filter_services(services, "cars", {"price_range": "gt-100"}) == [services[1]]

    def test_seats_five_plus(self):
        assert filter_services([car(60, seats="4")], "cars", {"seats": "5+"}) == []
        seven = car(60, seats="7")
        assert filter_services([seven], "cars", {"seats": "5+"}) == [seven]

    def test_seats_two_to_four(self):
        services = [car(60, seats="1"), car(60, seats="2"), car(60, seats="4"), car(60, seats="5")]
        assert filter_services(services, "cars", {"seats": "2-4"}) == services[1:3]

    def test_unparseable_seats_excluded_only_when_restricted(self):
        odd = car(60, seats="lots")
        assert filter_services([odd], "cars", {"seats": "5+"}) == []
        assert filter_services([odd], "cars", {"seats": "2-4"}) == []
        assert filter_services([odd], "cars", {"seats": "all"}) == [odd]

    def test_leading_integer_parse(self):
        roomy = car(60, seats="7 adults")
        assert filter_services([roomy], "cars", {"seats": "5+"}) == [roomy]

    def test_filters_combine_with_and(self):
        match = car(40, seats="5")
        services = [match, car(40, seats="4"), car(80, seats="5")]
        assert filter_services(services, "cars", {"price_range": "lt-50", "seats": "5+"}) == [match]

    def test_inactive_records_are_dropped(self):
        hidden = car(30, active=False)
        unset = {"price": 30, "details": {"Seats": "4"}}
        assert filter_services([hidden, unset], "cars", {}) == [unset]

    def test_hotel_city_exact_match(self):
        a = {"location": "Marrakech", "is_active": True}
        b = {"location": "Marrakech Medina", "is_active": True}
        assert filter_services([a, b], "hotels", {"city": "Marrakech"}) == [a]
        assert filter_services([a, b], "hotels", {"city": "all"}) == [a, b]

    def test_car_filters_ignored_for_other_categories(self):
        trip = {"price": 500, "is_active": True}
        assert filter_services([trip], "explore", {"price_range": "lt-50", "city": "Nowhere"}) == [trip]

    def test_unknown_filter_value_is_unrestricted(self):
        services = [car(30), car(300)]
        assert filter_services(services, "cars", {"price_range": "cheap"}) == services


class TestEmptyStates:
    enabled = {"id": "cars", "enabled": True}
    disabled = {"id": "cars", "enabled": False}

    def test_no_services(self):
        assert resolve_empty_state(self.enabled, [], []) == NO_SERVICES

    def test_all_inactive_is_busy(self):
        services = [car(30, active=False)]
        assert resolve_empty_state(self.enabled, services, []) == SERVICES_BUSY

    def test_no_filter_match(self):
        services = [car(30)]
        assert resolve_empty_state(self.enabled, services, []) == NO_MATCH

    def test_results_mean_no_empty_state(self):
        services = [car(30)]
        assert resolve_empty_state(self.enabled, services, services) is None

    def test_disabled_category_wins_regardless_of_records(self):
        assert resolve_empty_state(self.disabled, [], []) == CATEGORY_DISABLED
        assert resolve_empty_state(self.disabled, [car(30, active=False)], []) == CATEGORY_DISABLED
        assert resolve_empty_state(self.disabled, [car(30)], []) == CATEGORY_DISABLED
        assert resolve_empty_state(self.disabled, [car(30)], [car(30)]) == CATEGORY_DISABLED

    def test_unknown_category_counts_as_disabled(self):
        assert resolve_empty_state(None, [car(30)], [car(30)]) == CATEGORY_DISABLED

    def test_busy_outranks_no_match(self):
        services = [car(30, active=False), car(40, active=False)]
        assert resolve_empty_state(self.enabled, services, []) == SERVICES_BUSY


def test_best_offers_need_active_flag_and_enabled_category():
    categories = [{"id": "cars", "enabled": True}, {"id": "hotels", "enabled": False}]
    keep = {"category": "cars", "is_best_offer": True, "is_active": True}
    services = [
        keep,
        {"category": "cars", "is_best_offer": False, "is_active": True},
        {"category": "cars", "is_best_offer": True, "is_active": False},
        {"category": "hotels", "is_best_offer": True, "is_active": True},
    ]
    assert best_offers(services, categories) == [keep]


class TestTransportPrice:
    def test_missing_side_is_none(self):
        assert get_transport_price("", "Rabat") is None
        assert get_transport_price("Casablanca Mohammed V Airport (CMN)", "") is None

    def test_same_city(self):
        assert get_transport_price("Marrakech Menara Airport (RAK)", "Marrakech") == 50

    def test_named_routes(self):
        assert get_transport_price("Casablanca Mohammed V Airport (CMN)", "Rabat") == 80
        assert get_transport_price("Casablanca Mohammed V Airport (CMN)", "Marrakech") == 150
        assert get_transport_price("Rabat Sale Airport (RBA)", "Fes") == 120
        assert get_transport_price("Rabat", "Fes") == 120
        assert get_transport_price("Agadir Al Massira Airport (AGA)", "Marrakech") == 180

    def test_origin_fallbacks(self):
        assert get_transport_price("Casablanca Mohammed V Airport (CMN)", "Tangier") == 250
        assert get_transport_price("Marrakech Menara Airport (RAK)", "Tangier") == 220
        assert get_transport_price("Rabat", "Tangier") == 200
        assert get_transport_price("Agadir Al Massira Airport (AGA)", "Fes") == 280

    def test_unknown_origin(self):
        assert get_transport_price("Fes Saiss Airport (FEZ)", "Tangier") == 300


@pytest.mark.django_db
class TestCategoryServicesEndpoint:
    def test_filters_applied(self, api_client, make_service):
        make_service(price="30", details={"Seats": "4"})
        make_service(price="75", details={"Seats": "5"})
        res = api_client.get("/api/services/cars", {"price_range": "lt-50"})
        assert res.status_code == 200
        assert [s["price"] for s in res.data["services"]] == [30.0]
        assert res.data["empty_state"] is None

    def test_empty_states_surface(self, api_client, make_service):
        res = api_client.get("/api/services/hotels")
        assert res.data["empty_state"] == NO_SERVICES

        make_service(category="hotels", is_active=False)
        res = api_client.get("/api/services/hotels")
        assert res.data["empty_state"] == SERVICES_BUSY
        assert res.data["services"] == []

    def test_disabled_category_hides_everything(self, api_client, make_service):
        make_service(price="30")
        SiteSettings.objects.create(categories=[
            {"id": "cars", "name": "Cars", "icon": "Car", "href": "/services/cars",
             "image_url": "https://example.com/c.jpg", "enabled": False},
        ])
        res = api_client.get("/api/services/cars")
        assert res.data["empty_state"] == CATEGORY_DISABLED
        assert res.data["services"] == []

    def test_best_offers_endpoint(self, api_client, make_service):
        make_service(name="Deal", is_best_offer=True)
        make_service(name="Regular")
        res = api_client.get("/api/best-offers")
        assert [s["name"] for s in res.data["offers"]] == ["Deal"]
        assert list(res.data["by_category"]) == ["cars"]

    def test_transport_price_endpoint(self, api_client):
        res = api_client.get("/api/transport-price", {"from": "Casablanca Mohammed V Airport (CMN)", "to": "Rabat"})
        assert res.data["price"] == 80
