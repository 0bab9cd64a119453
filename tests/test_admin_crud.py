import pytest

from travel_backend.defaults import DEFAULT_ADMIN_EMAIL_TEMPLATE, DEFAULT_CLIENT_EMAIL_TEMPLATE
from travel_backend.models import EmailTemplate, Review, Service, SiteSettings

SERVICE = {
    "category": "cars",
    "name": "City Compact",
    "description": "Small and nimble",
    "image_url": "https://example.com/car.jpg",
    "price": "45",
    "price_unit": "day",
    "location": "Downtown",
    "details": {"Seats": "4"},
    "additional_media": [{"image_url": "https://example.com/2.jpg", "description": "Interior"}],
}


@pytest.mark.django_db
class TestServices:
    def test_create_then_update(self, admin_client):
        created = admin_client.post("/api/admin/save-service", SERVICE, format="json")
        assert created.status_code == 201
        sid = created.data["service"]["id"]
        assert sid == "CAR-CC-001"

        updated = admin_client.post("/api/admin/save-service", dict(SERVICE, id=sid, price="50"), format="json")
        assert updated.status_code == 200
        assert Service.objects.get(pk=sid).price == 50

    @pytest.mark.parametrize("override", [
        {"name": ""},
        {"image_url": "nope"},
        {"price": "-1"},
        {"price_unit": "week"},
        {"category": "boats"},
        {"additional_media": [{"image_url": "https://example.com/x.jpg", "description": ""}]},
    ])
    def test_validation(self, admin_client, override):
        res = admin_client.post("/api/admin/save-service", dict(SERVICE, **override), format="json")
        assert res.status_code == 400
        assert Service.objects.count() == 0

    def test_save_all_replaces_category_in_one_write(self, admin_client, make_service):
        keep = make_service(name="Keep")
        make_service(name="Drop")
        make_service(category="hotels", name="Other category")

        res = admin_client.post("/api/admin/save-all-services", {
            "category": "cars",
            "services": [dict(SERVICE, name="Brand New"), dict(SERVICE, id=keep.service_id, name="Keep")],
        }, format="json")
        assert res.status_code == 200
        assert res.data["removed"] == 1
        cars = list(Service.objects.filter(category="cars").order_by("order"))
        assert [s.name for s in cars] == ["Brand New", "Keep"]
        assert Service.objects.filter(category="hotels").count() == 1

    def test_save_all_rejects_any_invalid_item(self, admin_client, make_service):
        make_service(name="Existing")
        res = admin_client.post("/api/admin/save-all-services", {
            "category": "cars", "services": [SERVICE, dict(SERVICE, name="")],
        }, format="json")
        assert res.status_code == 400
        assert list(Service.objects.values_list("name", flat=True)) == ["Existing"]

    def test_duplicate_returns_unsaved_clone(self, admin_client, make_service):
        original = make_service(name="City Compact")
        res = admin_client.post("/api/admin/duplicate-service", {"service_id": original.service_id}, format="json")
        assert res.status_code == 200
        assert res.data["service"]["id"] != original.service_id
        assert res.data["service"]["name"] == "City Compact (Copy)"
        assert Service.objects.count() == 1

    def test_two_copies_of_one_service_both_survive_save_all(self, admin_client):
        original = admin_client.post("/api/admin/save-service", SERVICE, format="json").data["service"]
        copies = [
            admin_client.post("/api/admin/duplicate-service", {"service_id": original["id"]},
                              format="json").data["service"]
            for _ in range(2)
        ]
        assert len({original["id"], copies[0]["id"], copies[1]["id"]}) == 3

        res = admin_client.post("/api/admin/save-all-services", {
            "category": "cars", "services": [original, *copies],
        }, format="json")
        assert res.status_code == 200
        assert Service.objects.filter(category="cars").count() == 3

    def test_save_all_rejects_repeated_ids(self, admin_client, make_service):
        svc = make_service(name="Existing")
        item = dict(SERVICE, id=svc.service_id)
        res = admin_client.post("/api/admin/save-all-services", {
            "category": "cars", "services": [item, dict(item, name="Other")],
        }, format="json")
        assert res.status_code == 400
        assert 1 in res.data["details"]
        assert Service.objects.get(pk=svc.service_id).name == "Existing"

    @pytest.mark.parametrize("bad_item", ["not-an-object", 7, ["a", "b"], None])
    def test_save_all_rejects_non_object_items(self, admin_client, bad_item):
        res = admin_client.post("/api/admin/save-all-services", {
            "category": "cars", "services": [SERVICE, bad_item],
        }, format="json")
        assert res.status_code == 400
        assert Service.objects.count() == 0

    def test_toggle_and_delete(self, admin_client, make_service):
        svc = make_service()
        admin_client.post("/api/admin/toggle-service", {"service_id": svc.service_id, "is_active": False},
                          format="json")
        svc.refresh_from_db()
        assert svc.is_active is False

        res = admin_client.post("/api/admin/delete-service", {"service_id": svc.service_id}, format="json")
        assert res.status_code == 200
        assert not Service.objects.exists()

    def test_admin_listing_includes_inactive(self, admin_client, make_service):
        make_service(is_active=False)
        res = admin_client.get("/api/admin/show-services", {"category": "cars"})
        assert len(res.data["services"]) == 1
        assert "Seats" in res.data["detail_key_suggestions"]

    def test_requires_admin(self, api_client):
        assert api_client.post("/api/admin/save-service", SERVICE, format="json").status_code in (401, 403)


CATEGORY = {
    "id": "boats",
    "name": "Boat Trips",
    "icon": "Ship",
    "href": "/services/boats",
    "image_url": "https://example.com/boat.jpg",
    "enabled": True,
}


@pytest.mark.django_db
class TestCategories:
    def test_save_all_writes_override(self, admin_client, api_client):
        res = admin_client.post("/api/admin/save-categories", {"categories": [CATEGORY]}, format="json")
        assert res.status_code == 200
        assert SiteSettings.objects.get().categories == [CATEGORY]
        assert [c["id"] for c in api_client.get("/api/settings").data["categories"]] == ["boats"]

    @pytest.mark.parametrize("override", [
        {"href": "services/boats"},
        {"image_url": "boat.jpg"},
        {"id": "Not A Slug"},
    ])
    def test_validation(self, admin_client, override):
        res = admin_client.post("/api/admin/save-categories", {"categories": [dict(CATEGORY, **override)]},
                                format="json")
        assert res.status_code == 400

    def test_empty_list_rejected(self, admin_client):
        assert admin_client.post("/api/admin/save-categories", {"categories": []}, format="json").status_code == 400

    def test_duplicate_ids_rejected(self, admin_client):
        res = admin_client.post("/api/admin/save-categories", {"categories": [CATEGORY, CATEGORY]}, format="json")
        assert res.status_code == 400

    def test_duplicate_gets_unique_slug(self, admin_client):
        res = admin_client.post("/api/admin/duplicate-category", {"category_id": "cars"}, format="json")
        assert res.status_code == 200
        assert res.data["category"]["id"] == "cars-copy"
        assert res.data["category"]["href"] == "/services/cars-copy"

    def test_listing_counts_services(self, admin_client, make_service):
        make_service()
        res = admin_client.get("/api/admin/show-categories")
        cars = next(c for c in res.data if c["id"] == "cars")
        assert cars["services"] == 1


@pytest.mark.django_db
class TestReviews:
    def test_public_create_and_average(self, api_client):
        for rating in (5, 4):
            res = api_client.post("/api/save-review", {
                "service_id": "CAR-CC-001", "author_name": "Ana", "rating": rating, "comment": "Great",
            }, format="json")
            assert res.status_code == 201
        listing = api_client.get("/api/reviews", {"service_id": "CAR-CC-001"})
        assert listing.data["count"] == 2
        assert listing.data["average_rating"] == 4.5

    def test_author_id_comes_from_the_request_not_the_payload(self, api_client, admin_client, admin_user):
        anonymous = api_client.post("/api/save-review", {
            "author_name": "Ana", "rating": 5, "comment": "Great", "user_id": "someone-else",
        }, format="json")
        assert anonymous.status_code == 201
        assert Review.objects.get(pk=anonymous.data["review"]["review_id"]).user_id == ""

        signed_in = admin_client.post("/api/save-review", {
            "author_name": "Ana", "rating": 4, "comment": "Good", "user_id": "someone-else",
        }, format="json")
        assert Review.objects.get(pk=signed_in.data["review"]["review_id"]).user_id == str(admin_user.pk)

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_bounds(self, api_client, rating):
        res = api_client.post("/api/save-review", {"author_name": "Ana", "rating": rating, "comment": "x"},
                              format="json")
        assert res.status_code == 400

    def test_admin_edit_and_delete(self, admin_client):
        review = Review.objects.create(review_id="REV-1", author_name="Ana", rating=3, comment="ok")
        res = admin_client.post("/api/admin/edit-review", {"review_id": "REV-1", "rating": 5}, format="json")
        assert res.status_code == 200
        review.refresh_from_db()
        assert review.rating == 5

        assert admin_client.post("/api/admin/delete-review", {"review_id": "REV-1"}, format="json").status_code == 200
        assert not Review.objects.exists()

    def test_edit_requires_admin(self, api_client):
        Review.objects.create(review_id="REV-1", author_name="Ana", rating=3, comment="ok")
        res = api_client.post("/api/admin/edit-review", {"review_id": "REV-1", "rating": 1}, format="json")
        assert res.status_code in (401, 403)


@pytest.mark.django_db
class TestEmailTemplates:
    def test_defaults_when_absent(self, api_client):
        assert api_client.get("/api/email-template").data["template"] == DEFAULT_ADMIN_EMAIL_TEMPLATE
        assert api_client.get("/api/client-email-template").data["template"] == DEFAULT_CLIENT_EMAIL_TEMPLATE

    def test_admin_save_overwrites(self, admin_client, api_client):
        res = admin_client.post("/api/admin/save-email-template/client", {"template": "<p>{{name}}</p>"},
                                format="json")
        assert res.status_code == 200
        admin_client.post("/api/admin/save-email-template/client", {"template": "<p>Hi {{name}}</p>"},
                          format="json")
        assert EmailTemplate.objects.count() == 1
        assert api_client.get("/api/client-email-template").data["template"] == "<p>Hi {{name}}</p>"

    def test_empty_and_unknown(self, admin_client):
        assert admin_client.post("/api/admin/save-email-template/admin", {"template": ""},
                                 format="json").status_code == 400
        assert admin_client.post("/api/admin/save-email-template/sms", {"template": "x"},
                                 format="json").status_code == 404
