from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from travel_backend.mailer import MailerError
from travel_backend.models import AdminAccount, Service


class FakeMailer:
    """
    Records sends; fails for any address listed in `fail_for`.
    """

    def __init__(self, configured=True, fail_for=()):
        self.configured = configured
        self.fail_for = set(fail_for)
        self.sent = []

    @property
    def is_configured(self):
        return self.configured

    def send(self, to, subject, html, from_email):
        if to in self.fail_for:
            raise MailerError(f"rejected {to}")
        self.sent.append({"to": to, "subject": subject, "html": html, "from": from_email})
        return "msg-1"


@pytest.fixture(autouse=True)
def _plain_settings(settings):
    settings.FRONTEND_KEY = ""
    settings.BOOKING_EMAIL_TO = "bookings@triplanner.test"
    settings.RESEND_EMAIL_FROM = "TriPlanner <onboarding@resend.dev>"
    settings.STRIPE_PUBLISHABLE_KEY = ""
    settings.CLOUDINARY_CLOUD_NAME = ""
    settings.CLOUDINARY_API_KEY = ""
    settings.CLOUDINARY_API_SECRET = ""
    return settings


@pytest.fixture
def api_client():
    return APIClient()


def _make_admin(email, role):
    user = get_user_model().objects.create_user(username=email, email=email, password="secret123")
    AdminAccount.objects.create(user=user, email=email, role=role)
    return user


@pytest.fixture
def admin_user(db):
    return _make_admin("admin@triplanner.test", "admin")


@pytest.fixture
def superadmin_user(db):
    return _make_admin("root@triplanner.test", "superadmin")


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def superadmin_client(superadmin_user):
    client = APIClient()
    client.force_authenticate(user=superadmin_user)
    return client


@pytest.fixture
def fake_mailer(monkeypatch):
    mailer = FakeMailer()
    monkeypatch.setattr("travel_backend.booking.get_mailer", lambda: mailer)
    return mailer


@pytest.fixture
def make_service(db):
    counter = {"n": 0}

    def _make(category="cars", price="50", **kwargs):
        counter["n"] += 1
        defaults = {
            "service_id": f"TST-{counter['n']:03d}",
            "category": category,
            "name": f"Service {counter['n']}",
            "description": "A test service",
            "price": Decimal(price),
            "price_unit": {"cars": "day", "hotels": "night"}.get(category, "trip"),
            "location": "Downtown",
            "image_url": "https://example.com/img.jpg",
        }
        defaults.update(kwargs)
        return Service.objects.create(**defaults)

    return _make
