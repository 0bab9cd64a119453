# ---- SITE SETTINGS APIS ----
import copy
import logging

from django.db import DatabaseError, transaction
from rest_framework.parsers import FormParser, JSONParser
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from .defaults import DEFAULT_SETTINGS
from .models import SiteSettings
from .permissions import FrontendOnlyPermission, IsAdminAccount
from .serializers import SiteSettingsSerializer

logger = logging.getLogger(__name__)

OVERRIDE_FIELDS = (
    "logo_url",
    "whatsapp_number",
    "booking_email_to",
    "resend_email_from",
    "hero_background_image_url",
    "suggestions_background_image_url",
    "category_images",
    "categories",
)


def resolve_settings(defaults, override=None):
    """
    Effective settings = deep copy of `defaults` with `override` shallow-merged on top.

    `categories` is the exception: the override list wins only when it is a
    non-empty list, so a half-written override can never hide the storefront.
    Pure: identical inputs give deep-equal results.
    """
    effective = copy.deepcopy(defaults)
    override = override or {}

    for key, value in override.items():
        if key == "categories" or value is None:
            continue
        effective[key] = copy.deepcopy(value)

    override_categories = override.get("categories")
    if isinstance(override_categories, list) and override_categories:
        effective["categories"] = copy.deepcopy(override_categories)

    effective["is_settings_loading"] = False
    return effective


def _override_document(row):
    """
    Only non-blank fields of the stored row count as overrides.
    """
    doc = {}
    for field in OVERRIDE_FIELDS:
        value = getattr(row, field)
        if value in ("", None, {}, []):
            continue
        doc[field] = value
    return doc


def _active_settings():
    row, _ = SiteSettings.objects.get_or_create(singleton_lock="X")
    return row


def load_settings_override():
    try:
        row = SiteSettings.objects.filter(singleton_lock="X").first()
    except DatabaseError as e:
        logger.warning("Settings override unavailable, using defaults: %s", e)
        return None
    return _override_document(row) if row else None


def load_effective_settings():
    return resolve_settings(DEFAULT_SETTINGS, load_settings_override())


def effective_categories():
    return load_effective_settings()["categories"]


class ShowSettingsAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        return Response(load_effective_settings(), status=status.HTTP_200_OK)


class SaveSettingsAPIView(APIView):
    permission_classes = [IsAdminAccount]
    parser_classes = [JSONParser, FormParser]

    def post(self, request):
        """
        Accepts:
          - JSON/form: any subset of the settings fields
            (logo_url, whatsapp_number, booking_email_to, resend_email_from,
             hero_background_image_url, suggestions_background_image_url,
             category_images, categories)
        Fields not sent are left untouched.
        """
        serializer = SiteSettingsSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return Response({"error": "Invalid settings", "details": serializer.errors},
                            status=status.HTTP_400_BAD_REQUEST)

        try:
            with transaction.atomic():
                row = _active_settings()
                for field, value in serializer.validated_data.items():
                    setattr(row, field, value)
                row.save()
        except DatabaseError as e:
            logger.exception("Saving settings failed")
            return Response({"success": False, "error": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({"success": True, "settings": load_effective_settings()}, status=status.HTTP_200_OK)
