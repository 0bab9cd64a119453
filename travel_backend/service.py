# Standard Library
import logging

# Django
from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

# Django REST Framework
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

# Local Imports
from .defaults import DETAIL_KEY_SUGGESTIONS
from .models import Service
from .permissions import IsAdminAccount
from .serializers import ServiceSerializer
from .site_settings import effective_categories
from .utilities import _as_bool, generate_copy_id, generate_service_id, serialize_service

logger = logging.getLogger(__name__)

SERVICE_FIELDS = (
    "category", "name", "label", "description", "image_url", "price", "price_unit",
    "location", "details", "additional_media", "is_active", "is_best_offer", "order",
)


def _category_ids():
    return {c["id"] for c in effective_categories()}


def _upsert_service(data):
    service_id = (data.get("id") or "").strip()
    values = {field: data[field] for field in SERVICE_FIELDS if field in data}

    if service_id and Service.objects.filter(service_id=service_id).exists():
        Service.objects.filter(service_id=service_id).update(updated_at=timezone.now(), **values)
        return Service.objects.get(service_id=service_id), False

    service_id = service_id or generate_service_id(data["name"], data["category"])
    return Service.objects.create(service_id=service_id, **values), True


class ShowServicesAPIView(APIView):
    """
    Admin listing: inactive services included.
    """
    permission_classes = [IsAdminAccount]

    def get(self, request):
        qs = Service.objects.all()
        category = request.query_params.get("category")
        if category:
            qs = qs.filter(category=category)
        return Response({
            "services": [serialize_service(s) for s in qs],
            "detail_key_suggestions": DETAIL_KEY_SUGGESTIONS.get(category, []) if category else DETAIL_KEY_SUGGESTIONS,
        }, status=status.HTTP_200_OK)


class SaveServiceAPIView(APIView):
    """
    Create (no `id` or unknown `id`) or update (existing `id`) one service.
    """
    permission_classes = [IsAdminAccount]

    def post(self, request):
        serializer = ServiceSerializer(data=request.data, context={"category_ids": _category_ids()})
        if not serializer.is_valid():
            return Response({"error": "Invalid service", "details": serializer.errors},
                            status=status.HTTP_400_BAD_REQUEST)

        try:
            with transaction.atomic():
                service, created = _upsert_service(serializer.validated_data)
        except (DatabaseError, ValueError) as e:
            logger.exception("Saving service failed")
            return Response({"success": False, "error": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({"success": True, "created": created, "service": serialize_service(service)},
                        status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)


class SaveAllServicesAPIView(APIView):
    """
    Commit a category's staged list in one write:
      {"category": "cars", "services": [ {...}, {...} ]}
    Services of that category missing from the list are deleted; list order
    becomes display order.
    """
    permission_classes = [IsAdminAccount]

    def post(self, request):
        category = (request.data.get("category") or "").strip()
        items = request.data.get("services")
        if not category or not isinstance(items, list):
            return Response({"error": "category and services[] are required"},
                            status=status.HTTP_400_BAD_REQUEST)

        category_ids = _category_ids()
        if category not in category_ids:
            return Response({"error": f"Unknown category '{category}'"}, status=status.HTTP_400_BAD_REQUEST)

        validated, errors, seen_ids = [], {}, set()
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                errors[index] = {"non_field_errors": ["Each service must be an object."]}
                continue
            staged_id = str(item.get("id") or "").strip()
            if staged_id:
                if staged_id in seen_ids:
                    errors[index] = {"id": [f"Duplicate id '{staged_id}' in this list."]}
                    continue
                seen_ids.add(staged_id)
            item = dict(item, category=category, order=index)
            serializer = ServiceSerializer(data=item, context={"category_ids": category_ids})
            if serializer.is_valid():
                validated.append(serializer.validated_data)
            else:
                errors[index] = serializer.errors
        if errors:
            return Response({"error": "Invalid services", "details": errors},
                            status=status.HTTP_400_BAD_REQUEST)

        try:
            with transaction.atomic():
                saved = [_upsert_service(data)[0] for data in validated]
                keep = [s.service_id for s in saved]
                removed, _ = Service.objects.filter(category=category).exclude(service_id__in=keep).delete()
        except (DatabaseError, ValueError) as e:
            logger.exception("Saving services for %s failed", category)
            return Response({"success": False, "error": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({
            "success": True,
            "services": [serialize_service(s) for s in saved],
            "removed": removed,
        }, status=status.HTTP_200_OK)


class DuplicateServiceAPIView(APIView):
    """
    Returns an unsaved clone with a fresh id, for staging in the editor.
    """
    permission_classes = [IsAdminAccount]

    def post(self, request):
        service_id = request.data.get("service_id")
        if not service_id:
            return Response({"error": "service_id is required"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            original = Service.objects.get(service_id=service_id)
        except Service.DoesNotExist:
            return Response({"error": "Service not found"}, status=status.HTTP_404_NOT_FOUND)

        clone = serialize_service(original)
        clone["name"] = f"{original.name} (Copy)"
        clone["id"] = generate_copy_id(original.service_id)
        clone["is_best_offer"] = False
        clone["created_at"] = clone["updated_at"] = None
        return Response({"success": True, "service": clone}, status=status.HTTP_200_OK)


class ToggleServiceAPIView(APIView):
    """
    Quick switches from the listing: {"service_id", "is_active"?, "is_best_offer"?}
    """
    permission_classes = [IsAdminAccount]

    def post(self, request):
        service_id = request.data.get("service_id")
        try:
            service = Service.objects.get(service_id=service_id)
        except Service.DoesNotExist:
            return Response({"error": "Service not found"}, status=status.HTTP_404_NOT_FOUND)

        fields = []
        for flag in ("is_active", "is_best_offer"):
            if flag in request.data:
                setattr(service, flag, _as_bool(request.data.get(flag)))
                fields.append(flag)
        if not fields:
            return Response({"error": "Nothing to update"}, status=status.HTTP_400_BAD_REQUEST)

        service.save(update_fields=fields + ["updated_at"])
        return Response({"success": True, "service": serialize_service(service)}, status=status.HTTP_200_OK)


class DeleteServiceAPIView(APIView):
    permission_classes = [IsAdminAccount]

    def post(self, request):
        service_id = request.data.get("service_id")
        if not service_id:
            return Response({"success": False, "error": "service_id is required"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            Service.objects.get(service_id=service_id).delete()
        except Service.DoesNotExist:
            return Response({"success": False, "error": "Service not found"}, status=status.HTTP_404_NOT_FOUND)
        except IntegrityError as e:
            logger.exception("Deleting service %s failed", service_id)
            return Response({"success": False, "error": str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({"success": True, "message": f"Service '{service_id}' deleted"}, status=status.HTTP_200_OK)
