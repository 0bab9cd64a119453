# Standard Library
import copy
import logging

# Django
from django.db import DatabaseError, transaction

# Django REST Framework
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

# Local Imports
from .models import Service, SiteSettings
from .permissions import IsAdminAccount
from .serializers import CategorySerializer
from .site_settings import effective_categories
from .utilities import generate_category_slug

logger = logging.getLogger(__name__)


class ShowCategoryAPIView(APIView):
    permission_classes = [IsAdminAccount]

    def get(self, request):
        result = []
        for cat in effective_categories():
            result.append({
                **cat,
                "services": Service.objects.filter(category=cat["id"]).count(),
            })
        return Response(result, status=status.HTTP_200_OK)


class SaveCategoriesAPIView(APIView):
    """
    Commit the full staged category list in one write:
      {"categories": [{id, name, icon, href, image_url, enabled}, ...]}
    The list replaces the stored override wholesale.
    """
    permission_classes = [IsAdminAccount]

    def post(self, request):
        items = request.data.get("categories")
        if not isinstance(items, list) or not items:
            return Response({"error": "At least one category is required"}, status=status.HTTP_400_BAD_REQUEST)

        serializer = CategorySerializer(data=items, many=True)
        if not serializer.is_valid():
            return Response({"error": "Invalid categories", "details": serializer.errors},
                            status=status.HTTP_400_BAD_REQUEST)

        categories = [dict(c) for c in serializer.validated_data]
        ids = [c["id"] for c in categories]
        if len(ids) != len(set(ids)):
            return Response({"error": "Category ids must be unique"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            with transaction.atomic():
                row, _ = SiteSettings.objects.get_or_create(singleton_lock="X")
                row.categories = categories
                row.category_images = {c["id"]: c["image_url"] for c in categories}
                row.save(update_fields=["categories", "category_images", "updated_at"])
        except DatabaseError as e:
            logger.exception("Saving categories failed")
            return Response({"success": False, "error": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({"success": True, "categories": categories}, status=status.HTTP_200_OK)


class DuplicateCategoryAPIView(APIView):
    """
    Returns an unsaved clone with a unique slug, for staging in the editor.
    """
    permission_classes = [IsAdminAccount]

    def post(self, request):
        category_id = request.data.get("category_id")
        categories = effective_categories()
        original = next((c for c in categories if c["id"] == category_id), None)
        if not original:
            return Response({"error": "Category not found"}, status=status.HTTP_404_NOT_FOUND)

        taken = {c["id"] for c in categories}
        clone = copy.deepcopy(original)
        clone["name"] = f"{original['name']} (Copy)"
        clone["id"] = generate_category_slug(f"{original['id']}-copy", taken)
        clone["href"] = f"/services/{clone['id']}"
        return Response({"success": True, "category": clone}, status=status.HTTP_200_OK)
