# ---- EMAIL TEMPLATE APIS ----
import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .defaults import DEFAULT_EMAIL_TEMPLATES
from .models import EmailTemplate
from .permissions import FrontendOnlyPermission, IsAdminAccount
from .serializers import EmailTemplateSerializer

logger = logging.getLogger(__name__)


def get_email_template(kind):
    """
    Stored template for `kind` ("admin" | "client"), else the bundled default.
    """
    try:
        row = EmailTemplate.objects.filter(kind=kind).first()
    except DatabaseError as e:
        logger.warning("Email template '%s' unavailable, using default: %s", kind, e)
        row = None
    if row and row.template:
        return row.template
    return DEFAULT_EMAIL_TEMPLATES[kind]


class ShowAdminEmailTemplateAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        return Response({"template": get_email_template("admin")}, status=status.HTTP_200_OK)


class ShowClientEmailTemplateAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        return Response({"template": get_email_template("client")}, status=status.HTTP_200_OK)


class SaveEmailTemplateAPIView(APIView):
    """
    POST /api/admin/save-email-template/<kind>  {template}
    Overwrites the stored template wholesale.
    """
    permission_classes = [IsAdminAccount]

    def post(self, request, kind):
        if kind not in DEFAULT_EMAIL_TEMPLATES:
            return Response({"error": "Unknown template"}, status=status.HTTP_404_NOT_FOUND)

        serializer = EmailTemplateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": "Template cannot be empty", "details": serializer.errors},
                            status=status.HTTP_400_BAD_REQUEST)

        try:
            EmailTemplate.objects.update_or_create(
                kind=kind, defaults={"template": serializer.validated_data["template"]}
            )
        except DatabaseError as e:
            logger.exception("Saving %s email template failed", kind)
            return Response({"success": False, "error": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({"success": True, "kind": kind}, status=status.HTTP_200_OK)
