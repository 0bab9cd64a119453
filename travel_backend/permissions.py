from django.conf import settings
from rest_framework.permissions import BasePermission

from .models import AdminAccount


class FrontendOnlyPermission(BasePermission):
    """
    Storefront header gate. Open when no FRONTEND_KEY is configured.
    """
    def has_permission(self, request, view):
        expected = getattr(settings, "FRONTEND_KEY", "")
        if not expected:
            return True
        return request.headers.get("X-Frontend-Key") == expected


def admin_account_for(user):
    if not user or not getattr(user, "is_authenticated", False):
        return None
    try:
        return user.admin_account
    except AdminAccount.DoesNotExist:
        return None


class IsAdminAccount(BasePermission):
    message = "Admin access required."

    def has_permission(self, request, view):
        return admin_account_for(request.user) is not None

