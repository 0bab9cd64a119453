# Standard Library
import logging

# Django
from django.contrib.auth import get_user_model
from django.db import DatabaseError, IntegrityError, transaction

# Django REST Framework
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings as jwt_settings
from rest_framework_simplejwt.tokens import AccessToken

# Local Imports
from .models import AdminAccount
from .permissions import FrontendOnlyPermission, IsAdminAccount, admin_account_for
from .serializers import BootstrapSuperAdminSerializer, ManageAdminSerializer

logger = logging.getLogger(__name__)
User = get_user_model()


def _serialize_admin(account: AdminAccount):
    return {
        "uid": account.user_id,
        "email": account.email,
        "role": account.role,
        "created_at": account.created_at,
    }


def _find_account(data):
    if data.get("user_id"):
        return AdminAccount.objects.select_related("user").filter(user_id=data["user_id"]).first()
    return AdminAccount.objects.select_related("user").filter(email=data["email"].lower()).first()


def _create_admin_identity(email, password, role):
    email = email.lower()
    user = User.objects.create_user(username=email, email=email, password=password)
    return AdminAccount.objects.create(user=user, email=email, role=role)


class ShowAdminAPIView(APIView):
    permission_classes = [IsAdminAccount]

    def get(self, request):
        accounts = AdminAccount.objects.all()
        return Response({
            "admins": [_serialize_admin(a) for a in accounts],
            "me": _serialize_admin(admin_account_for(request.user)),
        }, status=status.HTTP_200_OK)


class ManageAdminAPIView(APIView):
    """
    {"action": "add", "email", "password"}         any admin
    {"action": "remove", "user_id" | "email"}      superadmin only, never self
    {"action": "promote", "user_id" | "email"}     superadmin only
    """
    permission_classes = [IsAdminAccount]

    def post(self, request):
        serializer = ManageAdminSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"success": False, "error": "Invalid data", "details": serializer.errors},
                            status=status.HTTP_400_BAD_REQUEST)
        data = serializer.validated_data
        action = data["action"]
        caller = admin_account_for(request.user)

        if action in ("remove", "promote") and not caller.is_superadmin:
            return Response({"success": False, "error": "Forbidden: Caller is not a superadmin."},
                            status=status.HTTP_403_FORBIDDEN)

        try:
            if action == "add":
                if User.objects.filter(username=data["email"].lower()).exists():
                    return Response({"success": False, "error": "A user with this email already exists."},
                                    status=status.HTTP_400_BAD_REQUEST)
                with transaction.atomic():
                    account = _create_admin_identity(data["email"], data["password"], "admin")
                return Response({"success": True, "message": "Admin added successfully.",
                                 "admin": _serialize_admin(account)}, status=status.HTTP_201_CREATED)

            account = _find_account(data)
            if not account:
                return Response({"success": False, "error": "Admin not found"}, status=status.HTTP_404_NOT_FOUND)

            if action == "remove":
                if account.pk == caller.pk:
                    return Response({"success": False, "error": "You cannot remove yourself."},
                                    status=status.HTTP_400_BAD_REQUEST)
                with transaction.atomic():
                    account.user.delete()  # cascades to the admin account
                return Response({"success": True, "message": "Admin removed successfully."},
                                status=status.HTTP_200_OK)

            account.role = "superadmin"
            account.save(update_fields=["role", "updated_at"])
            return Response({"success": True, "message": "Admin promoted to superadmin.",
                             "admin": _serialize_admin(account)}, status=status.HTTP_200_OK)

        except (DatabaseError, IntegrityError) as e:
            logger.exception("Admin management action '%s' failed", action)
            return Response({"success": False, "error": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)


class BootstrapSuperAdminAPIView(APIView):
    """
    Creates the first superadmin. Refused once any admin account exists.
    """
    permission_classes = [FrontendOnlyPermission]

    def post(self, request):
        serializer = BootstrapSuperAdminSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"success": False, "error": "Invalid data", "details": serializer.errors},
                            status=status.HTTP_400_BAD_REQUEST)
        data = serializer.validated_data

        try:
            with transaction.atomic():
                if AdminAccount.objects.select_for_update().exists():
                    return Response({"success": False,
                                     "error": "An admin already exists. Cannot bootstrap a new superadmin."},
                                    status=status.HTTP_409_CONFLICT)

                user = User.objects.filter(username=data["email"].lower()).first()
                if user:
                    if not user.check_password(data["password"]):
                        return Response({"success": False, "error": "Invalid credentials"},
                                        status=status.HTTP_401_UNAUTHORIZED)
                    account = AdminAccount.objects.create(user=user, email=user.email or data["email"].lower(),
                                                          role="superadmin")
                else:
                    account = _create_admin_identity(data["email"], data["password"], "superadmin")
        except (DatabaseError, IntegrityError) as e:
            logger.exception("Superadmin bootstrap failed")
            return Response({"success": False, "error": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({"success": True, "message": "Superadmin bootstrapped successfully.",
                         "admin": _serialize_admin(account)}, status=status.HTTP_201_CREATED)


def _bearer_token(request):
    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        return None
    return header[len("Bearer "):].strip() or None


class DeleteAdminUserAPIView(APIView):
    """
    POST /api/delete-admin-user  {"uid_to_delete": <user id>}
    Requires `Authorization: Bearer <access token>` of a superadmin.
    401 no/invalid token, 403 not superadmin, 400 missing target or self,
    404 unknown target, 500 anything else.
    """
    authentication_classes = ()
    permission_classes = ()

    def post(self, request):
        token = _bearer_token(request)
        if not token:
            return Response({"error": "Unauthorized: No token provided."}, status=status.HTTP_401_UNAUTHORIZED)

        try:
            caller_uid = str(AccessToken(token)[jwt_settings.USER_ID_CLAIM])
        except (TokenError, KeyError):
            return Response({"error": "Invalid or expired authorization token."},
                            status=status.HTTP_401_UNAUTHORIZED)

        caller = AdminAccount.objects.filter(user_id=caller_uid).first()
        if not caller or not caller.is_superadmin:
            return Response({"error": "Forbidden: Caller is not a superadmin."}, status=status.HTTP_403_FORBIDDEN)

        uid_to_delete = request.data.get("uid_to_delete") or request.data.get("uidToDelete")
        if not uid_to_delete:
            return Response({"error": "User ID to delete is required."}, status=status.HTTP_400_BAD_REQUEST)
        uid_to_delete = str(uid_to_delete)

        if uid_to_delete == caller_uid:
            return Response({"error": "A superadmin cannot delete themselves."}, status=status.HTTP_400_BAD_REQUEST)

        try:
            with transaction.atomic():
                target = User.objects.filter(pk=uid_to_delete).first() if uid_to_delete.isdigit() else None
                if not target:
                    return Response({"error": "User not found."}, status=status.HTTP_404_NOT_FOUND)
                AdminAccount.objects.filter(user=target).delete()
                target.delete()
        except DatabaseError as e:
            logger.exception("Failed to delete admin user %s", uid_to_delete)
            return Response({"error": "Failed to delete user.", "details": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.info("Admin user %s deleted by %s", uid_to_delete, caller_uid)
        return Response({"success": True, "message": f"User {uid_to_delete} deleted."}, status=status.HTTP_200_OK)
