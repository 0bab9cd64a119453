import logging

from django.conf import settings
from django.http import JsonResponse
from django.middleware.csrf import get_token
from django.utils.decorators import method_decorator
from django.views.decorators.csrf import csrf_protect, ensure_csrf_cookie
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from .authentication import AUTH_COOKIE_NAME

logger = logging.getLogger(__name__)

COOKIE_NAME = "refresh_token"
COOKIE_PATH = "/api/token/"
COOKIE_SAMESITE = "Lax"   # use "None" + secure if cross-site in prod
COOKIE_MAX_AGE = 7 * 24 * 60 * 60
AUTH_COOKIE_MAX_AGE = 60 * 60


def _cookie_secure():
    return getattr(settings, "AUTH_COOKIE_SECURE", False)


@ensure_csrf_cookie
def csrf(request):
    """
    GET /api/csrf -> sets csrftoken cookie and returns it as JSON
    """
    return JsonResponse({"csrfToken": get_token(request)})


@method_decorator(csrf_protect, name="post")
class CookieTokenObtainPairView(TokenObtainPairView):
    """
    POST /login {username, password}
    Returns {"access": ...}; sets the `auth` cookie (route guard) and the
    HttpOnly refresh cookie.
    """
    def post(self, request, *args, **kwargs):
        res = super().post(request, *args, **kwargs)
        if res.status_code == status.HTTP_200_OK and "refresh" in res.data:
            refresh = res.data.pop("refresh")
            res.set_cookie(
                COOKIE_NAME, refresh,
                max_age=COOKIE_MAX_AGE,
                httponly=True,
                secure=_cookie_secure(),
                samesite=COOKIE_SAMESITE,
                path=COOKIE_PATH,
            )
            res.set_cookie(
                AUTH_COOKIE_NAME, res.data.get("access", ""),
                max_age=AUTH_COOKIE_MAX_AGE,
                httponly=True,
                secure=_cookie_secure(),
                samesite=COOKIE_SAMESITE,
                path="/",
            )
            logger.info("Admin login for %s", request.data.get("username", ""))
        return res


@method_decorator(csrf_protect, name="post")
class CookieTokenRefreshView(TokenRefreshView):
    """
    POST /api/token/refresh -> returns {"access": "..."} using the HttpOnly cookie.
    """
    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data={"refresh": request.COOKIES.get(COOKIE_NAME, "")})
        serializer.is_valid(raise_exception=True)
        res = Response(serializer.validated_data, status=status.HTTP_200_OK)
        res.set_cookie(
            AUTH_COOKIE_NAME, serializer.validated_data.get("access", ""),
            max_age=AUTH_COOKIE_MAX_AGE,
            httponly=True,
            secure=_cookie_secure(),
            samesite=COOKIE_SAMESITE,
            path="/",
        )
        return res


@method_decorator(csrf_protect, name="post")
class LogoutView(APIView):
    authentication_classes = ()
    permission_classes = ()

    def post(self, request):
        r = Response({"detail": "Logged out"})
        r.delete_cookie(COOKIE_NAME, path=COOKIE_PATH)
        r.delete_cookie(AUTH_COOKIE_NAME, path="/")
        return r
