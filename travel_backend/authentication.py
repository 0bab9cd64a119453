from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken

AUTH_COOKIE_NAME = "auth"


class CookieJWTAuthentication(JWTAuthentication):
    """
    Standard `Authorization: Bearer <access>` header first, then the `auth`
    cookie set by the login view. A cookie that no longer validates is
    treated as anonymous.
    """
    def authenticate(self, request):
        header = self.get_header(request)
        if header is not None:
            return super().authenticate(request)

        raw_token = request.COOKIES.get(AUTH_COOKIE_NAME)
        if not raw_token:
            return None

        try:
            validated_token = self.get_validated_token(raw_token)
            return self.get_user(validated_token), validated_token
        except (InvalidToken, AuthenticationFailed):
            return None
