from django.http import HttpResponseRedirect

from .authentication import AUTH_COOKIE_NAME


class AuthCookieRouteGuardMiddleware:
    """
    Redirects on presence of the `auth` cookie:
      - /admin... without it -> /login
      - /login... with it    -> /admin/
    Only checks presence; token validity is enforced by the API itself.
    """
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        path = request.path
        has_cookie = bool(request.COOKIES.get(AUTH_COOKIE_NAME))

        if (path == "/admin" or path.startswith("/admin/")) and not has_cookie:
            return HttpResponseRedirect("/login")
        if (path == "/login" or path.startswith("/login/")) and has_cookie and request.method == "GET":
            return HttpResponseRedirect("/admin/")

        return self.get_response(request)
