# common/middleware.py
from django.conf import settings
from django.http import HttpResponse
from django.utils.cache import patch_vary_headers


class CorsMiddleware:
    """
    Answers CORS preflight requests and decorates every response with the
    allow-origin headers the SPA needs to send its session cookie.
    Origins come from settings.CORS_ALLOWED_ORIGINS; "*" allows any origin.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        origin = request.headers.get("Origin")

        if request.method == "OPTIONS" and origin:
            response = HttpResponse()
            if self._allowed(origin):
                self._decorate(response, origin)
                response["Access-Control-Allow-Methods"] = "GET, POST, PUT, PATCH, DELETE, OPTIONS"
                response["Access-Control-Allow-Headers"] = "Content-Type, Authorization, X-CSRFToken"
                response["Access-Control-Max-Age"] = "86400"
            return response

        response = self.get_response(request)
        if origin and self._allowed(origin):
            self._decorate(response, origin)
            response["Access-Control-Expose-Headers"] = "Content-Disposition"
        return response

    @staticmethod
    def _allowed(origin: str) -> bool:
        allowed = getattr(settings, "CORS_ALLOWED_ORIGINS", [])
        return "*" in allowed or origin in allowed

    @staticmethod
    def _decorate(response, origin: str) -> None:
        response["Access-Control-Allow-Origin"] = origin
        response["Access-Control-Allow-Credentials"] = "true"
        patch_vary_headers(response, ("Origin",))
