from django.conf import settings


class EmbeddedShopfrontMiddleware:
    """Forbid framing of everything but the shop pages once embedding is enabled."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)
        if settings.ENABLE_EMBEDDED_SHOPFRONTS and "Content-Security-Policy" not in response:
            response["Content-Security-Policy"] = "frame-ancestors 'none';"
        return response
