"""View decorator translating API exceptions into JSON error responses."""

import logging
from functools import wraps

from django.core.exceptions import ObjectDoesNotExist, PermissionDenied
from django.http import Http404, HttpResponseNotAllowed

from .errors import ApiError, error_response

logger = logging.getLogger(__name__)


def api_view(*methods):
    """
    Restrict a view to the given HTTP methods and answer errors as JSON.

    @api_view("GET", "POST")
    def customers(request): ...
    """

    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if methods and request.method not in methods:
                return HttpResponseNotAllowed(methods)
            try:
                return view_func(request, *args, **kwargs)
            except ApiError as exc:
                logger.info("%s %s rejected: %s", request.method, request.path, exc.detail)
                return exc.response()
            except (Http404, ObjectDoesNotExist):
                return error_response(404, "Not found")
            except PermissionDenied:
                return error_response(403, "Forbidden", "You are not allowed to perform this action")

        return wrapper

    return decorator
