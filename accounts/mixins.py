"""
RBAC decorator for view-level access control.

Usage:
    @role_required(Role.MANAGER)
    def my_view(request):
        ...

Views here answer JSON, so an anonymous caller gets a 401 body instead of
a redirect to the login page.
"""

from functools import wraps

from django.core.exceptions import PermissionDenied
from django.http import JsonResponse

from .models import Role


def role_required(*roles):
    """
    Decorator for function-based views.

    Admins and superusers always pass. With no roles given, any
    authenticated user passes.
    """

    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return JsonResponse(
                    {"errors": [{"title": "Unauthorized", "detail": "Authentication required"}]},
                    status=401,
                )
            if request.user.is_superuser or request.user.role == Role.ADMIN:
                return view_func(request, *args, **kwargs)
            if roles and request.user.role not in roles:
                raise PermissionDenied
            return view_func(request, *args, **kwargs)

        return wrapper

    return decorator
