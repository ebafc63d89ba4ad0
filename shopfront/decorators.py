from functools import wraps

from django.views.decorators.clickjacking import xframe_options_exempt

from .embedding import embedding_domain, frame_ancestors


def embeddable_shopfront(view_func):
    """Let the page be framed by the referer when it is allowed to embed shops."""

    @xframe_options_exempt
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        response = view_func(request, *args, **kwargs)
        response["Content-Security-Policy"] = frame_ancestors(embedding_domain(request))
        return response

    return wrapper
