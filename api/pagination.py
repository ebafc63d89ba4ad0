"""Page-number pagination producing JSON:API meta and links blocks."""

from django.conf import settings
from django.core.paginator import EmptyPage, Paginator

from .errors import InvalidQueryParameter
from .params import int_param


def _page_url(request, number):
    params = request.GET.copy()
    params["page"] = number
    return f"{request.build_absolute_uri(request.path)}?{params.urlencode()}"


def paginate(request, queryset):
    """
    Slice queryset by ?page= and ?per_page=.

    Returns (objects, meta, links).
    """
    per_page = int_param(request, "per_page", default=settings.API_DEFAULT_PER_PAGE, minimum=1)
    per_page = min(per_page, settings.API_MAX_PER_PAGE)
    number = int_param(request, "page", default=1, minimum=1)

    paginator = Paginator(queryset, per_page)
    try:
        page = paginator.page(number)
    except EmptyPage:
        raise InvalidQueryParameter("page", f"Page {number} is out of range") from None

    meta = {
        "pagination": {
            "results": paginator.count,
            "pages": paginator.num_pages,
            "page": page.number,
            "per_page": per_page,
        }
    }
    links = {
        "self": _page_url(request, page.number),
        "first": _page_url(request, 1),
        "prev": _page_url(request, page.previous_page_number()) if page.has_previous() else None,
        "next": _page_url(request, page.next_page_number()) if page.has_next() else None,
        "last": _page_url(request, paginator.num_pages),
    }
    return list(page.object_list), meta, links
