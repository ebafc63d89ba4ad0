"""Public shop pages. They answer JSON and may be framed by partner sites."""

from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.urls import reverse
from django.views.decorators.http import require_GET

from enterprises.models import Enterprise

from .decorators import embeddable_shopfront


def serialize_shop(enterprise):
    return {
        "id": enterprise.pk,
        "name": enterprise.name,
        "permalink": enterprise.permalink,
        "description": enterprise.description,
        "url": reverse("shopfront:enterprise_shop", kwargs={"permalink": enterprise.permalink}),
    }


@require_GET
@embeddable_shopfront
def shops(request):
    return JsonResponse({"shops": [serialize_shop(e) for e in Enterprise.objects.distributors()]})


@require_GET
@embeddable_shopfront
def enterprise_shop(request, permalink):
    enterprise = get_object_or_404(Enterprise.objects.distributors(), permalink=permalink)
    order_cycles = enterprise.received_exchanges.filter(incoming=False).values_list("order_cycle_id", flat=True)
    return JsonResponse(
        {
            "shop": serialize_shop(enterprise),
            "layout": "embedded" if request.GET.get("embedded_shopfront") == "true" else "default",
            "order_cycle_ids": sorted(set(order_cycles)),
        }
    )
