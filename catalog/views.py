from django.http import JsonResponse

from accounts.mixins import role_required
from api.decorators import api_view
from api.params import int_param

from .search import ScopeVariantsForSearch


def serialize_variant(variant):
    return {
        "id": str(variant.pk),
        "type": "variant",
        "attributes": {
            "name": variant.name,
            "display_name": variant.display_name,
            "full_name": variant.full_name,
            "sku": variant.sku,
            "unit_description": variant.unit_description,
            "price": float(variant.price),
            "product_id": variant.product_id,
            "supplier_id": variant.product.supplier_id,
        },
    }


@api_view("GET")
@role_required()
def variant_search(request):
    """
    GET /api/v1/variants/search?q=&schedule_id=&order_cycle_id=&distributor_id=
    """
    params = {
        "q": request.GET.get("q", ""),
        "schedule_id": int_param(request, "schedule_id"),
        "order_cycle_id": int_param(request, "order_cycle_id"),
        "distributor_id": int_param(request, "distributor_id"),
    }
    variants = ScopeVariantsForSearch(params).search()
    return JsonResponse({"data": [serialize_variant(v) for v in variants]})
