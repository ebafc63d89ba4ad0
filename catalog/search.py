"""
Variant search for admin pickers (subscriptions, order editing).

    ScopeVariantsForSearch({"q": "apple", "distributor_id": 7}).search()

Only one scope applies: schedule, else order cycle, else distributor.
"""

from django.db.models import Q
from django.db.models.functions import Lower

from order_cycles.models import OrderCycle

from .models import Variant


class ScopeVariantsForSearch:
    def __init__(self, params):
        self.params = params

    def search(self):
        variants = Variant.objects.select_related("product")

        q = (self.params.get("q") or "").strip()
        if q:
            variants = variants.filter(Q(product__name__icontains=q) | Q(sku__icontains=q))

        variants = self._scope(variants)
        return variants.order_by(Lower("product__name"), Lower("display_name"), "id")

    def _scope(self, variants):
        schedule_id = self.params.get("schedule_id")
        if schedule_id:
            return variants.in_order_cycles(OrderCycle.objects.filter(schedules__id=schedule_id))

        order_cycle_id = self.params.get("order_cycle_id")
        if order_cycle_id:
            return variants.in_order_cycles(OrderCycle.objects.filter(pk=order_cycle_id))

        distributor_id = self.params.get("distributor_id")
        if distributor_id:
            return variants.in_distributor(distributor_id)

        return variants
