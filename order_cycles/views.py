"""Order cycle editor endpoints."""

import logging

from django.http import JsonResponse
from django.shortcuts import get_object_or_404

from accounts.mixins import role_required
from accounts.models import Role
from api.decorators import api_view
from api.params import int_param, json_body

from .models import OrderCycle
from .services import save_order_cycle, split_exchanges

logger = logging.getLogger(__name__)


def serialize_order_cycle(order_cycle):
    incoming, outgoing = split_exchanges(order_cycle)
    return {
        "id": order_cycle.pk,
        "name": order_cycle.name,
        "coordinator_id": order_cycle.coordinator_id,
        "orders_open_at": order_cycle.orders_open_at.isoformat() if order_cycle.orders_open_at else None,
        "orders_close_at": order_cycle.orders_close_at.isoformat() if order_cycle.orders_close_at else None,
        "is_open": order_cycle.is_open,
        "incoming_exchanges": incoming,
        "outgoing_exchanges": outgoing,
    }


def _result(order_cycle, errors, status=200):
    if errors:
        return JsonResponse({"success": False, "errors": errors}, status=422)
    return JsonResponse({"success": True, "order_cycle": serialize_order_cycle(order_cycle)}, status=status)


@api_view("GET", "POST")
def order_cycle_list(request):
    if request.method == "POST":
        return order_cycle_create(request)
    return order_cycle_index(request)


@api_view("GET", "PUT", "PATCH")
def order_cycle_detail(request, pk):
    if request.method == "GET":
        return order_cycle_show(request, pk)
    return order_cycle_update(request, pk)


@role_required()
def order_cycle_index(request):
    order_cycles = OrderCycle.objects.select_related("coordinator")
    coordinator_id = int_param(request, "coordinator_id")
    if coordinator_id is not None:
        order_cycles = order_cycles.filter(coordinator_id=coordinator_id)
    return JsonResponse({"order_cycles": [serialize_order_cycle(oc) for oc in order_cycles]})


@role_required()
def order_cycle_show(request, pk):
    order_cycle = get_object_or_404(OrderCycle, pk=pk)
    return JsonResponse({"order_cycle": serialize_order_cycle(order_cycle)})


@role_required(Role.MANAGER)
def order_cycle_create(request):
    payload = json_body(request, wrapper_key="order_cycle")
    order_cycle, errors = save_order_cycle(payload)
    return _result(order_cycle, errors, status=201)


@role_required(Role.MANAGER)
def order_cycle_update(request, pk):
    order_cycle = get_object_or_404(OrderCycle, pk=pk)
    payload = json_body(request, wrapper_key="order_cycle")
    order_cycle, errors = save_order_cycle(payload, order_cycle=order_cycle)
    return _result(order_cycle, errors)
