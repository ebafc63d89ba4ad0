"""
Order cycle exchange editing.

Exchanges are stored with sender/receiver, but editors think in terms of
the coordinator: suppliers it buys from (incoming) and distributors it
sells through (outgoing). These helpers translate between the two views.
"""

import logging

from django.db import transaction

from catalog.models import Variant
from enterprises.models import Enterprise

from .forms import OrderCycleForm
from .models import Exchange

logger = logging.getLogger(__name__)


def split_exchanges(order_cycle):
    """
    Return (incoming, outgoing) lists of {"enterprise_id", "active", "variant_ids"}.

    Exchanges that don't touch the coordinator are logged and left out.
    """
    incoming, outgoing = [], []
    coordinator_id = order_cycle.coordinator_id
    for exchange in order_cycle.exchanges.prefetch_related("variants").order_by("id"):
        variant_ids = sorted(v.pk for v in exchange.variants.all())
        if exchange.incoming and exchange.receiver_id == coordinator_id:
            incoming.append({"enterprise_id": exchange.sender_id, "active": True, "variant_ids": variant_ids})
        elif not exchange.incoming and exchange.sender_id == coordinator_id:
            outgoing.append({"enterprise_id": exchange.receiver_id, "active": True, "variant_ids": variant_ids})
        else:
            logger.warning(
                "Order cycle %s: exchange %s between %s and %s bypasses coordinator %s",
                order_cycle.pk,
                exchange.pk,
                exchange.sender_id,
                exchange.receiver_id,
                coordinator_id,
            )
    return incoming, outgoing


def active_exchanges(exchanges):
    """Drop exchanges the editor switched off. Missing "active" counts as active."""
    return [exchange for exchange in exchanges if exchange.get("active", True)]


def _as_id(value):
    """Return value as an integer id, or None when it isn't one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return None


def _clean_exchanges(payload, key, errors):
    """
    Validate one exchange list and return it with integer ids.

    Problems are reported in errors[key]; the returned list is then empty.
    """
    exchanges = payload.get(key, [])
    if not isinstance(exchanges, list) or not all(isinstance(e, dict) for e in exchanges):
        errors[key] = ["Must be a list of objects."]
        return []

    cleaned = []
    problems = []
    for exchange in active_exchanges(exchanges):
        enterprise_id = _as_id(exchange.get("enterprise_id"))
        if enterprise_id is None:
            problems.append(f"Invalid enterprise id: {exchange.get('enterprise_id')!r}")
            continue
        variant_ids = exchange.get("variant_ids", [])
        if not isinstance(variant_ids, list) or any(_as_id(v) is None for v in variant_ids):
            problems.append(f"Invalid variant ids for enterprise {enterprise_id}: {variant_ids!r}")
            continue
        cleaned.append(dict(exchange, enterprise_id=enterprise_id, variant_ids=[_as_id(v) for v in variant_ids]))

    enterprise_ids = [e["enterprise_id"] for e in cleaned]
    duplicates = sorted({i for i in enterprise_ids if enterprise_ids.count(i) > 1})
    if duplicates:
        problems.append(f"Duplicate enterprise: {', '.join(map(str, duplicates))}")
    if problems:
        errors[key] = problems
        return []

    missing = set(enterprise_ids) - set(
        Enterprise.objects.filter(pk__in=enterprise_ids).values_list("pk", flat=True)
    )
    if missing:
        errors[key] = [f"Unknown enterprise: {', '.join(map(str, sorted(missing)))}"]
        return []

    variant_ids = {vid for e in cleaned for vid in e["variant_ids"]}
    unknown = variant_ids - set(Variant.objects.filter(pk__in=variant_ids).values_list("pk", flat=True))
    if unknown:
        errors[key] = [f"Unknown variant: {', '.join(map(str, sorted(unknown)))}"]
        return []
    return cleaned


def save_order_cycle(payload, order_cycle=None):
    """
    Create or update an order cycle and replace its exchanges.

    Returns (order_cycle, errors); errors maps field -> messages.
    """
    data = {}
    if order_cycle is not None:
        data = {
            "name": order_cycle.name,
            "coordinator": order_cycle.coordinator_id,
            "orders_open_at": order_cycle.orders_open_at,
            "orders_close_at": order_cycle.orders_close_at,
        }
    data.update({k: payload[k] for k in ("name", "orders_open_at", "orders_close_at") if k in payload})
    if "coordinator_id" in payload:
        data["coordinator"] = payload["coordinator_id"]

    form = OrderCycleForm(data=data, instance=order_cycle)
    errors = {}
    if not form.is_valid():
        errors.update(form.errors)

    replace_exchanges = "incoming_exchanges" in payload or "outgoing_exchanges" in payload
    incoming = _clean_exchanges(payload, "incoming_exchanges", errors)
    outgoing = _clean_exchanges(payload, "outgoing_exchanges", errors)

    if errors:
        return order_cycle, errors

    with transaction.atomic():
        order_cycle = form.save()
        if replace_exchanges:
            order_cycle.exchanges.all().delete()
            coordinator_id = order_cycle.coordinator_id
            for exchange in incoming:
                _create_exchange(order_cycle, exchange["enterprise_id"], coordinator_id, True, exchange)
            for exchange in outgoing:
                _create_exchange(order_cycle, coordinator_id, exchange["enterprise_id"], False, exchange)

    logger.info(
        "Order cycle %s saved with %d incoming and %d outgoing exchanges",
        order_cycle.pk,
        len(incoming),
        len(outgoing),
    )
    return order_cycle, {}


def _create_exchange(order_cycle, sender_id, receiver_id, incoming, payload):
    exchange = Exchange.objects.create(
        order_cycle=order_cycle,
        sender_id=sender_id,
        receiver_id=receiver_id,
        incoming=incoming,
        pickup_instructions=payload.get("pickup_instructions", ""),
    )
    exchange.variants.set(payload.get("variant_ids", []))
    return exchange
