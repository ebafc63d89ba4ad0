"""JSON:API representation of customers."""

from django.urls import reverse

from .addresses import serialize_address


def serialize_customer(customer, display_balance=False):
    attributes = {
        "id": customer.pk,
        "enterprise_id": customer.enterprise_id,
        "first_name": customer.first_name,
        "last_name": customer.last_name,
        "code": customer.code,
        "email": customer.email,
        "tags": customer.tags,
        "billing_address": serialize_address(customer.bill_address),
        "shipping_address": serialize_address(customer.ship_address),
    }
    if display_balance:
        attributes["balance"] = float(customer.balance)
        balance_time = getattr(customer, "balance_time", None)
        if balance_time is not None:
            attributes["balance_time"] = balance_time.isoformat()

    return {
        "id": str(customer.pk),
        "type": "customer",
        "attributes": attributes,
        "relationships": {
            "enterprise": {"data": {"id": str(customer.enterprise_id), "type": "enterprise"}},
        },
        "links": {"self": reverse("customers:detail", kwargs={"pk": customer.pk})},
    }
