"""Customers JSON API: list, show, create, update, destroy."""

import logging

from django.db import transaction
from django.db.models import Q
from django.forms import ValidationError
from django.http import JsonResponse
from django.shortcuts import get_object_or_404

from accounts.mixins import role_required
from accounts.models import Role
from api.decorators import api_view
from api.errors import invalid_resource
from api.json_schema import WithExtension
from api.pagination import paginate
from api.params import boolean_param, int_param, json_body

from .addresses import build_address
from .forms import CustomerForm
from .models import Customer
from .queries import CustomersWithBalance
from .schemas import CustomerSchema
from .serializers import serialize_customer

logger = logging.getLogger(__name__)

# API payload key -> Customer address field
ADDRESS_KEYS = {"billing_address": "bill_address", "shipping_address": "ship_address"}


@api_view("GET", "POST")
def customer_list(request):
    if request.method == "POST":
        return customer_create(request)
    return customer_index(request)


@api_view("GET", "PATCH", "PUT", "DELETE")
def customer_detail(request, pk):
    if request.method == "GET":
        return customer_show(request, pk)
    if request.method == "DELETE":
        return customer_destroy(request, pk)
    return customer_update(request, pk)


@role_required()
def customer_index(request):
    display_balance = bool(boolean_param(request, "display_customer_balance"))
    page, meta, links = paginate(request, search_customers(request, display_balance))
    return JsonResponse(
        {
            "data": [serialize_customer(c, display_balance=display_balance) for c in page],
            "meta": meta,
            "links": links,
        }
    )


@role_required()
def customer_show(request, pk):
    # Balance is always shown for a single customer
    visible = Customer.objects.visible_to(request.user).filter(pk=pk)
    customer = get_object_or_404(
        CustomersWithBalance(customers=visible, with_time=True)
        .query()
        .select_related("bill_address", "ship_address")
    )
    return JsonResponse({"data": serialize_customer(customer, display_balance=True)})


@role_required(Role.MANAGER)
def customer_create(request):
    payload = json_body(request, wrapper_key="customer")
    customer, errors = save_customer(Customer(), payload, user=request.user)
    if errors:
        return invalid_resource(errors)
    logger.info("Customer %s created for enterprise %s", customer.pk, customer.enterprise_id)
    return JsonResponse({"data": serialize_customer(customer)}, status=201)


@role_required(Role.MANAGER)
def customer_update(request, pk):
    customer = get_object_or_404(Customer.objects.visible_to(request.user), pk=pk)
    payload = json_body(request, wrapper_key="customer")
    customer, errors = save_customer(customer, payload, user=request.user)
    if errors:
        return invalid_resource(errors)
    return JsonResponse({"data": serialize_customer(customer)})


@role_required(Role.MANAGER)
def customer_destroy(request, pk):
    customer = get_object_or_404(
        Customer.objects.visible_to(request.user).select_related("bill_address", "ship_address"), pk=pk
    )
    data = serialize_customer(customer)
    customer.delete()
    logger.info("Customer %s deleted", pk)
    return JsonResponse({"data": data})


@api_view("GET")
def customer_schema(request):
    """Describe customer responses, for API documentation tooling."""
    return JsonResponse(
        {
            "customer": CustomerSchema.schema(
                with_=WithExtension("balance", required=True, options={"include_time": True})
            ),
            "customers": CustomerSchema.collection(with_=WithExtension("balance")),
        }
    )


def search_customers(request, display_balance=False):
    customers = Customer.objects.visible_to(request.user)

    enterprise_id = int_param(request, "enterprise_id")
    if enterprise_id is not None:
        customers = customers.of(enterprise_id)

    q = request.GET.get("q", "").strip()
    if q:
        customers = customers.filter(
            Q(email__icontains=q)
            | Q(first_name__icontains=q)
            | Q(last_name__icontains=q)
            | Q(code__icontains=q)
        )

    if display_balance:
        customers = CustomersWithBalance(customers=customers).query()

    return customers.select_related("bill_address", "ship_address").order_by("id")


def save_customer(customer, payload, user=None):
    """
    Validate and save a customer with its addresses.

    Absent keys leave the current values alone, so the same path serves
    create, PUT and PATCH. With a user, the enterprise must be one they
    manage. Returns (customer, errors).
    """
    data = {
        field: getattr(customer, field)
        for field in ("email", "code", "first_name", "last_name")
    }
    data["enterprise"] = customer.enterprise_id
    data.update({k: payload[k] for k in ("email", "code", "first_name", "last_name") if k in payload})
    if "enterprise_id" in payload:
        data["enterprise"] = payload["enterprise_id"]

    form = CustomerForm(data=data, instance=customer, user=user)
    errors = {}
    if not form.is_valid():
        errors.update(form.errors)

    tags = payload.get("tags", customer.tags)
    if not isinstance(tags, list):
        errors["tags"] = ["Tags must be a list of strings."]

    address_forms = {}
    for key, field in ADDRESS_KEYS.items():
        if key not in payload or payload[key] is None:
            continue
        try:
            address_form = build_address(payload[key], instance=getattr(customer, field))
        except ValidationError as exc:
            errors[key] = exc.messages
            continue
        if address_form.is_valid():
            address_forms[field] = address_form
        else:
            errors[key] = [f"{name}: {', '.join(messages)}" for name, messages in address_form.errors.items()]

    if errors:
        return customer, errors

    with transaction.atomic():
        customer = form.save(commit=False)
        customer.tags = [str(tag) for tag in tags]
        for key, field in ADDRESS_KEYS.items():
            if key in payload and payload[key] is None:
                setattr(customer, field, None)
        for field, address_form in address_forms.items():
            setattr(customer, field, address_form.save())
        customer.save()
    return customer, {}
