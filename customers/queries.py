"""
Customer balance aggregation.

Adds an aggregated ``balance_value`` to each customer based on their order
history: payments received minus order totals, summed over orders in a
finalized state. Negative means the customer owes money.

    CustomersWithBalance(enterprise=shop).query()
    CustomersWithBalance(customers=[4, 8]).query()
    CustomersWithBalance(enterprise=shop, customers=ids, with_time=True).query()
"""

import enum
import logging
from decimal import Decimal

from django.conf import settings
from django.db.models import DateTimeField, DecimalField, F, Q, QuerySet, Sum, Value
from django.db.models.functions import Coalesce
from django.utils import timezone

from .models import Customer

logger = logging.getLogger(__name__)

BALANCE_FIELD = DecimalField(max_digits=12, decimal_places=2)


class InvalidArgument(ValueError):
    """The aggregator was given nothing to select customers by."""


class SelectionPolicy(enum.Enum):
    # The id list further restricts the enterprise's customers
    INTERSECT = "intersect"
    # The id list, when given, replaces the enterprise filter
    OVERRIDE = "override"


class CustomersWithBalance:
    def __init__(
        self,
        enterprise=None,
        customers=None,
        finalized_states=None,
        selection=SelectionPolicy.INTERSECT,
        with_time=False,
    ):
        self.enterprise = enterprise
        self.customers = customers
        if finalized_states is None:
            finalized_states = settings.ORDER_FINALIZED_STATES
        self.finalized_states = tuple(finalized_states)
        self.selection = SelectionPolicy(selection)
        self.with_time = with_time

        self._validate_arguments()

    def query(self) -> QuerySet:
        logger.debug(
            "Building customer balances: enterprise=%r customers=%r states=%s",
            self.enterprise,
            self.customers,
            ",".join(self.finalized_states),
        )
        customers = self._filtered_customers().annotate(balance_value=self._outstanding_balance_sum())
        if self.with_time:
            customers = customers.annotate(
                balance_time=Value(timezone.now(), output_field=DateTimeField())
            )
        return customers

    def _validate_arguments(self):
        if self.enterprise is None and self.customers is None:
            raise InvalidArgument("Missing enterprise or customers argument")

    def _customer_ids(self):
        if self.customers is None:
            return None
        if isinstance(self.customers, Customer):
            return [self.customers.pk]
        if isinstance(self.customers, QuerySet):
            return self.customers.values("pk")
        return [getattr(customer, "pk", customer) for customer in self.customers]

    def _filtered_customers(self):
        ids = self._customer_ids()
        customers = Customer.objects.all()

        ids_override = ids is not None and self.selection is SelectionPolicy.OVERRIDE
        if self.enterprise is not None and not ids_override:
            customers = customers.of(self.enterprise)
        if ids is not None:
            customers = customers.filter(pk__in=ids)
        return customers

    def _outstanding_balance_sum(self):
        # An empty IN () can't be compiled inside an aggregate filter
        if not self.finalized_states:
            return Value(Decimal("0"), output_field=BALANCE_FIELD)

        # Orders outside the finalized states (and orders without a customer)
        # never reach the sum
        return Coalesce(
            Sum(
                F("orders__payment_total") - F("orders__total"),
                filter=Q(orders__state__in=self.finalized_states),
            ),
            Value(Decimal("0")),
            output_field=BALANCE_FIELD,
        )
