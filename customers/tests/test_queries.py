"""Tests for CustomersWithBalance."""

from decimal import Decimal

import pytest

from customers.models import Customer
from customers.queries import CustomersWithBalance, InvalidArgument, SelectionPolicy
from orders.models import OrderState


def balances(queryset):
    return {customer.pk: customer.balance_value for customer in queryset}


@pytest.mark.django_db
class TestCustomersWithBalance:
    def test_customer_without_orders_has_zero_balance(self, customer):
        result = CustomersWithBalance(enterprise=customer.enterprise).query()
        assert balances(result) == {customer.pk: Decimal("0")}

    def test_two_complete_unpaid_orders(self, customer, make_order):
        make_order(customer, total="100.00")
        make_order(customer, total="100.00")

        result = CustomersWithBalance(customers=[customer.pk]).query()
        assert result.get().balance_value == Decimal("-200.00")

    def test_canceled_order_is_excluded(self, customer, make_order):
        make_order(customer, total="100.00")
        make_order(customer, total="100.00", payment_total="100.00", state=OrderState.CANCELED)

        assert CustomersWithBalance(customers=customer).query().get().balance_value == Decimal("-100.00")

    @pytest.mark.parametrize(
        "state",
        [OrderState.COMPLETE, OrderState.RESUMED, OrderState.PAYMENT, OrderState.AWAITING_RETURN, OrderState.RETURNED],
    )
    def test_finalized_states_count(self, customer, make_order, state):
        make_order(customer, total="50.00", payment_total="20.00", state=state)
        assert customer.balance == Decimal("-30.00")

    @pytest.mark.parametrize(
        "state",
        [OrderState.CART, OrderState.ADDRESS, OrderState.DELIVERY, OrderState.CANCELED, OrderState.CONFIRMATION],
    )
    def test_other_states_never_count(self, customer, make_order, state):
        make_order(customer, total="50.00", payment_total="20.00", state=state)
        assert customer.balance == Decimal("0")

    def test_overpaid_orders_give_positive_balance(self, customer, make_order):
        make_order(customer, total="40.00", payment_total="50.00")
        assert customer.balance == Decimal("10.00")

    def test_orders_without_customer_are_ignored(self, customer, make_order):
        make_order(None, total="500.00")
        make_order(customer, total="10.00")

        assert balances(CustomersWithBalance(enterprise=customer.enterprise).query()) == {
            customer.pk: Decimal("-10.00")
        }

    def test_one_row_per_customer(self, enterprise, customer, make_order):
        other = Customer.objects.create(enterprise=enterprise, email="alan@example.com")
        make_order(customer, total="10.00")
        make_order(customer, total="15.00")
        make_order(other, total="7.50", payment_total="7.50")

        result = CustomersWithBalance(enterprise=enterprise).query()
        assert balances(result) == {customer.pk: Decimal("-25.00"), other.pk: Decimal("0.00")}

    def test_enterprise_scope_excludes_other_enterprises(self, customer, other_enterprise):
        outsider = Customer.objects.create(enterprise=other_enterprise, email="outsider@example.com")

        result = CustomersWithBalance(enterprise=customer.enterprise).query()
        assert outsider.pk not in balances(result)

    def test_enterprise_can_be_given_by_id(self, customer):
        result = CustomersWithBalance(enterprise=customer.enterprise_id).query()
        assert list(result.values_list("pk", flat=True)) == [customer.pk]

    def test_missing_arguments_raise(self):
        with pytest.raises(InvalidArgument):
            CustomersWithBalance()

    def test_empty_customer_list_returns_nothing(self, customer):
        assert list(CustomersWithBalance(customers=[]).query()) == []

    def test_accepts_a_queryset_of_customers(self, customer, make_order):
        make_order(customer, total="12.00")
        result = CustomersWithBalance(customers=Customer.objects.filter(email=customer.email)).query()
        assert balances(result) == {customer.pk: Decimal("-12.00")}

    def test_custom_finalized_states(self, customer, make_order):
        make_order(customer, total="10.00", state=OrderState.CART)
        make_order(customer, total="20.00", state=OrderState.COMPLETE)

        result = CustomersWithBalance(customers=[customer.pk], finalized_states=["cart"]).query()
        assert result.get().balance_value == Decimal("-10.00")

    def test_no_finalized_states_gives_zero(self, customer, make_order):
        make_order(customer, total="10.00")
        result = CustomersWithBalance(customers=[customer.pk], finalized_states=[]).query()
        assert result.get().balance_value == Decimal("0")

    def test_finalized_states_come_from_settings(self, settings, customer, make_order):
        settings.ORDER_FINALIZED_STATES = ["delivery"]
        make_order(customer, total="10.00", state=OrderState.DELIVERY)
        make_order(customer, total="20.00", state=OrderState.COMPLETE)

        assert CustomersWithBalance(customers=customer).query().get().balance_value == Decimal("-10.00")

    def test_balance_time_only_when_asked(self, customer):
        without = CustomersWithBalance(customers=[customer.pk]).query().get()
        assert not hasattr(without, "balance_time")

        with_time = CustomersWithBalance(customers=[customer.pk], with_time=True).query().get()
        assert with_time.balance_time is not None


@pytest.mark.django_db
class TestSelectionPolicy:
    @pytest.fixture
    def outsider(self, other_enterprise):
        return Customer.objects.create(enterprise=other_enterprise, email="outsider@example.com")

    def test_intersect_restricts_enterprise_customers(self, enterprise, customer, outsider):
        second = Customer.objects.create(enterprise=enterprise, email="second@example.com")

        result = CustomersWithBalance(enterprise=enterprise, customers=[customer.pk, outsider.pk]).query()
        assert set(balances(result)) == {customer.pk}
        assert second.pk not in balances(result)

    def test_override_uses_ids_only(self, enterprise, customer, outsider):
        result = CustomersWithBalance(
            enterprise=enterprise,
            customers=[customer.pk, outsider.pk],
            selection=SelectionPolicy.OVERRIDE,
        ).query()
        assert set(balances(result)) == {customer.pk, outsider.pk}

    def test_override_without_ids_falls_back_to_enterprise(self, enterprise, customer, outsider):
        result = CustomersWithBalance(enterprise=enterprise, selection="override").query()
        assert set(balances(result)) == {customer.pk}

    def test_ids_only_include_customers_without_orders(self, customer, outsider):
        result = CustomersWithBalance(customers=[customer.pk, outsider.pk]).query()
        assert balances(result) == {customer.pk: Decimal("0"), outsider.pk: Decimal("0")}
