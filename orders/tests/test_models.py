"""Tests for Order model: state transitions and payment totals."""

from decimal import Decimal

import pytest

from orders.models import Order, OrderState, PaymentState


@pytest.fixture
def order(make_order, customer):
    return make_order(customer, total="100.00", state=OrderState.CART)


def checkout(order, user=None):
    for state in (OrderState.ADDRESS, OrderState.DELIVERY, OrderState.PAYMENT, OrderState.COMPLETE):
        order.transition_to(state, changed_by=user)


@pytest.mark.django_db
class TestOrderStateTransitions:
    def test_valid_transition_cart_to_address(self, order, manager_user):
        order.transition_to(OrderState.ADDRESS, changed_by=manager_user)
        assert order.state == OrderState.ADDRESS

    def test_valid_transition_records_history(self, order, manager_user):
        order.transition_to(OrderState.ADDRESS, changed_by=manager_user, note="Checkout started")
        change = order.state_changes.first()
        assert change.from_state == OrderState.CART
        assert change.to_state == OrderState.ADDRESS
        assert change.note == "Checkout started"
        assert change.changed_by == manager_user

    def test_invalid_transition_raises_value_error(self, order):
        with pytest.raises(ValueError, match="Cannot transition"):
            order.transition_to(OrderState.COMPLETE)
        order.refresh_from_db()
        assert order.state == OrderState.CART
        assert not order.state_changes.exists()

    def test_completing_stamps_completed_at(self, order):
        checkout(order)
        order.refresh_from_db()
        assert order.state == OrderState.COMPLETE
        assert order.completed_at is not None

    def test_cancel_and_resume(self, order):
        checkout(order)
        completed_at = Order.objects.get(pk=order.pk).completed_at

        order.transition_to(OrderState.CANCELED)
        order.transition_to(OrderState.RESUMED)
        assert order.state == OrderState.RESUMED
        assert order.completed_at == completed_at
        assert order.state_changes.count() == 6

    def test_returned_is_terminal(self, order):
        checkout(order)
        order.transition_to(OrderState.AWAITING_RETURN)
        order.transition_to(OrderState.RETURNED)
        with pytest.raises(ValueError):
            order.transition_to(OrderState.COMPLETE)

    def test_number_is_generated(self, make_order):
        first, second = make_order(), make_order()
        assert first.number.startswith("R")
        assert first.number != second.number


@pytest.mark.django_db
class TestOrderPayments:
    def test_balance_due_calculation(self, order):
        assert order.balance_due == Decimal("100.00")

    def test_update_payment_total_without_payments(self, order):
        order.update_payment_total()
        assert order.payment_total == 0
        assert order.payment_state == PaymentState.BALANCE_DUE

    def test_balance_due_after_payment(self, order, manager_user):
        from payments.models import Payment, PaymentMethod

        Payment.objects.create(order=order, amount=Decimal("40.00"), method=PaymentMethod.CASH, received_by=manager_user)
        order.refresh_from_db()
        assert order.payment_total == Decimal("40.00")
        assert order.balance_due == Decimal("60.00")
        assert order.payment_state == PaymentState.BALANCE_DUE
