"""
Order models.

An order moves through the checkout workflow (cart -> complete) and then,
possibly, through cancellation or return. Every transition is recorded in
OrderStateChange. ``payment_total`` is maintained from the order's
completed payments; customer balances are aggregated from it.
"""

import secrets

from django.conf import settings
from django.db import models
from django.utils import timezone


class OrderState(models.TextChoices):
    # Checkout
    CART = "cart", "Cart"
    ADDRESS = "address", "Address"
    DELIVERY = "delivery", "Delivery"
    PAYMENT = "payment", "Payment"
    CONFIRMATION = "confirmation", "Confirmation"
    # Placed
    COMPLETE = "complete", "Complete"
    RESUMED = "resumed", "Resumed"
    # After the fact
    CANCELED = "canceled", "Canceled"
    AWAITING_RETURN = "awaiting_return", "Awaiting return"
    RETURNED = "returned", "Returned"


# Valid state transitions, enforced in transition_to()
ALLOWED_TRANSITIONS = {
    OrderState.CART: {OrderState.ADDRESS},
    OrderState.ADDRESS: {OrderState.DELIVERY, OrderState.CART},
    OrderState.DELIVERY: {OrderState.PAYMENT, OrderState.ADDRESS},
    OrderState.PAYMENT: {OrderState.CONFIRMATION, OrderState.COMPLETE, OrderState.DELIVERY},
    OrderState.CONFIRMATION: {OrderState.COMPLETE},
    OrderState.COMPLETE: {OrderState.CANCELED, OrderState.AWAITING_RETURN},
    OrderState.CANCELED: {OrderState.RESUMED},
    OrderState.RESUMED: {OrderState.CANCELED, OrderState.AWAITING_RETURN},
    OrderState.AWAITING_RETURN: {OrderState.RETURNED, OrderState.COMPLETE},
    OrderState.RETURNED: set(),
}


class PaymentState(models.TextChoices):
    BALANCE_DUE = "balance_due", "Balance due"
    PAID = "paid", "Paid"
    CREDIT_OWED = "credit_owed", "Credit owed"


def generate_order_number():
    return "R" + "".join(secrets.choice("0123456789") for _ in range(9))


class Order(models.Model):
    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
        verbose_name="customer",
    )
    distributor = models.ForeignKey(
        "enterprises.Enterprise",
        on_delete=models.PROTECT,
        related_name="distributed_orders",
        verbose_name="distributor",
    )
    order_cycle = models.ForeignKey(
        "order_cycles.OrderCycle",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="orders",
        verbose_name="order cycle",
    )
    number = models.CharField(max_length=32, unique=True, default=generate_order_number, editable=False)
    email = models.EmailField(blank=True)

    total = models.DecimalField(max_digits=10, decimal_places=2, default=0, verbose_name="total")
    payment_total = models.DecimalField(max_digits=10, decimal_places=2, default=0, verbose_name="paid")

    state = models.CharField(
        max_length=20,
        choices=OrderState.choices,
        default=OrderState.CART,
        db_index=True,
        verbose_name="state",
    )
    payment_state = models.CharField(
        max_length=15,
        choices=PaymentState.choices,
        blank=True,
        verbose_name="payment state",
    )

    completed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "order"
        verbose_name_plural = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["customer", "state"], name="order_customer_state_idx"),
        ]

    def __str__(self):
        return self.number

    @property
    def balance_due(self):
        return self.total - self.payment_total

    def transition_to(self, new_state, changed_by=None, note=""):
        """
        Move the order to new_state, enforcing allowed transitions.

        Stamps completed_at the first time an order is completed.
        """
        allowed = ALLOWED_TRANSITIONS.get(self.state, set())
        if new_state not in allowed:
            raise ValueError(
                f"Cannot transition from '{self.state}' to '{new_state}'. "
                f"Allowed: {sorted(allowed)}"
            )
        old_state = self.state
        self.state = new_state
        update_fields = ["state", "updated_at"]
        if new_state == OrderState.COMPLETE and self.completed_at is None:
            self.completed_at = timezone.now()
            update_fields.append("completed_at")
        self.save(update_fields=update_fields)

        OrderStateChange.objects.create(
            order=self,
            from_state=old_state,
            to_state=new_state,
            changed_by=changed_by,
            note=note,
        )

    def update_payment_total(self):
        """Recompute payment_total and payment_state from completed payments."""
        from payments.models import PaymentStatus

        paid = self.payments.filter(state=PaymentStatus.COMPLETED).aggregate(total=models.Sum("amount"))["total"]
        self.payment_total = paid or 0

        balance = self.total - self.payment_total
        if balance > 0:
            self.payment_state = PaymentState.BALANCE_DUE
        elif balance < 0:
            self.payment_state = PaymentState.CREDIT_OWED
        else:
            self.payment_state = PaymentState.PAID
        self.save(update_fields=["payment_total", "payment_state", "updated_at"])


class OrderStateChange(models.Model):
    """Audit log of every state change on an order."""

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="state_changes")
    from_state = models.CharField(max_length=20, choices=OrderState.choices)
    to_state = models.CharField(max_length=20, choices=OrderState.choices)
    changed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        verbose_name="changed by",
    )
    note = models.TextField(blank=True)
    changed_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "state change"
        verbose_name_plural = "state changes"
        ordering = ["-changed_at", "-id"]

    def __str__(self):
        return f"{self.order}: {self.from_state} -> {self.to_state}"
