"""
Payment models.

An order can have several payments (e.g. a deposit at the shop, then the
rest by bank transfer). Only completed payments count towards the order's
payment_total, which is recomputed whenever a payment is saved or removed.
"""

from django.conf import settings
from django.db import models


class PaymentMethod(models.TextChoices):
    CASH = "cash", "Cash"
    BANK_TRANSFER = "bank_transfer", "Bank transfer"
    CREDIT_CARD = "credit_card", "Credit card"
    CHEQUE = "cheque", "Cheque"
    STORE_CREDIT = "store_credit", "Store credit"


class PaymentStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    COMPLETED = "completed", "Completed"
    FAILED = "failed", "Failed"
    VOID = "void", "Void"


class Payment(models.Model):
    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="payments",
        verbose_name="order",
    )
    amount = models.DecimalField(max_digits=10, decimal_places=2, verbose_name="amount")
    method = models.CharField(max_length=15, choices=PaymentMethod.choices, verbose_name="method")
    state = models.CharField(
        max_length=10,
        choices=PaymentStatus.choices,
        default=PaymentStatus.COMPLETED,
        verbose_name="state",
    )
    reference_number = models.CharField(
        max_length=50,
        blank=True,
        verbose_name="reference",
        help_text="Transfer slip or card transaction number",
    )
    received_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        verbose_name="received by",
    )
    received_at = models.DateTimeField(auto_now_add=True, verbose_name="received")
    notes = models.CharField(max_length=255, blank=True, verbose_name="notes")

    class Meta:
        verbose_name = "payment"
        verbose_name_plural = "payments"
        ordering = ["-received_at"]

    def __str__(self):
        return f"{self.amount:,.2f} ({self.get_method_display()}) for order {self.order}"

    def save(self, *args, **kwargs):
        super().save(*args, **kwargs)
        self.order.update_payment_total()

    def delete(self, *args, **kwargs):
        order = self.order
        result = super().delete(*args, **kwargs)
        order.update_payment_total()
        return result
