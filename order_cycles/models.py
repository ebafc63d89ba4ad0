"""
Order cycle models.

An order cycle is a window during which a coordinator collects produce
from suppliers (incoming exchanges) and sends it on to distributors
(outgoing exchanges). Schedules group recurring order cycles for
subscriptions.
"""

from django.db import models
from django.utils import timezone


class OrderCycle(models.Model):
    name = models.CharField(max_length=255, verbose_name="name")
    coordinator = models.ForeignKey(
        "enterprises.Enterprise",
        on_delete=models.PROTECT,
        related_name="coordinated_order_cycles",
        verbose_name="coordinator",
    )
    orders_open_at = models.DateTimeField(null=True, blank=True, verbose_name="orders open")
    orders_close_at = models.DateTimeField(null=True, blank=True, verbose_name="orders close")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "order cycle"
        verbose_name_plural = "order cycles"
        ordering = ["-orders_close_at", "-id"]

    def __str__(self):
        return self.name

    @property
    def is_open(self):
        now = timezone.now()
        return bool(
            self.orders_open_at
            and self.orders_close_at
            and self.orders_open_at <= now < self.orders_close_at
        )

    def incoming_exchanges(self):
        return self.exchanges.filter(incoming=True)

    def outgoing_exchanges(self):
        return self.exchanges.filter(incoming=False)

    def distributors(self):
        from enterprises.models import Enterprise

        return Enterprise.objects.filter(
            received_exchanges__order_cycle=self,
            received_exchanges__incoming=False,
        ).distinct()

    def suppliers(self):
        from enterprises.models import Enterprise

        return Enterprise.objects.filter(
            sent_exchanges__order_cycle=self,
            sent_exchanges__incoming=True,
        ).distinct()


class Exchange(models.Model):
    """
    Movement of variants between two enterprises within an order cycle.

    Incoming: supplier -> coordinator. Outgoing: coordinator -> distributor.
    """

    order_cycle = models.ForeignKey(OrderCycle, on_delete=models.CASCADE, related_name="exchanges")
    sender = models.ForeignKey(
        "enterprises.Enterprise",
        on_delete=models.CASCADE,
        related_name="sent_exchanges",
    )
    receiver = models.ForeignKey(
        "enterprises.Enterprise",
        on_delete=models.CASCADE,
        related_name="received_exchanges",
    )
    incoming = models.BooleanField(default=False)
    variants = models.ManyToManyField("catalog.Variant", blank=True, related_name="exchanges")
    pickup_instructions = models.CharField(max_length=255, blank=True)

    class Meta:
        verbose_name = "exchange"
        verbose_name_plural = "exchanges"
        constraints = [
            models.UniqueConstraint(
                fields=["order_cycle", "sender", "receiver", "incoming"],
                name="unique_exchange_per_order_cycle",
            ),
        ]

    def __str__(self):
        direction = "incoming" if self.incoming else "outgoing"
        return f"{self.order_cycle}: {self.sender} -> {self.receiver} ({direction})"


class Schedule(models.Model):
    name = models.CharField(max_length=255, verbose_name="name")
    order_cycles = models.ManyToManyField(OrderCycle, related_name="schedules", blank=True)

    class Meta:
        verbose_name = "schedule"
        verbose_name_plural = "schedules"
        ordering = ["name"]

    def __str__(self):
        return self.name
