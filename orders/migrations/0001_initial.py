import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

import orders.models

STATE_CHOICES = [
    ("cart", "Cart"),
    ("address", "Address"),
    ("delivery", "Delivery"),
    ("payment", "Payment"),
    ("confirmation", "Confirmation"),
    ("complete", "Complete"),
    ("resumed", "Resumed"),
    ("canceled", "Canceled"),
    ("awaiting_return", "Awaiting return"),
    ("returned", "Returned"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("customers", "0001_initial"),
        ("enterprises", "0001_initial"),
        ("order_cycles", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "number",
                    models.CharField(
                        default=orders.models.generate_order_number, editable=False, max_length=32, unique=True
                    ),
                ),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("total", models.DecimalField(decimal_places=2, default=0, max_digits=10, verbose_name="total")),
                (
                    "payment_total",
                    models.DecimalField(decimal_places=2, default=0, max_digits=10, verbose_name="paid"),
                ),
                (
                    "state",
                    models.CharField(
                        choices=STATE_CHOICES, db_index=True, default="cart", max_length=20, verbose_name="state"
                    ),
                ),
                (
                    "payment_state",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("balance_due", "Balance due"),
                            ("paid", "Paid"),
                            ("credit_owed", "Credit owed"),
                        ],
                        max_length=15,
                        verbose_name="payment state",
                    ),
                ),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "customer",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="orders",
                        to="customers.customer",
                        verbose_name="customer",
                    ),
                ),
                (
                    "distributor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="distributed_orders",
                        to="enterprises.enterprise",
                        verbose_name="distributor",
                    ),
                ),
                (
                    "order_cycle",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to="order_cycles.ordercycle",
                        verbose_name="order cycle",
                    ),
                ),
            ],
            options={
                "verbose_name": "order",
                "verbose_name_plural": "orders",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["customer", "state"], name="order_customer_state_idx")],
            },
        ),
        migrations.CreateModel(
            name="OrderStateChange",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("from_state", models.CharField(choices=STATE_CHOICES, max_length=20)),
                ("to_state", models.CharField(choices=STATE_CHOICES, max_length=20)),
                ("note", models.TextField(blank=True)),
                ("changed_at", models.DateTimeField(auto_now_add=True)),
                (
                    "changed_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="changed by",
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="state_changes",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "verbose_name": "state change",
                "verbose_name_plural": "state changes",
                "ordering": ["-changed_at", "-id"],
            },
        ),
    ]
