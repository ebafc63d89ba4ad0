import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("enterprises", "0001_initial"),
        ("catalog", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="OrderCycle",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255, verbose_name="name")),
                ("orders_open_at", models.DateTimeField(blank=True, null=True, verbose_name="orders open")),
                ("orders_close_at", models.DateTimeField(blank=True, null=True, verbose_name="orders close")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "coordinator",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="coordinated_order_cycles",
                        to="enterprises.enterprise",
                        verbose_name="coordinator",
                    ),
                ),
            ],
            options={
                "verbose_name": "order cycle",
                "verbose_name_plural": "order cycles",
                "ordering": ["-orders_close_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="Exchange",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("incoming", models.BooleanField(default=False)),
                ("pickup_instructions", models.CharField(blank=True, max_length=255)),
                (
                    "order_cycle",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="exchanges",
                        to="order_cycles.ordercycle",
                    ),
                ),
                (
                    "sender",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sent_exchanges",
                        to="enterprises.enterprise",
                    ),
                ),
                (
                    "receiver",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="received_exchanges",
                        to="enterprises.enterprise",
                    ),
                ),
                (
                    "variants",
                    models.ManyToManyField(blank=True, related_name="exchanges", to="catalog.variant"),
                ),
            ],
            options={
                "verbose_name": "exchange",
                "verbose_name_plural": "exchanges",
                "constraints": [
                    models.UniqueConstraint(
                        fields=("order_cycle", "sender", "receiver", "incoming"),
                        name="unique_exchange_per_order_cycle",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Schedule",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255, verbose_name="name")),
                (
                    "order_cycles",
                    models.ManyToManyField(blank=True, related_name="schedules", to="order_cycles.ordercycle"),
                ),
            ],
            options={
                "verbose_name": "schedule",
                "verbose_name_plural": "schedules",
                "ordering": ["name"],
            },
        ),
    ]
