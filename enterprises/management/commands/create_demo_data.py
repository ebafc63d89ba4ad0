"""
Management command: create_demo_data

Seeds the database with a small marketplace (a producer, a hub, a shop,
their catalogue, an open order cycle and a few customers with orders) so
the admin and the API have something to show.

Usage:
    python manage.py create_demo_data          # add demo data
    python manage.py create_demo_data --reset  # wipe demo enterprises first, then add
"""

from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

User = get_user_model()

DEMO_PREFIX = "demo-"


class Command(BaseCommand):
    help = "Seed database with demo enterprises, products, an order cycle, customers and orders"

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete existing demo enterprises and everything hanging off them before seeding",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["reset"]:
            self._reset()

        users = self._get_or_create_users()
        enterprises = self._create_enterprises(users["manager"])
        variants = self._create_catalog(enterprises["farm"])
        order_cycle = self._create_order_cycle(enterprises, variants)
        customers = self._create_customers(enterprises["shop"])
        self._create_orders(customers, enterprises["shop"], order_cycle, users["manager"])
        self.stdout.write(self.style.SUCCESS("Demo data created successfully."))

    # -------------------------------------------------------------------------

    def _reset(self):
        from enterprises.models import Enterprise
        from order_cycles.models import OrderCycle
        from orders.models import Order

        demo = Enterprise.objects.filter(permalink__startswith=DEMO_PREFIX)
        Order.objects.filter(distributor__in=demo).delete()
        OrderCycle.objects.filter(coordinator__in=demo).delete()
        for enterprise in demo:
            enterprise.supplied_products.all().delete()
        demo.delete()
        self.stdout.write("  Reset: cleared demo enterprises, order cycles and orders.")

    def _get_or_create_users(self):
        from accounts.models import Role

        users = {}
        specs = [
            ("manager", "Mara", "Manager", Role.MANAGER),
            ("shopper", "Sam", "Shopper", Role.SHOPPER),
        ]
        for key, first, last, role in specs:
            user, created = User.objects.get_or_create(
                username=f"{DEMO_PREFIX}{key}",
                defaults=dict(first_name=first, last_name=last, role=role),
            )
            if created:
                user.set_password("demo1234")
                user.save()
                self.stdout.write(f"  Created user: {user.username}")
            users[key] = user
        return users

    def _create_enterprises(self, owner):
        from enterprises.models import Enterprise, Sells

        specs = {
            "farm": ("Green Valley Farm", Sells.OWN, True),
            "hub": ("Riverside Food Hub", Sells.ANY, False),
            "shop": ("Corner Grocer", Sells.ANY, False),
        }
        enterprises = {}
        for key, (name, sells, producer) in specs.items():
            enterprise, _ = Enterprise.objects.get_or_create(
                permalink=f"{DEMO_PREFIX}{key}",
                defaults=dict(name=name, owner=owner, sells=sells, is_primary_producer=producer),
            )
            enterprises[key] = enterprise
        self.stdout.write(f"  Enterprises: {len(enterprises)}")
        return enterprises

    def _create_catalog(self, supplier):
        from catalog.models import Product, Variant

        specs = [
            # (product, variant display name, sku, unit, price)
            ("Apples", "Braeburn", "APL-BRB-1KG", "1kg", "4.50"),
            ("Apples", "Granny Smith", "APL-GRS-1KG", "1kg", "4.20"),
            ("Carrots", "", "CRT-500G", "500g", "1.80"),
            ("Free range eggs", "Dozen", "EGG-12", "12 eggs", "6.00"),
            ("sourdough loaf", "", "BRD-SD", "800g", "5.50"),
        ]
        variants = []
        for product_name, display_name, sku, unit, price in specs:
            product, _ = Product.objects.get_or_create(supplier=supplier, name=product_name)
            variant, _ = Variant.objects.get_or_create(
                product=product,
                sku=sku,
                defaults=dict(display_name=display_name, unit_description=unit, price=Decimal(price)),
            )
            variants.append(variant)
        self.stdout.write(f"  Variants: {len(variants)}")
        return variants

    def _create_order_cycle(self, enterprises, variants):
        from order_cycles.models import Exchange, OrderCycle, Schedule

        now = timezone.now()
        order_cycle, created = OrderCycle.objects.get_or_create(
            name="Weekly box",
            coordinator=enterprises["hub"],
            defaults=dict(orders_open_at=now - timedelta(days=2), orders_close_at=now + timedelta(days=5)),
        )
        if created:
            incoming = Exchange.objects.create(
                order_cycle=order_cycle, sender=enterprises["farm"], receiver=enterprises["hub"], incoming=True
            )
            incoming.variants.set(variants)
            outgoing = Exchange.objects.create(
                order_cycle=order_cycle,
                sender=enterprises["hub"],
                receiver=enterprises["shop"],
                incoming=False,
                pickup_instructions="Collect from the back door on Saturday",
            )
            outgoing.variants.set(variants[:3])
            schedule, _ = Schedule.objects.get_or_create(name="Weekly")
            schedule.order_cycles.add(order_cycle)
        return order_cycle

    def _create_customers(self, shop):
        from customers.models import Customer

        specs = [
            ("ada@example.com", "Ada", "Lovelace", "C001"),
            ("alan@example.com", "Alan", "Turing", "C002"),
            ("grace@example.com", "Grace", "Hopper", "C003"),
        ]
        customers = []
        for email, first, last, code in specs:
            customer, _ = Customer.objects.get_or_create(
                enterprise=shop,
                email=email,
                defaults=dict(first_name=first, last_name=last, code=code),
            )
            customers.append(customer)
        self.stdout.write(f"  Customers: {len(customers)}")
        return customers

    def _create_orders(self, customers, shop, order_cycle, manager):
        from orders.models import Order, OrderState
        from payments.models import Payment, PaymentMethod

        checkout = [OrderState.ADDRESS, OrderState.DELIVERY, OrderState.PAYMENT, OrderState.COMPLETE]
        # (customer index, total, paid, final state)
        specs = [
            (0, "25.00", "25.00", OrderState.COMPLETE),
            (0, "18.40", "0.00", OrderState.COMPLETE),
            (1, "42.00", "50.00", OrderState.COMPLETE),
            (2, "12.00", "12.00", OrderState.CANCELED),
            (2, "30.00", "0.00", OrderState.CART),
        ]
        created = 0
        for index, total, paid, state in specs:
            customer = customers[index]
            if customer.orders.filter(total=Decimal(total), order_cycle=order_cycle).exists():
                continue
            order = Order.objects.create(
                customer=customer,
                distributor=shop,
                order_cycle=order_cycle,
                email=customer.email,
                total=Decimal(total),
            )
            if state != OrderState.CART:
                for step in checkout:
                    order.transition_to(step, changed_by=manager)
                if state == OrderState.CANCELED:
                    order.transition_to(OrderState.CANCELED, changed_by=manager, note="Customer request")
            if Decimal(paid):
                Payment.objects.create(
                    order=order, amount=Decimal(paid), method=PaymentMethod.CASH, received_by=manager
                )
            created += 1
        self.stdout.write(f"  Orders: {created}")
