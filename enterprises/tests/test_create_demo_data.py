"""Tests for the create_demo_data management command and enterprise querysets."""

from decimal import Decimal
from io import StringIO

import pytest
from django.core.management import call_command

from customers.models import Customer
from customers.queries import CustomersWithBalance
from enterprises.models import Enterprise
from orders.models import Order


def run(*args):
    out = StringIO()
    call_command("create_demo_data", *args, stdout=out)
    return out.getvalue()


@pytest.mark.django_db
class TestCreateDemoData:
    def test_seeds_marketplace(self):
        assert "Demo data created successfully." in run()
        shop = Enterprise.objects.get(permalink="demo-shop")
        assert shop.customers.count() == 3
        assert Order.objects.filter(distributor=shop).count() == 5

    def test_balances_are_computed_from_demo_orders(self):
        run()
        shop = Enterprise.objects.get(permalink="demo-shop")
        balances = {c.email: c.balance_value for c in CustomersWithBalance(enterprise=shop).query()}
        assert balances == {
            "ada@example.com": Decimal("-18.40"),
            "alan@example.com": Decimal("8.00"),
            "grace@example.com": Decimal("0"),
        }

    def test_is_idempotent(self):
        run()
        run()
        assert Customer.objects.filter(enterprise__permalink="demo-shop").count() == 3
        assert Order.objects.count() == 5

    def test_reset(self):
        run()
        run("--reset")
        assert Order.objects.count() == 5
        assert Enterprise.objects.filter(permalink__startswith="demo-").count() == 3


@pytest.mark.django_db
class TestEnterpriseQuerySet:
    def test_distributors_and_producers(self, enterprise, producer):
        assert list(Enterprise.objects.distributors()) == [enterprise]
        assert list(Enterprise.objects.producers()) == [producer]
        assert enterprise.is_distributor is True
        assert producer.is_distributor is False

    def test_managed_by(self, enterprise, platform_admin, shopper_user):
        assert list(Enterprise.objects.managed_by(enterprise.owner)) == [enterprise]
        assert list(Enterprise.objects.managed_by(shopper_user)) == []
        assert list(Enterprise.objects.managed_by(platform_admin)) == [enterprise]
