"""
Pytest configuration and shared fixtures.
"""

from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

User = get_user_model()


@pytest.fixture
def platform_admin(db):
    from accounts.models import Role

    return User.objects.create_user(
        username="admin",
        password="testpass123",
        role=Role.ADMIN,
        first_name="Platform",
        last_name="Admin",
    )


@pytest.fixture
def manager_user(db):
    from accounts.models import Role

    return User.objects.create_user(
        username="manager",
        password="testpass123",
        role=Role.MANAGER,
    )


@pytest.fixture
def shopper_user(db):
    from accounts.models import Role

    return User.objects.create_user(
        username="shopper",
        password="testpass123",
        role=Role.SHOPPER,
    )


@pytest.fixture
def enterprise(db, manager_user):
    from enterprises.models import Enterprise, Sells

    return Enterprise.objects.create(
        name="Corner Grocer",
        permalink="corner-grocer",
        owner=manager_user,
        sells=Sells.ANY,
    )


@pytest.fixture
def other_enterprise(db, manager_user):
    from enterprises.models import Enterprise, Sells

    return Enterprise.objects.create(
        name="Hilltop Market",
        permalink="hilltop-market",
        owner=manager_user,
        sells=Sells.ANY,
    )


@pytest.fixture
def producer(db, manager_user):
    from enterprises.models import Enterprise, Sells

    return Enterprise.objects.create(
        name="Green Valley Farm",
        permalink="green-valley-farm",
        owner=manager_user,
        sells=Sells.NONE,
        is_primary_producer=True,
    )


@pytest.fixture
def customer(db, enterprise):
    from customers.models import Customer

    return Customer.objects.create(
        enterprise=enterprise,
        email="ada@example.com",
        first_name="Ada",
        last_name="Lovelace",
        code="C001",
    )


@pytest.fixture
def make_order(db, enterprise):
    """Create an order directly in the given state, bypassing checkout."""
    from orders.models import Order, OrderState

    def make(customer=None, total="100.00", payment_total="0.00", state=OrderState.COMPLETE, distributor=None):
        return Order.objects.create(
            customer=customer,
            distributor=distributor or enterprise,
            total=Decimal(total),
            payment_total=Decimal(payment_total),
            state=state,
        )

    return make


@pytest.fixture
def manager_client(client, manager_user):
    client.force_login(manager_user)
    return client


@pytest.fixture
def shopper_client(client, shopper_user):
    client.force_login(shopper_user)
    return client
