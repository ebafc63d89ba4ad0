"""Tests for order cycle exchange editing."""

import json
from datetime import timedelta
from unittest import mock

import pytest
from django.utils import timezone

from catalog.models import Product, Variant
from order_cycles.models import Exchange, OrderCycle
from order_cycles.services import active_exchanges, save_order_cycle, split_exchanges


@pytest.fixture
def variant(producer):
    product = Product.objects.create(supplier=producer, name="Apples")
    return Variant.objects.create(product=product, sku="APL")


@pytest.fixture
def order_cycle(enterprise):
    now = timezone.now()
    return OrderCycle.objects.create(
        name="Weekly",
        coordinator=enterprise,
        orders_open_at=now - timedelta(days=1),
        orders_close_at=now + timedelta(days=1),
    )


@pytest.mark.django_db
class TestSplitExchanges:
    def test_splits_by_direction(self, order_cycle, enterprise, producer, other_enterprise, variant):
        incoming = Exchange.objects.create(order_cycle=order_cycle, sender=producer, receiver=enterprise, incoming=True)
        incoming.variants.add(variant)
        Exchange.objects.create(order_cycle=order_cycle, sender=enterprise, receiver=other_enterprise)

        incoming, outgoing = split_exchanges(order_cycle)
        assert incoming == [{"enterprise_id": producer.pk, "active": True, "variant_ids": [variant.pk]}]
        assert outgoing == [{"enterprise_id": other_enterprise.pk, "active": True, "variant_ids": []}]

    def test_exchange_bypassing_coordinator_is_left_out(self, order_cycle, producer, other_enterprise):
        Exchange.objects.create(order_cycle=order_cycle, sender=producer, receiver=other_enterprise, incoming=True)

        with mock.patch("order_cycles.services.logger") as logger:
            assert split_exchanges(order_cycle) == ([], [])
        logger.warning.assert_called_once()


class TestActiveExchanges:
    def test_drops_inactive(self):
        exchanges = [{"enterprise_id": 1, "active": False}, {"enterprise_id": 2, "active": True}, {"enterprise_id": 3}]
        assert [e["enterprise_id"] for e in active_exchanges(exchanges)] == [2, 3]


@pytest.mark.django_db
class TestSaveOrderCycle:
    def test_create_with_exchanges(self, enterprise, producer, other_enterprise, variant):
        order_cycle, errors = save_order_cycle(
            {
                "name": "Weekly",
                "coordinator_id": enterprise.pk,
                "incoming_exchanges": [
                    {"enterprise_id": producer.pk, "active": True, "variant_ids": [variant.pk]},
                ],
                "outgoing_exchanges": [
                    {"enterprise_id": other_enterprise.pk, "active": True, "variant_ids": [variant.pk]},
                    {"enterprise_id": producer.pk, "active": False, "variant_ids": []},
                ],
            }
        )
        assert errors == {}
        assert order_cycle.incoming_exchanges().get().sender == producer
        assert list(order_cycle.distributors()) == [other_enterprise]
        assert list(order_cycle.suppliers()) == [producer]

    def test_update_replaces_exchanges(self, order_cycle, enterprise, producer, other_enterprise):
        Exchange.objects.create(order_cycle=order_cycle, sender=producer, receiver=enterprise, incoming=True)

        order_cycle, errors = save_order_cycle(
            {"outgoing_exchanges": [{"enterprise_id": other_enterprise.pk}]}, order_cycle=order_cycle
        )
        assert errors == {}
        assert order_cycle.name == "Weekly"
        assert order_cycle.incoming_exchanges().count() == 0
        assert order_cycle.outgoing_exchanges().get().receiver == other_enterprise

    def test_update_without_exchange_keys_keeps_exchanges(self, order_cycle, enterprise, producer):
        Exchange.objects.create(order_cycle=order_cycle, sender=producer, receiver=enterprise, incoming=True)

        order_cycle, errors = save_order_cycle({"name": "Renamed"}, order_cycle=order_cycle)
        assert errors == {}
        assert order_cycle.name == "Renamed"
        assert order_cycle.exchanges.count() == 1

    def test_close_before_open_is_rejected(self, enterprise):
        now = timezone.now()
        _, errors = save_order_cycle(
            {
                "name": "Backwards",
                "coordinator_id": enterprise.pk,
                "orders_open_at": now.isoformat(),
                "orders_close_at": (now - timedelta(hours=1)).isoformat(),
            }
        )
        assert "orders_close_at" in errors
        assert not OrderCycle.objects.filter(name="Backwards").exists()

    def test_unknown_enterprise(self, enterprise):
        _, errors = save_order_cycle(
            {"name": "X", "coordinator_id": enterprise.pk, "incoming_exchanges": [{"enterprise_id": 9999}]}
        )
        assert errors == {"incoming_exchanges": ["Unknown enterprise: 9999"]}

    def test_unknown_variant(self, enterprise, producer):
        _, errors = save_order_cycle(
            {
                "name": "X",
                "coordinator_id": enterprise.pk,
                "incoming_exchanges": [{"enterprise_id": producer.pk, "variant_ids": [4242]}],
            }
        )
        assert errors == {"incoming_exchanges": ["Unknown variant: 4242"]}

    def test_exchanges_must_be_a_list(self, enterprise):
        _, errors = save_order_cycle({"name": "X", "coordinator_id": enterprise.pk, "outgoing_exchanges": {}})
        assert errors == {"outgoing_exchanges": ["Must be a list of objects."]}

    def test_duplicate_enterprise_in_one_list(self, enterprise, other_enterprise):
        _, errors = save_order_cycle(
            {
                "name": "Doubled",
                "coordinator_id": enterprise.pk,
                "outgoing_exchanges": [{"enterprise_id": other_enterprise.pk}, {"enterprise_id": other_enterprise.pk}],
            }
        )
        assert errors == {"outgoing_exchanges": [f"Duplicate enterprise: {other_enterprise.pk}"]}
        assert not OrderCycle.objects.filter(name="Doubled").exists()

    def test_same_enterprise_incoming_and_outgoing(self, enterprise, other_enterprise):
        order_cycle, errors = save_order_cycle(
            {
                "name": "Both ways",
                "coordinator_id": enterprise.pk,
                "incoming_exchanges": [{"enterprise_id": other_enterprise.pk}],
                "outgoing_exchanges": [{"enterprise_id": other_enterprise.pk}],
            }
        )
        assert errors == {}
        assert order_cycle.exchanges.count() == 2

    @pytest.mark.parametrize("variant_ids", [["abc"], 5, [None], [True]])
    def test_malformed_variant_ids(self, enterprise, producer, variant_ids):
        _, errors = save_order_cycle(
            {
                "name": "X",
                "coordinator_id": enterprise.pk,
                "incoming_exchanges": [{"enterprise_id": producer.pk, "variant_ids": variant_ids}],
            }
        )
        assert list(errors) == ["incoming_exchanges"]
        assert errors["incoming_exchanges"][0].startswith("Invalid variant ids")

    @pytest.mark.parametrize("enterprise_id", [None, "abc", 1.5, {"id": 1}])
    def test_malformed_enterprise_id(self, enterprise, enterprise_id):
        _, errors = save_order_cycle(
            {"name": "X", "coordinator_id": enterprise.pk, "outgoing_exchanges": [{"enterprise_id": enterprise_id}]}
        )
        assert errors["outgoing_exchanges"][0].startswith("Invalid enterprise id")

    def test_numeric_string_ids_are_accepted(self, enterprise, producer, variant):
        order_cycle, errors = save_order_cycle(
            {
                "name": "Strings",
                "coordinator_id": enterprise.pk,
                "incoming_exchanges": [{"enterprise_id": str(producer.pk), "variant_ids": [str(variant.pk)]}],
            }
        )
        assert errors == {}
        exchange = order_cycle.incoming_exchanges().get()
        assert exchange.sender == producer
        assert list(exchange.variants.all()) == [variant]


@pytest.mark.django_db
class TestOrderCycleViews:
    url = "/api/v1/order_cycles"

    def test_create(self, manager_client, enterprise, other_enterprise):
        response = manager_client.post(
            self.url,
            data=json.dumps(
                {
                    "order_cycle": {
                        "name": "Weekly",
                        "coordinator_id": enterprise.pk,
                        "outgoing_exchanges": [{"enterprise_id": other_enterprise.pk, "active": True}],
                    }
                }
            ),
            content_type="application/json",
        )
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["order_cycle"]["outgoing_exchanges"][0]["enterprise_id"] == other_enterprise.pk

    def test_invalid_payload(self, manager_client):
        response = manager_client.post(self.url, data=json.dumps({"name": ""}), content_type="application/json")
        assert response.status_code == 422
        assert response.json()["success"] is False

    def test_invalid_exchanges_are_unprocessable(self, manager_client, enterprise, other_enterprise):
        exchange = {"enterprise_id": other_enterprise.pk, "active": True}
        response = manager_client.post(
            self.url,
            data=json.dumps(
                {"order_cycle": {"name": "Weekly", "coordinator_id": enterprise.pk, "outgoing_exchanges": [exchange, exchange]}}
            ),
            content_type="application/json",
        )
        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert "outgoing_exchanges" in body["errors"]
        assert not OrderCycle.objects.exists()

    def test_shopper_cannot_update(self, shopper_client, order_cycle):
        response = shopper_client.put(
            f"{self.url}/{order_cycle.pk}", data=json.dumps({"name": "Hijacked"}), content_type="application/json"
        )
        assert response.status_code == 403

    def test_show(self, shopper_client, order_cycle):
        body = shopper_client.get(f"{self.url}/{order_cycle.pk}").json()
        assert body["order_cycle"]["name"] == "Weekly"
        assert body["order_cycle"]["is_open"] is True

    def test_index_filters_by_coordinator(self, manager_client, order_cycle, other_enterprise):
        OrderCycle.objects.create(name="Elsewhere", coordinator=other_enterprise)
        body = manager_client.get(self.url, {"coordinator_id": order_cycle.coordinator_id}).json()
        assert [oc["id"] for oc in body["order_cycles"]] == [order_cycle.pk]
