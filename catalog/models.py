"""
Catalog models.

Products are supplied by a producer enterprise; variants are the sellable
units (size, weight, pack) that order cycles exchange and orders contain.
"""

from decimal import Decimal

from django.db import models


class Product(models.Model):
    supplier = models.ForeignKey(
        "enterprises.Enterprise",
        on_delete=models.PROTECT,
        related_name="supplied_products",
        verbose_name="supplier",
    )
    name = models.CharField(max_length=255, verbose_name="name")
    description = models.TextField(blank=True, verbose_name="description")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "product"
        verbose_name_plural = "products"
        ordering = ["name"]

    def __str__(self):
        return self.name


class VariantQuerySet(models.QuerySet):
    def in_order_cycles(self, order_cycles):
        """Variants distributed (outgoing exchanges) through any of the order cycles."""
        distributed = self.model.objects.filter(
            exchanges__incoming=False,
            exchanges__order_cycle__in=order_cycles,
        )
        return self.filter(pk__in=distributed.values("pk"))

    def in_distributor(self, distributor):
        """Variants sent out to a distributor by any order cycle."""
        distributed = self.model.objects.filter(
            exchanges__incoming=False,
            exchanges__receiver=distributor,
        )
        return self.filter(pk__in=distributed.values("pk"))


class Variant(models.Model):
    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="variants",
        verbose_name="product",
    )
    sku = models.CharField(max_length=255, blank=True, verbose_name="SKU", db_index=True)
    display_name = models.CharField(max_length=255, blank=True, verbose_name="display name")
    unit_description = models.CharField(max_length=100, blank=True, verbose_name="unit")
    price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"), verbose_name="price")

    objects = VariantQuerySet.as_manager()

    class Meta:
        verbose_name = "variant"
        verbose_name_plural = "variants"

    def __str__(self):
        return self.full_name

    @property
    def name(self):
        return self.product.name

    @property
    def full_name(self):
        if self.display_name:
            return f"{self.product.name} - {self.display_name}"
        return self.product.name
