"""
Customer models.

A customer record is owned by a single enterprise: the same shopper buying
from two shops appears as two customers. Billing and shipping addresses are
separate rows so they can be replaced without touching the customer.
"""

from django.conf import settings
from django.db import models


class Address(models.Model):
    first_name = models.CharField(max_length=100, blank=True)
    last_name = models.CharField(max_length=100, blank=True)
    phone = models.CharField(max_length=32, blank=True)
    street_address_1 = models.CharField(max_length=255)
    street_address_2 = models.CharField(max_length=255, blank=True)
    postal_code = models.CharField(max_length=32)
    locality = models.CharField(max_length=100)
    region_name = models.CharField(max_length=100, blank=True)
    region_code = models.CharField(max_length=16, blank=True)
    country_name = models.CharField(max_length=100, blank=True)
    country_code = models.CharField(max_length=2, help_text="ISO 3166-1 alpha-2 code")
    latitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    longitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)

    class Meta:
        verbose_name = "address"
        verbose_name_plural = "addresses"

    def __str__(self):
        return f"{self.street_address_1}, {self.locality} {self.postal_code}"


class CustomerQuerySet(models.QuerySet):
    def of(self, enterprise):
        """Customers belonging to an enterprise (instance or id)."""
        return self.filter(enterprise=enterprise)

    def visible_to(self, user):
        """
        Customers the user may see: all of them for platform admins, else
        those of enterprises the user owns plus the user's own customer records.
        """
        from accounts.models import Role

        if user.is_superuser or user.role == Role.ADMIN:
            return self
        return self.filter(models.Q(enterprise__owner=user) | models.Q(user=user))


class Customer(models.Model):
    """A shopper as seen by one enterprise."""

    enterprise = models.ForeignKey(
        "enterprises.Enterprise",
        on_delete=models.CASCADE,
        related_name="customers",
        verbose_name="enterprise",
    )
    email = models.EmailField(verbose_name="email")
    code = models.CharField(max_length=64, blank=True, verbose_name="code")
    first_name = models.CharField(max_length=100, blank=True, verbose_name="first name")
    last_name = models.CharField(max_length=100, blank=True, verbose_name="last name")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="customers",
        verbose_name="user account",
    )
    bill_address = models.ForeignKey(
        Address,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name="billing address",
    )
    ship_address = models.ForeignKey(
        Address,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name="shipping address",
    )
    tags = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomerQuerySet.as_manager()

    class Meta:
        verbose_name = "customer"
        verbose_name_plural = "customers"
        constraints = [
            models.UniqueConstraint(fields=["enterprise", "email"], name="unique_customer_email_per_enterprise"),
        ]
        indexes = [
            models.Index(fields=["email"], name="customer_email_idx"),
            models.Index(fields=["enterprise", "code"], name="customer_enterprise_code_idx"),
        ]

    def __str__(self):
        return self.full_name or self.email

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def balance(self):
        """Payments received minus amounts owed across finalized orders."""
        balance_value = getattr(self, "balance_value", None)
        if balance_value is not None:
            return balance_value

        from .queries import CustomersWithBalance

        return CustomersWithBalance(customers=self).query().get().balance_value
