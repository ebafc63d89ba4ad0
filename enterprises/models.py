"""
Enterprise models.

An enterprise is a vendor on the marketplace: a producer, a distributor
(hub or shop), or both. Customers belong to exactly one enterprise.
"""

from django.conf import settings
from django.db import models


class Sells(models.TextChoices):
    NONE = "none", "Does not sell"
    OWN = "own", "Sells own produce"
    ANY = "any", "Sells any produce"


class EnterpriseQuerySet(models.QuerySet):
    def distributors(self):
        return self.exclude(sells=Sells.NONE)

    def producers(self):
        return self.filter(is_primary_producer=True)

    def managed_by(self, user):
        """Enterprises the user may edit: all of them for platform admins."""
        from accounts.models import Role

        if user.is_superuser or user.role == Role.ADMIN:
            return self
        return self.filter(owner=user)


class Enterprise(models.Model):
    name = models.CharField(max_length=255, verbose_name="name")
    permalink = models.SlugField(max_length=255, unique=True, verbose_name="permalink")
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="owned_enterprises",
        verbose_name="owner",
    )
    sells = models.CharField(
        max_length=10,
        choices=Sells.choices,
        default=Sells.NONE,
        verbose_name="sells",
    )
    is_primary_producer = models.BooleanField(default=False, verbose_name="primary producer")
    description = models.TextField(blank=True, verbose_name="description")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = EnterpriseQuerySet.as_manager()

    class Meta:
        verbose_name = "enterprise"
        verbose_name_plural = "enterprises"
        ordering = ["name"]

    def __str__(self):
        return self.name

    @property
    def is_distributor(self):
        return self.sells != Sells.NONE
