"""
Custom User model with role-based access control.

Roles are stored as a CharField with choices so they are easy to check
without extra DB queries. A user has a single primary role: platform
admins run the marketplace, enterprise managers look after their shops'
customers and order cycles, shoppers only buy.
"""

from django.contrib.auth.models import AbstractUser
from django.db import models


class Role(models.TextChoices):
    ADMIN = "admin", "Platform admin"
    MANAGER = "enterprise_manager", "Enterprise manager"
    SHOPPER = "shopper", "Shopper"


class User(AbstractUser):
    """Extended user with a single primary role for RBAC."""

    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.SHOPPER,
        verbose_name="role",
    )
    phone = models.CharField(max_length=20, blank=True, verbose_name="phone")

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"

    def __str__(self):
        return f"{self.get_full_name() or self.username} ({self.get_role_display()})"

    @property
    def is_admin(self):
        return self.role == Role.ADMIN

    @property
    def is_manager(self):
        return self.role == Role.MANAGER

    def has_any_role(self, *roles):
        """Check if user has one of the given roles."""
        return self.role in roles
