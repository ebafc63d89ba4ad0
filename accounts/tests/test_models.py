"""Tests for accounts models and RBAC logic."""

import json

import pytest
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.core.exceptions import PermissionDenied
from django.http import HttpResponse
from django.test import RequestFactory

from accounts.mixins import role_required
from accounts.models import Role

User = get_user_model()


@pytest.mark.django_db
class TestUserModel:
    def test_user_str_includes_role_display(self):
        user = User(username="test", first_name="Ada", last_name="Lovelace", role=Role.MANAGER)
        assert "Enterprise manager" in str(user)

    def test_is_admin_property(self, platform_admin):
        assert platform_admin.is_admin is True
        assert platform_admin.is_manager is False

    def test_is_manager_property(self, manager_user):
        assert manager_user.is_manager is True
        assert manager_user.is_admin is False

    def test_has_any_role_true(self, manager_user):
        assert manager_user.has_any_role(Role.MANAGER, Role.ADMIN) is True

    def test_has_any_role_false(self, shopper_user):
        assert shopper_user.has_any_role(Role.ADMIN, Role.MANAGER) is False

    def test_default_role_is_shopper(self, db):
        user = User.objects.create_user(username="newuser", password="pass")
        assert user.role == Role.SHOPPER


@role_required(Role.MANAGER)
def managers_only(request):
    return HttpResponse("ok")


@pytest.mark.django_db
class TestRoleRequired:
    def _request(self, user):
        request = RequestFactory().get("/")
        request.user = user
        return request

    def test_anonymous_gets_json_401(self):
        response = managers_only(self._request(AnonymousUser()))
        assert response.status_code == 401
        assert json.loads(response.content)["errors"][0]["title"] == "Unauthorized"

    def test_matching_role_passes(self, manager_user):
        assert managers_only(self._request(manager_user)).status_code == 200

    def test_admin_always_passes(self, platform_admin):
        assert managers_only(self._request(platform_admin)).status_code == 200

    def test_other_role_is_denied(self, shopper_user):
        with pytest.raises(PermissionDenied):
            managers_only(self._request(shopper_user))
