# tests/conftest.py
"""
Pytest configuration for django-branch-select tests.
"""
import django
import pytest
from django.conf import settings


def pytest_configure():
    if not settings.configured:
        settings.configure(
            DEBUG=True,
            SECRET_KEY="test-secret-key-for-branch-select",
            DATABASES={
                "default": {
                    "ENGINE": "django.db.backends.sqlite3",
                    "NAME": ":memory:",
                }
            },
            INSTALLED_APPS=[
                "django.contrib.admin",
                "django.contrib.contenttypes",
                "django.contrib.auth",
                "django.contrib.sessions",
                "django.contrib.messages",
                "django_branch_select",
                "django_restrict_branch",
            ],
            MIDDLEWARE=[
                "django.contrib.sessions.middleware.SessionMiddleware",
                "django.contrib.auth.middleware.AuthenticationMiddleware",
            ],
            ROOT_URLCONF="tests.urls",
            SESSION_ENGINE="django.contrib.sessions.backends.db",
            DEFAULT_AUTO_FIELD="django.db.models.BigAutoField",
            USE_TZ=True,
        )
    django.setup()


@pytest.fixture
def user(db):
    """Create a test editor."""
    from django.contrib.auth import get_user_model
    User = get_user_model()
    return User.objects.create_user(username="editor", password="testpass123")


@pytest.fixture
def branch_field(db):
    """Branch parent field configured for multiple pages."""
    from django_restrict_branch.models import DerefMode, FieldConfig, InputWidget

    return FieldConfig.objects.create(
        name="branch_parent",
        deref_mode=DerefMode.PAGE_ARRAY,
        input_widget=InputWidget.PAGE_LIST_SELECT_MULTIPLE,
    )


@pytest.fixture
def set_match_type(db):
    """Set the restrict branch match type."""
    from django_restrict_branch.models import RestrictBranchSettings

    def _set(match_type):
        settings_obj = RestrictBranchSettings.get_instance()
        settings_obj.match_type = match_type
        settings_obj.save()
        return settings_obj

    return _set


@pytest.fixture
def pages(db):
    """Site tree with branches A(10) and B(20) under a root."""
    from django_restrict_branch.models import Page

    root = Page.objects.create(pk=1, title="Home")
    page_a = Page.objects.create(pk=10, title="Branch A", parent=root, sort_order=1)
    page_b = Page.objects.create(pk=20, title="Branch B", parent=root, sort_order=2)
    Page.objects.create(pk=11, title="A child", parent=page_a)
    Page.objects.create(pk=21, title="B child", parent=page_b)
    return {"root": root, "a": page_a, "b": page_b}


@pytest.fixture
def make_request(user):
    """Build a GET request with a session for the test editor."""
    from django.contrib.sessions.backends.db import SessionStore
    from django.test import RequestFactory

    factory = RequestFactory()

    def _make(path="/pages/", data=None, session=None, as_user=None):
        request = factory.get(path, data or {})
        request.user = as_user or user
        request.session = session if session is not None else SessionStore()
        return request

    return _make
