"""Django app configuration for django-restrict-branch."""

from django.apps import AppConfig


class DjangoRestrictBranchConfig(AppConfig):
    """App config for django-restrict-branch."""

    name = "django_restrict_branch"
    verbose_name = "Restrict Branch"
    default_auto_field = "django.db.models.BigAutoField"
