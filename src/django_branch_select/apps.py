"""Django app configuration for django-branch-select."""

from django.apps import AppConfig


class DjangoBranchSelectConfig(AppConfig):
    """App config for django-branch-select.

    Wires the branch resolver and the selector injector into the
    restrict branch hooks.
    """

    name = "django_branch_select"
    verbose_name = "Branch Select"
    default_auto_field = "django.db.models.BigAutoField"

    def ready(self):
        from django_restrict_branch.hooks import HookRegistry

        from .injector import inject_branch_selector
        from .resolver import resolve_branch_root

        # Must run ahead of any other branch root hook
        HookRegistry.register_branch_root_hook(resolve_branch_root, priority=1)
        HookRegistry.register_page_list_processor(inject_branch_selector)
