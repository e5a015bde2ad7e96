"""Configuration for django-restrict-branch."""

from django.conf import settings

# CSS class wrapping the rendered page tree
PAGE_LIST_CONTAINER_CLASS = "PageListContainer"

DEFAULT_FIELD_NAME = "branch_parent"


def get_field_name() -> str:
    """Get the name of the branch parent field configuration.

    Reads RESTRICT_BRANCH_FIELD_NAME from Django settings.
    """
    return getattr(settings, "RESTRICT_BRANCH_FIELD_NAME", None) or DEFAULT_FIELD_NAME
