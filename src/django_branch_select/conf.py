"""Configuration for django-branch-select."""

from django.conf import settings

from django_branch_select.exceptions import BranchSelectConfigError

# GET parameter naming the requested branch parent
BRANCH_PARENT_PARAM = "branch_parent"

# Session key holding the active branch parent id
SESSION_KEY = "BranchParentID"

HOST_APP = "django_restrict_branch"

# First host release with a hookable branch root lookup
DEFAULT_REQUIRED_HOST_VERSION = "0.2.0"


def parse_version(value: str) -> tuple[int, ...]:
    """Parse a dotted version string into a comparable tuple.

    Raises:
        BranchSelectConfigError: If the version is not dotted integers
    """
    try:
        return tuple(int(part) for part in str(value).strip().split("."))
    except ValueError:
        raise BranchSelectConfigError(f"Invalid version string: {value!r}")


def get_required_host_version() -> str:
    """Get the minimum django-restrict-branch version.

    Reads BRANCH_SELECT_REQUIRED_HOST_VERSION from Django settings.
    """
    version = getattr(settings, "BRANCH_SELECT_REQUIRED_HOST_VERSION", None)
    return version or DEFAULT_REQUIRED_HOST_VERSION


def get_field_name() -> str:
    """Get the name of the branch parent field to reconfigure.

    Reads BRANCH_SELECT_FIELD_NAME, falling back to the host's field name.
    """
    from django_restrict_branch.conf import get_field_name as get_host_field_name

    return getattr(settings, "BRANCH_SELECT_FIELD_NAME", None) or get_host_field_name()
