"""Installation checks and branch parent field migration.

The branch parent field of django-restrict-branch dereferences a single
page by default. Installing branch select switches it to a multiple page
list so that users and roles can hold several branch parents.
"""

import logging
from dataclasses import dataclass, field
from importlib import import_module

from django.apps import apps
from django.db import DatabaseError

from django_branch_select.conf import (
    HOST_APP,
    get_field_name,
    get_required_host_version,
    parse_version,
)
from django_branch_select.exceptions import (
    FieldMissingError,
    PrerequisiteMissingError,
    PrerequisiteVersionError,
)

logger = logging.getLogger(__name__)


@dataclass
class InstallReport:
    """Outcome of an installation run.

    Attributes:
        messages: Informational messages for the administrator
        warnings: Non-fatal problems needing manual follow-up
        field_updated: Whether the branch parent field was changed
    """

    messages: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    field_updated: bool = False


def get_host_version() -> str:
    """Get the installed django-restrict-branch version."""
    return getattr(import_module(HOST_APP), "__version__", "0")


def check_prerequisites() -> None:
    """Check that a recent enough django-restrict-branch is installed.

    Raises:
        PrerequisiteMissingError: If the host app is not installed
        PrerequisiteVersionError: If the host app is older than required
    """
    if not apps.is_installed(HOST_APP):
        raise PrerequisiteMissingError(HOST_APP)

    installed = get_host_version()
    required = get_required_host_version()
    if parse_version(installed) < parse_version(required):
        raise PrerequisiteVersionError(HOST_APP, installed, required)


def install_branch_select() -> InstallReport:
    """Install branch select.

    Verifies prerequisites and makes the branch parent field accept
    multiple pages, unless it already does.

    Returns:
        InstallReport with messages and warnings

    Raises:
        PrerequisiteMissingError: If django-restrict-branch is not installed
        PrerequisiteVersionError: If django-restrict-branch is too old
        FieldMissingError: If the branch parent field does not exist
    """
    check_prerequisites()

    from django_restrict_branch.models import DerefMode, FieldConfig, InputWidget

    field_name = get_field_name()
    branch_parent = FieldConfig.objects.filter(name=field_name).first()
    if branch_parent is None:
        raise FieldMissingError(field_name)

    report = InstallReport()
    if branch_parent.deref_mode == DerefMode.PAGE_ARRAY:
        return report

    branch_parent.input_widget = InputWidget.PAGE_LIST_SELECT_MULTIPLE
    branch_parent.deref_mode = DerefMode.PAGE_ARRAY
    try:
        branch_parent.save()
    except DatabaseError as e:
        logger.warning(f"Failed to update field '{field_name}': {e}")
        report.warnings.append(
            "Branch parent field could not be updated to allow selecting multiple "
            "options, please update field setting manually"
        )
        return report

    logger.info(f"Field '{field_name}' now dereferences multiple pages")
    report.field_updated = True
    report.messages.append("Branch parent field updated to allow selecting multiple options")
    return report
