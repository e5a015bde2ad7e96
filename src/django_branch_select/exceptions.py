"""Exceptions for django-branch-select."""


class BranchSelectError(Exception):
    """Base exception for branch select errors."""
    pass


class BranchSelectConfigError(BranchSelectError):
    """Raised when branch select configuration is invalid."""
    pass


class BranchSelectInstallError(BranchSelectError):
    """Raised when installation cannot proceed."""
    pass


class PrerequisiteMissingError(BranchSelectInstallError):
    """Raised when django-restrict-branch is not installed."""

    def __init__(self, app_name: str):
        self.app_name = app_name
        super().__init__(f"Please install {app_name} before this module")


class PrerequisiteVersionError(BranchSelectInstallError):
    """Raised when the installed django-restrict-branch is too old."""

    def __init__(self, app_name: str, installed: str, required: str):
        self.app_name = app_name
        self.installed = installed
        self.required = required
        super().__init__(
            f"{app_name} {required} or newer is required, found {installed}"
        )


class FieldMissingError(BranchSelectInstallError):
    """Raised when the branch parent field configuration is missing."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(
            f"Branch parent field '{field_name}' not found, "
            "please add it before installing this module"
        )
