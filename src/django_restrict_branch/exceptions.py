"""Exceptions for django-restrict-branch."""


class RestrictBranchError(Exception):
    """Base exception for branch restriction errors."""
    pass


class BranchHookError(RestrictBranchError):
    """Raised when a branch hook is registered incorrectly."""
    pass
