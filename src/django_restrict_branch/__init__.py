"""Django Restrict Branch - Confine editors to a single page-tree branch."""

__version__ = "0.2.0"

__all__ = [
    "Page",
    "MatchType",
    "get_branch_root_parent_id",
    "HookRegistry",
    "BranchRootEvent",
]


def __getattr__(name):
    """Lazy imports to avoid AppRegistryNotReady errors."""
    if name in ("Page", "MatchType"):
        from django_restrict_branch import models
        return getattr(models, name)
    if name == "get_branch_root_parent_id":
        from django_restrict_branch.services import get_branch_root_parent_id
        return get_branch_root_parent_id
    if name in ("HookRegistry", "BranchRootEvent"):
        from django_restrict_branch import hooks
        return getattr(hooks, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
