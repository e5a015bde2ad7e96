"""Django Branch Select - Switch between multiple restricted branches."""

__version__ = "0.1.0"

__all__ = [
    "collect_candidates",
    "CandidateSet",
    "BranchSession",
    "resolve_branch_root",
    "inject_branch_selector",
    "install_branch_select",
]


def __getattr__(name):
    """Lazy imports to avoid AppRegistryNotReady errors."""
    if name in ("collect_candidates", "CandidateSet"):
        from django_branch_select import candidates
        return getattr(candidates, name)
    if name == "BranchSession":
        from django_branch_select.session import BranchSession
        return BranchSession
    if name == "resolve_branch_root":
        from django_branch_select.resolver import resolve_branch_root
        return resolve_branch_root
    if name == "inject_branch_selector":
        from django_branch_select.injector import inject_branch_selector
        return inject_branch_selector
    if name == "install_branch_select":
        from django_branch_select.install import install_branch_select
        return install_branch_select
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
