"""Services for django-restrict-branch.

Branch root lookup, branch parent collections and page tree rendering.
"""

import logging
from typing import Any

from django.utils.html import format_html, format_html_join
from django.utils.safestring import mark_safe

from .conf import PAGE_LIST_CONTAINER_CLASS, get_field_name
from .hooks import BranchRootEvent, HookRegistry
from .models import (
    FieldConfig,
    MatchType,
    Page,
    RestrictBranchSettings,
    RoleBranchParent,
    UserBranchParent,
)

logger = logging.getLogger(__name__)


def get_match_type() -> str:
    """Get the configured match type."""
    return RestrictBranchSettings.get_instance().match_type


def get_branch_parent_field() -> FieldConfig | None:
    """Get the branch parent field configuration, if it exists."""
    return FieldConfig.objects.filter(name=get_field_name()).first()


def is_multi_branch_field() -> bool:
    """Check whether the branch parent field dereferences multiple pages."""
    field = get_branch_parent_field()
    return field is not None and field.allows_multiple


def _limit(ids: list[int]) -> list[int]:
    if is_multi_branch_field():
        return ids
    return ids[:1]


def get_user_branch_parent_ids(user: Any) -> list[int]:
    """Get the branch parent page ids assigned directly to a user.

    Ids are returned in assignment order. While the branch parent field
    is single-valued only the first assignment counts.

    Args:
        user: The user to look up

    Returns:
        List of page ids (possibly pointing at deleted pages)
    """
    if user is None or not getattr(user, "is_authenticated", False):
        return []
    ids = UserBranchParent.objects.filter(user=user).values_list("page_id", flat=True)
    return _limit(list(ids))


def get_role_branch_parent_ids(role: Any) -> list[int]:
    """Get the branch parent page ids assigned to a role (auth Group)."""
    ids = RoleBranchParent.objects.filter(role=role).values_list("page_id", flat=True)
    return _limit(list(ids))


def get_default_branch_root_parent_id(user: Any) -> int | None:
    """Compute the branch root the host would use on its own.

    - single_specified_parent: the user's first branch parent
    - specified_parent_by_role: first branch parent of the first role
      that has one
    - none: no restriction
    """
    match_type = get_match_type()

    if match_type == MatchType.SINGLE_SPECIFIED_PARENT:
        ids = get_user_branch_parent_ids(user)
        return ids[0] if ids else None

    if match_type == MatchType.SPECIFIED_PARENT_BY_ROLE:
        if user is None or not getattr(user, "is_authenticated", False):
            return None
        for role in user.groups.order_by("id"):
            ids = get_role_branch_parent_ids(role)
            if ids:
                return ids[0]

    return None


def get_branch_root_parent_id(request: Any) -> int | None:
    """Get the id of the branch root page for the requesting user.

    Registered branch root hooks run first, in priority order. The first
    hook that sets ``replace`` decides the result; otherwise the host's
    default lookup is used.

    Args:
        request: The current HTTP request

    Returns:
        Page id of the branch root, or None when the user is unrestricted
    """
    user = getattr(request, "user", None)
    event = BranchRootEvent(request=request, user=user)

    for hook in HookRegistry.branch_root_hooks():
        hook(event)
        if event.replace:
            logger.debug(f"Branch root {event.return_value} set by hook {hook!r}")
            return event.return_value

    return get_default_branch_root_parent_id(user)


def get_branch_root(request: Any) -> Page | None:
    """Get the branch root page for the requesting user."""
    root_id = get_branch_root_parent_id(request)
    if root_id is None:
        return None
    return Page.objects.filter(pk=root_id).first()


def build_page_tree(root: Page | None = None) -> list[tuple[Page, list]]:
    """Build the page tree below (and including) a root page.

    Args:
        root: Branch root page, or None for the whole tree

    Returns:
        Nested list of (page, children) tuples
    """
    children: dict[int | None, list[Page]] = {}
    for page in Page.objects.all():
        children.setdefault(page.parent_id, []).append(page)

    def _subtree(page: Page) -> tuple[Page, list]:
        return page, [_subtree(child) for child in children.get(page.pk, [])]

    if root is not None:
        return [_subtree(root)]
    return [_subtree(page) for page in children.get(None, [])]


def _render_nodes(nodes: list[tuple[Page, list]]) -> str:
    if not nodes:
        return ""
    items = format_html_join(
        "",
        '<li data-id="{}">{}{}</li>',
        ((page.pk, page.title, mark_safe(_render_nodes(kids))) for page, kids in nodes),
    )
    return format_html('<ul class="PageList">{}</ul>', items)


def render_page_list(request: Any) -> str:
    """Render the page tree markup for the requesting user's branch.

    The markup is wrapped in a container carrying the
    PAGE_LIST_CONTAINER_CLASS class.
    """
    root_id = get_branch_root_parent_id(request)
    root = Page.objects.filter(pk=root_id).first() if root_id is not None else None
    if root_id is not None and root is None:
        nodes = []
    else:
        nodes = build_page_tree(root)

    return format_html(
        '<div class="{}" data-root="{}">{}</div>',
        PAGE_LIST_CONTAINER_CLASS,
        root_id if root_id is not None else "",
        mark_safe(_render_nodes(nodes)),
    )


def apply_page_list_processors(request: Any, markup: str) -> str:
    """Run registered page list processors over rendered markup."""
    for processor in HookRegistry.page_list_processors():
        markup = processor(request, markup)
    return markup
