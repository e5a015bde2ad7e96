"""Branch selector for the page tree.

Prepends a small GET form to the page list markup so that users with
several branch parents can switch between them.
"""

from typing import Any

from django.utils.html import format_html, format_html_join
from django.utils.safestring import mark_safe
from django.utils.translation import gettext as _

from django_restrict_branch.conf import PAGE_LIST_CONTAINER_CLASS
from django_restrict_branch.models import Page
from django_restrict_branch.services import get_match_type

from django_branch_select.candidates import collect_candidates
from django_branch_select.conf import BRANCH_PARENT_PARAM
from django_branch_select.session import BranchSession

# Visually hidden label text, still read by screen readers
LABEL_TEXT_STYLE = (
    "position: absolute; width: 1px; height: 1px; padding: 0; margin: -1px; "
    "overflow: hidden; clip: rect(0, 0, 0, 0); white-space: nowrap; border-width: 0;"
)

SELECTED = mark_safe(' selected="selected"')


def render_branch_selector(pages: list[Page], active_id: int | None) -> str:
    """Render the branch select form.

    Args:
        pages: Branch parent pages, one option each
        active_id: Id of the option to mark as selected

    Returns:
        Form markup
    """
    options = format_html_join(
        "",
        '<option value="{}"{}>{}</option>',
        (
            (page.pk, SELECTED if page.pk == active_id else "", page.title)
            for page in pages
        ),
    )
    return format_html(
        '<form method="get" class="BranchSelectForm">'
        "<label>"
        '<span style="{}">{}</span> '
        '<select name="{}" onchange="this.form.submit()">{}</select>'
        "</label>"
        "</form>",
        LABEL_TEXT_STYLE,
        _("Active branch"),
        BRANCH_PARENT_PARAM,
        options,
    )


def inject_branch_selector(request: Any, markup: str) -> str:
    """Prepend the branch selector to page tree markup.

    Markup that isn't the page tree, and users with fewer than two
    branch parents, are left alone.
    """
    if PAGE_LIST_CONTAINER_CLASS not in markup:
        return markup

    candidates = collect_candidates(getattr(request, "user", None), get_match_type())
    if len(candidates) < 2:
        return markup

    pages = candidates.pages()
    if len(pages) < 2:
        return markup

    active_id = BranchSession.from_request(request).active_id
    return render_branch_selector(pages, active_id) + markup
