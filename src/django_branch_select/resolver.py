"""Branch root resolution for users with several branch parents.

Runs as a branch root hook ahead of the host's own lookup. With a single
candidate that candidate is used directly. With several, the requested
branch is taken from the ``branch_parent`` GET parameter, then from the
session, then from the first candidate that still exists. The chosen
branch is remembered in the session.
"""

import logging

from django_restrict_branch.hooks import BranchRootEvent
from django_restrict_branch.services import get_match_type

from django_branch_select.candidates import SUPPORTED_MATCH_TYPES, CandidateSet, collect_candidates
from django_branch_select.conf import BRANCH_PARENT_PARAM
from django_branch_select.session import BranchSession, parse_page_id

logger = logging.getLogger(__name__)


def select_branch_parent(
    candidates: CandidateSet,
    requested_id: int | None,
    stored_id: int | None,
) -> int | None:
    """Pick the active branch parent from several candidates.

    Args:
        candidates: Candidate set with two or more members
        requested_id: Id from the request, if any
        stored_id: Id remembered in the session, if any

    Returns:
        The selected page id, or None if no candidate resolves
    """
    for page_id in (requested_id, stored_id):
        if candidates.resolve(page_id) is not None:
            return page_id
    return candidates.first_resolvable()


def resolve_branch_root(event: BranchRootEvent) -> None:
    """Override the branch root when the user has branch parents to pick from."""
    match_type = get_match_type()
    if match_type not in SUPPORTED_MATCH_TYPES:
        return

    candidates = collect_candidates(event.user, match_type)
    if not candidates:
        return

    if len(candidates) == 1:
        event.return_value = candidates.ids[0]
        event.replace = True
        return

    request = event.request
    session = BranchSession.from_request(request)
    requested_id = parse_page_id(request.GET.get(BRANCH_PARENT_PARAM))
    stored_id = session.active_id

    branch_parent_id = select_branch_parent(candidates, requested_id, stored_id)
    if branch_parent_id is None:
        logger.debug(f"No resolvable branch parent among {candidates!r}")
        if stored_id is not None:
            session.clear()
        return

    if branch_parent_id != stored_id:
        logger.debug(f"Active branch parent changed from {stored_id} to {branch_parent_id}")

    session.active_id = branch_parent_id
    event.return_value = branch_parent_id
    event.replace = True
