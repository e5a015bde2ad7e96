"""Branch parent candidates for a user.

A candidate set holds page ids in collection order, without duplicates.
It is computed fresh for every request and never mutated.
"""

from typing import Any, Iterable, Iterator

from django_restrict_branch.models import MatchType, Page
from django_restrict_branch.services import (
    get_role_branch_parent_ids,
    get_user_branch_parent_ids,
)

SUPPORTED_MATCH_TYPES = (
    MatchType.SINGLE_SPECIFIED_PARENT,
    MatchType.SPECIFIED_PARENT_BY_ROLE,
)


class CandidateSet:
    """Ordered, de-duplicated branch parent page ids."""

    __slots__ = ("_ids",)

    def __init__(self, ids: Iterable[int] = ()):
        self._ids = tuple(dict.fromkeys(ids))

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[int]:
        return iter(self._ids)

    def __contains__(self, page_id) -> bool:
        return page_id in self._ids

    def __eq__(self, other) -> bool:
        if isinstance(other, CandidateSet):
            return set(self._ids) == set(other._ids)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._ids))

    def __repr__(self) -> str:
        return f"CandidateSet({list(self._ids)!r})"

    @property
    def ids(self) -> tuple[int, ...]:
        return self._ids

    def resolve(self, page_id: int | None) -> Page | None:
        """Resolve a member id to an existing page.

        Returns None for ids outside the set or pointing at missing pages.
        """
        if page_id is None or page_id not in self._ids:
            return None
        return Page.objects.filter(pk=page_id).first()

    def pages(self) -> list[Page]:
        """Existing pages for the candidates, in collection order."""
        found = Page.objects.in_bulk(self._ids)
        return [found[page_id] for page_id in self._ids if page_id in found]

    def first_resolvable(self) -> int | None:
        """First candidate id that resolves to an existing page."""
        pages = self.pages()
        return pages[0].pk if pages else None


def collect_candidates(user: Any, match_type: str) -> CandidateSet:
    """Collect the branch parents a user may choose from.

    Args:
        user: The user to collect candidates for
        match_type: The host's configured MatchType value

    Returns:
        CandidateSet, empty when the match type is not supported
    """
    if user is None or not getattr(user, "is_authenticated", False):
        return CandidateSet()

    if match_type == MatchType.SINGLE_SPECIFIED_PARENT:
        return CandidateSet(get_user_branch_parent_ids(user))

    if match_type == MatchType.SPECIFIED_PARENT_BY_ROLE:
        ids = []
        for role in user.groups.order_by("id"):
            ids.extend(get_role_branch_parent_ids(role))
        return CandidateSet(ids)

    return CandidateSet()
