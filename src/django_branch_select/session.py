"""Session access for the active branch parent."""

from typing import Any

from django_branch_select.conf import SESSION_KEY


def parse_page_id(value: Any) -> int | None:
    """Parse a page id from a request or session value.

    Returns None for missing, non-integer and non-positive values.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        page_id = int(value)
    except (TypeError, ValueError):
        return None
    return page_id if page_id > 0 else None


class BranchSession:
    """Typed wrapper over a session for the active branch parent id.

    Usage:
        session = BranchSession(request.session)
        session.active_id = 10
        session.active_id  # 10
    """

    key = SESSION_KEY

    def __init__(self, session):
        self.session = session

    @classmethod
    def from_request(cls, request) -> "BranchSession":
        return cls(request.session)

    @property
    def active_id(self) -> int | None:
        return parse_page_id(self.session.get(self.key))

    @active_id.setter
    def active_id(self, page_id: int) -> None:
        self.session[self.key] = int(page_id)

    def clear(self) -> None:
        self.session.pop(self.key, None)
