"""Extension points for branch restriction.

Two kinds of hooks are supported:

- Branch root hooks run before the host computes a user's branch root.
  They receive a BranchRootEvent and may set ``return_value`` together
  with ``replace=True`` to short-circuit the host's own lookup.
- Page list processors run after the page tree markup has been rendered.
  They receive the request and the markup and return the new markup.

Apps register their hooks from ``AppConfig.ready()``:

    from django_restrict_branch.hooks import HookRegistry

    HookRegistry.register_branch_root_hook(my_resolver, priority=1)
    HookRegistry.register_page_list_processor(my_processor)
"""

from dataclasses import dataclass
from typing import Any, Callable

from .exceptions import BranchHookError

DEFAULT_PRIORITY = 100


@dataclass
class BranchRootEvent:
    """State shared between branch root hooks and the host lookup.

    Attributes:
        request: The current HTTP request
        user: The user whose branch root is being resolved
        return_value: Branch root page id set by a hook
        replace: When True, the host uses return_value as is
    """

    request: Any
    user: Any
    return_value: int | None = None
    replace: bool = False


@dataclass
class _Hook:
    func: Callable
    priority: int
    order: int


class HookRegistry:
    """Central registry for branch restriction hooks.

    Hooks run in ascending priority; equal priorities keep registration
    order.
    """

    _branch_root_hooks: list[_Hook] = []
    _page_list_processors: list[_Hook] = []
    _counter: int = 0

    @classmethod
    def _add(cls, hooks: list[_Hook], func: Callable, priority: int) -> None:
        if not callable(func):
            raise BranchHookError(f"Hook must be callable, got {func!r}")
        if any(hook.func == func for hook in hooks):
            return
        cls._counter += 1
        hooks.append(_Hook(func=func, priority=priority, order=cls._counter))

    @classmethod
    def register_branch_root_hook(
        cls,
        func: Callable[[BranchRootEvent], None],
        priority: int = DEFAULT_PRIORITY,
    ) -> None:
        """Register a hook that runs before the branch root lookup."""
        cls._add(cls._branch_root_hooks, func, priority)

    @classmethod
    def register_page_list_processor(
        cls,
        func: Callable[[Any, str], str],
        priority: int = DEFAULT_PRIORITY,
    ) -> None:
        """Register a post-processor for rendered page list markup."""
        cls._add(cls._page_list_processors, func, priority)

    @classmethod
    def unregister(cls, func: Callable) -> None:
        """Remove a hook from every registry."""
        cls._branch_root_hooks[:] = [h for h in cls._branch_root_hooks if h.func != func]
        cls._page_list_processors[:] = [h for h in cls._page_list_processors if h.func != func]

    @classmethod
    def branch_root_hooks(cls) -> list[Callable]:
        return [h.func for h in sorted(cls._branch_root_hooks, key=lambda h: (h.priority, h.order))]

    @classmethod
    def page_list_processors(cls) -> list[Callable]:
        return [h.func for h in sorted(cls._page_list_processors, key=lambda h: (h.priority, h.order))]

    @classmethod
    def clear(cls) -> None:
        """Clear all registered hooks (for testing)."""
        cls._branch_root_hooks.clear()
        cls._page_list_processors.clear()
