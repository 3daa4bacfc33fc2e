"""Callback and recurrence registry adapters.

The classifier needs to ask one question of the host: "how many callbacks
are bound to hook H right now?". Hosts answer it in different ways, so the
question is expressed as a small protocol and plain mappings (the shape the
host's filter table usually has) are adapted to it.

┌──────────────────────────────────────────────────────────────────────────────┐
│  CALLBACK REGISTRY                                                            │
│                                                                               │
│   classify() ──► CallbackRegistry.callback_count(hook) ──► int               │
│                        ▲                                                      │
│                        │                                                      │
│        ┌───────────────┴────────────────┐                                    │
│        │                                │                                    │
│   MappingCallbackRegistry          any object with                           │
│   {hook: [callbacks...]}           callback_count(hook)                      │
│   {hook: {priority: {...}}}                                                  │
│   {hook: 3}                                                                  │
└──────────────────────────────────────────────────────────────────────────────┘

Exceptions raised by a registry are never caught here; the engine cannot
reason about registry internals.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CallbackRegistry(Protocol):
    """Protocol for the host's live hook → callbacks table.

    Example (custom registry):
        >>> class PluginRegistry:
        ...     def __init__(self, plugins):
        ...         self._plugins = plugins
        ...
        ...     def callback_count(self, hook: str) -> int:
        ...         return sum(1 for p in self._plugins if hook in p.hooks)
    """

    def callback_count(self, hook: str) -> int:
        """Number of callbacks currently bound to ``hook``."""
        ...


class MappingCallbackRegistry:
    """Adapt a plain ``{hook: callbacks}`` mapping to :class:`CallbackRegistry`.

    Values may be a collection of callbacks, a nested priority mapping, or a
    bare count. Missing hooks and falsy values count as zero.
    """

    def __init__(self, table: Mapping[str, Any]) -> None:
        self._table = table

    def callback_count(self, hook: str) -> int:
        bound = self._table.get(hook)
        if not bound:
            return 0
        if isinstance(bound, bool):
            return 1
        if isinstance(bound, int):
            return max(bound, 0)
        if isinstance(bound, Mapping):
            return sum(_count_bound(value) for value in bound.values())
        if isinstance(bound, Collection) and not isinstance(bound, (str, bytes)):
            return len(bound)
        return 1

    def __repr__(self) -> str:
        return f"MappingCallbackRegistry(hooks={len(self._table)})"


def _count_bound(value: Any) -> int:
    # Priority buckets hold either callbacks keyed by id or a single callback.
    if isinstance(value, Mapping) or (
        isinstance(value, Collection) and not isinstance(value, (str, bytes))
    ):
        return len(value)
    return 1 if value else 0


def as_callback_registry(source: Any) -> CallbackRegistry:
    """Return ``source`` as a :class:`CallbackRegistry`.

    Accepts an object implementing the protocol, a mapping, or an iterable of
    hook names (each counted as one callback).
    """
    if isinstance(source, CallbackRegistry):
        return source
    if source is None:
        return MappingCallbackRegistry({})
    if isinstance(source, Mapping):
        return MappingCallbackRegistry(source)
    if isinstance(source, (str, bytes)):
        raise TypeError("callback registry must be a mapping or a collection of hook names")
    return MappingCallbackRegistry({hook: 1 for hook in source})


def resolve_interval(registry: Mapping[str, Any] | None, schedule: str) -> int | None:
    """Look up the interval of a named recurrence.

    Registry entries may be mappings with an ``interval`` key or objects with
    an ``interval`` attribute. Unknown names and unusable intervals give
    ``None``.
    """
    if not schedule or not isinstance(registry, Mapping):
        return None
    definition = registry.get(schedule)
    if definition is None:
        return None
    if isinstance(definition, Mapping):
        interval = definition.get("interval")
    else:
        interval = getattr(definition, "interval", None)
    if interval is None or isinstance(interval, bool):
        return None
    try:
        return int(interval)
    except (TypeError, ValueError, OverflowError):
        return None
