"""Reset hooks for module-level singletons (settings, emoji resolver).

Tests call :func:`reset_all_singletons` so environment changes made through
``monkeypatch`` take effect and custom emoji registrations do not leak.
"""

from __future__ import annotations

from collections.abc import Callable

_reset_fns: list[Callable[[], None]] = []


def register_singleton(reset_fn: Callable[[], None]) -> Callable[[], None]:
    """Register *reset_fn*; returns it so it can be used as a decorator."""
    if reset_fn not in _reset_fns:
        _reset_fns.append(reset_fn)
    return reset_fn


def reset_all_singletons() -> None:
    for fn in _reset_fns:
        fn()
