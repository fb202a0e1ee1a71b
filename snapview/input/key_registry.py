"""Reusable key-combo registry primitives."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .keys import KeyEvent


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single action callback."""

    combos: tuple[str, ...]
    handler: Callable[[], object]


class KeyComboRegistry:
    """Small key-dispatch table keyed by ``KeyEvent.token``."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], object]] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing handlers for same combos."""
        for combo in binding.combos:
            self._handlers[combo] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def handles(self, event: KeyEvent) -> bool:
        return event.token in self._handlers

    def dispatch(self, event: KeyEvent) -> tuple[bool, object]:
        """Invoke the handler bound to ``event``.

        Returns ``(handled, handler_result)``.
        """
        handler = self._handlers.get(event.token)
        if handler is None:
            return False, None
        return True, handler()
