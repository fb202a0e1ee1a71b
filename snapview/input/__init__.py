"""Input-layer public API for key decoding and classification.

Exports are split between low-level terminal decoding (`read_key`) and the
pure classifier used by the application state machine.
"""

from .classify import (
    Action,
    Movement,
    MovementKind,
    clamp_cursor,
    classify_key,
    key_to_movement,
    movement_delta,
)
from .key_registry import KeyComboBinding, KeyComboRegistry
from .keys import KeyEvent, Modifier
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "Action",
    "KeyComboBinding",
    "KeyComboRegistry",
    "KeyEvent",
    "Modifier",
    "Movement",
    "MovementKind",
    "clamp_cursor",
    "classify_key",
    "key_to_movement",
    "movement_delta",
]
