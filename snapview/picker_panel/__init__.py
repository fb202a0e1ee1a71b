"""Directory picker dialog used to choose a restore destination."""

from .key_dispatch import PickerOutcome, handle_picker_key
from .picker import DialogFocus, DirectoryPicker, expand_tilde, list_subdirectories, resolve_listing_dir

__all__ = [
    "DialogFocus",
    "DirectoryPicker",
    "PickerOutcome",
    "expand_tilde",
    "handle_picker_key",
    "list_subdirectories",
    "resolve_listing_dir",
]
