"""Files-panel name filter: match computation and prompt key handling."""

from .matching import SearchState, compute_matches, entry_matches
from .panel import SearchPanel

__all__ = ["SearchPanel", "SearchState", "compute_matches", "entry_matches"]
