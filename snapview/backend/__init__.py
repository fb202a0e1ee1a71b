"""Archive backend: the restic command-line client."""

from .restic import ResticClient, is_direct_child

__all__ = ["ResticClient", "is_direct_child"]
