"""Navigation cache: saved directory listings for free backward navigation."""

from __future__ import annotations

from dataclasses import dataclass, field

from .model import FileEntry


@dataclass(frozen=True)
class NavigationFrame:
    """Files-panel browsing state captured right before a descent."""

    path: str
    entries: tuple[FileEntry, ...]
    cursor: int
    scroll: int


@dataclass
class NavigationCache:
    """Stack of frames scoped to one active snapshot.

    Frames are pushed on descent into a directory whose listing is on screen
    and popped on ascent; the owner clears the stack when the snapshot changes.
    """

    _frames: list[NavigationFrame] = field(default_factory=list)

    def push(self, path: str, entries: list[FileEntry], cursor: int, scroll: int) -> NavigationFrame:
        frame = NavigationFrame(path=path, entries=tuple(entries), cursor=cursor, scroll=scroll)
        self._frames.append(frame)
        return frame

    def pop(self) -> NavigationFrame | None:
        if not self._frames:
            return None
        return self._frames.pop()

    def peek(self) -> NavigationFrame | None:
        return self._frames[-1] if self._frames else None

    def clear(self) -> None:
        self._frames.clear()

    @property
    def depth(self) -> int:
        return len(self._frames)

    def __len__(self) -> int:
        return len(self._frames)

    def __bool__(self) -> bool:
        return bool(self._frames)


__all__ = ["NavigationCache", "NavigationFrame"]
