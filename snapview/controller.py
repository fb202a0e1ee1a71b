"""Application state machine.

``AppController`` is the only mutator of ``AppState`` besides the renderer's
height and scroll hints. Key handling returns at most one ``Command``; the
control loop hands it to the task orchestrator and later folds the typed
result back in through ``apply_result``.
"""

from __future__ import annotations

from collections.abc import Callable

from .commands import (
    Command,
    Download,
    FilesLoaded,
    ListSnapshots,
    LoadSnapshot,
    NavigateDir,
    Quit,
    RestoreFinished,
    SnapshotsLoaded,
    TaskResult,
)
from .debug import get_logger
from .filter_panel import SearchPanel, compute_matches
from .input.classify import Action, Movement, clamp_cursor, classify_key, is_help, is_quit, movement_delta
from .input.keys import KeyEvent
from .model import FileEntry, Snapshot, parent_entry, parent_path
from .picker_panel import DirectoryPicker, PickerOutcome, handle_picker_key
from .state import (
    HELP,
    LOADING,
    PICKING,
    READY,
    SEARCHING,
    AppState,
    Downloading,
    Error,
    Help,
    Mode,
    Panel,
    PickingDestination,
    Searching,
    is_busy,
)

logger = get_logger("controller")


class AppController:
    """Owns every mode transition of the browser."""

    def __init__(self, state: AppState | None = None) -> None:
        self.state = state if state is not None else AppState()
        self.search_panel = SearchPanel(self)
        self._action_handlers: dict[Action, Callable[[], Command | None]] = {
            Action.PANEL_SWITCH: self.switch_panel,
            Action.SELECT: self.select,
            Action.BACK: self.back,
            Action.DOWNLOAD: self.open_download_dialog,
            Action.START_SEARCH: self.start_search,
            Action.REFRESH: self.refresh,
        }

    # -- key routing -----------------------------------------------------

    def handle_key(self, event: KeyEvent) -> Command | None:
        """Apply one key press and return the command it emits, if any."""
        state = self.state
        mode = state.mode

        if isinstance(mode, PickingDestination):
            return self._handle_picker_key(event)
        if isinstance(mode, Searching):
            self.search_panel.handle_key(event)
            return None
        if isinstance(mode, Help):
            # Quit dismisses help instead of exiting.
            if is_help(event) or is_quit(event):
                self.close_help()
            return None

        action = classify_key(event)
        if action is Action.QUIT:
            state.should_quit = True
            return Quit()
        if action is Action.HELP:
            self.open_help()
            return None
        if is_busy(mode):
            return None
        if isinstance(mode, Error):
            state.mode = READY

        if isinstance(action, Movement):
            self.apply_movement(action)
            return None
        if action is None:
            return None
        return self._action_handlers[action]()

    def _handle_picker_key(self, event: KeyEvent) -> Command | None:
        state = self.state
        picker = state.picker
        if picker is None:
            state.mode = READY
            return None
        outcome = handle_picker_key(picker, event)
        if outcome is PickerOutcome.CANCEL:
            self.close_download_dialog()
            return None
        if outcome is PickerOutcome.CONFIRM:
            return self.confirm_download()
        picker.adjust_scroll(state.picker_visible_height)
        return None

    # -- help overlay ----------------------------------------------------

    def open_help(self) -> None:
        state = self.state
        state.help_return_mode = state.mode if is_busy(state.mode) else None
        state.mode = HELP

    def close_help(self) -> None:
        state = self.state
        state.mode = state.help_return_mode or READY
        state.help_return_mode = None

    def _set_mode(self, mode: Mode) -> None:
        """Change mode, or the mode underneath the help overlay while it is shown."""
        if isinstance(self.state.mode, Help):
            self.state.help_return_mode = mode
        else:
            self.state.mode = mode

    # -- movement and focus ----------------------------------------------

    def apply_movement(self, movement: Movement) -> None:
        state = self.state
        if state.focused_panel is Panel.SNAPSHOTS:
            count = len(state.snapshots)
            if count == 0:
                return
            delta = movement_delta(movement, state.snapshot_visible_height)
            state.snapshot_cursor = clamp_cursor(state.snapshot_cursor, delta, count - 1)
            return
        count = state.visible_file_count()
        if count == 0:
            return
        delta = movement_delta(movement, state.file_visible_height)
        state.file_cursor = clamp_cursor(state.file_cursor, delta, count - 1)

    def switch_panel(self) -> None:
        self.state.focused_panel = self.state.focused_panel.toggled()

    # -- navigation ------------------------------------------------------

    def select(self) -> Command | None:
        """Open the highlighted snapshot or directory."""
        state = self.state
        if state.focused_panel is Panel.SNAPSHOTS:
            snapshot = state.snapshot_at_cursor()
            if snapshot is None:
                return None
            return self._enter_snapshot(snapshot)

        entry = state.file_at_cursor()
        if entry is None or not entry.is_dir:
            return None
        if entry.is_parent:
            return self.back()
        active = state.active_snapshot
        if active is None:
            return None
        state.nav_cache.push(state.current_path, state.files, state.file_index_at_cursor(), state.file_scroll)
        state.search.clear()
        state.mode = LOADING
        logger.debug("descending into %s", entry.path)
        return NavigateDir(snapshot_id=active.id, path=entry.path)

    def _enter_snapshot(self, snapshot: Snapshot) -> Command:
        state = self.state
        root = snapshot.primary_path
        state.active_snapshot = snapshot
        state.current_path = root
        state.files = []
        state.file_cursor = 0
        state.file_scroll = 0
        state.search.clear()
        state.nav_cache.clear()
        state.focused_panel = Panel.FILES
        state.mode = LOADING
        logger.debug("opening snapshot %s at %s", snapshot.display_id, root)
        return LoadSnapshot(snapshot_id=snapshot.id, path=root)

    def back(self) -> Command | None:
        """Go to the parent directory, from the cache when it was visited."""
        state = self.state
        active = state.active_snapshot
        if state.focused_panel is not Panel.FILES or active is None:
            return None

        frame = state.nav_cache.pop()
        if frame is not None:
            state.current_path = frame.path
            state.files = list(frame.entries)
            state.file_cursor = frame.cursor
            state.file_scroll = frame.scroll
            state.search.clear()
            state.mode = READY
            return None

        if state.current_path == active.primary_path:
            return None
        parent = parent_path(state.current_path)
        if parent == state.current_path:
            return None
        state.search.clear()
        state.mode = LOADING
        return NavigateDir(snapshot_id=active.id, path=parent)

    def refresh(self) -> Command:
        """Reload the snapshot list."""
        self.state.mode = LOADING
        return ListSnapshots()

    # -- search ----------------------------------------------------------

    def start_search(self) -> None:
        state = self.state
        if state.focused_panel is not Panel.FILES or not state.files:
            return
        state.search.clear()
        state.mode = SEARCHING
        self.apply_search_filter()

    def apply_search_filter(self) -> None:
        """Recompute the match list for the current query and reset the cursor."""
        state = self.state
        state.search.matches = compute_matches(state.files, state.search.query)
        state.file_cursor = 0
        state.file_scroll = 0

    def cancel_search(self) -> None:
        state = self.state
        state.search.clear()
        state.mode = READY
        state.file_cursor = 0
        state.file_scroll = 0

    def confirm_search(self) -> None:
        self.state.mode = READY

    # -- restore destination dialog --------------------------------------

    def open_download_dialog(self) -> None:
        state = self.state
        if state.focused_panel is not Panel.FILES:
            return
        entry = state.file_at_cursor()
        if entry is None or entry.is_parent:
            return
        state.picker = DirectoryPicker.open(entry.path, state.last_download_dir)
        state.mode = PICKING

    def close_download_dialog(self) -> None:
        self.state.picker = None
        self.state.mode = READY

    def confirm_download(self) -> Command | None:
        state = self.state
        picker = state.picker
        active = state.active_snapshot
        if picker is None or active is None:
            self.close_download_dialog()
            return None
        target = picker.confirmed_path()
        state.last_download_dir = target
        self.close_download_dialog()
        return Download(snapshot_id=active.id, path=picker.source_path, target=target)

    # -- fold-in ---------------------------------------------------------

    def begin_command(self, command: Command) -> None:
        """Enter the busy mode for a command the loop has just dispatched."""
        if isinstance(command, Download):
            self._set_mode(Downloading(command.path))
        elif isinstance(command, (ListSnapshots, LoadSnapshot, NavigateDir)):
            self._set_mode(LOADING)
        else:
            return
        self.state.status_message = ""

    def set_snapshots(self, snapshots: list[Snapshot]) -> None:
        state = self.state
        highlighted = state.snapshot_at_cursor()
        state.snapshots = list(snapshots)
        state.snapshot_cursor = 0
        state.snapshot_scroll = 0
        if highlighted is not None:
            for idx, snapshot in enumerate(state.snapshots):
                if snapshot.id == highlighted.id:
                    state.snapshot_cursor = idx
                    break
        self._set_mode(READY)

    def set_files(self, entries: list[FileEntry], path: str | None = None) -> None:
        """Replace the files listing, prepending ``..`` below the snapshot root."""
        state = self.state
        if path is not None:
            state.current_path = path
        display = list(entries)
        root = state.snapshot_root
        if state.current_path and state.current_path != root:
            display.insert(0, parent_entry(state.current_path))
        state.files = display
        state.search.clear()
        state.file_cursor = 0
        state.file_scroll = 0
        self._set_mode(READY)

    def set_error(self, message: str) -> None:
        logger.warning("%s", message)
        self._set_mode(Error(message))

    def apply_result(self, result: TaskResult) -> None:
        """Fold one background result into state."""
        state = self.state
        if result.record is not None:
            state.oplog.add(result.record)

        if isinstance(result, SnapshotsLoaded):
            if result.error is not None:
                self.set_error(result.error)
            else:
                self.set_snapshots(list(result.snapshots))
            return

        if isinstance(result, FilesLoaded):
            if result.error is not None:
                frame = state.nav_cache.peek()
                # A failed descent leaves its frame on top of the listing it captured.
                if frame is not None and frame.path == state.current_path:
                    state.nav_cache.pop()
                self.set_error(result.error)
            else:
                self.set_files(list(result.entries), result.path)
            return

        if isinstance(result, RestoreFinished):
            if result.error is not None:
                self.set_error(result.error)
            else:
                state.status_message = f"Downloaded to: {result.target}"
                self._set_mode(READY)


__all__ = ["AppController"]
