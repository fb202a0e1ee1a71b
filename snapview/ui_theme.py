"""UI theme definitions and selection helpers.

Themes are ANSI palettes for panel chrome, list rows, overlays and the
status bar. ``--no-color`` always resolves to the plain palette.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    reverse: str
    border: str
    border_focused: str
    title: str
    snapshot_id: str
    snapshot_time: str
    snapshot_host: str
    snapshot_tags: str
    file_dir: str
    file_default: str
    file_size: str
    search_query: str
    log_ok: str
    log_fail: str
    log_dim: str
    status_bar: str
    status_error: str
    spinner: str
    button_focused: str
    help_heading: str
    help_key: str
    help_dim: str
    modal_border: str
    modal_title: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    border="\033[2m",
    border_focused="\033[38;5;44m",
    title="\033[1;38;5;81m",
    snapshot_id="\033[38;5;229m",
    snapshot_time="\033[38;5;252m",
    snapshot_host="\033[38;5;109m",
    snapshot_tags="\033[38;5;141m",
    file_dir="\033[1;34m",
    file_default="\033[38;5;252m",
    file_size="\033[38;5;109m",
    search_query="\033[1;38;5;81m",
    log_ok="\033[38;5;42m",
    log_fail="\033[38;5;203m",
    log_dim="\033[2;38;5;250m",
    status_bar="\033[38;5;250m",
    status_error="\033[1;38;5;203m",
    spinner="\033[1;38;5;214m",
    button_focused="\033[1;7m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
    help_dim="\033[2;38;5;250m",
    modal_border="\033[38;5;45m",
    modal_title="\033[1;38;5;45m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    border="\033[2;38;5;31m",
    border_focused="\033[38;5;39m",
    title="\033[1;38;5;45m",
    snapshot_id="\033[38;5;153m",
    snapshot_time="\033[38;5;252m",
    snapshot_host="\033[38;5;73m",
    snapshot_tags="\033[38;5;117m",
    file_dir="\033[1;38;5;45m",
    file_default="\033[38;5;252m",
    file_size="\033[38;5;73m",
    search_query="\033[1;38;5;45m",
    log_ok="\033[38;5;84m",
    log_fail="\033[38;5;215m",
    log_dim="\033[2;38;5;110m",
    status_bar="\033[38;5;110m",
    status_error="\033[1;38;5;215m",
    spinner="\033[1;38;5;39m",
    button_focused="\033[1;7m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
    help_dim="\033[2;38;5;110m",
    modal_border="\033[38;5;39m",
    modal_title="\033[1;38;5;39m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    reverse="\033[7m",
    border="",
    border_focused="",
    title="",
    snapshot_id="",
    snapshot_time="",
    snapshot_host="",
    snapshot_tags="",
    file_dir="",
    file_default="",
    file_size="",
    search_query="",
    log_ok="",
    log_fail="",
    log_dim="",
    status_bar="",
    status_error="",
    spinner="",
    button_focused="\033[7m",
    help_heading="",
    help_key="",
    help_dim="",
    modal_border="",
    modal_title="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
