"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the listing, status lines and help screen.
Syntax highlighting style for ``visu`` remains a separate setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    header: str
    divider: str
    listing_ref: str
    listing_dir: str
    listing_text: str
    listing_other: str
    status_label: str
    annotation: str
    error: str
    prompt: str
    help_heading: str
    help_key: str
    help_dim: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    header="\033[36m",
    divider="\033[2m",
    listing_ref="\033[38;5;244m",
    listing_dir="\033[33m",
    listing_text="\033[32m",
    listing_other="\033[31m",
    status_label="\033[1;38;5;81m",
    annotation="\033[38;5;229m",
    error="\033[1;31m",
    prompt="\033[1m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
    help_dim="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    header="\033[1;38;5;45m",
    divider="\033[2;38;5;31m",
    listing_ref="\033[38;5;73m",
    listing_dir="\033[1;38;5;45m",
    listing_text="\033[38;5;117m",
    listing_other="\033[38;5;215m",
    status_label="\033[1;38;5;45m",
    annotation="\033[38;5;153m",
    error="\033[1;38;5;203m",
    prompt="\033[1;38;5;39m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
    help_dim="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    header="",
    divider="",
    listing_ref="",
    listing_dir="",
    listing_text="",
    listing_other="",
    status_label="",
    annotation="",
    error="",
    prompt="",
    help_heading="",
    help_key="",
    help_dim="",
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
