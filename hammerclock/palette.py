"""Colour palettes for the terminal interface."""

from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass(frozen=True)
class Color:
    """A 24-bit RGB colour."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if isinstance(channel, bool) or not isinstance(channel, int):
                raise ValueError("colour channels must be integers")
            if not 0 <= channel <= 255:
                raise ValueError(f"colour channel {channel} outside 0..255")

    def hex(self) -> str:
        """Return the colour as '#rrggbb'."""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def _high(self) -> str:
        # urwid's 256-colour mode takes 12-bit '#rgb' specifications.
        return "#" + "".join(f"{round(c / 17):x}" for c in (self.r, self.g, self.b))


# Nearest 16-colour fallbacks for each palette slot.
_BASIC = {
    "blue": "dark blue",
    "cyan": "light cyan",
    "white": "white",
    "dim_white": "light gray",
    "yellow": "yellow",
    "green": "dark green",
    "red": "dark red",
    "black": "black",
}


@dataclass(frozen=True)
class ColorPalette:
    """All the colours the interface uses."""

    blue: Color
    cyan: Color
    white: Color
    dim_white: Color
    yellow: Color
    green: Color
    red: Color
    black: Color

    def _entry(self, name: str, fg: str, bg: str, mono: str = "") -> tuple:
        fg_color: Color = getattr(self, fg)
        bg_color: Color = getattr(self, bg)
        return (name, _BASIC[fg], _BASIC[bg], mono, fg_color._high(), bg_color._high())

    def urwid_entries(self) -> list[tuple[str, str, str, str, str, str]]:
        """Return urwid palette entries (name, fg, bg, mono, fg_high, bg_high)."""
        entries = [
            self._entry("primary", "white", "black"),
            self._entry("secondary", "yellow", "black"),
            self._entry("tertiary", "green", "black"),
            self._entry("inverse", "red", "black"),
            self._entry("border", "cyan", "black"),
            self._entry("title", "white", "black", "bold"),
            self._entry("contrast", "white", "green", "standout"),
            self._entry("more_contrast", "black", "cyan", "standout"),
        ]
        entries.extend(self._entry(f.name, f.name, "black") for f in fields(self))
        return entries


K9S_PALETTE = ColorPalette(
    blue=Color(36, 96, 146),
    cyan=Color(0, 183, 235),
    white=Color(255, 255, 255),
    dim_white=Color(180, 180, 180),
    yellow=Color(253, 185, 19),
    green=Color(0, 200, 83),
    red=Color(255, 0, 0),
    black=Color(0, 0, 0),
)

DRACULA_PALETTE = ColorPalette(
    blue=Color(189, 147, 249),
    cyan=Color(139, 233, 253),
    white=Color(248, 248, 242),
    dim_white=Color(174, 174, 169),
    yellow=Color(241, 250, 140),
    green=Color(80, 250, 123),
    red=Color(255, 85, 85),
    black=Color(40, 42, 54),
)

MONOKAI_PALETTE = ColorPalette(
    blue=Color(102, 217, 239),
    cyan=Color(102, 217, 239),
    white=Color(248, 248, 242),
    dim_white=Color(174, 174, 169),
    yellow=Color(230, 219, 116),
    green=Color(166, 226, 46),
    red=Color(249, 38, 114),
    black=Color(39, 40, 34),
)

WARHAMMER_PALETTE = ColorPalette(
    blue=Color(38, 57, 132),
    cyan=Color(23, 155, 215),
    white=Color(255, 250, 240),
    dim_white=Color(180, 170, 150),
    yellow=Color(245, 180, 26),
    green=Color(0, 120, 50),
    red=Color(190, 0, 0),
    black=Color(10, 10, 10),
)

KILL_TEAM_PALETTE = ColorPalette(
    blue=Color(63, 81, 153),
    cyan=Color(0, 169, 157),
    white=Color(230, 230, 230),
    dim_white=Color(150, 150, 150),
    yellow=Color(255, 193, 0),
    green=Color(76, 99, 25),
    red=Color(200, 40, 40),
    black=Color(5, 5, 5),
)

_PALETTES: dict[str, ColorPalette] = {
    "k9s": K9S_PALETTE,
    "dracula": DRACULA_PALETTE,
    "monokai": MONOKAI_PALETTE,
    "warhammer": WARHAMMER_PALETTE,
    "killteam": KILL_TEAM_PALETTE,
}


def color_palettes() -> list[str]:
    """Return the names of the available palettes."""
    return list(_PALETTES)


def color_palette_by_name(name: str) -> ColorPalette:
    """Return the palette with this name, or the k9s palette if unknown."""
    return _PALETTES.get(name, K9S_PALETTE)


def color_palette_index_by_name(name: str) -> int:
    """Return the position of the named palette, or 0 if unknown."""
    names = color_palettes()
    return names.index(name) if name in names else 0