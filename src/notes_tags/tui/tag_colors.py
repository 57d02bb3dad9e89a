"""Tag color palette using golden-angle spacing in HSL space.

Each tagged entry gets a color triple by its position in the entry list;
untagged entries ("General Notes") get a neutral triple. Golden angle
(137.508°) keeps consecutive entries far apart on the wheel.

Three lightness levels per hue:
  - Foreground (L≈0.70) — tag label text on dark backgrounds
  - Background (L≈0.18) — hovered row / active tab highlight
  - Border (L≈0.40) — text area and preview frame
"""

import colorsys
from dataclasses import dataclass

GOLDEN_ANGLE = 137.508
PALETTE_SIZE = 6


@dataclass(frozen=True)
class TagColors:
    fg: str
    bg: str
    border: str


NEUTRAL = TagColors(fg="#9E9E9E", bg="#262626", border="#4D4D4D")


def _hsl_to_hex(h: float, s: float, lightness: float) -> str:
    """Convert HSL (h in 0-360, s/lightness in 0-1) to #RRGGBB hex string."""
    r, g, b = colorsys.hls_to_rgb((h % 360) / 360.0, lightness, s)
    return "#{:02X}{:02X}{:02X}".format(
        int(round(r * 255)),
        int(round(g * 255)),
        int(round(b * 255)),
    )


def build_palette(seed_hue: float, size: int = PALETTE_SIZE) -> tuple[TagColors, ...]:
    """Generate size color triples starting at seed_hue."""
    hues = [(seed_hue + i * GOLDEN_ANGLE) % 360 for i in range(size)]
    return tuple(
        TagColors(
            fg=_hsl_to_hex(h, 0.75, 0.70),
            bg=_hsl_to_hex(h, 0.45, 0.18),
            border=_hsl_to_hex(h, 0.55, 0.40),
        )
        for h in hues
    )


class TagPalette:
    """Index → colors lookup, cycling through the generated palette."""

    def __init__(self, seed_hue: float = 230.0, size: int = PALETTE_SIZE):
        self.seed_hue = seed_hue
        self._colors = build_palette(seed_hue, size)

    def __len__(self) -> int:
        return len(self._colors)

    def color_for(self, index: int, has_tag: bool) -> TagColors:
        if not has_tag:
            return NEUTRAL
        return self._colors[index % len(self._colors)]
