"""Color parsing and blending for fill/stroke tweens. No engine imports."""

from __future__ import annotations

# Named colors to hex
_NAMED_COLORS = {
    "black": "#000000", "white": "#ffffff", "red": "#ff0000",
    "green": "#008000", "blue": "#0000ff", "yellow": "#ffff00",
    "gray": "#808080", "grey": "#808080", "orange": "#ffa500",
    "none": None, "transparent": None,
}

Rgba = tuple[float, float, float, float]


def parse_color(color: str | None) -> Rgba | None:
    """Parse ``#rgb``, ``#rrggbb``, ``#rrggbbaa`` or a named color to RGBA (0-255, alpha 0-1)."""
    if not color:
        return None
    color = color.strip().lower()
    if color in _NAMED_COLORS:
        mapped = _NAMED_COLORS[color]
        if mapped is None:
            return None
        color = mapped
    if not color.startswith("#"):
        return None
    color = color[1:]
    if len(color) == 3:
        color = color[0] * 2 + color[1] * 2 + color[2] * 2
    if len(color) not in (6, 8):
        return None
    try:
        r = int(color[0:2], 16)
        g = int(color[2:4], 16)
        b = int(color[4:6], 16)
        a = int(color[6:8], 16) / 255 if len(color) == 8 else 1.0
    except ValueError:
        return None
    return (float(r), float(g), float(b), a)


def is_transparent(color: str | None) -> bool:
    return color is None or color.strip().lower() in ("none", "transparent")


def format_color(rgba: Rgba) -> str:
    r, g, b, a = rgba
    channels = [max(0, min(255, round(c))) for c in (r, g, b)]
    text = "#" + "".join(f"{c:02x}" for c in channels)
    if a < 1:
        text += f"{max(0, min(255, round(a * 255))):02x}"
    return text


def mix_colors(a: str | None, b: str | None, t: float) -> str | None:
    """Blend two colors; a transparent side fades from/to the other color at zero alpha.

    Colors that cannot be parsed snap from ``a`` to ``b`` at the midpoint.
    """
    if t <= 0:
        return a
    if t >= 1:
        return b

    ca = parse_color(a)
    cb = parse_color(b)
    if ca is None and is_transparent(a) and cb is not None:
        ca = (cb[0], cb[1], cb[2], 0.0)
    if cb is None and is_transparent(b) and ca is not None:
        cb = (ca[0], ca[1], ca[2], 0.0)
    if ca is None or cb is None:
        return a if t < 0.5 else b

    return format_color(tuple(x + (y - x) * t for x, y in zip(ca, cb)))
