"""Per-attribute interpolation between a matched pair of shape nodes."""

from __future__ import annotations

from collections.abc import Sequence
from numbers import Real
from typing import Any

from pathmorph.engine.easing import TimingFunction, linear
from pathmorph.engine.path_tween import PathTween
from pathmorph.models.document import LAYOUT_KINDS, NodeKind, ShapeNode
from pathmorph.utils.bezier import lerp
from pathmorph.utils.color import mix_colors

# Attributes animated on every matched pair, with the value assumed when a side omits one
TRANSFORM_DEFAULTS: dict[str, Any] = {"position": (0.0, 0.0), "scale": (1.0, 1.0), "rotation": 0.0}
STYLE_COLOR_ATTRIBUTES = ("fill", "stroke")


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def interpolate_value(a: Any, b: Any, t: float) -> Any:
    """Lerp numbers and equal-length number sequences; anything else switches at t = 0.5."""
    if t <= 0:
        return a
    if t >= 1:
        return b
    if _is_number(a) and _is_number(b):
        return lerp(float(a), float(b), t)
    if (
        isinstance(a, Sequence)
        and isinstance(b, Sequence)
        and not isinstance(a, str)
        and not isinstance(b, str)
        and len(a) == len(b)
        and all(_is_number(x) for x in a)
        and all(_is_number(y) for y in b)
    ):
        return tuple(lerp(float(x), float(y), t) for x, y in zip(a, b))
    return a if t < 0.5 else b


def tween_attributes(
    from_node: ShapeNode,
    to_node: ShapeNode,
    value: float,
    path_tween: PathTween | None = None,
    *,
    timing: TimingFunction = linear,
    include_style: bool = True,
) -> dict[str, Any]:
    """Attributes of ``from_node`` moved towards ``to_node`` at linear time ``value``.

    Plain attributes are eased with ``timing``. Path data goes through
    ``path_tween``, which eases with its own timing, when both nodes are paths
    with different data; without a tween it switches at the midpoint.
    """
    src = from_node.attributes
    dst = to_node.attributes
    t = timing(value)
    if value <= 0:
        return dict(src)
    if value >= 1:
        if path_tween is not None:
            path_tween.complete(dst.get("data", ""))
        return dict(dst)

    result = dict(src)

    for name, default in TRANSFORM_DEFAULTS.items():
        if name in src or name in dst:
            result[name] = interpolate_value(src.get(name, default), dst.get(name, default), t)

    if from_node.kind == NodeKind.PATH and to_node.kind == NodeKind.PATH:
        from_data = src.get("data", "")
        to_data = dst.get("data", "")
        if from_data != to_data:
            if path_tween is not None:
                result["data"] = path_tween.sample(from_data, to_data, value)
            else:
                result["data"] = from_data if t < 0.5 else to_data

    if from_node.kind in LAYOUT_KINDS and to_node.kind in LAYOUT_KINDS:
        if "size" in src or "size" in dst:
            result["size"] = interpolate_value(src.get("size"), dst.get("size", src.get("size")), t)

    if include_style:
        for name in STYLE_COLOR_ATTRIBUTES:
            if name in src or name in dst:
                result[name] = mix_colors(src.get(name), dst.get(name), t)
        if "line_width" in src or "line_width" in dst:
            result["line_width"] = interpolate_value(
                src.get("line_width", 0.0), dst.get("line_width", 0.0), t
            )

    return result
