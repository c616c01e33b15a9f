"""Leaf-node Bezier helpers. No engine imports."""

from __future__ import annotations

import math

from pathmorph.models.geometry import CubicSegment, Point

# Largest arc span approximated by a single cubic (radians).
_MAX_ARC_SPAN = math.pi / 2


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def lerp_point(a: Point, b: Point, t: float) -> Point:
    return (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)


def line_to_cubic(p0: Point, p1: Point) -> CubicSegment:
    """Exact degree elevation of a straight line: controls at 1/3 and 2/3 of the chord."""
    x0, y0 = p0
    x1, y1 = p1
    return CubicSegment(
        (x0, y0),
        (x0 + (x1 - x0) / 3, y0 + (y1 - y0) / 3),
        (x0 + 2 * (x1 - x0) / 3, y0 + 2 * (y1 - y0) / 3),
        (x1, y1),
    )


def quad_to_cubic(p0: Point, control: Point, p1: Point) -> CubicSegment:
    """Exact degree elevation of a quadratic Bezier."""
    x0, y0 = p0
    cx, cy = control
    x1, y1 = p1
    return CubicSegment(
        (x0, y0),
        (x0 + 2 * (cx - x0) / 3, y0 + 2 * (cy - y0) / 3),
        (x1 + 2 * (cx - x1) / 3, y1 + 2 * (cy - y1) / 3),
        (x1, y1),
    )


def _vector_angle(ux: float, uy: float, vx: float, vy: float) -> float:
    """Signed angle from u to v."""
    dot = ux * vx + uy * vy
    length = math.sqrt((ux * ux + uy * uy) * (vx * vx + vy * vy))
    if length == 0:
        return 0.0
    angle = math.acos(max(-1.0, min(1.0, dot / length)))
    if ux * vy - uy * vx < 0:
        angle = -angle
    return angle


def arc_to_cubics(
    p0: Point,
    rx: float,
    ry: float,
    x_rotation: float,
    large_arc: bool,
    sweep: bool,
    p1: Point,
) -> list[CubicSegment]:
    """Approximate an SVG elliptical arc with cubics spanning at most 90 degrees each.

    Follows the endpoint-to-center conversion of SVG 1.1 appendix F.6.
    ``x_rotation`` is in degrees.
    """
    rx, ry = abs(rx), abs(ry)
    if rx == 0 or ry == 0:
        return [line_to_cubic(p0, p1)]

    x0, y0 = p0
    x1, y1 = p1
    phi = math.radians(x_rotation)
    sin_phi = math.sin(phi)
    cos_phi = math.cos(phi)

    # Midpoint in the ellipse's rotated frame
    xp = cos_phi * (x0 - x1) / 2 + sin_phi * (y0 - y1) / 2
    yp = -sin_phi * (x0 - x1) / 2 + cos_phi * (y0 - y1) / 2

    rx_sq = rx * rx
    ry_sq = ry * ry
    xp_sq = xp * xp
    yp_sq = yp * yp

    # Radii too small for the chord: scale up uniformly
    lam = xp_sq / rx_sq + yp_sq / ry_sq
    if lam > 1:
        s = math.sqrt(lam)
        rx *= s
        ry *= s
        rx_sq = rx * rx
        ry_sq = ry * ry

    denom = rx_sq * yp_sq + ry_sq * xp_sq
    if denom == 0:
        return [line_to_cubic(p0, p1)]

    coef = math.sqrt(max(0.0, (rx_sq * ry_sq - denom) / denom))
    if large_arc == sweep:
        coef = -coef

    cxp = coef * rx * yp / ry
    cyp = -coef * ry * xp / rx

    cx = cos_phi * cxp - sin_phi * cyp + (x0 + x1) / 2
    cy = sin_phi * cxp + cos_phi * cyp + (y0 + y1) / 2

    theta1 = _vector_angle(1, 0, (xp - cxp) / rx, (yp - cyp) / ry)
    dtheta = _vector_angle(
        (xp - cxp) / rx,
        (yp - cyp) / ry,
        (-xp - cxp) / rx,
        (-yp - cyp) / ry,
    )
    if not sweep and dtheta > 0:
        dtheta -= 2 * math.pi
    elif sweep and dtheta < 0:
        dtheta += 2 * math.pi

    pieces = max(1, math.ceil(abs(dtheta) / _MAX_ARC_SPAN))
    span = dtheta / pieces
    alpha = 4 / 3 * math.tan(span / 4)

    def to_user(x: float, y: float) -> Point:
        return (cos_phi * x - sin_phi * y + cx, sin_phi * x + cos_phi * y + cy)

    result: list[CubicSegment] = []
    for i in range(pieces):
        a1 = theta1 + i * span
        a2 = theta1 + (i + 1) * span
        cos1, sin1 = math.cos(a1), math.sin(a1)
        cos2, sin2 = math.cos(a2), math.sin(a2)

        e1 = (rx * cos1, ry * sin1)
        e2 = (rx * cos2, ry * sin2)
        c1 = (e1[0] - alpha * rx * sin1, e1[1] + alpha * ry * cos1)
        c2 = (e2[0] + alpha * rx * sin2, e2[1] - alpha * ry * cos2)

        result.append(CubicSegment(to_user(*e1), to_user(*c1), to_user(*c2), to_user(*e2)))

    # Pin the exact endpoints so the path stays continuous
    first = result[0]
    result[0] = CubicSegment(p0, first.p1, first.p2, first.p3)
    last = result[-1]
    result[-1] = CubicSegment(last.p0, last.p1, last.p2, p1)
    return result


def split_cubic_at(seg: CubicSegment, t: float) -> tuple[CubicSegment, CubicSegment]:
    """De Casteljau split at parameter ``t``; the halves retrace the original exactly."""
    a = lerp_point(seg.p0, seg.p1, t)
    b = lerp_point(seg.p1, seg.p2, t)
    c = lerp_point(seg.p2, seg.p3, t)
    d = lerp_point(a, b, t)
    e = lerp_point(b, c, t)
    f = lerp_point(d, e, t)
    return CubicSegment(seg.p0, a, d, f), CubicSegment(f, e, c, seg.p3)


def subdivide_segment(seg: CubicSegment, pieces: int) -> list[CubicSegment]:
    """Split ``seg`` into ``pieces`` curves of equal parameter length."""
    if pieces <= 1:
        return [seg]

    result: list[CubicSegment] = []
    remaining = seg
    for i in range(pieces - 1):
        left, remaining = split_cubic_at(remaining, 1 / (pieces - i))
        result.append(left)
    result.append(remaining)
    return result


def cubic_point(seg: CubicSegment, t: float) -> Point:
    """Evaluate the Bernstein form at ``t``."""
    mt = 1 - t
    w0 = mt * mt * mt
    w1 = 3 * mt * mt * t
    w2 = 3 * mt * t * t
    w3 = t * t * t
    return (
        w0 * seg.p0[0] + w1 * seg.p1[0] + w2 * seg.p2[0] + w3 * seg.p3[0],
        w0 * seg.p0[1] + w1 * seg.p1[1] + w2 * seg.p2[1] + w3 * seg.p3[1],
    )
