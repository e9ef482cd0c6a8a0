"""Curve evaluation for camera tracks.

Every segment between two keyframes is shaped by two parameters ``a`` and
``b`` in the range ``[0, 1]`` stored on the segment's first keyframe.  They
are the control point of a quadratic Bezier running from ``(0, 0)`` to
``(1, 1)``: ``a`` skews time and ``b`` skews value.  ``a = b = 0.5`` is a
straight line.

The module is intentionally lightweight so it can be imported without any GUI
initialisation.
"""
from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

from chart import GraphPoint
from config import DEFAULT_EASE

EPSILON = 1e-9


def do_curve(x: float, a: float, b: float) -> float:
    """Evaluate the ease curve with control point ``(a, b)`` at ``x``.

    ``x`` is solved for the Bezier parameter ``t`` in the rationalised form
    ``t = x / (a + sqrt(a^2 + (1 - 2a) x))`` which stays finite for
    ``a = 0.5``.
    """
    x = max(0.0, min(1.0, x))
    denom = a + math.sqrt(max(0.0, a * a + (1.0 - 2.0 * a) * x))
    t = 0.0 if denom < EPSILON else x / denom
    t = max(0.0, min(1.0, t))
    return 2.0 * (1.0 - t) * t * b + t * t


def ease_of(point: GraphPoint) -> Tuple[float, float]:
    a = DEFAULT_EASE if point.a is None else point.a
    b = DEFAULT_EASE if point.b is None else point.b
    return a, b


def start_value(point: GraphPoint) -> float:
    """Value a segment starts from: the jump target if there is one."""
    return point.v if point.vf is None else point.vf


def segment_value(start: GraphPoint, end: GraphPoint, tick: float,
                  ease: Optional[Tuple[float, float]] = None) -> float:
    a, b = ease if ease is not None else ease_of(start)
    s = start_value(start)
    length = end.y - start.y
    if length <= 0:
        return end.v
    x = (tick - start.y) / length
    return s + (end.v - s) * do_curve(x, a, b)


def find_segment(points: Sequence[GraphPoint], tick: float) -> Optional[int]:
    """Index of the segment ``[k, k+1)`` containing ``tick``, if any."""
    for i in range(len(points) - 1):
        if points[i].y <= tick < points[i + 1].y:
            return i
    return None


def value_at(points: Sequence[GraphPoint], tick: float) -> float:
    """Value of a camera track at ``tick``."""
    if not points:
        return 0.0
    first = points[0]
    if tick < first.y:
        return first.v
    last = points[-1]
    if tick >= last.y:
        return start_value(last)
    idx = find_segment(points, tick)
    if idx is None:
        return start_value(last)
    return segment_value(points[idx], points[idx + 1], tick)


def control_point(start: GraphPoint, end: GraphPoint,
                  ease: Optional[Tuple[float, float]] = None) -> Optional[Tuple[float, float]]:
    """``(tick, value)`` of the segment's shape handle.

    Returns ``None`` for a zero-length segment.
    """
    if end.y <= start.y:
        return None
    a, b = ease if ease is not None else ease_of(start)
    s = start_value(start)
    return start.y + a * (end.y - start.y), s + b * (end.v - s)


def sample_segment(start: GraphPoint, end: GraphPoint, samples: int = 60,
                   ease: Optional[Tuple[float, float]] = None) -> List[Tuple[float, float]]:
    """Return ``(tick, value)`` pairs along one segment, both ends included."""
    if samples < 2:
        samples = 2
    out = []
    for i in range(samples):
        tick = start.y + (end.y - start.y) * i / (samples - 1)
        out.append((tick, segment_value(start, end, tick, ease)))
    return out
