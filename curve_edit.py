"""Interactive editing of a segment's ease parameters.

A press on a segment's control handle starts a drag; pointer movement
re-derives ``(a, b)`` from the pointer's tick and lane; releasing hands the
result back so it can be committed as an undoable action.  Nothing here
touches the chart.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from chart import GraphPoint
from config import HANDLE_RADIUS, LANE_COUNT, VALUE_RANGE
from easing import EPSILON, ease_of, start_value

logger = logging.getLogger(__name__)


@dataclass
class EditSession:
    segment_index: int
    a: float
    b: float


def _clamp01(x: float) -> float:
    return max(0.0, min(1.0, x))


def normalize_value(v: float, value_range: Tuple[float, float] = VALUE_RANGE) -> float:
    lo, hi = value_range
    return (v - lo) / (hi - lo)


def derive_ease(start: GraphPoint, end: GraphPoint, tick_f: float, lane: float,
                current: Tuple[float, float],
                value_range: Tuple[float, float] = VALUE_RANGE) -> Tuple[float, float]:
    """Ease parameters that put the segment's handle under the pointer.

    Both results saturate to ``[0, 1]``.  When the segment has no length in
    time (or in value) the corresponding parameter keeps its ``current`` value.
    """
    a, b = current
    length = end.y - start.y
    if length > 0:
        a = _clamp01((tick_f - start.y) / length)

    s = normalize_value(start_value(start), value_range)
    e = normalize_value(end.v, value_range)
    if abs(e - s) > EPSILON:
        b = _clamp01((lane / LANE_COUNT - s) / (e - s))
    return a, b


class CurveEditSession:
    """Idle while :attr:`curving` is ``None``, dragging otherwise."""

    def __init__(self) -> None:
        self.curving: Optional[EditSession] = None

    @property
    def dragging(self) -> bool:
        return self.curving is not None

    def drag_start(self, screen, points: Sequence[GraphPoint], pos: Tuple[float, float],
                   value_range: Tuple[float, float] = VALUE_RANGE) -> bool:
        """Hit test every segment handle against ``pos``.

        Handles are not exclusive: when several lie within the pick radius the
        last segment checked wins.
        """
        for i, (start, end) in enumerate(zip(points, points[1:])):
            handle = screen.get_control_point_pos([start, end], value_range)
            if handle is None:
                continue
            if math.dist(handle, pos) < HANDLE_RADIUS:
                a, b = ease_of(start)
                self.curving = EditSession(i, a, b)
        if self.curving is not None:
            logger.debug("Curve drag started on segment %d", self.curving.segment_index)
        return self.curving is not None

    def update(self, points: Sequence[GraphPoint], tick_f: float, lane: float,
               value_range: Tuple[float, float] = VALUE_RANGE) -> None:
        if self.curving is None:
            return
        idx = self.curving.segment_index
        if idx + 1 >= len(points):
            return
        a, b = derive_ease(points[idx], points[idx + 1], tick_f, lane,
                           (self.curving.a, self.curving.b), value_range)
        self.curving = EditSession(idx, a, b)

    def drag_end(self) -> Optional[EditSession]:
        """Leave the drag and return the final session, if there was one."""
        finished, self.curving = self.curving, None
        return finished

    def preview_ease(self, segment_index: int) -> Optional[Tuple[float, float]]:
        """Provisional ease of ``segment_index`` while it is being dragged."""
        if self.curving is None or self.curving.segment_index != segment_index:
            return None
        return self.curving.a, self.curving.b
