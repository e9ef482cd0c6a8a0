"""Timeline view of a camera track.

Ticks run left to right, values bottom to top.  The vertical axis is also
expressed in *lanes*: ``0`` at the bottom edge and :data:`config.LANE_COUNT`
at the top, so a value maps to the same normalised position whether it is
read as a value or as a lane.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import pygame

from chart import GraphPoint
from config import LANE_COUNT, VALUE_RANGE
from easing import control_point, sample_segment, value_at

Colour = Tuple[int, int, int]


@dataclass
class ScreenState:
    left: float
    top: float
    width: float
    height: float
    tick_offset: float = 0.0
    ticks_per_pixel: float = 2.0

    # ------------------------------------------------------------------
    # Coordinate transforms
    # ------------------------------------------------------------------
    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.left), int(self.top), int(self.width), int(self.height))

    def visible_ticks(self) -> Tuple[float, float]:
        return self.tick_offset, self.tick_offset + self.width * self.ticks_per_pixel

    def tick_to_x(self, tick: float) -> float:
        return self.left + (tick - self.tick_offset) / self.ticks_per_pixel

    def x_to_tick(self, x: float) -> float:
        return self.tick_offset + (x - self.left) * self.ticks_per_pixel

    def value_to_y(self, value: float, value_range: Tuple[float, float] = VALUE_RANGE) -> float:
        lo, hi = value_range
        return self.bottom - (value - lo) / (hi - lo) * self.height

    def pos_to_tick_lane(self, pos: Tuple[float, float]) -> Tuple[float, float]:
        """Pointer position as ``(tick_f, lane)``."""
        x, y = pos
        lane = (self.bottom - y) / self.height * LANE_COUNT
        return self.x_to_tick(x), lane

    def to_screen(self, tick: float, value: float,
                  value_range: Tuple[float, float] = VALUE_RANGE) -> Tuple[float, float]:
        return self.tick_to_x(tick), self.value_to_y(value, value_range)

    def contains(self, pos: Tuple[float, float]) -> bool:
        x, y = pos
        return self.left <= x < self.left + self.width and self.top <= y < self.bottom

    # ------------------------------------------------------------------
    # Curve services
    # ------------------------------------------------------------------
    def get_control_point_pos(
        self,
        points: Sequence[GraphPoint],
        value_range: Tuple[float, float] = VALUE_RANGE,
        ease: Optional[Tuple[float, float]] = None,
    ) -> Optional[Tuple[float, float]]:
        """Screen position of the shape handle of segment ``points[0..2]``.

        ``None`` when the segment has no length or the handle is scrolled out
        of view.
        """
        if len(points) < 2:
            return None
        handle = control_point(points[0], points[1], ease)
        if handle is None:
            return None
        tick, value = handle
        first, last = self.visible_ticks()
        if not first <= tick <= last:
            return None
        return self.to_screen(tick, value, value_range)

    def draw_graph(self, points: Sequence[GraphPoint], surface: pygame.Surface,
                   value_range: Tuple[float, float], colour: Colour, width: int = 1) -> None:
        if not points:
            return
        line = []
        for px in range(int(self.width) + 1):
            tick = self.x_to_tick(self.left + px)
            line.append((self.left + px, self.value_to_y(value_at(points, tick), value_range)))
        pygame.draw.lines(surface, colour, False, line, width)
        for point in points:
            x, y = self.to_screen(point.y, point.v, value_range)
            if self.left <= x <= self.left + self.width:
                pygame.draw.circle(surface, colour, (int(x), int(y)), 3)

    def draw_graph_segmented(self, points: Sequence[GraphPoint], surface: pygame.Surface,
                             value_range: Tuple[float, float], colour: Colour,
                             ease: Optional[Tuple[float, float]] = None, width: int = 1) -> None:
        """Draw consecutive segments, optionally overriding their ease."""
        for start, end in zip(points, points[1:]):
            if end.y <= start.y:
                continue
            line = [
                self.to_screen(tick, value, value_range)
                for tick, value in sample_segment(start, end, 60, ease)
            ]
            pygame.draw.lines(surface, colour, False, line, width)
