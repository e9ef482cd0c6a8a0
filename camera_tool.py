"""Camera tool: edits the radius and angle tracks of a chart.

The tool owns the slider values, the per-parameter dirty flags, which track
is on display and the curve drag in progress.  All chart changes go through
the :class:`actions.ActionStack`.
"""
from __future__ import annotations

import logging
import sys
from typing import List, Optional, Tuple

import pygame

from actions import ActionStack, AddControlPoint, CommitCurveEdit
from camera import CameraPaths, ChartCamera, build_camera, field_of
from chart import Chart, GraphPoint
from config import HANDLE_RADIUS, VALUE_RANGE
from curve_edit import CurveEditSession
from easing import value_at
from screen import ScreenState

logger = logging.getLogger(__name__)

LINE_COLOURS = {
    CameraPaths.ZOOM: (255, 255, 0),
    CameraPaths.ROTATION_X: (0, 255, 255),
}
HANDLE_IDLE = (0, 0, 255)
HANDLE_ACTIVE = (0, 255, 0)


def _clamp_value(v: float) -> float:
    lo, hi = VALUE_RANGE
    return max(lo, min(hi, v))


class CameraTool:
    def __init__(self) -> None:
        self.radius = 0.0
        self.angle = 0.0
        self.radius_dirty = False
        self.angle_dirty = False
        self.display_line = CameraPaths.ZOOM
        self.session = CurveEditSession()

    def current_graph(self, chart: Chart) -> List[GraphPoint]:
        return field_of(self.display_line, chart)

    # ------------------------------------------------------------------
    # Sliders
    # ------------------------------------------------------------------
    def sync(self, chart: Chart, cursor_tick: float) -> None:
        """Follow the tracks at the cursor for every parameter not edited yet."""
        if not self.radius_dirty:
            self.radius = value_at(chart.camera.zoom, cursor_tick)
        if not self.angle_dirty:
            self.angle = value_at(chart.camera.rotation_x, cursor_tick)

    def set_radius(self, value: float) -> None:
        value = _clamp_value(value)
        if abs(value - self.radius) > sys.float_info.epsilon:
            self.radius_dirty = True
        self.radius = value

    def set_angle(self, value: float) -> None:
        value = _clamp_value(value)
        if abs(value - self.angle) > sys.float_info.epsilon:
            self.angle_dirty = True
        self.angle = value

    def camera(self) -> ChartCamera:
        return build_camera(self.radius, self.angle)

    def add_control_point(self, actions: ActionStack, cursor_tick: int) -> Optional[AddControlPoint]:
        """Key the edited slider values at the cursor."""
        if not (self.radius_dirty or self.angle_dirty):
            logger.debug("Add control point ignored, no parameter changed")
            return None
        command = AddControlPoint(
            tick=int(cursor_tick),
            radius=self.radius if self.radius_dirty else None,
            angle=self.angle if self.angle_dirty else None,
        )
        handle = actions.new_action()
        handle.description = command.description
        handle.action = command
        self.radius_dirty = False
        self.angle_dirty = False
        return command

    # ------------------------------------------------------------------
    # Curve dragging
    # ------------------------------------------------------------------
    def drag_start(self, screen: ScreenState, pos: Tuple[float, float], chart: Chart) -> bool:
        return self.session.drag_start(screen, self.current_graph(chart), pos, VALUE_RANGE)

    def update(self, tick_f: float, lane: float, chart: Chart) -> None:
        self.session.update(self.current_graph(chart), tick_f, lane, VALUE_RANGE)

    def drag_end(self, actions: ActionStack) -> Optional[CommitCurveEdit]:
        finished = self.session.drag_end()
        if finished is None:
            return None
        command = CommitCurveEdit(self.display_line, finished.segment_index, finished.a, finished.b)
        handle = actions.new_action()
        handle.description = command.description
        handle.action = command
        return command

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------
    def draw(self, chart: Chart, screen: ScreenState, surface: pygame.Surface) -> None:
        graph = self.current_graph(chart)
        screen.draw_graph(graph, surface, VALUE_RANGE, LINE_COLOURS[self.display_line])

        for i, (start, end) in enumerate(zip(graph, graph[1:])):
            ease = self.session.preview_ease(i)
            colour = HANDLE_IDLE if ease is None else HANDLE_ACTIVE
            pos = screen.get_control_point_pos([start, end], VALUE_RANGE, ease)
            if pos is not None:
                pygame.draw.circle(surface, colour, (int(pos[0]), int(pos[1])), int(HANDLE_RADIUS))

        curving = self.session.curving
        if curving is not None and curving.segment_index + 1 < len(graph):
            idx = curving.segment_index
            screen.draw_graph_segmented(
                graph[idx:idx + 2], surface, VALUE_RANGE, (0, 255, 0), (curving.a, curving.b)
            )
