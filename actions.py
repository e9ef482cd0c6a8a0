"""Undoable edits to a chart.

Tools never change the chart they are shown.  They register an :class:`Action`
(a description plus a function applied to the chart) with the
:class:`ActionStack`, which applies it to a copy and keeps the previous state
for undo.  The concrete edits the camera tool produces are the small command
dataclasses at the bottom of this module.
"""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from camera import CameraPaths, field_of
from chart import Chart, GraphPoint, sort_track
from config import DEFAULT_EASE

logger = logging.getLogger(__name__)


class ActionError(RuntimeError):
    """Raised by an action that cannot be applied."""


def _noop(chart: Chart) -> None:
    return None


@dataclass
class Action:
    description: str = ""
    action: Callable[[Chart], None] = _noop


class ActionStack:
    def __init__(self, chart: Chart) -> None:
        self._current = chart
        self._pending: List[Action] = []
        self._undo: List[tuple[Chart, str]] = []
        self._redo: List[tuple[Chart, str]] = []

    def new_action(self) -> Action:
        """Register an empty action; fill in ``description`` and ``action``."""
        handle = Action()
        self._pending.append(handle)
        return handle

    def commit(self) -> None:
        pending, self._pending = self._pending, []
        for handle in pending:
            updated = copy.deepcopy(self._current)
            try:
                handle.action(updated)
            except ActionError as exc:
                logger.warning("Dropped action %r: %s", handle.description, exc)
                continue
            self._undo.append((self._current, handle.description))
            self._redo.clear()
            self._current = updated
            logger.info("Applied: %s", handle.description)

    def current(self) -> Chart:
        self.commit()
        return self._current

    def reset(self, chart: Chart) -> None:
        """Start over with ``chart`` and an empty history."""
        self._current = chart
        self._pending.clear()
        self._undo.clear()
        self._redo.clear()

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def undo(self) -> Optional[str]:
        self.commit()
        if not self._undo:
            return None
        previous, description = self._undo.pop()
        self._redo.append((self._current, description))
        self._current = previous
        logger.info("Undo: %s", description)
        return description

    def redo(self) -> Optional[str]:
        self.commit()
        if not self._redo:
            return None
        following, description = self._redo.pop()
        self._undo.append((self._current, description))
        self._current = following
        logger.info("Redo: %s", description)
        return description


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CommitCurveEdit:
    path: CameraPaths
    index: int
    a: float
    b: float

    @property
    def description(self) -> str:
        return f"Edit curve for camera {self.path.noun}."

    def __call__(self, chart: Chart) -> None:
        graph = field_of(self.path, chart)
        if not 0 <= self.index < len(graph):
            # the track changed under the drag; nothing to edit
            return
        graph[self.index].a = self.a
        graph[self.index].b = self.b


@dataclass(frozen=True)
class AddKeyframe:
    path: CameraPaths
    tick: int
    value: float

    @property
    def description(self) -> str:
        return f"Added camera {self.path.noun} keyframe."

    def __call__(self, chart: Chart) -> None:
        graph = field_of(self.path, chart)
        graph.append(GraphPoint(self.tick, self.value, None, DEFAULT_EASE, DEFAULT_EASE))
        sort_track(graph)


@dataclass(frozen=True)
class AddControlPoint:
    """Key whichever of radius and angle were changed; ``None`` skips one."""

    tick: int
    radius: Optional[float] = None
    angle: Optional[float] = None
    keyframes: tuple = field(init=False, repr=False, compare=False, default=())

    def __post_init__(self) -> None:
        keys = []
        if self.angle is not None:
            keys.append(AddKeyframe(CameraPaths.ROTATION_X, self.tick, self.angle))
        if self.radius is not None:
            keys.append(AddKeyframe(CameraPaths.ZOOM, self.tick, self.radius))
        object.__setattr__(self, "keyframes", tuple(keys))

    @property
    def description(self) -> str:
        return "Added camera control point."

    def __call__(self, chart: Chart) -> None:
        for key in self.keyframes:
            key(chart)
