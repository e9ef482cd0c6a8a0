"""Camera pose used by the preview and the selector for the two camera tracks."""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

import numpy as np

from chart import Chart, GraphPoint
from config import FIELD_OF_VIEW, TRACK_LENGTH

NEAR_PLANE = 0.01


class CameraPaths(Enum):
    ZOOM = "zoom"
    ROTATION_X = "rotation_x"

    @property
    def label(self) -> str:
        return "Radius" if self is CameraPaths.ZOOM else "Angle"

    @property
    def noun(self) -> str:
        """Lower case name used in action descriptions."""
        return "radius" if self is CameraPaths.ZOOM else "angle"


def field_of(path: CameraPaths, chart: Chart) -> List[GraphPoint]:
    """Return the keyframe list ``path`` selects in ``chart``."""
    return getattr(chart.camera, path.value)


# ---------------------------------------------------------------------------
# Matrix helpers
# ---------------------------------------------------------------------------


def _normalize(v: np.ndarray) -> np.ndarray:
    n = np.linalg.norm(v)
    if n < 1e-12:
        return v
    return v / n


def rotation_y(degrees: float) -> np.ndarray:
    s = math.sin(math.radians(degrees))
    c = math.cos(math.radians(degrees))
    return np.array(
        [
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def look_at(eye: np.ndarray, target: np.ndarray, up: np.ndarray) -> np.ndarray:
    """Right handed view matrix looking from ``eye`` towards ``target``."""
    forward = _normalize(target - eye)
    right = _normalize(np.cross(forward, up))
    up = np.cross(right, forward)
    return np.array(
        [
            [right[0], right[1], right[2], -right.dot(eye)],
            [up[0], up[1], up[2], -up.dot(eye)],
            [-forward[0], -forward[1], -forward[2], forward.dot(eye)],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def perspective_infinite(fov_y: float, aspect: float, near: float) -> np.ndarray:
    """Right handed perspective projection with the far plane at infinity.

    ``fov_y`` is the vertical field of view in radians.
    """
    f = 1.0 / math.tan(fov_y / 2.0)
    return np.array(
        [
            [f / aspect, 0.0, 0.0, 0.0],
            [0.0, f, 0.0, 0.0],
            [0.0, 0.0, -1.0, -2.0 * near],
            [0.0, 0.0, -1.0, 0.0],
        ]
    )


# ---------------------------------------------------------------------------
# Camera pose
# ---------------------------------------------------------------------------


@dataclass
class ChartCamera:
    """Orbit camera around ``center``.

    ``angle`` is measured from straight down: ``0`` looks down onto the track,
    negative values swing the camera behind the judgement line towards the
    horizon.  ``tilt`` rolls the view around its forward axis.
    """

    center: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    angle: float = -45.0
    fov: float = FIELD_OF_VIEW
    radius: float = 1.0
    tilt: float = 0.0
    track_length: float = TRACK_LENGTH

    def eye(self) -> np.ndarray:
        theta = math.radians(self.angle)
        offset = np.array([math.sin(theta), math.cos(theta), 0.0]) * self.radius
        return np.asarray(self.center, dtype=float) + offset

    def up(self) -> np.ndarray:
        theta = math.radians(self.angle)
        up = np.array([math.cos(theta), -math.sin(theta), 0.0])
        if abs(self.tilt) > 0.0:
            # roll around the viewing direction (Rodrigues)
            k = _normalize(np.asarray(self.center, dtype=float) - self.eye())
            phi = math.radians(self.tilt)
            up = (
                up * math.cos(phi)
                + np.cross(k, up) * math.sin(phi)
                + k * k.dot(up) * (1.0 - math.cos(phi))
            )
        return up

    def matrix(self, size: Tuple[float, float]) -> Tuple[np.ndarray, np.ndarray]:
        """Return ``(projection, view)`` for a viewport of ``size`` pixels."""
        width, height = size
        aspect = max(width, 1.0) / max(height, 1.0)
        projection = perspective_infinite(math.radians(self.fov), aspect, NEAR_PLANE)
        view = look_at(self.eye(), np.asarray(self.center, dtype=float), self.up())
        return projection, view


def build_camera(radius_value: float, angle_value: float) -> ChartCamera:
    """Map the author-facing track values onto a camera pose."""
    return ChartCamera(
        center=(0.0, 0.0, 0.0),
        angle=-45.0 - 14.0 * angle_value,
        fov=FIELD_OF_VIEW,
        radius=(-radius_value + 3.1) / 2.0,
        tilt=0.0,
        track_length=TRACK_LENGTH,
    )
