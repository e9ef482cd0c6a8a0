"""3D camera preview of the note track.

The track is described as flat coloured rectangles in its own 2D frame
(``x`` across the lanes, ``y`` along the track starting at the judgement line)
and projected through a :class:`camera.ChartCamera` into a screen rectangle.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np
import pygame

from camera import ChartCamera, rotation_y
from config import PREVIEW_ASPECT, PREVIEW_MIN_SIZE, TRACK_LENGTH, TRACK_WIDTH

Colour = Tuple[int, int, int]
Rect = Tuple[float, float, float, float]  # left, top, width, height

# Smallest |w| allowed before the perspective divide.
MIN_W = 1e-6


@dataclass
class Vertex:
    pos: Tuple[float, float]
    uv: Tuple[float, float] = (0.0, 0.0)
    colour: Colour = (255, 255, 255)


@dataclass
class Mesh:
    vertices: List[Vertex] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    texture_id: int = 0

    def add_colored_rect(self, min_pos: Tuple[float, float], max_pos: Tuple[float, float],
                         colour: Colour) -> None:
        """Append a rectangle as two triangles."""
        idx = len(self.vertices)
        (x0, y0), (x1, y1) = min_pos, max_pos
        self.vertices += [
            Vertex((x0, y0), (0.0, 0.0), colour),
            Vertex((x1, y0), (1.0, 0.0), colour),
            Vertex((x0, y1), (0.0, 1.0), colour),
            Vertex((x1, y1), (1.0, 1.0), colour),
        ]
        self.indices += [idx, idx + 1, idx + 2, idx + 2, idx + 1, idx + 3]

    def triangles(self):
        for i in range(0, len(self.indices) - 2, 3):
            yield self.indices[i], self.indices[i + 1], self.indices[i + 2]


def viewport_size(available_width: float,
                  desired_size: Tuple[float, float] = PREVIEW_MIN_SIZE) -> Tuple[float, float]:
    """Fill the available width (never below the desired width) at 16:9."""
    width = max(available_width, desired_size[0])
    return width, width / PREVIEW_ASPECT


def track_mesh(length: float = TRACK_LENGTH, width: float = TRACK_WIDTH) -> Mesh:
    left = -(width / 2.0)
    right = width / 2.0
    mesh = Mesh()

    mesh.add_colored_rect((left, 0.0), (right, length), (50, 50, 50))
    # lane dividers
    for i in range(5):
        x = left + (i + 1.0) * width / 6.0
        mesh.add_colored_rect((x - 0.01, 0.0), (x + 0.01, length), (100, 100, 100))
    # laser lanes; the view is seen from behind so local left ends up on screen right
    mesh.add_colored_rect((left, 0.0), (left + width / 6.0, length), (255, 0, 100))
    mesh.add_colored_rect((right - width / 6.0, 0.0), (right, length), (0, 100, 255))
    # judgement line
    mesh.add_colored_rect((left, -0.01), (right, 0.01), (255, 0, 0))
    return mesh


def project_points(points: Sequence[Tuple[float, float]], camera: ChartCamera,
                   view_rect: Rect) -> np.ndarray:
    """Project track-local 2D points into screen pixels.

    Returns an ``(N, 2)`` array.  Points are laid flat as ``(x, 0, y)``, turned
    90 degrees about the vertical axis so the track runs along the camera's
    forward axis, then pushed through view and projection.
    """
    left, top, width, height = view_rect
    if len(points) == 0:
        return np.zeros((0, 2))
    projection, view = camera.matrix((width, height))
    transform = projection @ view @ rotation_y(90.0)

    local = np.asarray(points, dtype=float).reshape(-1, 2)
    homogeneous = np.column_stack(
        [local[:, 0], np.zeros(len(local)), local[:, 1], np.ones(len(local))]
    )
    clip = homogeneous @ transform.T
    w = clip[:, 3]
    w = np.where(np.abs(w) < MIN_W, np.copysign(MIN_W, w), w)
    ndc = clip[:, :2] / w[:, None]
    ndc[:, 1] *= -1.0
    unit = (ndc + 1.0) / 2.0
    return np.column_stack([unit[:, 0] * width + left, unit[:, 1] * height + top])


def _clamp_pixel(pos: Tuple[float, float], limit: float = 1e5) -> Tuple[float, float]:
    # pygame rejects coordinates outside the C int range
    return max(-limit, min(limit, pos[0])), max(-limit, min(limit, pos[1]))


class CameraView:
    """Collects meshes and renders them through a camera."""

    def __init__(self, desired_size: Tuple[float, float], camera: ChartCamera) -> None:
        self.desired_size = desired_size
        self.camera = camera
        self.meshes: List[Mesh] = []

    def add_track(self) -> None:
        self.meshes.append(track_mesh(self.camera.track_length))

    def add_mesh(self, mesh: Mesh) -> None:
        self.meshes.append(mesh)

    def layout(self, left: float, top: float, available_width: float) -> Rect:
        width, height = viewport_size(available_width, self.desired_size)
        return left, top, width, height

    def project(self, view_rect: Rect) -> List[Mesh]:
        """Screen space copies of the meshes; only positions change."""
        out = []
        for mesh in self.meshes:
            screen = project_points([v.pos for v in mesh.vertices], self.camera, view_rect)
            vertices = [
                Vertex((float(p[0]), float(p[1])), v.uv, v.colour)
                for p, v in zip(screen, mesh.vertices)
            ]
            out.append(Mesh(vertices, list(mesh.indices), mesh.texture_id))
        return out

    def draw(self, surface: pygame.Surface, view_rect: Rect) -> None:
        rect = pygame.Rect(*(int(round(c)) for c in view_rect))
        previous_clip = surface.get_clip()
        surface.set_clip(rect)
        pygame.draw.rect(surface, (0, 0, 0), rect)
        for mesh in self.project(view_rect):
            for i0, i1, i2 in mesh.triangles():
                tri = [_clamp_pixel(mesh.vertices[i].pos) for i in (i0, i1, i2)]
                pygame.draw.polygon(surface, mesh.vertices[i0].colour, tri)
        surface.set_clip(previous_clip)
