"""Chart document holding the camera keyframe tracks.

Charts are KSON-style JSON documents.  The editor only understands the two
camera tracks stored under ``camera.cam.body`` (``zoom`` for the radius and
``rotation_x`` for the angle); every other key is kept untouched in
:attr:`Chart.data` so that a load/save cycle does not lose information.

Keyframes serialise field-for-field as ``{"y", "v", "vf", "a", "b"}`` where the
last three are optional.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class ChartError(ValueError):
    """Raised when a chart file cannot be read."""


@dataclass
class GraphPoint:
    """A single keyframe of a camera track."""

    y: int
    v: float
    vf: Optional[float] = None
    a: Optional[float] = None
    b: Optional[float] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "GraphPoint":
        def opt(key: str) -> Optional[float]:
            value = raw.get(key)
            return None if value is None else float(value)

        return cls(int(raw["y"]), float(raw["v"]), opt("vf"), opt("a"), opt("b"))

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"y": self.y, "v": self.v}
        for key in ("vf", "a", "b"):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        return out


def sort_track(points: List[GraphPoint]) -> None:
    """Sort ``points`` by tick in place.

    The sort is stable: keyframes sharing a tick keep their insertion order.
    """
    points.sort(key=lambda p: p.y)


def is_sorted(points: List[GraphPoint]) -> bool:
    return all(p0.y < p1.y for p0, p1 in zip(points, points[1:]))


def _checked(point: GraphPoint, track: str) -> GraphPoint:
    """Clamp fields a stored keyframe may not hold out of range."""
    if point.y < 0:
        logger.warning("Keyframe at tick %d in %r moved to tick 0", point.y, track)
        point.y = 0
    for key in ("a", "b"):
        value = getattr(point, key)
        if value is not None and not 0.0 <= value <= 1.0:
            logger.warning("Ease %s=%s at tick %d in %r clamped to [0, 1]",
                           key, value, point.y, track)
            setattr(point, key, max(0.0, min(1.0, value)))
    return point


@dataclass
class CameraBody:
    zoom: List[GraphPoint] = field(default_factory=list)
    rotation_x: List[GraphPoint] = field(default_factory=list)


@dataclass
class Chart:
    """Container for a chart document."""

    data: Dict[str, Any] = field(default_factory=dict)
    camera: CameraBody = field(default_factory=CameraBody)
    path: Path | None = None

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------
    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: Path | None = None) -> "Chart":
        body: Any = data
        for key in ("camera", "cam", "body"):
            body = body.get(key, {})
            if not isinstance(body, dict):
                raise ChartError(f"Chart entry {key!r} must be an object")
        camera = CameraBody()
        for name in ("zoom", "rotation_x"):
            raw_points = body.get(name, [])
            if not isinstance(raw_points, list):
                raise ChartError(f"Camera track {name!r} must be a list")
            try:
                points = [_checked(GraphPoint.from_dict(p), name) for p in raw_points]
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                raise ChartError(f"Malformed camera track {name!r}: {exc}") from exc
            if not is_sorted(points):
                logger.warning("Camera track %r is not ordered by tick, sorting", name)
                sort_track(points)
            setattr(camera, name, points)
        return cls(data=data, camera=camera, path=path)

    @classmethod
    def load(cls, filename: Path) -> "Chart":
        """Parse ``filename`` and return a :class:`Chart`.

        Parameters
        ----------
        filename:
            Path to the ``.kson`` file.
        """

        try:
            with open(filename, encoding="utf-8-sig") as fp:
                data = json.load(fp)
        except OSError as exc:
            raise ChartError(f"Could not read chart {filename}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ChartError(f"Chart {filename} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ChartError(f"Chart {filename} does not contain a JSON object")
        try:
            chart = cls.from_dict(data, Path(filename))
        except ChartError as exc:
            raise ChartError(f"Chart {filename}: {exc}") from exc
        logger.info(
            "Loaded %s (%d radius / %d angle keyframes)",
            filename,
            len(chart.camera.zoom),
            len(chart.camera.rotation_x),
        )
        return chart

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def dict(self) -> Dict[str, Any]:
        """Return the document with the camera tracks written back into it."""

        out = dict(self.data)
        camera = dict(out.get("camera", {}))
        cam = dict(camera.get("cam", {}))
        body = dict(cam.get("body", {}))
        body["zoom"] = [p.to_dict() for p in self.camera.zoom]
        body["rotation_x"] = [p.to_dict() for p in self.camera.rotation_x]
        cam["body"] = body
        camera["cam"] = cam
        out["camera"] = camera
        return out

    def write(self, filename: Path | None = None) -> None:
        """Write the chart to ``filename``.

        If ``filename`` is ``None`` the path supplied to :meth:`load` is used.
        """

        dest = filename or self.path
        if dest is None:
            raise ValueError("No filename supplied for Chart.write")
        with open(dest, "w", encoding="utf-8") as fp:
            json.dump(self.dict(), fp, indent=2)
        self.path = Path(dest)
        logger.info("Saved chart to %s", dest)
