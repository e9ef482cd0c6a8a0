"""Global constants for the camera editor.

Values shared by the chart model, the curve editing core and the pygame host
live here so that none of them has to be repeated across modules.
"""
from __future__ import annotations


# ---------------------------------------------------------------------------
# Camera tracks
# ---------------------------------------------------------------------------

# Author-facing range of the radius and angle tracks (slider bounds).
VALUE_RANGE: tuple[float, float] = (-3.0, 3.0)
# Width of the graph area in lanes; lane / LANE_COUNT is the normalised value.
LANE_COUNT = 6
# Ease parameters used when a keyframe does not store them.
DEFAULT_EASE = 0.5
# Pick radius around a curve control handle, in pixels.
HANDLE_RADIUS = 5.0
TICKS_PER_BEAT = 240

# ---------------------------------------------------------------------------
# Preview
# ---------------------------------------------------------------------------

FIELD_OF_VIEW = 70.0
TRACK_LENGTH = 16.0
TRACK_WIDTH = 1.0
PREVIEW_MIN_SIZE: tuple[float, float] = (300.0, 200.0)
PREVIEW_ASPECT = 16.0 / 9.0

# ---------------------------------------------------------------------------
# Window
# ---------------------------------------------------------------------------

WINDOW_SIZE: tuple[int, int] = (1200, 800)
PANEL_WIDTH = 340
TIMELINE_HEIGHT = 300
FPS = 60
