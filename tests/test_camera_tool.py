"""
Camera tool: sliders, dirty flags and command emission.
Run from project root: python -m pytest tests/ -v
"""
import os
import sys
import unittest
from pathlib import Path

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from actions import ActionStack, AddControlPoint, CommitCurveEdit
from camera import CameraPaths
from camera_tool import CameraTool
from chart import Chart, GraphPoint
from screen import ScreenState


def _chart():
    chart = Chart()
    chart.camera.zoom = [GraphPoint(0, 0.0), GraphPoint(100, 3.0)]
    chart.camera.rotation_x = [GraphPoint(0, 0.0), GraphPoint(100, 3.0)]
    return chart


class TestSliders(unittest.TestCase):
    def setUp(self):
        self.tool = CameraTool()

    def test_sync_follows_tracks(self):
        self.tool.sync(_chart(), 50)
        self.assertAlmostEqual(self.tool.radius, 1.5)
        self.assertAlmostEqual(self.tool.angle, 1.5)
        self.assertFalse(self.tool.radius_dirty)
        self.assertFalse(self.tool.angle_dirty)

    def test_dirty_value_survives_sync(self):
        chart = _chart()
        self.tool.sync(chart, 50)
        self.tool.set_radius(-2.0)
        self.tool.sync(chart, 0)
        self.assertTrue(self.tool.radius_dirty)
        self.assertEqual(self.tool.radius, -2.0)
        self.assertAlmostEqual(self.tool.angle, 0.0)

    def test_unchanged_value_is_not_dirty(self):
        self.tool.sync(_chart(), 50)
        self.tool.set_angle(self.tool.angle)
        self.assertFalse(self.tool.angle_dirty)

    def test_slider_values_are_clamped(self):
        self.tool.set_radius(10.0)
        self.tool.set_angle(-10.0)
        self.assertEqual((self.tool.radius, self.tool.angle), (3.0, -3.0))

    def test_camera_uses_slider_values(self):
        self.tool.set_radius(3.0)
        self.tool.set_angle(-3.0)
        cam = self.tool.camera()
        self.assertAlmostEqual(cam.radius, 0.05)
        self.assertAlmostEqual(cam.angle, -3.0)


class TestAddControlPoint(unittest.TestCase):
    def test_radius_only_scenario(self):
        chart = Chart()
        chart.camera.rotation_x = [GraphPoint(0, 0.5)]
        stack = ActionStack(chart)
        tool = CameraTool()
        tool.sync(stack.current(), 40)
        tool.set_radius(-1.0)

        command = tool.add_control_point(stack, 40)
        self.assertEqual(command, AddControlPoint(tick=40, radius=-1.0, angle=None))

        result = stack.current()
        self.assertEqual(result.camera.zoom, [GraphPoint(40, -1.0, None, 0.5, 0.5)])
        self.assertEqual(result.camera.rotation_x, [GraphPoint(0, 0.5)])
        self.assertFalse(tool.radius_dirty)
        self.assertFalse(tool.angle_dirty)

    def test_nothing_changed_registers_nothing(self):
        stack = ActionStack(_chart())
        tool = CameraTool()
        self.assertIsNone(tool.add_control_point(stack, 10))
        stack.commit()
        self.assertFalse(stack.can_undo)


class TestCurveDrag(unittest.TestCase):
    def setUp(self):
        self.screen = ScreenState(0, 0, 600, 300, tick_offset=0.0, ticks_per_pixel=1.0)
        self.stack = ActionStack(_chart())
        self.tool = CameraTool()
        self.tool.display_line = CameraPaths.ROTATION_X

    def test_drag_commits_on_release(self):
        chart = self.stack.current()
        self.assertTrue(self.tool.drag_start(self.screen, (50.0, 75.0), chart))
        tick_f, lane = self.screen.pos_to_tick_lane((20.0, 50.0))
        self.tool.update(tick_f, lane, chart)

        command = self.tool.drag_end(self.stack)
        self.assertIsInstance(command, CommitCurveEdit)
        self.assertEqual(command.path, CameraPaths.ROTATION_X)
        self.assertEqual(command.index, 0)
        self.assertEqual(command.description, "Edit curve for camera angle.")

        result = self.stack.current()
        self.assertAlmostEqual(result.camera.rotation_x[0].a, 0.2)
        self.assertAlmostEqual(result.camera.rotation_x[0].b, 2.0 / 3.0)
        self.assertIsNone(result.camera.zoom[0].a)
        self.assertFalse(self.tool.session.dragging)

    def test_drag_is_provisional_until_release(self):
        chart = self.stack.current()
        self.tool.drag_start(self.screen, (50.0, 75.0), chart)
        self.tool.update(90.0, 6.0, chart)
        self.assertIsNone(self.stack.current().camera.rotation_x[0].a)

    def test_release_without_drag(self):
        self.assertIsNone(self.tool.drag_end(self.stack))
        self.stack.commit()
        self.assertFalse(self.stack.can_undo)

    def test_release_after_track_shrank(self):
        chart = self.stack.current()
        self.tool.drag_start(self.screen, (50.0, 75.0), chart)
        handle = self.stack.new_action()
        handle.description = "Shrink"
        handle.action = lambda c: c.camera.rotation_x.clear()
        self.stack.commit()

        self.tool.drag_end(self.stack)
        self.assertEqual(self.stack.current().camera.rotation_x, [])
        self.assertIsNone(self.tool.session.curving)


if __name__ == "__main__":
    unittest.main()
