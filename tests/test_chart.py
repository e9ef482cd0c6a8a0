"""
Chart document load/save.
Run from project root: python -m pytest tests/ -v
"""
import json
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from chart import Chart, ChartError, GraphPoint, is_sorted


def _document(zoom, rotation_x=()):
    return {
        "meta": {"title": "test"},
        "camera": {"cam": {"body": {"zoom": list(zoom), "rotation_x": list(rotation_x)}}},
    }


class TestGraphPoint(unittest.TestCase):
    def test_optional_fields_are_omitted(self):
        self.assertEqual(GraphPoint(10, 1.5).to_dict(), {"y": 10, "v": 1.5})

    def test_all_fields_survive(self):
        raw = {"y": 0, "v": 1.0, "vf": 2.0, "a": 0.25, "b": 0.75}
        self.assertEqual(GraphPoint.from_dict(raw).to_dict(), raw)

    def test_missing_optional_fields_read_as_none(self):
        point = GraphPoint.from_dict({"y": 3, "v": 0})
        self.assertIsNone(point.vf)
        self.assertIsNone(point.a)
        self.assertIsNone(point.b)


class TestChartFile(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def _write(self, name, content):
        path = self.tmp / name
        path.write_text(content, encoding="utf-8")
        return path

    def test_load_and_write_keep_unknown_keys(self):
        doc = _document([{"y": 0, "v": 0.0}, {"y": 240, "v": 1.0, "a": 0.2, "b": 0.8}])
        path = self._write("in.kson", json.dumps(doc))
        chart = Chart.load(path)
        self.assertEqual(len(chart.camera.zoom), 2)
        self.assertEqual(chart.camera.zoom[1].a, 0.2)

        out = self.tmp / "out.kson"
        chart.write(out)
        written = json.loads(out.read_text(encoding="utf-8"))
        self.assertEqual(written["meta"], {"title": "test"})
        self.assertEqual(written["camera"]["cam"]["body"]["zoom"], doc["camera"]["cam"]["body"]["zoom"])
        self.assertEqual(chart.path, out)

    def test_unsorted_track_is_sorted_on_load(self):
        doc = _document([{"y": 100, "v": 1.0}, {"y": 0, "v": 0.0}])
        path = self._write("unsorted.kson", json.dumps(doc))
        with self.assertLogs("chart", level="WARNING"):
            chart = Chart.load(path)
        self.assertTrue(is_sorted(chart.camera.zoom))
        self.assertEqual([p.y for p in chart.camera.zoom], [0, 100])

    def test_chart_without_camera(self):
        path = self._write("bare.kson", json.dumps({"meta": {}}))
        chart = Chart.load(path)
        self.assertEqual(chart.camera.zoom, [])
        self.assertEqual(chart.camera.rotation_x, [])

    def test_invalid_json_raises_chart_error(self):
        path = self._write("broken.kson", "{not json")
        with self.assertRaises(ChartError):
            Chart.load(path)

    def test_missing_file_raises_chart_error(self):
        with self.assertRaises(ChartError):
            Chart.load(self.tmp / "missing.kson")

    def test_malformed_keyframe_raises_chart_error(self):
        path = self._write("bad_point.kson", json.dumps(_document([{"v": 1.0}])))
        with self.assertRaises(ChartError):
            Chart.load(path)

    def test_wrong_shaped_camera_section_raises_chart_error(self):
        for name, doc in (
            ("null_camera.kson", {"camera": None}),
            ("list_cam.kson", {"camera": {"cam": []}}),
            ("number_body.kson", {"camera": {"cam": {"body": 3}}}),
            ("number_track.kson", {"camera": {"cam": {"body": {"zoom": 5}}}}),
            ("list_keyframe.kson", _document([[0, 1.0]])),
        ):
            with self.subTest(name=name):
                path = self._write(name, json.dumps(doc))
                with self.assertRaises(ChartError):
                    Chart.load(path)

    def test_out_of_range_keyframe_is_clamped_on_load(self):
        doc = _document([{"y": -5, "v": 0.0, "a": 1.5, "b": -0.2}, {"y": 96, "v": 1.0}])
        path = self._write("out_of_range.kson", json.dumps(doc))
        with self.assertLogs("chart", level="WARNING") as logs:
            chart = Chart.load(path)
        self.assertEqual(len(logs.output), 3)
        first = chart.camera.zoom[0]
        self.assertEqual((first.y, first.a, first.b), (0, 1.0, 0.0))
        self.assertEqual(chart.camera.zoom[1].y, 96)

    def test_write_without_destination(self):
        with self.assertRaises(ValueError):
            Chart().write()


if __name__ == "__main__":
    unittest.main()
