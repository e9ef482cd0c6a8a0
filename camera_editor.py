"""Pygame based camera editor for KSON charts.

Shows the chart's camera radius or angle track on a timeline together with a
live 3D preview of the note track as the camera at the cursor sees it.  The
shape of each curve segment is edited by dragging its handle; the sliders
change radius and angle at the cursor and "Add Control Point" keys them.
Every change is undoable.
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

import pygame
from tkinter import Tk, filedialog

from actions import ActionStack
from camera import CameraPaths
from camera_tool import CameraTool
from chart import Chart, ChartError
from config import (
    FPS,
    PANEL_WIDTH,
    PREVIEW_MIN_SIZE,
    TICKS_PER_BEAT,
    TIMELINE_HEIGHT,
    VALUE_RANGE,
    WINDOW_SIZE,
)
from logging_config import setup_logging
from preview import CameraView
from screen import ScreenState
from widgets import Button, ComboBox, ParamSlider

logger = logging.getLogger(__name__)

KSON_FILETYPES = [("KSON chart", "*.kson"), ("All files", "*.*")]


class Editor:
    BG = (30, 30, 30)
    PANEL_BG = (45, 45, 45)
    CURSOR_COLOUR = (230, 230, 230)

    def __init__(self, chart: Chart) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode(WINDOW_SIZE, pygame.RESIZABLE)
        pygame.display.set_caption("Camera Editor")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("arial", 16)

        self.actions = ActionStack(chart)
        self.tool = CameraTool()
        self.cursor_tick = 0
        self.tick_offset = 0.0
        self.scrubbing = False

        lo, hi = VALUE_RANGE
        self.sliders = [
            ParamSlider("Radius", lo, hi, lambda: self.tool.radius, self.tool.set_radius),
            ParamSlider("Angle", lo, hi, lambda: self.tool.angle, self.tool.set_angle),
        ]
        self.display_combo = ComboBox(
            "Display Line",
            [(path.label, path) for path in CameraPaths],
            lambda: self.tool.display_line,
            self._set_display_line,
        )
        self.add_button = Button(pygame.Rect(0, 0, 200, 30), "Add Control Point",
                                 self._add_control_point)
        self.file_buttons = [
            Button(pygame.Rect(10, 10, 100, 30), "Open Chart", self._open_chart),
            Button(pygame.Rect(120, 10, 100, 30), "Save", self._save_dialog),
        ]

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    @property
    def chart(self) -> Chart:
        return self.actions.current()

    def _timeline(self) -> ScreenState:
        width = self.screen.get_width() - PANEL_WIDTH
        top = self.screen.get_height() - TIMELINE_HEIGHT
        return ScreenState(0, top, width, TIMELINE_HEIGHT, self.tick_offset)

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------
    def run(self) -> None:
        while True:
            self.clock.tick(FPS)
            self._handle_events()
            self.tool.sync(self.chart, self.cursor_tick)
            self._draw()

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit()
                raise SystemExit
            if event.type == pygame.KEYDOWN:
                self._handle_key(event)
                continue
            if self.display_combo.handle_event(event):
                continue
            if any(s.handle_event(event) for s in self.sliders):
                continue
            if self.add_button.handle_event(event):
                continue
            if any(btn.handle_event(event) for btn in self.file_buttons):
                continue
            self._handle_timeline(event)

    def _handle_timeline(self, event: pygame.event.Event) -> None:
        timeline = self._timeline()
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if not timeline.contains(event.pos):
                return
            if not self.tool.drag_start(timeline, event.pos, self.chart):
                self.scrubbing = True
                self._set_cursor(timeline.x_to_tick(event.pos[0]))
        elif event.type == pygame.MOUSEMOTION:
            if self.tool.session.dragging:
                tick_f, lane = timeline.pos_to_tick_lane(event.pos)
                self.tool.update(tick_f, lane, self.chart)
            elif self.scrubbing:
                self._set_cursor(timeline.x_to_tick(event.pos[0]))
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.scrubbing = False
            self.tool.drag_end(self.actions)
        elif event.type == pygame.MOUSEWHEEL:
            step = TICKS_PER_BEAT * (1 if event.y < 0 else -1)
            self.tick_offset = max(0.0, self.tick_offset + step)

    def _handle_key(self, event: pygame.event.Event) -> None:
        ctrl = event.mod & pygame.KMOD_CTRL
        step = TICKS_PER_BEAT // 4 if event.mod & pygame.KMOD_SHIFT else TICKS_PER_BEAT
        if event.key == pygame.K_LEFT:
            self._set_cursor(self.cursor_tick - step)
        elif event.key == pygame.K_RIGHT:
            self._set_cursor(self.cursor_tick + step)
        elif event.key == pygame.K_TAB:
            paths = list(CameraPaths)
            self._set_display_line(paths[(paths.index(self.tool.display_line) + 1) % len(paths)])
        elif event.key == pygame.K_z and ctrl:
            self.actions.undo()
        elif event.key == pygame.K_y and ctrl:
            self.actions.redo()
        elif event.key == pygame.K_s and ctrl:
            self._save_dialog()
        elif event.key == pygame.K_o and ctrl:
            self._open_chart()

    def _set_cursor(self, tick: float) -> None:
        self.cursor_tick = max(0, int(round(tick)))

    def _set_display_line(self, path: CameraPaths) -> None:
        if self.tool.session.dragging:
            # the drag belongs to the old line
            return
        self.tool.display_line = path

    def _add_control_point(self) -> None:
        self.tool.add_control_point(self.actions, self.cursor_tick)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------
    def _draw(self) -> None:
        self.screen.fill(self.BG)
        chart = self.chart
        timeline = self._timeline()
        self._draw_timeline(chart, timeline)
        self._draw_panel()
        for btn in self.file_buttons:
            btn.draw(self.screen, self.font)
        pygame.display.flip()

    def _draw_timeline(self, chart: Chart, timeline: ScreenState) -> None:
        rect = timeline.rect
        pygame.draw.rect(self.screen, (60, 60, 60), rect)
        first, last = timeline.visible_ticks()
        beat = (int(first) // TICKS_PER_BEAT) * TICKS_PER_BEAT
        while beat <= last:
            x = timeline.tick_to_x(beat)
            pygame.draw.line(self.screen, (75, 75, 75), (x, rect.top), (x, rect.bottom))
            beat += TICKS_PER_BEAT
        zero_y = timeline.value_to_y(0.0)
        pygame.draw.line(self.screen, (90, 90, 90), (rect.left, zero_y), (rect.right, zero_y))

        self.screen.set_clip(rect)
        self.tool.draw(chart, timeline, self.screen)
        self.screen.set_clip(None)

        cursor_x = timeline.tick_to_x(self.cursor_tick)
        pygame.draw.line(self.screen, self.CURSOR_COLOUR, (cursor_x, rect.top),
                         (cursor_x, rect.bottom), 2)
        label = self.font.render(
            f"{self.tool.display_line.label}  tick {self.cursor_tick}", True, (255, 255, 255)
        )
        self.screen.blit(label, (rect.left + 5, rect.top + 5))

    def _draw_panel(self) -> None:
        x = self.screen.get_width() - PANEL_WIDTH
        panel = pygame.Rect(x, 0, PANEL_WIDTH, self.screen.get_height())
        pygame.draw.rect(self.screen, self.PANEL_BG, panel)

        view = CameraView(PREVIEW_MIN_SIZE, self.tool.camera())
        view.add_track()
        view_rect = view.layout(x + 10, 10, PANEL_WIDTH - 20)
        view.draw(self.screen, view_rect)

        y = int(view_rect[1] + view_rect[3]) + 15
        for slider in self.sliders:
            slider.draw(self.screen, self.font, x + 10, y)
            y += 45
        self.display_combo.draw(self.screen, self.font, x + 10, y)
        y += 40
        self.add_button.rect.topleft = (x + 10, y)
        self.add_button.draw(self.screen, self.font)
        y += 40
        dirty = [name for name, flag in (("radius", self.tool.radius_dirty),
                                         ("angle", self.tool.angle_dirty)) if flag]
        if dirty:
            txt = self.font.render("Changed: " + ", ".join(dirty), True, (255, 200, 0))
            self.screen.blit(txt, (x + 10, y))
        self.display_combo.draw_popup(self.screen, self.font)

    # ------------------------------------------------------------------
    # File operations
    # ------------------------------------------------------------------
    def _open_chart(self) -> None:
        root = Tk(); root.withdraw()
        path = filedialog.askopenfilename(filetypes=KSON_FILETYPES)
        root.destroy()
        if not path:
            return
        try:
            chart = Chart.load(Path(path))
        except ChartError as exc:
            logger.error("Failed to load chart: %s", exc)
            return
        self.actions.reset(chart)
        self.tool = CameraTool()
        self._rebind_widgets()
        self.cursor_tick = 0
        self.tick_offset = 0.0

    def _rebind_widgets(self) -> None:
        radius, angle = self.sliders
        radius.getter, radius.setter = (lambda: self.tool.radius), self.tool.set_radius
        angle.getter, angle.setter = (lambda: self.tool.angle), self.tool.set_angle

    def _save_dialog(self) -> None:
        chart = self.chart
        root = Tk(); root.withdraw()
        initial = chart.path.name if chart.path else ""
        path = filedialog.asksaveasfilename(defaultextension=".kson", initialfile=initial,
                                            filetypes=KSON_FILETYPES)
        root.destroy()
        if not path:
            return
        try:
            chart.write(Path(path))
        except OSError as exc:
            logger.error("Failed to save chart: %s", exc)


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="KSON camera editor")
    parser.add_argument("chart", type=Path, nargs="?", help="Path to .kson file")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None, help="Also write the log to this file")
    args = parser.parse_args(argv)

    setup_logging(getattr(logging, args.log_level), args.log_file)

    chart = Chart()
    if args.chart:
        try:
            chart = Chart.load(args.chart)
        except ChartError as exc:
            logger.error("%s", exc)
            raise SystemExit(1)
    Editor(chart).run()


if __name__ == "__main__":
    main()
