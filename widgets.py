"""Minimal pygame widgets for the camera panel."""
from __future__ import annotations

from typing import Any, Callable, List, Sequence, Tuple

import pygame


class ParamSlider:
    def __init__(self, label: str, min_val: float, max_val: float,
                 getter: Callable[[], float], setter: Callable[[float], None],
                 width: int = 240) -> None:
        self.label = label
        self.min = min_val
        self.max = max_val
        self.getter = getter
        self.setter = setter
        self.width = width
        self.rect = pygame.Rect(0, 0, 0, 0)
        self.dragging = False

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Return ``True`` when the event was used by the slider."""
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.inflate(0, 12).collidepoint(event.pos):
                self.dragging = True
                self._update(event.pos[0])
                return True
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            was_dragging, self.dragging = self.dragging, False
            return was_dragging
        elif event.type == pygame.MOUSEMOTION and self.dragging:
            self._update(event.pos[0])
            return True
        return False

    def _update(self, mx: int) -> None:
        pos = (mx - self.rect.x) / max(1, self.rect.width)
        pos = max(0.0, min(1.0, pos))
        self.setter(self.min + pos * (self.max - self.min))

    def draw(self, surface: pygame.Surface, font: pygame.font.Font, x: int, y: int) -> None:
        value = self.getter()
        txt = font.render(f"{self.label}: {value:.2f}", True, (230, 230, 230))
        surface.blit(txt, (x, y))
        y += 18
        self.rect = pygame.Rect(x, y, self.width, 8)
        pygame.draw.rect(surface, (80, 80, 80), self.rect)
        pos = (value - self.min) / (self.max - self.min)
        knob_x = self.rect.x + pos * self.rect.width
        pygame.draw.rect(surface, (200, 200, 0), pygame.Rect(knob_x - 4, y - 4, 8, 16))


class Button:
    def __init__(self, rect: pygame.Rect, text: str, callback: Callable[[], None]) -> None:
        self.rect = rect
        self.text = text
        self.callback = callback

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()
                return True
        return False

    def draw(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        pygame.draw.rect(surface, (70, 70, 70), self.rect)
        txt = font.render(self.text, True, (255, 255, 255))
        surface.blit(txt, txt.get_rect(center=self.rect.center))


class ComboBox:
    """Click to open, click an entry to select it."""

    ROW_HEIGHT = 22

    def __init__(self, label: str, options: Sequence[Tuple[str, Any]],
                 getter: Callable[[], Any], setter: Callable[[Any], None],
                 width: int = 160) -> None:
        self.label = label
        self.options: List[Tuple[str, Any]] = list(options)
        self.getter = getter
        self.setter = setter
        self.rect = pygame.Rect(0, 0, width, self.ROW_HEIGHT)
        self.open = False

    def _option_rects(self) -> List[pygame.Rect]:
        return [
            pygame.Rect(self.rect.x, self.rect.bottom + i * self.ROW_HEIGHT,
                        self.rect.width, self.ROW_HEIGHT)
            for i in range(len(self.options))
        ]

    def selected_text(self) -> str:
        current = self.getter()
        for text, value in self.options:
            if value == current:
                return text
        return ""

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type != pygame.MOUSEBUTTONDOWN or event.button != 1:
            return False
        if self.rect.collidepoint(event.pos):
            self.open = not self.open
            return True
        if self.open:
            self.open = False
            for (_text, value), rect in zip(self.options, self._option_rects()):
                if rect.collidepoint(event.pos):
                    self.setter(value)
                    return True
        return False

    def draw(self, surface: pygame.Surface, font: pygame.font.Font, x: int, y: int) -> None:
        self.rect.topleft = (x, y)
        pygame.draw.rect(surface, (70, 70, 70), self.rect)
        txt = font.render(f"{self.selected_text()} v", True, (255, 255, 255))
        surface.blit(txt, (self.rect.x + 6, self.rect.y + 3))
        label = font.render(self.label, True, (230, 230, 230))
        surface.blit(label, (self.rect.right + 8, self.rect.y + 3))

    def draw_popup(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        """Drawn last so the list sits above the rest of the panel."""
        if not self.open:
            return
        for (text, _value), rect in zip(self.options, self._option_rects()):
            pygame.draw.rect(surface, (55, 55, 55), rect)
            pygame.draw.rect(surface, (90, 90, 90), rect, 1)
            surface.blit(font.render(text, True, (255, 255, 255)), (rect.x + 6, rect.y + 3))
