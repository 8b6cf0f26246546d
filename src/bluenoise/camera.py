from dataclasses import dataclass
from typing import Callable

import pygame

from bluenoise.common import Color, GVec2, Vec2


@dataclass(frozen=True)
class InputState:
    mouse_screen: GVec2
    mouse_world: Vec2


@dataclass
class RenderContext:
    screen: pygame.Surface
    camera: "Camera2D"
    input: InputState


@dataclass(frozen=True)
class DrawLayer:
    z: int
    label: str
    draw: Callable[[RenderContext], None]


class Camera2D:
    def __init__(self, offset: pygame.Vector2 | None = None, zoom: float = 1.0):
        self.offset = offset if offset is not None else pygame.Vector2(0, 0)
        self.zoom = zoom

    def world_to_screen(self, p: Vec2) -> GVec2:
        v = pygame.Vector2(p[0], p[1]) * self.zoom + self.offset
        return int(v.x), int(v.y)

    def screen_to_world(self, p: GVec2) -> Vec2:
        v = (pygame.Vector2(p[0], p[1]) - self.offset) / self.zoom
        return float(v.x), float(v.y)

    def zoom_at(self, screen_pos: GVec2, zoom_factor: float) -> None:
        """Zoom keeping the world point under cursor fixed."""
        before = pygame.Vector2(self.screen_to_world(screen_pos))
        self.zoom = max(0.05, min(500.0, self.zoom * zoom_factor))
        after = pygame.Vector2(self.screen_to_world(screen_pos))
        self.offset += (after - before) * self.zoom

    def fit(self, width: float, height: float, screen_size: GVec2, margin: int = 40) -> None:
        """Zoom and centre so the whole world rectangle is visible."""
        sw, sh = screen_size
        self.zoom = min((sw - 2 * margin) / width, (sh - 2 * margin) / height)
        self.offset = pygame.Vector2(
            (sw - width * self.zoom) / 2,
            (sh - height * self.zoom) / 2,
        )


def draw_world_circle(ctx: RenderContext, center: Vec2, radius: float, color: Color, width: int = 1) -> None:
    c = ctx.camera.world_to_screen(center)
    r = max(1, int(radius * ctx.camera.zoom))
    pygame.draw.circle(ctx.screen, color, c, r, width)
