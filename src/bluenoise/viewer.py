import logging
import math
import sys
from datetime import datetime

import numpy as np
import pygame

from bluenoise.camera import Camera2D, DrawLayer, InputState, RenderContext, draw_world_circle
from bluenoise.common import AreaFn, Point, Vec2
from bluenoise.errors import PoissonDiscError
from bluenoise.nearest_neighbors import NearestNeighbors
from bluenoise.poisson import PoissonDiscConfig, poisson_disc_array
from bluenoise.sources import uniform_source

logger = logging.getLogger(__name__)

HUD_FONT_COLOR_2 = (160, 160, 160)
HUD_FONT_COLOR = (220, 220, 220)
HUD_ERROR_COLOR = (255, 90, 90)

FILL_COLOR = (18, 18, 18)
COLOR_WORLD_EDGE = (150, 0, 0)
COLOR_GRID = (40, 40, 40)
COLOR_POINT = (255, 255, 255)
COLOR_SEED = (0, 255, 0)
COLOR_HIGHLIGHT = (255, 255, 0)
COLOR_ANNULUS = (0, 120, 255)

POINT_RADIUS_PX = 3
WHEEL_ZOOM = 1.15


class PoissonScene:
    """
    The last successful sampling run plus its spacing statistics.

    A failed resample leaves the previous points in place and records the
    error message instead.
    """

    def __init__(self, cfg: PoissonDiscConfig, in_area: AreaFn, seed: int = 0):
        self.cfg = cfg
        self.in_area = in_area
        self.seed = seed
        self.error: str | None = None
        self._set_points(np.empty((0, 2)))
        self.resample(seed)

    def _set_points(self, points: np.ndarray) -> None:
        self.points = points
        self.neighbors = NearestNeighbors(points)
        self.stats = self.neighbors.stats()

    def resample(self, seed: int) -> bool:
        try:
            points = poisson_disc_array(self.cfg, uniform_source(seed), self.in_area)
        except PoissonDiscError as e:
            logger.warning("resampling with seed %d failed: %s", seed, e)
            self.error = f"seed {seed}: {e}"
            return False
        self.seed = seed
        self.error = None
        self._set_points(points)
        return True

    def hovered(self, world: Vec2) -> Point | None:
        if not len(self.neighbors):
            return None
        x, y = self.points[self.neighbors.nearest_vertex(world)]
        if math.hypot(x - world[0], y - world[1]) > self.cfg.min_distance:
            return None
        return Point(float(x), float(y))


class PoissonViewer:
    """
    Interactive view of one sampling run.

    LMB drag pans, the wheel zooms. The point under the cursor is shown with
    its [min_distance, 2 * min_distance) annulus.
    """

    def __init__(self, cfg: PoissonDiscConfig, in_area: AreaFn, seed: int = 0,
                 w: int = 1280, h: int = 800, name: str = "bluenoise") -> None:
        pygame.init()
        pygame.display.set_caption(name)
        self.screen = pygame.display.set_mode((w, h))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("consolas", 16)
        self.name = name

        self.cfg = cfg
        self.scene = PoissonScene(cfg, in_area, seed)
        self.show_grid = True
        self._next_seed = seed + 1

        self.cam = Camera2D()
        self.cam.fit(cfg.width, cfg.height, (w, h))

        self._panning = False
        self._pan_anchor = pygame.Vector2(0, 0)
        self._cam_anchor = pygame.Vector2(0, 0)

        self._key_actions = {
            pygame.K_ESCAPE: self._quit,
            pygame.K_g: self._toggle_grid,
            pygame.K_r: self._resample,
            pygame.K_s: self.save,
        }

    def _draw_world_border(self, ctx: RenderContext) -> None:
        origin = ctx.camera.world_to_screen((0, 0))
        corner = ctx.camera.world_to_screen((self.cfg.width, self.cfg.height))
        rect = pygame.Rect(origin[0], origin[1], corner[0] - origin[0], corner[1] - origin[1])
        pygame.draw.rect(ctx.screen, COLOR_WORLD_EDGE, rect, 2)

    def _draw_grid(self, ctx: RenderContext) -> None:
        cs = self.cfg.cell_size
        cols = int(math.ceil(self.cfg.width / cs))
        rows = int(math.ceil(self.cfg.height / cs))
        for gx in range(cols + 1):
            a = ctx.camera.world_to_screen((gx * cs, 0))
            b = ctx.camera.world_to_screen((gx * cs, rows * cs))
            pygame.draw.line(ctx.screen, COLOR_GRID, a, b, 1)
        for gy in range(rows + 1):
            a = ctx.camera.world_to_screen((0, gy * cs))
            b = ctx.camera.world_to_screen((cols * cs, gy * cs))
            pygame.draw.line(ctx.screen, COLOR_GRID, a, b, 1)

    def _draw_points(self, ctx: RenderContext) -> None:
        for i, (x, y) in enumerate(self.scene.points):
            color = COLOR_SEED if i == 0 else COLOR_POINT
            pygame.draw.circle(ctx.screen, color, ctx.camera.world_to_screen((x, y)), POINT_RADIUS_PX)

    def _draw_hover(self, ctx: RenderContext) -> None:
        p = self.scene.hovered(ctx.input.mouse_world)
        if p is None:
            return
        r = self.cfg.min_distance
        draw_world_circle(ctx, p.as_tuple(), r, COLOR_ANNULUS)
        draw_world_circle(ctx, p.as_tuple(), 2 * r, COLOR_ANNULUS)
        pygame.draw.circle(ctx.screen, COLOR_HIGHLIGHT, ctx.camera.world_to_screen(p.as_tuple()), POINT_RADIUS_PX + 2)

    def _draw_hud(self, ctx: RenderContext) -> None:
        wx, wy = ctx.input.mouse_world
        s = self.scene.stats
        text = (f"seed={self.scene.seed}  points={s.count}  nn min={s.min:.3f} max={s.max:.3f} "
                f"mean={s.mean:.3f}  world=({wx:.2f},{wy:.2f})  zoom={ctx.camera.zoom:.2f}")
        ctx.screen.blit(self.font.render(text, True, HUD_FONT_COLOR), (10, 10))

        help1 = "LMB drag: pan | Wheel: zoom | R: resample | G: grid | S: save | ESC: quit"
        ctx.screen.blit(self.font.render(help1, True, HUD_FONT_COLOR_2), (10, 30))

        if self.scene.error is not None:
            ctx.screen.blit(self.font.render(self.scene.error, True, HUD_ERROR_COLOR), (10, 50))

    def _layers(self) -> list[DrawLayer]:
        layers = [
            DrawLayer(z=10, label="border", draw=self._draw_world_border),
            DrawLayer(z=20, label="points", draw=self._draw_points),
            DrawLayer(z=30, label="hover", draw=self._draw_hover),
            DrawLayer(z=2000, label="hud", draw=self._draw_hud),
        ]
        if self.show_grid:
            layers.append(DrawLayer(z=5, label="grid", draw=self._draw_grid))
        return sorted(layers, key=lambda x: x.z)

    # --- actions ---
    def _quit(self) -> None:
        pygame.quit()
        sys.exit(0)

    def _toggle_grid(self) -> None:
        self.show_grid = not self.show_grid

    def _resample(self) -> None:
        self.scene.resample(self._next_seed)
        self._next_seed += 1

    # --- events ---
    def _handle_event(self, e: pygame.event.Event) -> None:
        if e.type == pygame.QUIT:
            self._quit()
        elif e.type == pygame.KEYDOWN:
            action = self._key_actions.get(e.key)
            if action is not None:
                action()
        elif e.type == pygame.MOUSEBUTTONDOWN:
            self._on_mouse_down(e.button, e.pos)
        elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
            self._panning = False
        elif e.type == pygame.MOUSEMOTION and self._panning:
            self.cam.offset = self._cam_anchor + (pygame.Vector2(e.pos) - self._pan_anchor)

    def _on_mouse_down(self, button: int, pos) -> None:
        if button == 1:
            self._panning = True
            self._pan_anchor = pygame.Vector2(pos)
            self._cam_anchor = self.cam.offset.copy()
        elif button == 4:
            self.cam.zoom_at(pos, WHEEL_ZOOM)
        elif button == 5:
            self.cam.zoom_at(pos, 1 / WHEEL_ZOOM)

    def _context(self) -> RenderContext:
        ms = pygame.mouse.get_pos()
        inp = InputState(mouse_world=self.cam.screen_to_world(ms), mouse_screen=ms)
        return RenderContext(screen=self.screen, camera=self.cam, input=inp)

    def save(self) -> None:
        now = datetime.now().strftime("%Y%m%d_%H%M%S")
        pygame.image.save(self.screen, f"{self.name}_{self.scene.seed}_{now}.png")

    def run(self, fps: int = 30) -> None:
        while True:
            for e in pygame.event.get():
                self._handle_event(e)

            ctx = self._context()
            self.screen.fill(FILL_COLOR)
            for layer in self._layers():
                layer.draw(ctx)

            pygame.display.flip()
            self.clock.tick(fps)
