"""
Interactive viewer for the toroidal Game of Life, built on pygame.

Controls:
    SPACE       - Pause/Resume simulation
    N           - Advance one generation while paused
    R           - Reset with random grid
    C           - Clear grid
    G           - Add glider at mouse position
    U           - Add glider gun at mouse position
    S           - Save snapshot
    LEFT CLICK  - Draw cells
    RIGHT CLICK - Erase cells
    UP/DOWN     - Increase/Decrease speed
    +/-         - Zoom in/out
    ESC         - Quit

Each generation goes through the selected update strategy and its duration
is logged, like a single tick of the batch driver.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

import pygame

from .grid import DenseGrid, Grid, random_grid
from .patterns import stamp
from .snapshot import save_snapshot
from .strategies import Implementation, make_strategy

logger = logging.getLogger(__name__)

BLACK = (0, 0, 0)          # background
GRAY = (40, 40, 40)        # grid lines
GREEN = (0, 255, 100)      # alive cells
YELLOW = (255, 255, 0)     # paused UI
WHITE = (255, 255, 255)    # text

WINDOW_WIDTH = 1200
WINDOW_HEIGHT = 800


def screen_to_grid(sx: int, sy: int, cell_size: int,
                   offset_x: int = 0, offset_y: int = 0) -> tuple[int, int]:
    """Pixel position -> (col, row)."""
    return (sx + offset_x) // cell_size, (sy + offset_y) // cell_size


class GameOfLifeViewer:
    def __init__(self, grid: Grid, implementation: Implementation | str = Implementation.SPARSE,
                 cell_size: int = 10, prior_iterations: int = 0,
                 output_dir: str | Path = ".", workers: int | None = None):
        pygame.init()  # init pygame modules

        self.strategy = make_strategy(implementation, workers=workers)
        self.grid = self.strategy.prepare(grid)
        self.cell_size = cell_size                    # cell size in pixels
        self.prior_iterations = prior_iterations      # generations behind the seed
        self.output_dir = Path(output_dir)

        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))  # main window
        pygame.display.set_caption(
            f"Conway's Game of Life ({self.strategy.implementation.label})")
        self.grid_surface = self._make_surface()      # grid canvas

        self.running = False             # paused by default
        self.generation = 0              # generations since start
        self.speed = 10                  # sim steps per second
        self.last_tick_ms = 0.0

        self.clock = pygame.time.Clock()                 # frame timing
        self.font = pygame.font.Font(None, 28)           # main UI font
        self.small_font = pygame.font.Font(None, 22)     # help UI font

        self.mouse_down = False          # dragging state
        self.mouse_button = None         # 1=left, 3=right

    def _make_surface(self) -> pygame.Surface:
        return pygame.Surface((self.grid.width * self.cell_size,
                               self.grid.height * self.cell_size))

    def _replace(self, grid: Grid):
        self.grid = self.strategy.prepare(grid)

    def init_random(self, density: float = 0.5):
        self._replace(random_grid(self.grid.width, self.grid.height, density=density))
        self.generation = 0  # reset counter
        self.prior_iterations = 0

    def clear_grid(self):
        self._replace(DenseGrid.empty(self.grid.width, self.grid.height))  # all dead
        self.generation = 0  # reset counter
        self.prior_iterations = 0

    def add_pattern(self, name: str, x: int, y: int):
        if 0 <= x < self.grid.width and 0 <= y < self.grid.height:  # bounds check
            self._replace(stamp(self.grid, name, x, y))

    def step(self):
        start = time.perf_counter()
        self.grid = self.strategy.update(self.grid)
        self.last_tick_ms = (time.perf_counter() - start) * 1000
        self.generation += 1  # increment gen
        logger.info("Tick took %.2f milliseconds", self.last_tick_ms)

    def set_cell(self, sx: int, sy: int, alive: bool):
        gx, gy = screen_to_grid(sx, sy, self.cell_size)  # convert coords
        if 0 <= gx < self.grid.width and 0 <= gy < self.grid.height:  # clip to grid
            if self.grid.is_alive(gy, gx) != alive:
                self._replace(self.grid.with_cell(gx, gy, alive))

    def save(self) -> Path:
        total = self.prior_iterations + self.generation
        path = save_snapshot(self.output_dir, self.grid, total)
        logger.info("Saved snapshot to %s", path)
        return path

    def draw(self):
        self.grid_surface.fill(BLACK)  # clear canvas
        width_px = self.grid.width * self.cell_size
        height_px = self.grid.height * self.cell_size

        if self.cell_size >= 4:  # avoid clutter when zoomed out
            for x in range(0, width_px, self.cell_size):
                pygame.draw.line(self.grid_surface, GRAY, (x, 0), (x, height_px))  # vertical
            for y in range(0, height_px, self.cell_size):
                pygame.draw.line(self.grid_surface, GRAY, (0, y), (width_px, y))  # horizontal

        for x, y in self.grid.alive_cells():  # draw only alive cells
            rect = pygame.Rect(
                x * self.cell_size + 1,
                y * self.cell_size + 1,
                self.cell_size - 1,
                self.cell_size - 1
            )
            pygame.draw.rect(self.grid_surface, GREEN, rect)  # filled cell

    def draw_ui(self):
        pygame.draw.rect(self.screen, (30, 30, 30), (0, WINDOW_HEIGHT - 35, WINDOW_WIDTH, 35))  # status bar

        status = "RUNNING" if self.running else "PAUSED"  # state label
        color = GREEN if self.running else YELLOW         # state color
        text = self.font.render(
            f"[{status}]  Gen: {self.prior_iterations + self.generation}  "
            f"Cells: {self.grid.live_count()}  Speed: {self.speed} fps  "
            f"Tick: {self.last_tick_ms:.1f} ms",
            True,
            color
        )
        self.screen.blit(text, (10, WINDOW_HEIGHT - 28))  # status text

        if not self.running:  # show help only when paused
            help_bg = pygame.Surface((WINDOW_WIDTH, 25))  # top strip
            help_bg.set_alpha(200)                        # translucent
            help_bg.fill((30, 30, 30))                    # dark bg
            self.screen.blit(help_bg, (0, 0))             # draw bg

            text = self.small_font.render(
                "SPACE: Play/Pause | N: Step | R: Random | C: Clear | G: Glider | U: Gun | "
                "S: Save | Click: Draw | UP/DOWN: Speed",
                True,
                WHITE
            )
            self.screen.blit(text, (10, 5))  # help text

    def handle_events(self) -> bool:
        for event in pygame.event.get():  # poll events
            if event.type == pygame.QUIT:
                return False  # close window

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    return False  # quit

                elif event.key == pygame.K_SPACE:
                    self.running = not self.running  # toggle run/pause

                elif event.key == pygame.K_n and not self.running:
                    self.step()  # single step

                elif event.key == pygame.K_r:
                    self.init_random()  # random reset

                elif event.key == pygame.K_c:
                    self.clear_grid()  # clear all

                elif event.key == pygame.K_g:
                    gx, gy = screen_to_grid(*pygame.mouse.get_pos(), self.cell_size)  # mouse cell
                    self.add_pattern("glider", gx, gy)  # stamp glider

                elif event.key == pygame.K_u:
                    gx, gy = screen_to_grid(*pygame.mouse.get_pos(), self.cell_size)  # mouse cell
                    self.add_pattern("glider-gun", gx, gy)

                elif event.key == pygame.K_s:
                    self.save()

                elif event.key == pygame.K_UP:
                    self.speed = min(self.speed + 5, 60)  # speed up

                elif event.key == pygame.K_DOWN:
                    self.speed = max(self.speed - 5, 1)  # slow down

                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self.cell_size = min(self.cell_size + 2, 50)  # zoom in
                    self.grid_surface = self._make_surface()  # resize

                elif event.key == pygame.K_MINUS:
                    self.cell_size = max(self.cell_size - 2, 2)  # zoom out
                    self.grid_surface = self._make_surface()  # resize

            elif event.type == pygame.MOUSEBUTTONDOWN:
                self.mouse_down = True  # start drag
                self.mouse_button = event.button  # store button
                self.set_cell(event.pos[0], event.pos[1], event.button == 1)  # paint once

            elif event.type == pygame.MOUSEBUTTONUP:
                self.mouse_down = False  # stop drag
                self.mouse_button = None  # clear state

            elif event.type == pygame.MOUSEMOTION and self.mouse_down:
                self.set_cell(event.pos[0], event.pos[1], self.mouse_button == 1)  # paint while dragging

        return True  # keep running

    def run(self):
        try:
            while self.handle_events():  # main loop
                if self.running:
                    self.step()  # advance simulation

                self.screen.fill(BLACK)  # clear window
                self.draw()  # draw grid surface
                self.screen.blit(self.grid_surface, (0, 0))  # blit grid
                self.draw_ui()  # draw overlays

                pygame.display.flip()  # swap buffers

                self.clock.tick(self.speed if self.running else 60)  # sim rate vs UI rate
        finally:
            self.strategy.close()
            pygame.quit()  # clean exit
