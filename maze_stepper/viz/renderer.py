import logging
import pygame
from maze_stepper.core.cell import Cell
from maze_stepper.core.grid import Grid
from maze_stepper.viz.painter import CellPainter
from maze_stepper.viz.recorder import VideoRecorder

logger = logging.getLogger(__name__)

class Renderer:
    COLOR_BG = (10, 10, 10)
    COLOR_HUD = (255, 255, 255)
    PADDING = 40
    MIN_CELL_SIZE = 2

    def __init__(self, grid: Grid, generator=None, width=1280, height=720,
                 fps=60, steps_per_frame=1, record=False):
        self.grid = grid
        self.generator = generator
        self.screen_width = width
        self.screen_height = height
        self.fps = fps
        self.steps_per_frame = steps_per_frame

        self.painter = CellPainter()
        self.grid.painter = self.painter
        self.recorder = VideoRecorder(active=record)

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None
        self.maze_surface = None
        self.maze_pos = (0, 0)
        self.gen_finished = False

        self.grid.add_redraw_listener(self.on_cell_changed)

    def fit_to_screen(self):
        """Pick the largest whole-pixel cell size that fits the grid on screen, and center it."""
        available_w = self.screen_width - (self.PADDING * 2)
        available_h = self.screen_height - (self.PADDING * 2)

        cell_size = min(available_w // self.grid.cols, available_h // self.grid.rows)
        self.painter.cell_size = max(self.MIN_CELL_SIZE, cell_size)

        total_maze_w = self.grid.cols * self.painter.cell_size
        total_maze_h = self.grid.rows * self.painter.cell_size
        self.maze_pos = ((self.screen_width - total_maze_w) // 2,
                         (self.screen_height - total_maze_h) // 2)

        # Full repaint at the new scale
        self.maze_surface = pygame.Surface((total_maze_w, total_maze_h))
        self.maze_surface.fill(self.COLOR_BG)
        self.grid.draw_all(self.maze_surface)

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"Maze Stepper - {self.grid.cols}x{self.grid.rows}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)

        self.fit_to_screen()

    def on_cell_changed(self, cell: Cell):
        if self.maze_surface is not None:
            self.painter(self.maze_surface, cell.x, cell.y, cell.walls)

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.running = False
            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h
                self.fit_to_screen()

    def draw_hud(self):
        fps = int(self.clock.get_fps())
        cells = self.grid.cols * self.grid.rows
        rec_status = "REC" if self.recorder.active else ""
        status = "Done" if self.gen_finished else "Generating"
        info = [
            f"FPS: {fps}",
            f"Size: {self.grid.cols}x{self.grid.rows} ({cells:,})",
            f"Edges: {self.grid.open_edge_count()}/{cells - 1}",
            f"Status: {status}",
            rec_status
        ]

        for i, text in enumerate(info):
            lbl = self.font.render(text, True, self.COLOR_HUD)
            self.surface.blit(lbl, (10, 10 + i * 20))

    def run_loop(self):
        while self.running:
            self.handle_input()

            # Step Generator
            if self.generator and not self.gen_finished:
                if not self.generator.advance(self.steps_per_frame):
                    self.gen_finished = True
                    logger.info("Generation finished")

            self.surface.fill(self.COLOR_BG)
            self.surface.blit(self.maze_surface, self.maze_pos)
            self.draw_hud()
            pygame.display.flip()

            if self.recorder.active:
                self.recorder.capture_frame(self.surface)

            self.clock.tick(self.fps)

        self.grid.remove_redraw_listener(self.on_cell_changed)
        self.recorder.stop()
        pygame.quit()
