import pygame
from maze_stepper.core.cell import Cell

class CellPainter:
    """
    Paints a single cell: fills its bounding box and draws a line along every
    side whose wall is still standing. Holds only layout and colours, never grid state.
    """
    COLOR_CELL = (60, 100, 160) # Blue tint
    COLOR_WALL = (200, 200, 200)

    def __init__(self, cell_size: int = 20, offset_x: int = 0, offset_y: int = 0,
                 color_cell=None, color_wall=None, line_width: int = 1):
        self.cell_size = cell_size
        self.offset_x = offset_x
        self.offset_y = offset_y
        self.color_cell = color_cell or self.COLOR_CELL
        self.color_wall = color_wall or self.COLOR_WALL
        self.line_width = line_width

    def cell_rect(self, x: int, y: int) -> pygame.Rect:
        px = x * self.cell_size + self.offset_x
        py = y * self.cell_size + self.offset_y
        return pygame.Rect(px, py, self.cell_size, self.cell_size)

    def __call__(self, surface: pygame.Surface, x: int, y: int, walls: int):
        rect = self.cell_rect(x, y)
        pygame.draw.rect(surface, self.color_cell, rect)

        # Lines sit on the last pixel row/column inside the box for S/E
        left, top = rect.left, rect.top
        right, bottom = rect.right - 1, rect.bottom - 1
        color, width = self.color_wall, self.line_width

        if walls & Cell.NORTH:
            pygame.draw.line(surface, color, (left, top), (right, top), width)
        if walls & Cell.EAST:
            pygame.draw.line(surface, color, (right, top), (right, bottom), width)
        if walls & Cell.SOUTH:
            pygame.draw.line(surface, color, (left, bottom), (right, bottom), width)
        if walls & Cell.WEST:
            pygame.draw.line(surface, color, (left, top), (left, bottom), width)
