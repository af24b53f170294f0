from typing import Iterator


class Cell:
    # Bitmask Constants (clockwise from the top)
    NORTH = 0b0001
    EAST  = 0b0010
    SOUTH = 0b0100
    WEST  = 0b1000

    # All walls present by default (N|E|S|W) = 15
    ALL_WALLS = NORTH | EAST | SOUTH | WEST

    DIRECTIONS = (NORTH, EAST, SOUTH, WEST)
    OPPOSITE = {NORTH: SOUTH, SOUTH: NORTH, EAST: WEST, WEST: EAST}

    __slots__ = ('x', 'y', 'walls', 'region', 'seed')

    def __init__(self, x: int, y: int, region: int):
        self.x = x
        self.y = y
        self.walls = self.ALL_WALLS
        self.region = region
        self.seed = False

    def has_wall(self, dir_bit: int) -> bool:
        return (self.walls & dir_bit) != 0

    def clear_wall(self, dir_bit: int):
        # Walls only ever go away; there is no way to put one back.
        self.walls &= ~dir_bit

    def open_walls(self) -> Iterator[int]:
        """Yields the direction bits whose wall has been removed."""
        for dir_bit in self.DIRECTIONS:
            if not (self.walls & dir_bit):
                yield dir_bit

    def __repr__(self):
        return f"Cell(x={self.x}, y={self.y}, walls={self.walls:04b}, region={self.region}, seed={self.seed})"
