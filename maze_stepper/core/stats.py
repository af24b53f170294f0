from maze_stepper.core.grid import Grid


class MazeStats:
    @staticmethod
    def popcount_walls(walls: int) -> int:
        c = 0
        if walls & Grid.NORTH: c += 1
        if walls & Grid.EAST: c += 1
        if walls & Grid.SOUTH: c += 1
        if walls & Grid.WEST: c += 1
        return c

    @staticmethod
    def calculate_stats(grid: Grid):
        """
        Counts cell shapes by remaining walls.
        Border walls count too, so a corner cell with one exit is a dead end.
        """
        dead_ends = 0
        corridors = 0 # 2 walls
        intersections = 0 # 0, 1 walls
        enclosed = 0 # 4 walls, not joined to anything yet

        for cell in grid.cells:
            walls = MazeStats.popcount_walls(cell.walls)
            if walls == 4: enclosed += 1
            elif walls == 3: dead_ends += 1
            elif walls == 2: corridors += 1
            else: intersections += 1

        total = grid.cols * grid.rows
        return {
            "dead_ends": dead_ends,
            "corridors": corridors,
            "intersections": intersections,
            "enclosed": enclosed,
            "edges_opened": grid.open_edge_count(),
            "regions": len({cell.region for cell in grid.cells}),
            "dead_end_percent": (dead_ends / total) * 100
        }
