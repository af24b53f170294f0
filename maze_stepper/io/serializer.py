import struct
import json
import zlib
from typing import Dict, Any, Tuple
from array import array
from maze_stepper.core.grid import Grid

class MazeSerializer:
    MAGIC = b"MAZE"
    VERSION = 1

    # Flags
    FLAG_COMPRESSED = 1

    # META_LEN is a 2 byte field
    MAX_META_LEN = 0xFFFF

    @staticmethod
    def save(grid: Grid, filepath: str, meta: Dict[str, Any] = None, compress=False):
        """
        Saves the maze to a binary file.
        Format:
        - MAGIC (4 bytes)
        - VERSION (1 byte)
        - FLAGS (1 byte)
        - COLS (4 bytes)
        - ROWS (4 bytes)
        - SEED_INDEX (4 bytes)
        - META_LEN (2 bytes)
        - META_JSON (META_LEN bytes)
        - DATA_LEN (4 bytes)
        - DATA (compressed or raw): one wall byte per cell, then one uint32 region tag per cell
        """
        if meta is None:
            meta = {}

        flags = 0
        if compress:
            flags |= MazeSerializer.FLAG_COMPRESSED

        meta_bytes = json.dumps(meta).encode('utf-8')
        meta_len = len(meta_bytes)

        walls = array('B', (cell.walls for cell in grid.cells))
        regions = array('I', (cell.region for cell in grid.cells))
        data = walls.tobytes() + regions.tobytes()
        if compress:
            data = zlib.compress(data)

        # Checked before the file is opened so a failed save leaves nothing behind
        if meta_len > MazeSerializer.MAX_META_LEN:
            raise ValueError(f"Metadata is {meta_len} bytes, limit is {MazeSerializer.MAX_META_LEN}")

        with open(filepath, "wb") as f:
            f.write(MazeSerializer.MAGIC)
            f.write(struct.pack("B", MazeSerializer.VERSION))
            f.write(struct.pack("B", flags))
            f.write(struct.pack("III", grid.cols, grid.rows, grid.seed_index))
            f.write(struct.pack("H", meta_len))
            f.write(meta_bytes)
            f.write(struct.pack("I", len(data)))
            f.write(data)

    @staticmethod
    def _read(f, fmt: str) -> Tuple:
        size = struct.calcsize(fmt)
        data = f.read(size)
        if len(data) != size:
            raise ValueError("Truncated maze file header")
        return struct.unpack(fmt, data)

    @staticmethod
    def load(filepath: str) -> Tuple[Grid, Dict[str, Any]]:
        with open(filepath, "rb") as f:
            magic = f.read(4)
            if magic != MazeSerializer.MAGIC:
                raise ValueError("Invalid file format")

            version, flags = MazeSerializer._read(f, "BB")
            if version != MazeSerializer.VERSION:
                raise ValueError(f"Unsupported maze file version {version}")
            cols, rows, seed_index = MazeSerializer._read(f, "III")
            meta_len, = MazeSerializer._read(f, "H")
            meta_bytes = f.read(meta_len)
            if len(meta_bytes) != meta_len:
                raise ValueError("Truncated maze file header")
            meta = json.loads(meta_bytes.decode('utf-8'))

            data_len, = MazeSerializer._read(f, "I")
            data = f.read(data_len)
            if len(data) != data_len:
                raise ValueError("Truncated maze file")

        if cols == 0 or rows == 0:
            raise ValueError(f"Invalid grid dimensions {cols}x{rows}")

        # Size the payload from the header before allocating any cells
        count = cols * rows
        walls = array('B')
        regions = array('I')
        expected = count * (walls.itemsize + regions.itemsize)

        if flags & MazeSerializer.FLAG_COMPRESSED:
            decompressor = zlib.decompressobj()
            try:
                data = decompressor.decompress(data, expected + 1)
            except zlib.error as e:
                raise ValueError(f"Corrupt compressed cell data: {e}") from e
            if not decompressor.eof:
                raise ValueError("Cell data does not match grid dimensions")

        if len(data) != expected:
            raise ValueError("Cell data does not match grid dimensions")

        grid = Grid(cols, rows, seed_index=seed_index)
        walls.frombytes(data[:count])
        regions.frombytes(data[count:])

        opened = 0
        for cell, wall_bits, region in zip(grid.cells, walls, regions):
            cell.walls = wall_bits & Grid.ALL_WALLS
            cell.region = region
            # Each open edge clears one bit on each side
            opened += 4 - bin(cell.walls).count("1")
        grid.edges_opened = opened // 2

        return grid, meta
