import struct
from typing import Iterator, Tuple

# Event Types
EVT_CARVE = 0x03

MAGIC = b"MAZELOG"


class EventWriter:
    def __init__(self, filename: str):
        self.filename = filename
        self.file = open(filename, "wb")
        self.event_count = 0

    def write_header(self, cols: int, rows: int, seed_index: int):
        # Header: Magic "MAZELOG" + Cols (4b) + Rows (4b) + Seed Index (4b)
        self.file.write(MAGIC)
        self.file.write(struct.pack(">III", cols, rows, seed_index))

    def log_carve(self, x: int, y: int, direction: int):
        # 1 byte type + 2b X + 2b Y + 1b Dir
        # 'H' keeps coordinates to 65535, far beyond what the step-per-frame loop can animate
        data = struct.pack(">BHHB", EVT_CARVE, x, y, direction)
        self.file.write(data)
        self.event_count += 1

    def close(self):
        if self.file:
            self.file.close()
            self.file = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class EventReader:
    def __init__(self, filename: str):
        self.filename = filename
        self.file = open(filename, "rb")
        self.cols = 0
        self.rows = 0
        self.seed_index = 0

    def read_header(self) -> Tuple[int, int, int]:
        magic = self.file.read(len(MAGIC))
        if magic != MAGIC:
            raise ValueError("Invalid event log file")
        data = self.file.read(12)
        if len(data) != 12:
            raise ValueError("Truncated event log header")
        self.cols, self.rows, self.seed_index = struct.unpack(">III", data)
        return self.cols, self.rows, self.seed_index

    def stream_events(self) -> Iterator[Tuple[int, Tuple]]:
        while True:
            type_byte = self.file.read(1)
            if not type_byte:
                break

            type_code = ord(type_byte)

            if type_code == EVT_CARVE:
                data = self.file.read(5) # 2 shorts + 1 byte
                if len(data) != 5:
                    raise ValueError("Truncated carve event")
                x, y, d = struct.unpack(">HHB", data)
                yield (type_code, (x, y, d))
            else:
                raise ValueError(f"Unknown event type 0x{type_code:02x}")

    def close(self):
        if self.file:
            self.file.close()
            self.file = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
