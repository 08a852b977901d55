# src/tetris_arcade/game/core/constants.py
from __future__ import annotations

# Board geometry
BOARD_W: int = 12
BOARD_H: int = 20

# Board / cell encoding (0 = empty, 1..NUM_COLORS = colour id of the locked block)
EMPTY_CELL: int = 0
NUM_COLORS: int = 7
# uint8 grid: colour ids must fit in one byte
MAX_COLOR_ID: int = 255

# Horizontal kick search order tried on rotation (no vertical kicks)
KICK_OFFSETS: tuple[int, ...] = (0, +1, -1, +2, -2)

# Frames the screen flashes after a hard drop
HARD_DROP_FLASH_FRAMES: int = 5
