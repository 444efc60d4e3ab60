GRID_ROWS = 4
GRID_COLS = 4

# Tiles placed on a fresh board and after every move that changed something.
INITIAL_TILE_COUNT = 1
TILES_PER_MOVE = 1
# Chance that a spawned tile is a 4 rather than a 2.
SPAWN_FOUR_PROBABILITY = 0.2

# Pending move requests kept while a move resolves; anything beyond is dropped.
MOVE_BACKLOG_LIMIT = 2
# Seconds to wait for a move to settle before forcing it; None waits forever.
SETTLE_TIMEOUT = None

# Window update cadence (seconds per tick).
UPDATE_RATE = 1 / 60

# Slide animation time per cell travelled.
SLIDE_SECONDS_PER_CELL = 0.08
# Fade applied to the consumed tile of a merge once it reaches its target.
MERGE_FADE_SECONDS = 0.12
# Delay between the game over transition and showing the notice.
GAME_OVER_NOTICE_DELAY = 0.5

# Board layout (pixels)
TILE_SIZE = 100
TILE_GAP = 4
SCORE_PANEL_HEIGHT = 32
WINDOW_MARGIN = 16

BOARD_BACKGROUND = (187, 173, 160)          # #bbada0
CELL_BACKGROUND = (238, 228, 218, 89)       # rgba(238, 228, 218, 0.35)
PANEL_TEXT_COLOR = (102, 102, 102)          # #666

# value -> (text colour, background colour, font size)
TILE_STYLES = {
    2: ((119, 110, 101), (238, 228, 218), 65),
    4: ((119, 110, 101), (237, 224, 200), 65),
    8: ((249, 246, 242), (242, 177, 121), 55),
    16: ((249, 246, 242), (245, 149, 99), 55),
    32: ((249, 246, 242), (246, 124, 95), 55),
    64: ((249, 246, 242), (246, 94, 59), 55),
    128: ((249, 246, 242), (237, 207, 114), 45),
    256: ((249, 246, 242), (237, 204, 97), 45),
    512: ((249, 246, 242), (237, 200, 80), 45),
    1024: ((249, 246, 242), (171, 227, 88), 35),
    2048: ((249, 246, 242), (77, 217, 207), 35),
    4096: ((249, 246, 242), (162, 131, 249), 35),
    8192: ((249, 246, 242), (249, 131, 131), 35),
}
# Used for values past the end of TILE_STYLES.
FALLBACK_TILE_STYLE = ((249, 246, 242), (60, 58, 50), 30)
