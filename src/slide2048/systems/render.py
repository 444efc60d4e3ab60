from slide2048.events.bus import (EVENT_TICK, EventBus, EVENT_BOARD_CHANGED,
                                 EVENT_GAME_OVER, EVENT_GAME_RESET)
from slide2048.constants import (
    GRID_ROWS, GRID_COLS, BOARD_BACKGROUND, CELL_BACKGROUND, PANEL_TEXT_COLOR,
    TILE_STYLES, FALLBACK_TILE_STYLE, TILE_SIZE, GAME_OVER_NOTICE_DELAY,
)
from slide2048.rendering.context import collect_tile_draws
from slide2048.ui.layout import compute_board_geometry, new_game_button_rect
from slide2048.utils.game_state import get_game_state
from esper import World


def tile_style(value: int):
    return TILE_STYLES.get(value, FALLBACK_TILE_STYLE)


class RenderSystem:
    """Draws the board, the score panel and the game over notice.

    The score shown is mirrored from board events and the tile draw list is
    rebuilt from the world every frame.
    """
    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_BOARD_CHANGED, self.on_board_changed)
        self.event_bus.subscribe(EVENT_GAME_OVER, self.on_game_over)
        self.event_bus.subscribe(EVENT_GAME_RESET, self.on_game_reset)
        self.use_easing = True
        self.score = get_game_state(world).score
        self._game_over_elapsed: float | None = None

    @property
    def game_over_notice_visible(self) -> bool:
        return self._game_over_elapsed is not None and self._game_over_elapsed >= GAME_OVER_NOTICE_DELAY

    def on_tick(self, sender, **kwargs):
        if self._game_over_elapsed is not None:
            self._game_over_elapsed += float(kwargs.get('dt', 1/60))

    def on_board_changed(self, sender, **kwargs):
        self.score = kwargs.get('score', self.score)

    def on_game_over(self, sender, **kwargs):
        self.score = kwargs.get('score', self.score)
        self._game_over_elapsed = 0.0

    def on_game_reset(self, sender, **kwargs):
        self._game_over_elapsed = None
        self.score = kwargs.get('score', 0)

    def get_new_game_button_at_point(self, x: float, y: float) -> bool:
        left, right, bottom, top = new_game_button_rect(self.window.width, self.window.height)
        return left <= x <= right and bottom <= y <= top

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        geometry = compute_board_geometry(self.window.width, self.window.height)
        scale = geometry.tile_size / TILE_SIZE
        half = geometry.tile_size / 2

        arcade.draw_lrbt_rectangle_filled(
            geometry.board_left, geometry.board_left + geometry.board_size,
            geometry.board_bottom, geometry.board_top, BOARD_BACKGROUND,
        )
        for row in range(GRID_ROWS):
            for col in range(GRID_COLS):
                cx, cy = geometry.cell_center(row, col)
                arcade.draw_lrbt_rectangle_filled(cx - half, cx + half, cy - half, cy + half, CELL_BACKGROUND)

        for draw in collect_tile_draws(self.world, use_easing=self.use_easing):
            text_color, background, font_size = tile_style(draw.value)
            alpha = int(255 * max(0.0, min(1.0, draw.alpha)))
            cx, cy = geometry.cell_center(draw.row, draw.col)
            arcade.draw_lrbt_rectangle_filled(cx - half, cx + half, cy - half, cy + half, (*background, alpha))
            arcade.draw_text(
                str(draw.value), cx, cy, (*text_color, alpha), font_size * scale * 0.6,
                anchor_x="center", anchor_y="center", bold=True,
            )

        panel_y = geometry.board_top + 10
        arcade.draw_text(f"score: {self.score}", geometry.board_left, panel_y, PANEL_TEXT_COLOR, 14)
        _, right, _, _ = new_game_button_rect(self.window.width, self.window.height)
        arcade.draw_text("New Game", right, panel_y, PANEL_TEXT_COLOR, 14, anchor_x="right")

        if self.game_over_notice_visible:
            arcade.draw_lrbt_rectangle_filled(
                geometry.board_left, geometry.board_left + geometry.board_size,
                geometry.board_bottom, geometry.board_top, (238, 228, 218, 160),
            )
            cx = geometry.board_left + geometry.board_size / 2
            cy = geometry.board_bottom + geometry.board_size / 2
            arcade.draw_text("Game Over!", cx, cy, (119, 110, 101), 40,
                             anchor_x="center", anchor_y="center", bold=True)
