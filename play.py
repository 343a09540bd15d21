"""
Interactive 2048 game client using Pygame Zero.
Run with: python main.py gui  (or: pgzrun play.py)
"""
import sys
from collections.abc import Callable

import pygame
from pgzero.constants import keys
from pydantic import BaseModel

from game import Direction, Game2048, GameConfig, GameStatus, value_to_exponent


class WindowConfig(BaseModel):
    """Window layout, in pixels."""

    title: str = "2048"
    cell_size: int = 100
    margin: int = 50
    score_height: int = 60

    @property
    def width(self) -> int:
        return self.margin * 2 + self.cell_size * 4

    @property
    def height(self) -> int:
        return self.margin * 2 + self.cell_size * 4 + self.score_height


BACKGROUND = (250, 248, 239)
EMPTY_COLOR = (192, 192, 192)
BORDER_COLOR = (64, 64, 64)
DARK_TEXT = (64, 64, 64)
OVERLAY_COLOR = (0, 0, 0, 128)

# Colors keyed by exponent
COLORS = {
    1: (238, 228, 218),    # 2
    2: (237, 224, 200),    # 4
    3: (242, 177, 121),    # 8
    4: (245, 149, 99),     # 16
    5: (246, 124, 95),     # 32
    6: (246, 94, 59),      # 64
    7: (237, 207, 114),    # 128
    8: (237, 204, 97),     # 256
    9: (237, 200, 80),     # 512
    10: (237, 197, 63),    # 1024
    11: (237, 194, 46),    # 2048
}

KEY_DIRECTIONS = {
    keys.UP: Direction.UP,
    keys.DOWN: Direction.DOWN,
    keys.LEFT: Direction.LEFT,
    keys.RIGHT: Direction.RIGHT,
}


class BoardView:
    """
    Owns one game session and renders its last snapshot.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        window: WindowConfig | None = None,
        on_quit: Callable[[], None] | None = None,
    ):
        self.window = window or WindowConfig()
        self.game = Game2048(config)
        self.board = self.game.get_board()
        self.on_quit = on_quit or (lambda: sys.exit(0))

    def restart(self) -> None:
        self.game.reset()
        self.board = self.game.get_board()

    def on_key_down(self, key) -> None:
        """Handle keyboard input."""
        if self.game.is_over:
            if key == keys.Y:
                self.restart()
            elif key == keys.N:
                self.on_quit()
            return

        direction = KEY_DIRECTIONS.get(key)
        if direction is None:
            return

        self.game.move(direction)
        self.board = self.game.get_board()

    def draw(self, screen) -> None:
        """Draw the grid, the score and, once the game ended, the replay panel."""
        screen.clear()
        screen.fill(BACKGROUND)

        size = self.window.cell_size
        for row, values in enumerate(self.board):
            for col, value in enumerate(values):
                x = self.window.margin + col * size
                y = self.window.margin + row * size
                self._draw_tile(screen, x, y, value)

        screen.draw.text(
            f"Score: {self.game.get_score()}",
            center=(self.window.width // 2, self.window.margin * 2 + size * 4),
            fontsize=36,
            color=DARK_TEXT,
        )

        if self.game.is_over:
            self._draw_overlay(screen)

    def _draw_tile(self, screen, x: int, y: int, value: int) -> None:
        size = self.window.cell_size
        rect = pygame.Rect(x, y, size, size)
        color = COLORS[value_to_exponent(value)] if value else EMPTY_COLOR

        screen.draw.filled_rect(rect, color)
        screen.draw.rect(rect, BORDER_COLOR)

        if value == 0:
            return

        screen.draw.text(
            str(value),
            center=(x + size // 2, y + size // 2),
            fontsize=48 if value < 1000 else 36,
            color="white" if value > 4 else DARK_TEXT,
        )

    def _draw_overlay(self, screen) -> None:
        width, height = self.window.width, self.window.height
        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        overlay.fill(OVERLAY_COLOR)
        screen.blit(overlay, (0, 0))

        message = "You won!" if self.game.status is GameStatus.WON else "You lost!"
        lines = [message, f"Final score: {self.game.get_score()}", "Play again? (y/n)"]
        for i, line in enumerate(lines):
            screen.draw.text(
                line,
                center=(width // 2, height // 2 - 30 + i * 30),
                fontsize=36,
                color="white",
            )


# Window settings, read by Pygame Zero
_window = WindowConfig()
WIDTH = _window.width
HEIGHT = _window.height
TITLE = _window.title

view = BoardView(window=_window)


def draw():
    view.draw(screen)  # noqa: F821


def on_key_down(key):
    view.on_key_down(key)


def run(config: GameConfig | None = None, window: WindowConfig | None = None) -> None:
    """Open the window and run the event loop with a fresh session."""
    global view, WIDTH, HEIGHT, TITLE
    from pgzero.runner import prepare_mod, run_mod

    window = window or WindowConfig()
    view = BoardView(config=config, window=window)
    WIDTH, HEIGHT, TITLE = window.width, window.height, window.title

    mod = sys.modules[__name__]
    prepare_mod(mod)
    run_mod(mod)


# Start the game
if __name__ == "__main__":
    import pgzrun

    pgzrun.go()
