import pytest

pytest.importorskip("pgzero")

from pgzero.constants import keys  # noqa: E402

import play  # noqa: E402
from game import Direction, Game2048, GameConfig, GameStatus  # noqa: E402


class RecordingDraw:
    def __init__(self):
        self.calls = []

    def filled_rect(self, rect, color):
        self.calls.append(("filled_rect", tuple(rect), color))

    def rect(self, rect, color):
        self.calls.append(("rect", tuple(rect), color))

    def text(self, text, **kwargs):
        self.calls.append(("text", text, kwargs))


class RecordingScreen:
    def __init__(self):
        self.draw = RecordingDraw()
        self.blits = []

    def clear(self):
        pass

    def fill(self, color):
        pass

    def blit(self, image, pos):
        self.blits.append(pos)

    def texts(self):
        return [call[1] for call in self.draw.calls if call[0] == "text"]


def make_view(board, quit_calls=None):
    view = play.BoardView(
        config=GameConfig(seed=1),
        on_quit=lambda: quit_calls.append(True) if quit_calls is not None else None,
    )
    view.game = Game2048.from_board(board, config=GameConfig(seed=1))
    view.board = view.game.get_board()
    return view


def single_tile_board():
    return [[0, 0, 0, 0], [0, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]]


@pytest.mark.parametrize(
    "key, row, col",
    [
        (keys.UP, 0, 1),
        (keys.DOWN, 3, 1),
        (keys.LEFT, 1, 0),
        (keys.RIGHT, 1, 3),
    ],
)
def test_arrow_keys_move_in_their_direction(key, row, col):
    view = make_view(single_tile_board())

    view.on_key_down(key)

    assert view.board[row][col] == 2
    assert view.board == view.game.get_board()


def test_key_directions_cover_all_moves():
    assert set(play.KEY_DIRECTIONS.values()) == set(Direction)


def test_unbound_keys_are_ignored():
    view = make_view(single_tile_board())

    view.on_key_down(keys.SPACE)
    view.on_key_down(keys.Y)

    assert view.board == single_tile_board()


def test_replay_prompt_after_win():
    quit_calls = []
    view = make_view([[1024, 1024, 0, 0], [0] * 4, [0] * 4, [0] * 4], quit_calls)
    view.on_key_down(keys.LEFT)
    assert view.game.status is GameStatus.WON

    # arrows do nothing once the game ended
    view.on_key_down(keys.RIGHT)
    assert view.board[0][0] == 2048

    view.on_key_down(keys.N)
    assert quit_calls == [True]

    view.on_key_down(keys.Y)
    assert view.game.status is GameStatus.IN_PROGRESS
    assert view.game.get_score() == 0
    assert sum(1 for row in view.board for cell in row if cell) == 1


def test_draw_renders_tiles_and_score():
    view = make_view([[2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 2048, 0], [0, 0, 0, 0]])
    screen = RecordingScreen()

    view.draw(screen)

    filled = [call for call in screen.draw.calls if call[0] == "filled_rect"]
    assert len(filled) == 16
    assert filled[0][2] == play.COLORS[1]
    assert filled[10][2] == play.COLORS[11]
    assert filled[1][2] == play.EMPTY_COLOR
    assert screen.texts() == ["2", "2048", "Score: 0"]
    assert screen.blits == []


def test_draw_overlay_when_lost():
    board = [[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 4, 2]]
    view = make_view(board)
    view.on_key_down(keys.UP)
    screen = RecordingScreen()

    view.draw(screen)

    assert screen.blits == [(0, 0)]
    assert screen.texts()[-3:] == ["You lost!", "Final score: 0", "Play again? (y/n)"]


def test_window_config_size():
    window = play.WindowConfig(cell_size=80, margin=20)
    assert window.width == 360
    assert window.height == 420


def test_importing_play_does_not_open_a_window():
    import pygame

    assert pygame.display.get_surface() is None
    assert not hasattr(play, "pgzrun")
