from dataclasses import dataclass
from enum import Enum
import random

from pydantic import BaseModel

GRID_SIZE = 4
CELL_COUNT = GRID_SIZE * GRID_SIZE

# exponents: 0 = empty, k = 2^k
MAX_EXPONENT = 11
WINNING_EXPONENT = 11
ELEVATED_SPAWN_EXPONENT = 3

type Grid = list[list[int]]


class InvalidMoveError(ValueError):
    """Raised for a direction token that is not one of the four moves."""


class GameOverError(RuntimeError):
    """Raised when a move is applied to a session that already ended."""


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, token: "Direction | str") -> "Direction":
        """
        Accepts a Direction, its value ("up") or its console character ("u").
        Matching is case-sensitive.
        """
        if isinstance(token, Direction):
            return token
        if isinstance(token, str):
            for direction in cls:
                if token == direction.value or token == direction.value[0]:
                    return direction
        raise InvalidMoveError(f"Invalid move: {token!r}")


class GameStatus(Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"


@dataclass
class MoveResult:
    direction: Direction
    status: GameStatus
    points: int
    changed: bool


class GameConfig(BaseModel):
    """Configuration for a game session."""

    seed: int | None = None  # seeds the session's random source


# (column, row) step toward the direction of travel
_STEPS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

# cells farther along the direction of travel come first
_SCAN_ORDERS = {
    Direction.UP: tuple(range(CELL_COUNT)),
    Direction.LEFT: tuple(range(CELL_COUNT)),
    Direction.DOWN: tuple(reversed(range(CELL_COUNT))),
    Direction.RIGHT: tuple(reversed(range(CELL_COUNT))),
}


def _index(col: int, row: int) -> int:
    return row * GRID_SIZE + col


def _in_bounds(col: int, row: int) -> bool:
    return 0 <= col < GRID_SIZE and 0 <= row < GRID_SIZE


def value_to_exponent(value: int) -> int:
    """Convert a face value (0, 2, 4, ... 2048) to its exponent."""
    if value == 0:
        return 0
    exponent = value.bit_length() - 1
    assert (
        value > 0 and value == 1 << exponent and 1 <= exponent <= MAX_EXPONENT
    ), f"invalid tile value: {value}"
    return exponent


def exponent_to_value(exponent: int) -> int:
    return 0 if exponent == 0 else 1 << exponent


class Game2048:
    """
    A single 2048 session: the board, the score, the spawn mode and the status.

    Cells are stored as a flat list of exponents indexed by row * 4 + column.
    A new instance is already started with one spawned tile.
    """

    cells: list[int]

    def __init__(self, config: GameConfig | None = None):
        self._configure(config)
        self.reset()

    def _configure(self, config: GameConfig | None) -> None:
        self.config = config or GameConfig()
        self._random = random.Random(self.config.seed)

    @classmethod
    def from_board(
        cls,
        values: Grid,
        elevated_spawn: bool = False,
        config: GameConfig | None = None,
    ) -> "Game2048":
        """
        Build an in-progress session from a 4x4 grid of face values given as
        rows. No tile is spawned.
        """
        assert len(values) == GRID_SIZE and all(
            len(row) == GRID_SIZE for row in values
        ), "board must be 4x4"
        game = cls.__new__(cls)
        game._configure(config)
        game.cells = [value_to_exponent(v) for row in values for v in row]
        game._score = 0
        game._elevated_spawn = elevated_spawn
        game._status = GameStatus.IN_PROGRESS
        return game

    @property
    def score(self) -> int:
        return self._score

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def is_over(self) -> bool:
        return self._status is not GameStatus.IN_PROGRESS

    @property
    def elevated_spawn(self) -> bool:
        return self._elevated_spawn

    def get_score(self) -> int:
        """
        Returns the cumulative score: the sum of every merged tile's value.
        """
        return self._score

    def get_board(self) -> Grid:
        """
        Returns a fresh snapshot of face values, indexed [row][column].
        """
        return [
            [exponent_to_value(self.cells[_index(col, row)]) for col in range(GRID_SIZE)]
            for row in range(GRID_SIZE)
        ]

    def max_tile(self) -> int:
        return exponent_to_value(max(self.cells))

    def empty_cells(self) -> list[tuple[int, int]]:
        """(column, row) of every empty cell."""
        return [
            (index % GRID_SIZE, index // GRID_SIZE)
            for index, exponent in enumerate(self.cells)
            if exponent == 0
        ]

    def reset(self) -> Grid:
        """
        Start a new game: empty board, zero score, normal spawn mode, one tile.
        The session keeps its random source, so consecutive games differ.
        """
        self.cells = [0] * CELL_COUNT
        self._score = 0
        self._elevated_spawn = False
        self._status = GameStatus.IN_PROGRESS
        self._add_tile()
        return self.get_board()

    def _set_exponent(self, index: int, exponent: int) -> None:
        assert 0 <= exponent <= MAX_EXPONENT, f"invalid tile exponent: {exponent}"
        self.cells[index] = exponent

    def _add_tile(self) -> bool:
        """
        Spawn one tile on a random empty cell.
        Returns False without touching the board when it is full.
        """
        if 0 not in self.cells:
            return False

        exponent = 1
        if self._elevated_spawn:
            roll = self._random.randrange(100)
            if roll == 99:
                exponent = 3
            elif roll >= 90:
                exponent = 2

        while True:
            col = self._random.randrange(GRID_SIZE)
            row = self._random.randrange(GRID_SIZE)
            if self.cells[_index(col, row)] == 0:
                break

        self._set_exponent(_index(col, row), exponent)
        if exponent == ELEVATED_SPAWN_EXPONENT:
            self._elevated_spawn = True
        return True

    def has_next_step(self) -> bool:
        return self.cells_have_move(self.cells)

    @staticmethod
    def cells_have_move(cells: list[int]) -> bool:
        """
        True while an empty cell or an adjacent equal pair exists.
        """
        if 0 in cells:
            return True
        for index, exponent in enumerate(cells):
            col, row = index % GRID_SIZE, index // GRID_SIZE
            if col + 1 < GRID_SIZE and cells[index + 1] == exponent:
                return True
            if row + 1 < GRID_SIZE and cells[index + GRID_SIZE] == exponent:
                return True
        return False

    def _slide_and_merge(self, direction: Direction) -> tuple[int, bool, bool]:
        """
        Apply one slide-and-merge pass in place.
        Returns (points, changed, reached_win).
        """
        dcol, drow = _STEPS[direction]
        merged = [False] * CELL_COUNT
        points = 0
        changed = False
        reached_win = False

        for index in _SCAN_ORDERS[direction]:
            exponent = self.cells[index]
            if exponent == 0:
                continue

            col, row = index % GRID_SIZE, index // GRID_SIZE
            ncol, nrow = col + dcol, row + drow
            while _in_bounds(ncol, nrow) and self.cells[_index(ncol, nrow)] == 0:
                ncol += dcol
                nrow += drow

            if _in_bounds(ncol, nrow):
                target = _index(ncol, nrow)
                if self.cells[target] == exponent and not merged[target]:
                    new_exponent = exponent + 1
                    self._set_exponent(target, new_exponent)
                    self._set_exponent(index, 0)
                    merged[target] = True
                    points += exponent_to_value(new_exponent)
                    if new_exponent == ELEVATED_SPAWN_EXPONENT:
                        self._elevated_spawn = True
                    # keep scanning: later cells still slide and score
                    if new_exponent == WINNING_EXPONENT:
                        reached_win = True
                    changed = True
                    continue

            # step back onto the farthest empty cell
            ncol -= dcol
            nrow -= drow
            if (ncol, nrow) != (col, row):
                self._set_exponent(_index(ncol, nrow), exponent)
                self._set_exponent(index, 0)
                changed = True

        return points, changed, reached_win

    def step(self, direction: Direction | str) -> MoveResult:
        """
        Apply a move and report what happened.

        Raises InvalidMoveError for an unknown direction and GameOverError once
        the session is won or lost; neither touches the board.
        """
        direction = Direction.parse(direction)
        if self.is_over:
            raise GameOverError(f"Game already {self._status.value}")

        points, changed, reached_win = self._slide_and_merge(direction)
        self._score += points

        if reached_win:
            self._status = GameStatus.WON
        else:
            if changed:
                self._add_tile()
            if not self.has_next_step():
                self._status = GameStatus.LOST

        return MoveResult(
            direction=direction, status=self._status, points=points, changed=changed
        )

    def move(self, direction: Direction | str) -> GameStatus:
        """
        Apply a move; returns IN_PROGRESS while the game continues, else WON or LOST.
        """
        return self.step(direction).status
