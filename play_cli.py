"""
CLI 2048 game client for terminal play.
Run with: python main.py console

Each turn reads one line; its first character picks the move (u/d/l/r).
"""
import sys
from typing import TextIO

import typer

from game import Game2048, GameConfig, GameStatus, Grid, InvalidMoveError, MoveResult
from logger import GameLogger

EMPTY_MOVE_MESSAGE = "Invalid input. Please enter a move (u/l/d/r)"
EMPTY_ANSWER_MESSAGE = "Invalid input. Please enter 'y' or 'n'"


def format_board(board: Grid) -> str:
    """Format a snapshot of face values as a boxed grid."""
    max_val = max(cell for row in board for cell in row)
    cell_width = max(5, len(str(max_val)) + 2)

    lines = ["┌" + "─" * (cell_width * 4 + 3) + "┐"]
    for i, row in enumerate(board):
        cells = [(str(cell) if cell else ".").center(cell_width) for cell in row]
        lines.append("│" + "│".join(cells) + "│")
        if i < 3:
            lines.append("├" + "─" * (cell_width * 4 + 3) + "┤")
    lines.append("└" + "─" * (cell_width * 4 + 3) + "┘")

    return "\n".join(lines)


def draw_board(game: Game2048, out: TextIO | None = None) -> None:
    typer.echo(format_board(game.get_board()), file=out)
    typer.echo(f"Score: {game.get_score()}", file=out)


def read_line(stdin: TextIO) -> str | None:
    """Read one line without its newline; None at end of input."""
    line = stdin.readline()
    if not line:
        return None
    return line.rstrip("\r\n")


def read_move(game: Game2048, stdin: TextIO, out: TextIO | None = None) -> MoveResult | None:
    """
    Prompt until a valid move is applied. Returns None at end of input.
    """
    while True:
        line = read_line(stdin)
        if line is None:
            return None
        if not line:
            typer.echo(EMPTY_MOVE_MESSAGE, file=out)
            continue
        try:
            return game.step(line[0])
        except InvalidMoveError:
            typer.echo("Invalid move", file=out)


def read_answer(stdin: TextIO, out: TextIO | None = None) -> str | None:
    """Read the first character of the next non-empty line."""
    while True:
        line = read_line(stdin)
        if line is None:
            return None
        if line:
            return line[0]
        typer.echo(EMPTY_ANSWER_MESSAGE, file=out)


def run(
    config: GameConfig | None = None,
    game: Game2048 | None = None,
    stdin: TextIO | None = None,
    out: TextIO | None = None,
    logger: GameLogger | None = None,
) -> int:
    """
    Main game loop. Returns the number of games finished.
    Plays on `game` when given, otherwise on a new session built from `config`.
    """
    stdin = stdin or sys.stdin
    game = game or Game2048(config)
    moves = 0
    finished = 0

    while True:
        draw_board(game, out)

        result = read_move(game, stdin, out)
        if result is None:
            if logger is not None and moves:
                logger.log_game(game, moves)
            return finished

        moves += 1
        if logger is not None:
            logger.log_move(game, result, moves)

        if result.status is GameStatus.IN_PROGRESS:
            continue

        finished += 1
        if logger is not None:
            logger.log_game(game, moves)

        draw_board(game, out)
        typer.echo("You won!" if result.status is GameStatus.WON else "You lost!", file=out)
        typer.echo(f"Final score: {game.get_score()}", file=out)
        typer.echo("Play again? (y/n)", file=out)

        if read_answer(stdin, out) != "y":
            return finished

        game.reset()
        moves = 0
