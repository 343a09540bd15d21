"""
CLI launcher for 2048.
Run with: python main.py [command]
"""

import random
from pathlib import Path
from typing import Optional

import typer
from tqdm import tqdm

import play_cli
from game import Direction, Game2048, GameConfig, GameStatus
from logger import GameLogger

app = typer.Typer(help="Play 2048 in the terminal or in a window")

DIRECTIONS = list(Direction)


@app.command()
def console(
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for tile spawns"),
    log_dir: Optional[Path] = typer.Option(
        None, "--log-dir", help="Directory for JSONL move logs (disabled if not set)"
    ),
):
    """Play in the terminal: type u/d/l/r and press enter."""
    config = GameConfig(seed=seed)
    with GameLogger(log_dir=log_dir, experiment_name="console", verbose=False) as logger:
        try:
            play_cli.run(config, logger=logger)
        except KeyboardInterrupt:
            typer.echo("\nGame interrupted. Goodbye!")


@app.command()
def gui(
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for tile spawns"),
    cell_size: int = typer.Option(100, "--cell-size", help="Tile size in pixels"),
):
    """Play in a window with the arrow keys."""
    # pygame is only needed here
    import play

    play.run(GameConfig(seed=seed), play.WindowConfig(cell_size=cell_size))


def play_random_game(game: Game2048, rng: random.Random, max_moves: int) -> int:
    """
    Play uniformly random directions until the game ends or max_moves is hit.
    Returns the number of moves made.
    """
    moves = 0
    while not game.is_over and moves < max_moves:
        game.move(rng.choice(DIRECTIONS))
        moves += 1
    return moves


@app.command()
def simulate(
    games: int = typer.Option(100, "--games", "-n", help="Number of games to play"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
    max_moves: int = typer.Option(
        10_000, "--max-moves", help="Abandon a game after this many moves"
    ),
    log_dir: Optional[Path] = typer.Option(
        None, "--log-dir", help="Directory for JSONL game logs (disabled if not set)"
    ),
):
    """Play games with random moves and report outcome statistics."""
    rng = random.Random(seed)
    wins = losses = 0
    scores = []
    best_tile = 0

    with GameLogger(log_dir=log_dir, experiment_name="simulate", verbose=False) as logger:
        for _ in tqdm(range(games), desc="Simulating"):
            game = Game2048(GameConfig(seed=rng.randrange(2**32)))
            moves = play_random_game(game, rng, max_moves)
            logger.log_game(game, moves)

            if game.status is GameStatus.WON:
                wins += 1
            elif game.status is GameStatus.LOST:
                losses += 1
            scores.append(game.get_score())
            best_tile = max(best_tile, game.max_tile())

        stats = {
            "games": games,
            "wins": wins,
            "losses": losses,
            "unfinished": games - wins - losses,
            "mean_score": sum(scores) / len(scores) if scores else 0.0,
            "best_score": max(scores, default=0),
            "best_tile": best_tile,
        }
        logger.log(stats, header="--- Simulation ---", verbose=True)


if __name__ == "__main__":
    app()
