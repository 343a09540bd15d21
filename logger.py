"""Game event logging: console echo and JSONL records."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

import typer

from game import Game2048, MoveResult


class GameLogger:
    """
    Logs game events to:
    1. stdout (formatted as "  key: value") when verbose
    2. JSONL file (one JSON object per line) - only if log_dir is provided

    Usage:
        with GameLogger(log_dir="./logs", experiment_name="console") as logger:
            result = game.step("l")
            logger.log_move(game, result, move_number=1)

        # file output:
        # {"step": 1, "timestamp": "...", "event": "move", "direction": "left", ...}
    """

    def __init__(
        self,
        log_dir: str | Path | None = None,
        experiment_name: str = "game",
        verbose: bool = True,
    ):
        """
        Initialize the game logger.

        Args:
            log_dir: Directory for JSONL logs. If None, file logging is disabled.
            experiment_name: Base name for log files (e.g., "console" -> "console_20260101_001.jsonl")
            verbose: Whether log() echoes records to stdout.
        """
        self.verbose = verbose
        self.log_dir = None
        self.log_file = None
        self._file_handle = None

        if log_dir is not None:
            self.log_dir = Path(log_dir)
            self.log_dir.mkdir(parents=True, exist_ok=True)

            self.log_file = self._get_unique_filename(experiment_name)
            self._file_handle = open(self.log_file, "a")
            if verbose:
                typer.echo(f"Logging to: {self.log_file}")

    def _get_unique_filename(self, base_name: str) -> Path:
        """Find a unique filename by incrementing suffix if file exists."""
        timestamp = datetime.now().strftime("%Y%m%d")
        suffix = 1

        while True:
            filename = self.log_dir / f"{base_name}_{timestamp}_{suffix:03d}.jsonl"
            if not filename.exists():
                return filename
            suffix += 1

    def _format_value(self, value: Any) -> str:
        """Format a value for console output."""
        if isinstance(value, float):
            if abs(value) < 0.01 or abs(value) >= 10000:
                return f"{value:.2e}"
            return f"{value:.2f}"
        return str(value)

    def log(
        self,
        record: dict[str, Any],
        step: int | None = None,
        header: str | None = None,
        verbose: bool | None = None,
    ) -> None:
        """
        Log a record to the JSONL file, and to stdout when verbose.

        Args:
            record: Dictionary of field name -> JSON-serializable value.
            step: Optional step number (the move number for move events).
            header: Optional header line (default: "--- Step {step} ---").
            verbose: Overrides the logger's default for this record.
        """
        if verbose is None:
            verbose = self.verbose

        if verbose:
            if header is not None:
                typer.echo(header)
            elif step is not None:
                typer.echo(f"--- Step {step} ---")

            for key, value in record.items():
                typer.echo(f"  {key}: {self._format_value(value)}")

        if self._file_handle is not None:
            log_entry = {"step": step, "timestamp": datetime.now().isoformat()}
            log_entry.update(record)

            self._file_handle.write(json.dumps(log_entry) + "\n")
            self._file_handle.flush()

    def log_move(self, game: Game2048, result: MoveResult, move_number: int) -> None:
        self.log(
            {
                "event": "move",
                "direction": result.direction.value,
                "status": result.status.value,
                "points": result.points,
                "changed": result.changed,
                "score": game.get_score(),
                "max_tile": game.max_tile(),
            },
            step=move_number,
        )

    def log_game(self, game: Game2048, moves: int) -> None:
        """Record the outcome of a finished (or abandoned) game."""
        self.log(
            {
                "event": "game",
                "status": game.status.value,
                "score": game.get_score(),
                "moves": moves,
                "max_tile": game.max_tile(),
                "board": game.get_board(),
            },
            header="--- Game Over ---",
        )

    def close(self) -> None:
        """Close the file handle."""
        if self._file_handle:
            self._file_handle.close()
            self._file_handle = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
