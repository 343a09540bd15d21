import json

from game import Direction, Game2048, GameConfig
from logger import GameLogger


def test_no_log_dir_disables_file_logging(capsys):
    logger = GameLogger(verbose=True)
    logger.log({"score": 4}, step=1)
    logger.close()

    assert logger.log_file is None
    assert capsys.readouterr().out == "--- Step 1 ---\n  score: 4\n"


def test_quiet_logger_writes_only_to_file(tmp_path, capsys):
    with GameLogger(log_dir=tmp_path, verbose=False) as logger:
        logger.log({"score": 4, "ratio": 0.5}, step=3)

    assert capsys.readouterr().out == ""
    entry = json.loads(logger.log_file.read_text())
    assert entry["step"] == 3
    assert entry["score"] == 4
    assert entry["ratio"] == 0.5
    assert "timestamp" in entry


def test_per_call_verbose_overrides_default(capsys):
    logger = GameLogger(verbose=False)
    logger.log({"wins": 0}, header="--- Simulation ---", verbose=True)

    assert capsys.readouterr().out == "--- Simulation ---\n  wins: 0\n"


def test_unique_filenames(tmp_path):
    first = GameLogger(log_dir=tmp_path, experiment_name="console", verbose=False)
    second = GameLogger(log_dir=tmp_path, experiment_name="console", verbose=False)
    first.close()
    second.close()

    assert first.log_file != second.log_file
    assert first.log_file.name.endswith("_001.jsonl")
    assert second.log_file.name.endswith("_002.jsonl")


def test_log_move_and_game(tmp_path):
    game = Game2048.from_board(
        [[2, 2, 0, 0], [0] * 4, [0] * 4, [0] * 4], config=GameConfig(seed=5)
    )
    result = game.step(Direction.LEFT)

    with GameLogger(log_dir=tmp_path, verbose=False) as logger:
        logger.log_move(game, result, move_number=1)
        logger.log_game(game, moves=1)

    move, summary = [json.loads(line) for line in logger.log_file.read_text().splitlines()]
    assert move["event"] == "move"
    assert move["step"] == 1
    assert move["changed"] is True
    assert move["score"] == 4
    assert move["max_tile"] == 4
    assert summary["event"] == "game"
    assert summary["status"] == "in_progress"
    assert summary["board"] == game.get_board()


def test_float_formatting():
    logger = GameLogger(verbose=False)
    assert logger._format_value(12.5) == "12.50"
    assert logger._format_value(0.001) == "1.00e-03"
    assert logger._format_value(7) == "7"


def test_close_is_idempotent(tmp_path):
    logger = GameLogger(log_dir=tmp_path, verbose=False)
    logger.close()
    logger.close()
