"""
Tests for the comparison runner, settings persistence and command line entry point.

Usage:
    pytest tests/test_runner.py
"""

import json
import logging
import sys
import threading
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import main as cli
from knights_tour.runner import (
    max_steps,
    run_comparison,
    strategy_options_from_settings,
    strategy_rng,
    summarize,
)
from knights_tour.settings import DEFAULT_SETTINGS, load_settings, save_settings
from knights_tour.solver import (
    AnnealingSchedule,
    InvalidBoardError,
    Position,
    get_strategy_names,
    is_valid_tour,
)

FAST_OPTIONS = {
    "simulated_annealing": {
        "schedule": AnnealingSchedule(
            initial_temperature=1.0,
            cooling_rate=0.5,
            min_temperature=0.01,
            iterations_per_temperature=10,
        )
    },
    "frontier": {"max_expansions": 2000},
}

FAST_SETTINGS = {
    "board_size": 5,
    "annealing": {
        "initial_temperature": 1.0,
        "cooling_rate": 0.5,
        "min_temperature": 0.01,
        "iterations_per_temperature": 10,
    },
    "frontier_max_expansions": 2000,
}


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------

def test_run_all_on_3x3_reports_failure_for_every_strategy():
    results = run_comparison(Position(0, 0), 3, seed=1, strategy_options=FAST_OPTIONS)

    assert len(results) == len(get_strategy_names())
    assert not any(result.success for result in results)
    assert [r.metrics.strategy_name for r in results] == get_strategy_names()


def test_results_follow_requested_order():
    names = ["warnsdorff_dfs", "warnsdorff"]
    results = run_comparison(Position(0, 0), 5, names)
    assert [r.name for r in results] == ["Warnsdorff DFS", "Warnsdorff"]


def test_parallel_matches_sequential_with_seed():
    names = ["warnsdorff", "warnsdorff_dfs", "simulated_annealing", "divide_and_conquer"]
    kwargs = dict(seed=7, strategy_options=FAST_OPTIONS)

    sequential = run_comparison(Position(2, 2), 5, names, **kwargs)
    parallel = run_comparison(Position(2, 2), 5, names, parallel=True, **kwargs)

    assert [r.path for r in sequential] == [r.path for r in parallel]
    assert [r.success for r in sequential] == [r.success for r in parallel]
    for result in parallel:
        assert result.success == is_valid_tour(result.path, 5)


def test_unknown_strategy_fails_before_running():
    with pytest.raises(ValueError, match="Unknown strategy"):
        run_comparison(Position(0, 0), 5, ["warnsdorff", "nope"])


def test_invalid_board_rejected():
    with pytest.raises(InvalidBoardError):
        run_comparison(Position(7, 0), 5)


def test_shared_cancel_flag_stops_every_strategy():
    cancel = threading.Event()
    cancel.set()
    results = run_comparison(
        Position(0, 0), 8, ["brute_force", "warnsdorff"], cancel_flag=cancel
    )
    assert all(result.was_cancelled for result in results)


def test_strategy_rng_is_reproducible_per_name():
    assert strategy_rng(3, "warnsdorff").random() == strategy_rng(3, "warnsdorff").random()
    assert strategy_rng(3, "warnsdorff").random() != strategy_rng(3, "simulated_annealing").random()


def test_summarize_and_max_steps():
    results = run_comparison(Position(0, 0), 5, ["warnsdorff_dfs", "divide_and_conquer"])
    rows = summarize(results, 5)

    assert rows[0]["name"] == "Warnsdorff DFS"
    assert rows[0]["success"] is True
    assert rows[0]["steps"] == 25
    assert rows[0]["coverage"] == 1.0
    assert rows[1]["steps"] == 1
    assert rows[1]["total"] == 25
    assert max_steps(results) == 25
    assert max_steps([]) == 0


def test_strategy_options_from_settings():
    options = strategy_options_from_settings(FAST_SETTINGS)
    assert options["simulated_annealing"]["schedule"].cooling_rate == 0.5
    assert options["frontier"] == {"max_expansions": 2000}


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

def test_missing_settings_file_gives_defaults(tmp_path):
    settings = load_settings(tmp_path / "missing.json")
    assert settings == DEFAULT_SETTINGS
    assert settings is not DEFAULT_SETTINGS


def test_corrupt_settings_file_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_settings(path) == DEFAULT_SETTINGS


def test_settings_round_trip_merges_defaults(tmp_path):
    path = tmp_path / "config.json"
    save_settings({"board_size": 6, "annealing": {"cooling_rate": 0.9}}, path)

    settings = load_settings(path)
    assert settings["board_size"] == 6
    assert settings["annealing"]["cooling_rate"] == 0.9
    assert settings["annealing"]["initial_temperature"] == 10.0
    assert settings["frontier_max_expansions"] == DEFAULT_SETTINGS["frontier_max_expansions"]
    # Loading must not leak changes into the defaults
    assert DEFAULT_SETTINGS["annealing"]["cooling_rate"] == 0.99


# ---------------------------------------------------------------------------
# Command line
# ---------------------------------------------------------------------------

def _config(tmp_path):
    path = tmp_path / "config.json"
    save_settings(FAST_SETTINGS, path)
    return str(path)


def test_cli_table_output(tmp_path, capsys):
    code = cli.main([
        "--size", "5", "--strategies", "warnsdorff,warnsdorff_dfs",
        "--config", _config(tmp_path),
    ])
    out = capsys.readouterr().out

    assert code == 0
    assert "from (2,2)" in out
    assert "Warnsdorff DFS" in out
    assert "25/25" in out


def test_cli_json_output(tmp_path, capsys):
    code = cli.main([
        "--size", "3", "--row", "0", "--col", "0", "--seed", "1", "--json",
        "--config", _config(tmp_path),
    ])
    data = json.loads(capsys.readouterr().out)

    assert code == 1
    assert data["boardSize"] == 3
    assert data["start"] == {"row": 0, "col": 0}
    assert len(data["results"]) == len(get_strategy_names())
    assert all(result["success"] is False for result in data["results"])


def test_cli_rejects_bad_start(tmp_path, capsys):
    code = cli.main(["--size", "5", "--row", "9", "--config", _config(tmp_path)])
    assert code == 2
    assert "outside" in capsys.readouterr().err


def test_cli_rejects_unknown_strategy(tmp_path, capsys):
    code = cli.main(["--strategies", "bogus", "--config", _config(tmp_path)])
    assert code == 2


def test_cli_lists_strategies(tmp_path, capsys):
    code = cli.main(["--list", "--config", _config(tmp_path)])
    out = capsys.readouterr().out
    assert code == 0
    for name in get_strategy_names():
        assert name in out


@pytest.mark.parametrize("argv, level", [
    ([], logging.INFO),
    (["--debug"], logging.DEBUG),
])
def test_cli_log_level(tmp_path, capsys, argv, level):
    cli.main(["--list", "--config", _config(tmp_path)] + argv)
    assert logging.getLogger().level == level
