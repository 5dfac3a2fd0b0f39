"""Tests for the command-line tools."""

import json

from classic_snake.cli import _build_parser, main
from classic_snake.config import GameConfig


class TestCLIParser:
    def test_no_command_returns_1(self):
        assert main([]) == 1

    def test_simulate_defaults(self):
        args = _build_parser().parse_args(["simulate"])
        assert args.command == "simulate"
        assert args.steps == 50
        assert args.seed is None
        assert args.moves == ""
        assert not args.record

    def test_simulate_flags(self):
        args = _build_parser().parse_args([
            "simulate", "--grid-size", "8", "--steps", "5",
            "--seed", "3", "--moves", "wd",
        ])
        assert args.grid_size == 8
        assert args.steps == 5
        assert args.seed == 3
        assert args.moves == "wd"


class TestSimulate:
    def test_runs_into_wall(self, capsys):
        assert main([
            "simulate", "--grid-size", "6", "--steps", "10",
            "--seed", "1", "--quiet",
        ]) == 0
        out = capsys.readouterr().out
        assert "Game over" in out
        assert len(out.strip().splitlines()) == 7

    def test_prints_every_tick(self, capsys):
        main(["simulate", "--grid-size", "10", "--steps", "2", "--seed", "0"])
        out = capsys.readouterr().out
        assert out.count("Score:") == 2

    def test_record_writes_history(self, tmp_path, capsys):
        scores = tmp_path / "scores.json"
        cfg_path = tmp_path / "cfg.json"
        GameConfig(grid_size=6, scores_path=str(scores)).save(cfg_path)
        main([
            "simulate", "--config", str(cfg_path), "--steps", "10",
            "--seed", "1", "--quiet", "--record",
        ])
        data = json.loads(scores.read_text())
        assert len(data["snake:last10"]) == 1


class TestScores:
    def test_empty(self, tmp_path, capsys):
        assert main(["scores", "--scores-path", str(tmp_path / "s.json")]) == 0
        assert "No scores yet." in capsys.readouterr().out

    def test_lists_ranked(self, tmp_path, capsys):
        path = tmp_path / "s.json"
        path.write_text(json.dumps({"snake:last10": [
            {"score": 2, "played_at": 1, "player_name": "Neo Fox"},
            {"score": 6, "played_at": 2, "player_name": "Vibe Ace"},
        ]}))
        main(["scores", "--scores-path", str(path)])
        lines = capsys.readouterr().out.strip().splitlines()
        assert lines[0] == " 1. [VA] Vibe Ace (leader)  Score 6"
        assert lines[1] == " 2. [NF] Neo Fox  Score 2"
